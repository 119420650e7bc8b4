"""
Tests for the serverless entry point.

The GitHub adapter is replaced with an in-memory store so only the
event/context envelope mapping is exercised.
"""

from __future__ import annotations

import base64
import json
from types import SimpleNamespace

import pytest

from content_publisher.app_shell import serverless
from content_publisher.components.publisher import ReadResult, WriteResult

VALID_BODY = json.dumps({"hero": {}, "positions": [], "servers": []})
USER = {"sub": "user-1", "email": "admin@example.com"}


class FakeStore:
    def __init__(self, config) -> None:
        self.config = config
        self.writes: list[str] = []

    def read_version(self, path: str, branch: str) -> ReadResult:
        return ReadResult(status_code=200, text="{}", sha="abc123")

    def write_file(self, path, branch, content_b64, sha, message) -> WriteResult:
        self.writes.append(sha)
        return WriteResult(status_code=201, text="{}")


@pytest.fixture
def fake_store(monkeypatch: pytest.MonkeyPatch) -> list[FakeStore]:
    created: list[FakeStore] = []

    def factory(config):
        store = FakeStore(config)
        created.append(store)
        return store

    monkeypatch.setattr("content_publisher.app_shell.factory.GitHubContentsStore", factory)
    return created


def context_for(user: dict | None) -> dict:
    return {"clientContext": {"user": user} if user is not None else {}}


class TestServerlessHandler:
    def test_preflight(self, fake_store: list[FakeStore]) -> None:
        result = serverless.handler({"httpMethod": "OPTIONS"}, context_for(None))

        assert result["statusCode"] == 204
        assert result["body"] == ""
        assert result["headers"]["Access-Control-Allow-Origin"] == "*"

    def test_method_not_allowed(self, fake_store: list[FakeStore]) -> None:
        result = serverless.handler({"httpMethod": "GET"}, context_for(USER))

        assert result["statusCode"] == 405

    def test_no_user_is_unauthorized(self, github_env: None, fake_store: list[FakeStore]) -> None:
        result = serverless.handler({"httpMethod": "POST", "body": VALID_BODY}, context_for(None))

        assert result["statusCode"] == 401
        assert "error" in json.loads(result["body"])

    def test_missing_env(self, fake_store: list[FakeStore]) -> None:
        result = serverless.handler({"httpMethod": "POST", "body": VALID_BODY}, context_for(USER))

        assert result["statusCode"] == 500
        assert json.loads(result["body"])["missing"] == ["GITHUB_TOKEN", "GITHUB_REPO"]

    def test_successful_save(self, github_env: None, fake_store: list[FakeStore]) -> None:
        result = serverless.handler({"httpMethod": "POST", "body": VALID_BODY}, context_for(USER))

        body = json.loads(result["body"])
        assert result["statusCode"] == 200
        assert body["success"] is True
        assert body["savedBy"] == "admin@example.com"
        assert fake_store[0].writes == ["abc123"]

    def test_attribute_style_context(
        self, github_env: None, fake_store: list[FakeStore]
    ) -> None:
        context = SimpleNamespace(clientContext=SimpleNamespace(user=USER))

        result = serverless.handler({"httpMethod": "POST", "body": VALID_BODY}, context)

        assert result["statusCode"] == 200

    def test_base64_body(self, github_env: None, fake_store: list[FakeStore]) -> None:
        event = {
            "httpMethod": "POST",
            "body": base64.b64encode(VALID_BODY.encode()).decode(),
            "isBase64Encoded": True,
        }

        result = serverless.handler(event, context_for(USER))

        assert result["statusCode"] == 200

    def test_invalid_json(self, github_env: None, fake_store: list[FakeStore]) -> None:
        result = serverless.handler({"httpMethod": "POST", "body": "{"}, context_for(USER))

        assert result["statusCode"] == 400
        assert json.loads(result["body"]) == {"error": "Invalid JSON body"}


class TestServerlessConfigErrors:
    @pytest.mark.parametrize("method", ["OPTIONS", "POST"])
    def test_missing_config_file(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path,
        github_env: None,
        fake_store: list[FakeStore],
        method: str,
    ) -> None:
        monkeypatch.setenv("PUBLISHER_CONFIG", str(tmp_path / "nope.yaml"))

        result = serverless.handler(
            {"httpMethod": method, "body": VALID_BODY}, context_for(USER)
        )

        body = json.loads(result["body"])
        assert result["statusCode"] == 500
        assert "nope.yaml" in body["error"]
        assert "PUBLISHER_CONFIG" in body["hint"]
        assert result["headers"]["Access-Control-Allow-Origin"] == "*"
        assert fake_store == []

    def test_malformed_config_file(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path,
        github_env: None,
        fake_store: list[FakeStore],
    ) -> None:
        path = tmp_path / "publisher.yaml"
        path.write_text("branch: [unclosed\n")
        monkeypatch.setenv("PUBLISHER_CONFIG", str(path))

        result = serverless.handler({"httpMethod": "POST", "body": VALID_BODY}, context_for(USER))

        assert result["statusCode"] == 500
        assert result["headers"]["Content-Type"] == "application/json"
        assert "Invalid YAML" in json.loads(result["body"])["error"]
