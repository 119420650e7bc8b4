"""
GitHub contents API adapter.

read  = GET /repos/{repo}/contents/{path}?ref={branch}  -> {"sha": ..., ...}
write = PUT /repos/{repo}/contents/{path} {message, content, sha, branch}
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from content_publisher.app_shell.config import PublisherConfig
from content_publisher.components.publisher.models import ReadResult, WriteResult
from content_publisher.components.publisher.ports import ContentStoreUnavailable

logger = logging.getLogger(__name__)


class GitHubContentsStore:
    """ContentStorePort backed by the GitHub REST contents endpoint."""

    def __init__(
        self,
        config: PublisherConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        # Tests inject httpx.MockTransport here.
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self._config.github_token}",
            "Accept": "application/vnd.github.v3+json",
            "Content-Type": "application/json",
            "User-Agent": self._config.user_agent,
        }

    def _url(self, path: str) -> str:
        base = self._config.api_base_url.rstrip("/")
        return f"{base}/repos/{self._config.github_repo}/contents/{quote(path.lstrip('/'))}"

    def _client(self) -> httpx.Client:
        return httpx.Client(
            headers=self._headers(),
            timeout=self._config.request_timeout,
            transport=self._transport,
        )

    def read_version(self, path: str, branch: str) -> ReadResult:
        url = self._url(path)
        try:
            with self._client() as client:
                response = client.get(url, params={"ref": branch})
        except httpx.RequestError as exc:
            raise ContentStoreUnavailable(f"GitHub GET {url}: {exc}") from exc

        logger.debug("GET %s -> %s", url, response.status_code)
        sha: str | None = None
        if response.is_success:
            sha = _extract_sha(response)
        return ReadResult(status_code=response.status_code, text=response.text, sha=sha)

    def write_file(
        self,
        path: str,
        branch: str,
        content_b64: str,
        sha: str,
        message: str,
    ) -> WriteResult:
        url = self._url(path)
        payload = {
            "message": message,
            "content": content_b64,
            "sha": sha,
            "branch": branch,
        }
        try:
            with self._client() as client:
                response = client.put(url, json=payload)
        except httpx.RequestError as exc:
            raise ContentStoreUnavailable(f"GitHub PUT {url}: {exc}") from exc

        logger.debug("PUT %s -> %s", url, response.status_code)
        return WriteResult(status_code=response.status_code, text=response.text)


def _extract_sha(response: httpx.Response) -> str | None:
    try:
        data: Any = response.json()
    except ValueError:
        return None
    # A directory path yields a list, which has no single sha.
    if isinstance(data, dict) and isinstance(data.get("sha"), str):
        return data["sha"]
    return None
