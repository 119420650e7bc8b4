"""Publisher component models - frozen dataclass inputs and outputs."""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from content_publisher.domain.entities import Principal

ErrorCode = Literal[
    "METHOD_NOT_ALLOWED",
    "UNAUTHENTICATED",
    "MISCONFIGURED",
    "MALFORMED_PAYLOAD",
    "INVALID_SCHEMA",
    "TARGET_MISSING",
    "UPSTREAM_READ_FAILED",
    "UPSTREAM_WRITE_FAILED",
]

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Content-Type": "application/json",
}


@dataclass(frozen=True)
class PublishError:
    """Terminal failure for one request, mapped to exactly one status."""

    code: ErrorCode
    status_code: int
    message: str
    hint: str | None = None
    missing: list[str] | None = None

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.hint is not None:
            body["hint"] = self.hint
        if self.missing is not None:
            body["missing"] = list(self.missing)
        return body


@dataclass(frozen=True)
class PublishRequest:
    """Transport-neutral view of an incoming request."""

    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | bytes | None = None
    # Set when the hosting platform already verified the caller.
    principal: Principal | None = None


@dataclass(frozen=True)
class PublishResponse:
    status_code: int
    body: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=lambda: dict(CORS_HEADERS))
    error: PublishError | None = None

    @property
    def success(self) -> bool:
        return self.error is None and 200 <= self.status_code < 300

    def render(self) -> str:
        """JSON text of the body, empty string when there is none."""
        if self.body is None:
            return ""
        return json.dumps(self.body, ensure_ascii=False)

    @classmethod
    def from_error(cls, error: PublishError) -> "PublishResponse":
        return cls(status_code=error.status_code, body=error.to_body(), error=error)


@dataclass(frozen=True)
class ReadResult:
    """Outcome of reading the target file's current revision."""

    status_code: int
    text: str
    sha: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class WriteResult:
    """Outcome of committing new file content."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
