"""Publisher component port definitions - protocols for dependencies."""

from collections.abc import Mapping
from datetime import datetime
from typing import Protocol

from content_publisher.components.publisher.models import ReadResult, WriteResult
from content_publisher.domain.entities import Principal


class IdentityPort(Protocol):
    """Protocol for verifying the caller's credential."""

    def authenticate(self, headers: Mapping[str, str]) -> Principal | None:
        """Return the verified principal, or None when the caller is anonymous."""
        ...


class ContentStorePort(Protocol):
    """Protocol for a version-controlled file store addressed by path."""

    def read_version(self, path: str, branch: str) -> ReadResult:
        """Fetch the current revision token of a file.

        Raises ContentStoreUnavailable when the store cannot be reached.
        """
        ...

    def write_file(
        self,
        path: str,
        branch: str,
        content_b64: str,
        sha: str,
        message: str,
    ) -> WriteResult:
        """Overwrite a file, guarded by the revision token from read_version."""
        ...


class ClockPort(Protocol):
    """Protocol for time operations."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...


class ContentStoreUnavailable(Exception):
    """The file store could not be reached (DNS, connect, TLS, timeout)."""
