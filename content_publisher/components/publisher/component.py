"""Publisher component - validates a content document and commits it to the file store."""

import base64
import logging
from email.utils import format_datetime
from typing import Any

from content_publisher.app_shell.config import PublisherConfig
from content_publisher.components.publisher.models import (
    PublishError,
    PublishRequest,
    PublishResponse,
)
from content_publisher.components.publisher.ports import (
    ClockPort,
    ContentStorePort,
    ContentStoreUnavailable,
    IdentityPort,
)
from content_publisher.domain.content import (
    MalformedPayloadError,
    encode_content_document,
    missing_content_keys,
    parse_content_document,
)
from content_publisher.domain.entities import Principal

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Saved! Site rebuilds in ~30 seconds."


class ContentPublisher:
    """Handles one save request: gate, authenticate, validate, read sha, write."""

    def __init__(
        self,
        config: PublisherConfig,
        identity: IdentityPort,
        store: ContentStorePort,
        clock: ClockPort,
    ) -> None:
        self._config = config
        self._identity = identity
        self._store = store
        self._clock = clock

    def handle(self, request: PublishRequest) -> PublishResponse:
        """Process a request and return the response. Never raises for client or upstream errors."""
        method = request.method.upper()
        if method == "OPTIONS":
            return PublishResponse(status_code=204)
        if method != "POST":
            return PublishResponse.from_error(
                PublishError(
                    code="METHOD_NOT_ALLOWED",
                    status_code=405,
                    message="Method not allowed",
                )
            )

        principal = request.principal or self._identity.authenticate(request.headers)
        if principal is None:
            return PublishResponse.from_error(
                PublishError(
                    code="UNAUTHENTICATED",
                    status_code=401,
                    message="Unauthorized. Log in via the identity provider first.",
                )
            )

        missing = self._config.missing_secrets()
        if missing:
            logger.error("Publisher misconfigured, missing: %s", ", ".join(missing))
            return PublishResponse.from_error(
                PublishError(
                    code="MISCONFIGURED",
                    status_code=500,
                    message="Missing env vars.",
                    hint="Add GITHUB_TOKEN and GITHUB_REPO to the site's environment variables.",
                    missing=missing,
                )
            )

        try:
            document = parse_content_document(request.body)
        except MalformedPayloadError as e:
            logger.debug("Rejected body from %s: %s", principal.email, e)
            return PublishResponse.from_error(
                PublishError(
                    code="MALFORMED_PAYLOAD",
                    status_code=400,
                    message="Invalid JSON body",
                )
            )

        absent = missing_content_keys(document)
        if absent:
            logger.debug("Rejected document from %s, missing keys: %s", principal.email, absent)
            return PublishResponse.from_error(
                PublishError(
                    code="INVALID_SCHEMA",
                    status_code=400,
                    message="Invalid content schema",
                )
            )

        sha_or_error = self._read_sha()
        if isinstance(sha_or_error, PublishError):
            return PublishResponse.from_error(sha_or_error)

        write_error = self._write(document, sha_or_error, principal)
        if write_error is not None:
            return PublishResponse.from_error(write_error)

        logger.info(
            "Saved %s to %s@%s for %s",
            self._config.content_path,
            self._config.github_repo,
            self._config.branch,
            principal.email,
        )
        return PublishResponse(
            status_code=200,
            body={"success": True, "message": SUCCESS_MESSAGE, "savedBy": principal.email},
        )

    def commit_message(self, principal: Principal) -> str:
        stamp = format_datetime(self._clock.now_utc(), usegmt=True)
        return f"✏️ Admin update — {stamp} by {principal.email}"

    def _read_sha(self) -> str | PublishError:
        cfg = self._config
        read_hint = "Check GITHUB_TOKEN and GITHUB_REPO are correct."

        try:
            result = self._store.read_version(cfg.content_path, cfg.branch)
        except ContentStoreUnavailable as e:
            logger.warning("GitHub read unreachable: %s", e)
            return PublishError(
                code="UPSTREAM_READ_FAILED",
                status_code=500,
                message=f"Read failed: {e}",
                hint=read_hint,
            )

        if result.status_code == 404:
            logger.warning("%s missing in %s@%s", cfg.content_path, cfg.github_repo, cfg.branch)
            return PublishError(
                code="TARGET_MISSING",
                status_code=500,
                message=(
                    f'{cfg.content_path} not found in repo "{cfg.github_repo}" '
                    f'on branch "{cfg.branch}".'
                ),
                hint=(
                    "Make sure you pushed your files to GitHub and connected "
                    "the repo to your site."
                ),
            )

        if not result.ok:
            logger.warning("GitHub GET returned %s", result.status_code)
            return PublishError(
                code="UPSTREAM_READ_FAILED",
                status_code=500,
                message=f"Read failed: GitHub GET {result.status_code}: {result.text}",
                hint=read_hint,
            )

        if not result.sha:
            logger.warning("GitHub GET %s carried no sha", result.status_code)
            return PublishError(
                code="UPSTREAM_READ_FAILED",
                status_code=500,
                message=f"Read failed: GitHub GET {result.status_code}: response carried no sha",
                hint=read_hint,
            )

        return result.sha

    def _write(
        self, document: dict[str, Any], sha: str, principal: Principal
    ) -> PublishError | None:
        cfg = self._config
        write_hint = 'Check GITHUB_TOKEN has "repo" scope.'
        encoded = base64.b64encode(encode_content_document(document).encode("utf-8")).decode(
            "ascii"
        )

        try:
            result = self._store.write_file(
                cfg.content_path,
                cfg.branch,
                encoded,
                sha,
                self.commit_message(principal),
            )
        except ContentStoreUnavailable as e:
            logger.warning("GitHub write unreachable: %s", e)
            return PublishError(
                code="UPSTREAM_WRITE_FAILED",
                status_code=500,
                message=f"Save failed: {e}",
                hint=write_hint,
            )

        if not result.ok:
            # 409 here means the sha went stale between read and write.
            logger.warning("GitHub PUT returned %s", result.status_code)
            return PublishError(
                code="UPSTREAM_WRITE_FAILED",
                status_code=500,
                message=f"Save failed: GitHub PUT {result.status_code}: {result.text}",
                hint=write_hint,
            )

        return None
