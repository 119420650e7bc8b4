"""
Serverless entry point.

Accepts the platform's event envelope:
    {"httpMethod": ..., "headers": {...}, "body": ..., "isBase64Encoded": bool}
and a context whose `clientContext.user` holds the verified identity claims.
Returns {"statusCode": int, "headers": {...}, "body": str}.
"""

import base64
import binascii
import logging
from collections.abc import Mapping
from typing import Any

from content_publisher.adapters.auth.client_context import ClientContextIdentity
from content_publisher.app_shell.config import load_config
from content_publisher.app_shell.factory import create_publisher
from content_publisher.app_shell.log_setup import configure_logging
from content_publisher.components.publisher import PublishError, PublishRequest, PublishResponse

logger = logging.getLogger(__name__)


def _field(obj: Any, name: str) -> Any:
    """Read a field from either a mapping or an attribute-style object."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def context_user(context: Any) -> Mapping[str, Any] | None:
    user = _field(_field(context, "clientContext"), "user")
    return user if isinstance(user, Mapping) else None


def event_body(event: Mapping[str, Any]) -> str | bytes | None:
    body = event.get("body")
    if body is None or not event.get("isBase64Encoded"):
        return body
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError):
        # Left undecoded; the JSON parse rejects it as a malformed payload.
        return body


def _envelope(response: PublishResponse) -> dict[str, Any]:
    return {
        "statusCode": response.status_code,
        "headers": dict(response.headers),
        "body": response.render(),
    }


def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
    """Handle one invocation. Config is read from the environment each time."""
    configure_logging()
    try:
        config = load_config()
    except (FileNotFoundError, ValueError) as e:
        logger.error("Publisher config could not be loaded: %s", e)
        return _envelope(
            PublishResponse.from_error(
                PublishError(
                    code="MISCONFIGURED",
                    status_code=500,
                    message=f"Invalid publisher config: {e}",
                    hint="Check the file named by PUBLISHER_CONFIG exists and is valid YAML.",
                )
            )
        )

    publisher = create_publisher(config, identity=ClientContextIdentity(context_user(context)))
    request = PublishRequest(
        method=str(event.get("httpMethod") or ""),
        headers=event.get("headers") or {},
        body=event_body(event),
    )
    return _envelope(publisher.handle(request))
