"""
Content document parsing and schema checks.

The document is opaque apart from its required top-level keys. A key
counts as present only when its value is set: null, "", 0 and false are
treated as absent, while empty lists and objects pass.
"""

import json
from typing import Any

REQUIRED_CONTENT_KEYS: tuple[str, ...] = ("hero", "positions", "servers")


class MalformedPayloadError(ValueError):
    """Body is not valid JSON."""


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON.
    raise MalformedPayloadError(f"Invalid JSON constant: {name}")


def parse_content_document(body: str | bytes | None) -> Any:
    """
    Parse a request body as strict JSON.

    Raises MalformedPayloadError when the body is empty or not JSON.
    """
    if body is None:
        raise MalformedPayloadError("Request body is empty")
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPayloadError(f"Body is not UTF-8: {e}") from e
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(str(e)) from e


def _is_unset(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0
    return False


def missing_content_keys(document: Any) -> list[str]:
    """Return the required keys absent or unset in the document (all of them for non-objects)."""
    if not isinstance(document, dict):
        return list(REQUIRED_CONTENT_KEYS)
    return [key for key in REQUIRED_CONTENT_KEYS if _is_unset(document.get(key))]


def encode_content_document(document: dict[str, Any]) -> str:
    """Pretty-print the document the way it is stored in the repository."""
    return json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False)
