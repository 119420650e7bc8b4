import logging
from collections.abc import Mapping
from typing import Any, cast

from jose import jwt

from content_publisher.domain.entities import Principal

logger = logging.getLogger(__name__)


def bearer_token(headers: Mapping[str, str]) -> str | None:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    for key, value in headers.items():
        if key.lower() == "authorization":
            scheme, _, token = value.partition(" ")
            if scheme.lower() == "bearer" and token.strip():
                return token.strip()
            return None
    return None


def principal_from_claims(claims: Mapping[str, Any]) -> Principal | None:
    """Map identity-provider claims onto a Principal. Requires an email claim."""
    email = claims.get("email")
    if not isinstance(email, str) or not email:
        return None

    app_metadata = claims.get("app_metadata") or {}
    roles = app_metadata.get("roles") if isinstance(app_metadata, dict) else None
    return Principal(
        id=str(claims.get("sub") or email),
        email=email,
        roles=[str(r) for r in roles] if isinstance(roles, list) else [],
    )


class JWTIdentityAdapter:
    """Verifies identity-provider JWTs signed with a shared secret."""

    def __init__(self, secret: str | None, algorithms: list[str] | None = None) -> None:
        self._secret = secret
        self._algorithms = algorithms or ["HS256"]

    def decode(self, token: str) -> dict[str, Any] | None:
        if not self._secret:
            logger.warning("IDENTITY_JWT_SECRET is not set; rejecting bearer token")
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=self._algorithms,
                options={"verify_aud": False},
            )
            return cast(dict[str, Any], payload)
        except jwt.JWTError as e:
            logger.debug("Bearer token rejected: %s", e)
            return None

    def authenticate(self, headers: Mapping[str, str]) -> Principal | None:
        token = bearer_token(headers)
        if not token:
            return None

        claims = self.decode(token)
        if claims is None:
            return None
        return principal_from_claims(claims)
