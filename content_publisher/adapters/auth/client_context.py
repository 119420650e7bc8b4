from collections.abc import Mapping
from typing import Any

from content_publisher.adapters.auth.jwt_identity import principal_from_claims
from content_publisher.domain.entities import Principal


class ClientContextIdentity:
    """
    Identity already verified by the hosting platform.

    Serverless platforms decode the identity JWT before invoking the
    function and hand over the user claims on the invocation context.
    """

    def __init__(self, user: Mapping[str, Any] | None) -> None:
        self._user = user

    def authenticate(self, headers: Mapping[str, str]) -> Principal | None:
        _ = headers  # Verification already happened upstream
        if not self._user:
            return None
        return principal_from_claims(self._user)
