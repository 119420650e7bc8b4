"""Wires the publisher component to its production adapters."""

from content_publisher.adapters.auth.jwt_identity import JWTIdentityAdapter
from content_publisher.adapters.clock import SystemClock
from content_publisher.adapters.github.contents import GitHubContentsStore
from content_publisher.app_shell.config import PublisherConfig
from content_publisher.components.publisher import ContentPublisher, IdentityPort


def create_publisher(
    config: PublisherConfig,
    identity: IdentityPort | None = None,
) -> ContentPublisher:
    """Build a publisher. Identity defaults to bearer-JWT verification."""
    if identity is None:
        identity = JWTIdentityAdapter(
            secret=config.identity_jwt_secret,
            algorithms=config.identity_jwt_algorithms,
        )
    return ContentPublisher(
        config=config,
        identity=identity,
        store=GitHubContentsStore(config),
        clock=SystemClock(),
    )
