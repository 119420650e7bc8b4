"""Publisher component - commits a validated content document to the file store."""

from content_publisher.components.publisher.component import SUCCESS_MESSAGE, ContentPublisher
from content_publisher.components.publisher.models import (
    CORS_HEADERS,
    PublishError,
    PublishRequest,
    PublishResponse,
    ReadResult,
    WriteResult,
)
from content_publisher.components.publisher.ports import (
    ClockPort,
    ContentStorePort,
    ContentStoreUnavailable,
    IdentityPort,
)

__all__ = [
    # Component
    "ContentPublisher",
    "SUCCESS_MESSAGE",
    # Models
    "CORS_HEADERS",
    "PublishError",
    "PublishRequest",
    "PublishResponse",
    "ReadResult",
    "WriteResult",
    # Ports
    "IdentityPort",
    "ContentStorePort",
    "ContentStoreUnavailable",
    "ClockPort",
]
