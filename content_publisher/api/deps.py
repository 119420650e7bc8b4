from functools import lru_cache

from fastapi import Depends

from content_publisher.app_shell.config import PublisherConfig, load_config
from content_publisher.app_shell.factory import create_publisher
from content_publisher.components.publisher import ContentPublisher


# --- Settings ---
@lru_cache
def get_config() -> PublisherConfig:
    return load_config()


# --- Component Services ---
def get_publisher(config: PublisherConfig = Depends(get_config)) -> ContentPublisher:
    """Get publisher component with production adapters."""
    return create_publisher(config)
