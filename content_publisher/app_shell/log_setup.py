import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "PUBLISHER_LOG_LEVEL"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once per process. Level defaults to $PUBLISHER_LOG_LEVEL or INFO."""
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, name, logging.INFO),
    )
