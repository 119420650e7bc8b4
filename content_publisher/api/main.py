import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from content_publisher import __version__
from content_publisher.api.deps import get_config
from content_publisher.app_shell.log_setup import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    configure_logging()

    # Fail fast on an unreadable config file; missing secrets only warn,
    # since each request reports them with a 500.
    config = get_config()
    missing = config.missing_secrets()
    if missing:
        logger.warning("Missing required environment variables: %s", ", ".join(missing))
    else:
        logger.info(
            "Publishing %s to %s@%s", config.content_path, config.github_repo, config.branch
        )

    yield


app = FastAPI(
    title="Content Publisher API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from content_publisher.api.routes import save_content  # noqa: E402

app.include_router(save_content.router, prefix="/api/save-content", tags=["Content"])
# Path the static admin page posts to when deployed as a serverless function.
app.include_router(
    save_content.router, prefix="/.netlify/functions/save-content", tags=["Content"]
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "content-publisher"}
