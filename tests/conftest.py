import pytest

from content_publisher.api.deps import get_config
from content_publisher.app_shell.config import (
    CONFIG_PATH_ENV,
    SECRET_ENV_NAMES,
    SETTING_ENV_NAMES,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """
    Isolate every test from the developer's shell environment.

    Clears publisher env vars and the cached API config.
    """
    for name in [*SECRET_ENV_NAMES.values(), *SETTING_ENV_NAMES.values(), CONFIG_PATH_ENV]:
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def github_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Required secrets present."""
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    monkeypatch.setenv("GITHUB_REPO", "owner/site")
