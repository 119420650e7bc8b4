import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

# Env names of the required connection secrets, in reporting order.
SECRET_ENV_NAMES: dict[str, str] = {
    "github_token": "GITHUB_TOKEN",
    "github_repo": "GITHUB_REPO",
}

# Optional env overrides for non-secret settings.
SETTING_ENV_NAMES: dict[str, str] = {
    "branch": "PUBLISHER_BRANCH",
    "content_path": "PUBLISHER_CONTENT_PATH",
    "api_base_url": "GITHUB_API_URL",
    "user_agent": "PUBLISHER_USER_AGENT",
    "identity_jwt_secret": "IDENTITY_JWT_SECRET",
}

CONFIG_PATH_ENV = "PUBLISHER_CONFIG"


class PublisherConfig(BaseModel):
    """Connection settings for one publisher, built once and injected."""

    github_token: str | None = None
    github_repo: str | None = None
    branch: str = "main"
    content_path: str = "content.json"
    api_base_url: str = "https://api.github.com"
    user_agent: str = "ContentPublisher-Admin/1.0"
    identity_jwt_secret: str | None = None
    identity_jwt_algorithms: list[str] = Field(default_factory=lambda: ["HS256"])
    # None leaves the platform's request lifetime as the only bound.
    request_timeout: float | None = None

    model_config = {"frozen": True, "extra": "forbid"}

    def missing_secrets(self) -> list[str]:
        """Env names of required secrets that are unset or empty."""
        return [
            env_name
            for attr, env_name in SECRET_ENV_NAMES.items()
            if not getattr(self, attr)
        ]

    def __repr__(self) -> str:
        token = "***" if self.github_token else None
        return (
            f"PublisherConfig(github_repo={self.github_repo!r}, branch={self.branch!r}, "
            f"content_path={self.content_path!r}, github_token={token!r})"
        )

    __str__ = __repr__


def _read_settings_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Publisher config file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in publisher config: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Publisher config must be a mapping at the top level")

    # Secrets only ever come from the environment.
    leaked = sorted(set(data) & set(SECRET_ENV_NAMES))
    if leaked:
        raise ValueError(f"Secrets must not be set in the config file: {', '.join(leaked)}")
    return data


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> PublisherConfig:
    """
    Build the publisher config from an optional YAML file and the environment.

    Environment values win over file values. The file path defaults to
    $PUBLISHER_CONFIG when set.
    Raises FileNotFoundError if an explicit file is missing.
    Raises ValueError if the file or the resulting settings are invalid.
    """
    env = os.environ if environ is None else environ

    if path is None and env.get(CONFIG_PATH_ENV):
        path = Path(env[CONFIG_PATH_ENV])

    data: dict[str, Any] = _read_settings_file(path) if path is not None else {}

    for attr, env_name in {**SECRET_ENV_NAMES, **SETTING_ENV_NAMES}.items():
        value = env.get(env_name)
        if value:
            data[attr] = value

    try:
        return PublisherConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Publisher config validation failed:\n{e}") from e
