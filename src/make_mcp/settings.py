from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from make_mcp.adapters.make import DEFAULT_BASE_URL


class MakeSettings(BaseSettings):
    # Credentials
    API_TOKEN: str = ""

    # Upstream
    API_URL: str = DEFAULT_BASE_URL
    HTTP_TIMEOUT_MS: Optional[int] = None  # unset keeps the httpx default

    # Server
    SERVER_NAME: str = "make-integration"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="MAKE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )


def load_settings(**overrides: object) -> MakeSettings:
    """Read settings once from the environment and ``.env``."""
    return MakeSettings(**overrides)
