"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `MEDIASHELF_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Mediashelf settings.

    All fields are environment-configurable. Prefix is `MEDIASHELF_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIASHELF_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")

    # Rotten Tomatoes
    rt_api_key: str | None = Field(default=None)
    rt_api_base_url: str = Field(default="https://api.rottentomatoes.com/api/public/v1.0")

    # Goodreads
    gr_api_key: str | None = Field(default=None)
    gr_api_secret: str | None = Field(default=None)
    gr_api_base_url: str = Field(default="https://www.goodreads.com")

    # Spotify
    sp_client_id: str | None = Field(default=None)
    sp_client_secret: str | None = Field(default=None)
    sp_api_base_url: str = Field(default="https://api.spotify.com")
    sp_accounts_url: str = Field(default="https://accounts.spotify.com/api/token")

    # Aggregation
    search_max_results: int = Field(default=10, ge=1, le=50)
    source_timeout_s: float = Field(default=10.0, gt=0.0, le=120.0)
    title_max_len: int = Field(default=60, ge=1, le=1000)
    title_suffix: str = Field(default="...")

    # Networking
    http_timeout_s: float = Field(default=8.0, gt=0.0)
    http_user_agent: str = Field(default="mediashelf/0.1")

    # Storage
    entries_path: Path = Field(default=Path("entries.json"))


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("MEDIASHELF_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
