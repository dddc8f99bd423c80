"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `BIBNOTES_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TEMPLATE = "apa"


class Settings(BaseSettings):
    """bibnotes settings.

    All fields are environment-configurable. Prefix is `BIBNOTES_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="BIBNOTES_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")

    # Bibliography
    bibtex_file: Path | None = Field(default=None)
    template: str = Field(default=DEFAULT_TEMPLATE, min_length=1)

    @field_validator("bibtex_file", mode="before")
    @classmethod
    def _blank_path_is_unset(cls, v: object) -> object:
        # Path("") would silently become the current directory.
        if isinstance(v, str) and not v.strip():
            return None
        return v


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("BIBNOTES_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
