"""Application settings loaded from the environment.

Every field can be overridden with a ``GDD_``-prefixed environment variable
(``GDD_API_BASE_URL``, ``GDD_DEBUG``...) or from a local ``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://gdd-sw.onrender.com"


class Settings(BaseSettings):
    """Runtime configuration for the dashboard."""

    model_config = SettingsConfigDict(env_prefix="GDD_", env_file=".env", extra="ignore")

    app_name: str = "gdd-dashboard"
    app_env: str = "development"
    debug: bool = False

    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, description="GDD service root URL")
    request_timeout: float = Field(default=30.0, gt=0)

    # Initial form values, as shown when the dashboard first opens
    default_location: str = "Larnaca"
    default_base_temp: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()
