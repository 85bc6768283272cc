from __future__ import annotations

from functools import lru_cache

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App configuration (env-friendly).

    Tip: create a .env file and point API_BASE_URL at the trails backend.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Dog Trails"
    version: str = "0.1.0"

    # Backend that serves /api/trails and /api/providers.
    api_base_url: AnyHttpUrl = "http://127.0.0.1:3000"
    trails_path: str = "/api/trails"
    providers_path: str = "/api/providers"

    user_agent: str = "dogtrails/0.1.0"

    http_timeout_s: float = 20.0

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
