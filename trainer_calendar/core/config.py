from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration.

    Values are loaded from environment variables and optional .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # App
    app_name: str = "Trainer Calendar"
    environment: str = "dev"  # dev|staging|prod
    api_prefix: str = "/api"

    # REST backend
    backend_api_url: str = "http://localhost:3000/api"
    backend_timeout_seconds: float = 10.0

    # Timezone used to decide "today"
    timezone: str = "Asia/Kuala_Lumpur"

    # Logging
    log_level: str = "INFO"
    log_dir: str = ""  # empty: console only


@lru_cache
def get_settings() -> Settings:
    return Settings()
