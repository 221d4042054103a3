from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Finance Tracker"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/finance"
    database_echo: bool = False
    log_level: str = "INFO"
    recent_limit_default: int = 10
    recent_limit_max: int = 100


@lru_cache
def get_settings() -> Settings:
    return Settings()
