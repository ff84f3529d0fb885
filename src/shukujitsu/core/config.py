from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="SHUKUJITSU_", case_sensitive=False)

    environment: Literal["development", "staging", "production"] = "development"
    project_name: str = "Japanese Holiday Calendar API"
    version: str = "0.1.0"

    default_format: Literal["json", "csv", "yaml"] = "json"
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
