# sahayata/core/config.py
from functools import lru_cache
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Sahayata Donation API"
    host: str = "0.0.0.0"
    port: int = 5000
    mongo_uri: str = "mongodb://localhost:27017/Sahayata"
    mongo_db: str = "Sahayata"  # used when the URI names no database
    storage_backend: Literal["mongo", "memory"] = "mongo"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
