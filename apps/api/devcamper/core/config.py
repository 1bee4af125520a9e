"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    auth_provider: Literal["mock", "jwt"] = "jwt"
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"

    store_backend: Literal["memory", "mongo"] = "memory"
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "devcamper"

    geocoder_provider: Literal["mapquest", "static"] = "mapquest"
    geocoder_api_key: str | None = None
    geocoder_base_url: str = "https://www.mapquestapi.com/geocoding/v1/address"
    geocoder_timeout_seconds: float = Field(default=10.0, gt=0)

    # Bytes.
    max_file_upload: int = Field(default=1_000_000, ge=1)
    file_upload_path: str = "./public/uploads"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="DEVCAMPER_", env_file=".env", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _LOG_LEVELS:
            raise ValueError(f"Invalid log_level '{value}'. Must be one of: {sorted(_LOG_LEVELS)}")
        return upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
