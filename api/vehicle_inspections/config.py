"""Runtime settings, read from the environment and an optional ``.env`` file."""
from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    database_url: Optional[str] = Field(None, validation_alias="DATABASE_URL")
    # comma separated in the environment
    cors_origins: Annotated[List[str], NoDecode] = Field(
        ["http://localhost:3000", "http://localhost:5173"], validation_alias="CORS_ORIGINS"
    )
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    connect_timeout: int = Field(3, ge=1, validation_alias="DB_CONNECT_TIMEOUT")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance; a malformed value fails here with a ValidationError."""
    return Settings()
