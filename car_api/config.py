"""
Configuration settings for the Car API.
Uses Pydantic for type-safe configuration management.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Car API"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000

    # Storage
    cars_file: str = "data/cars.json"
    persistence_fail_closed: bool = False  # raise instead of logging read/write failures

    # Security
    jwt_secret: str = Field(..., min_length=1)  # no default: must come from the environment
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_rounds: int = 10

    # CORS
    cors_origins: list[str] = ["*"]

    # Docs
    docs_url: str = "/api-docs"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
