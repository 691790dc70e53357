"""
Configuration management using Pydantic settings.
Handles the store URL, public and privileged keys, and environment variables.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings read from the environment (or a .env file).

    The three store settings have no defaults: a process started without
    them fails at import time instead of on the first request.
    """

    # Application configuration
    app_name: str = "Armenia Property Listings API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False

    # Record store configuration (required)
    store_url: str
    store_public_key: str
    store_service_key: str

    # Identity tokens are signed with the privileged service key
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    min_password_length: int = 6

    # API configuration
    api_prefix: str = "/api"
    cors_origins: List[str] = ["http://localhost:3000"]

    # Public feed size
    feed_limit: int = 20

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("store_url")
    @classmethod
    def validate_store_url(cls, v: str) -> str:
        """Ensure an async driver is used for the store URL."""
        if not v or not v.strip():
            raise ValueError("STORE_URL is required")
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+asyncpg://", 1)
        if v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    @field_validator("store_public_key")
    @classmethod
    def validate_public_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("STORE_PUBLIC_KEY is required")
        return v

    @field_validator("store_service_key")
    @classmethod
    def validate_service_key(cls, v: str) -> str:
        """Validate service key strength, it doubles as the token signing secret."""
        if not v or not v.strip():
            raise ValueError("STORE_SERVICE_KEY is required")
        if len(v) < 32:
            raise ValueError("STORE_SERVICE_KEY must be at least 32 characters long")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.store_url.startswith("sqlite")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()


# Global settings instance
settings = get_settings()
