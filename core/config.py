"""
Configuration settings for the AccessLanka assistant backend.

Uses Pydantic Settings for environment variable management.
"""

import os
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Environment
    ENV: str = Field(default="development", env="ENV")
    DEBUG: bool = Field(default=False, env="DEBUG")
    LOG_LEVEL: str = Field(default="INFO", env="LOG_LEVEL")

    # Application
    APP_NAME: str = Field(default="AccessLanka Assistant", env="APP_NAME")
    VERSION: str = Field(default="1.0.0", env="VERSION")

    # Server
    HOST: str = Field(default="0.0.0.0", env="HOST")
    PORT: int = Field(default=8000, env="PORT")

    origins: List[str] = [
        "http://localhost:8081",  # expo dev server
        "http://localhost:19006",
    ]

    DATABASE_URL: Optional[str] = Field(default=None, env="DATABASE_URL")
    PRODUCTION_DATABASE_URL: Optional[str] = Field(default=None, env="PRODUCTION_DATABASE_URL")

    @property
    def database_url(self) -> str:
        if self.ENV == "development":
            return self.DATABASE_URL or "sqlite+aiosqlite:///./accesslanka.db"
        return self.PRODUCTION_DATABASE_URL or ""

    DATABASE_POOL_SIZE: int = Field(default=10, env="DATABASE_POOL_SIZE")
    DATABASE_MAX_OVERFLOW: int = Field(default=20, env="DATABASE_MAX_OVERFLOW")

    # Chatbot
    CHATBOT_MAX_RESULTS: int = Field(default=5, env="CHATBOT_MAX_RESULTS")
    # Unset means fetches are not bounded.
    CHATBOT_FETCH_TIMEOUT_SECONDS: Optional[float] = Field(
        default=None,
        env="CHATBOT_FETCH_TIMEOUT_SECONDS"
    )

    # Sentry (Optional)
    SENTRY_DSN: Optional[str] = Field(default=None, env="SENTRY_DSN")
    SENTRY_ENVIRONMENT: str = Field(default="development", env="SENTRY_ENVIRONMENT")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Create settings instance
settings = Settings()


def get_env_file() -> str:
    """Get the appropriate environment file based on ENV setting."""
    env_file = f".env.{settings.ENV}"
    if os.path.exists(env_file):
        return env_file
    return ".env"


# Update settings with environment-specific file
settings = Settings(_env_file=get_env_file())
