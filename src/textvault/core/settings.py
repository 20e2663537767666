from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field
from dotenv import load_dotenv

from textvault.core.errors import ConfigurationError

# Load .env if present
load_dotenv()


class SecuritySettings(BaseModel):
    """Security-related settings for document encryption."""

    SECRET_KEY: str = Field(..., repr=False, description="Server secret mixed into every per-document key. Never logged.")


class MongoSettings(BaseModel):
    """MongoDB connection settings."""

    DB_URL: str = Field(default="mongodb://localhost:27017", description="Mongo connection string")
    DB_NAME: str = Field(default="textvault", description="Database name to use")
    DB_COLLECTION: str = Field(default="textdocuments", description="Collection holding encrypted documents")


class APISettings(BaseModel):
    """FastAPI application settings."""

    API_TITLE: str = Field(default="Text Vault", description="API title for OpenAPI")
    API_DESCRIPTION: str = Field(
        default="Stores text documents encrypted at rest with a per-document derived key.",
        description="API description",
    )
    API_VERSION: str = Field(default="0.1.0", description="API version")
    CLIENT_URL: str = Field(..., description="Single origin allowed by CORS")
    CORS_ALLOW_METHODS: List[str] = Field(default_factory=lambda: ["GET", "POST"], description="CORS allowed methods")
    ENV: str = Field(default="development", description="Environment name")


class Settings(BaseModel):
    """Application configuration bundle."""

    security: SecuritySettings
    mongo: MongoSettings
    api: APISettings

    @staticmethod
    def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
        return os.getenv(name, default)

    # PUBLIC_INTERFACE
    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        security = SecuritySettings(SECRET_KEY=cls._get_env("SECRET_KEY", "") or "")
        mongo = MongoSettings(
            DB_URL=cls._get_env("DB_URL", "mongodb://localhost:27017"),
            DB_NAME=cls._get_env("DB_NAME", "textvault"),
            DB_COLLECTION=cls._get_env("DB_COLLECTION", "textdocuments"),
        )
        api = APISettings(
            API_TITLE=cls._get_env("API_TITLE", "Text Vault"),
            API_VERSION=cls._get_env("API_VERSION", "0.1.0"),
            CLIENT_URL=cls._get_env("CLIENT_URL", "") or "",
            ENV=cls._get_env("ENV", "development"),
        )
        return cls(security=security, mongo=mongo, api=api)

    # PUBLIC_INTERFACE
    def validate_required(self) -> "Settings":
        """Fail fast when a variable the service cannot run without is missing."""
        if not self.api.CLIENT_URL:
            raise ConfigurationError("CLIENT_URL is not defined")
        if not self.security.SECRET_KEY:
            raise ConfigurationError("SECRET_KEY is not defined")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton access to application settings loaded from environment."""
    return Settings.from_env()
