import os
import sys
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _should_load_env_file() -> str | None:
    """Determine if .env should be loaded.

    Local development picks up `backend/.env` automatically. Under pytest or
    in CI the environment is the only source, so tests see a predictable
    configuration.
    """
    if any("pytest" in str(x) for x in sys.argv if x):
        return None
    if os.environ.get("CI") in ("1", "true", "True"):
        return None
    return ".env"


class Settings(BaseSettings):
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: 'development', 'staging', or 'production'",
    )
    PROJECT_NAME: str = Field(
        default="The Brand Report",
        description="Project name used in the API title and CSV filenames",
    )

    # Firebase / Firestore
    FIREBASE_PROJECT_ID: str = Field(
        default="the-brand-report",
        description="Google Cloud project hosting Firestore and Firebase Auth",
    )
    FIREBASE_CREDENTIALS_PATH: str = Field(
        default="",
        description="Path to a service account JSON file. "
        "Application default credentials are used when empty.",
    )
    FIRESTORE_BATCH_SIZE: int = Field(
        default=400,
        description="Deletes per batch when clearing a comment subcollection "
        "(Firestore caps a batch at 500 writes)",
    )

    # Admin access: custom claim `admin: true` or a listed email
    ADMIN_EMAILS: Annotated[List[str], NoDecode] = Field(
        default=[],
        description="Emails treated as admins (comma-separated in env var)",
    )

    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["http://localhost:5173"],
        description="Allowed CORS origins (comma-separated in env var)",
    )

    # Public comment thread
    COMMENTS_PAGE_SIZE: int = Field(
        default=10,
        description="Comments per page on the investigation detail page",
    )
    CLAIMANT_EXCERPT_LENGTH: int = Field(
        default=50,
        description="Characters of the issue description quoted in a claimant comment",
    )

    # Rate limits for unauthenticated writes (slowapi syntax)
    RATE_LIMIT_COMMENTS: str = Field(default="10/minute")
    RATE_LIMIT_COMMENT_REPORTS: str = Field(default="10/minute")
    RATE_LIMIT_INCIDENT_REPORTS: str = Field(default="5/hour")

    # Performance settings
    SLOW_REQUEST_THRESHOLD: float = Field(
        default=1.0,
        description="Log warning for requests slower than this (seconds)",
    )

    @field_validator("CORS_ORIGINS", "ADMIN_EMAILS", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | List[str]) -> List[str]:
        """Parse a comma-separated string into a list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=_should_load_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",  # Allow extra env vars (e.g., SENTRY_DSN) without validation errors
    )


settings = Settings()


def get_settings() -> Settings:
    """Get the settings instance (for dependency injection)."""
    return settings
