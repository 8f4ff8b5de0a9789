"""
Configuration and settings for the blog backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Post store: Firestore wins over SQL when both are configured
    database_url: Optional[str] = Field(default=None)
    firestore_project_id: Optional[str] = Field(default=None)
    posts_collection: str = Field(default="posts")

    # Uploaded images
    upload_dir: str = Field(default="uploads")
    uploads_path: str = Field(default="/uploads")
    max_upload_bytes: int = Field(default=MAX_UPLOAD_BYTES, gt=0)

    # Admin routes are open when no token is set
    admin_token: Optional[str] = Field(default=None)

    cors_origins: str = Field(default="*")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "use_in_memory_backends", "BLOG_USE_IN_MEMORY_BACKENDS"
        ),
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)
    log_level: str = Field(default="INFO")

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
