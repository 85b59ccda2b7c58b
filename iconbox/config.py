"""
Configuration and settings for the icon service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Administrator secret; also the session cookie value.
    admin_password: Optional[str] = Field(
        default=None, validation_alias="ADMIN_PASSWORD"
    )

    # S3-compatible object storage (AWS S3, Cloudflare R2, Tencent COS, MinIO)
    s3_bucket: Optional[str] = Field(default=None, validation_alias="S3_BUCKET")
    s3_endpoint: Optional[str] = Field(default=None, validation_alias="S3_ENDPOINT")
    s3_region: Optional[str] = Field(default=None, validation_alias="S3_REGION")
    s3_key_prefix: str = Field(default="", validation_alias="S3_KEY_PREFIX")
    aws_access_key_id: Optional[str] = Field(
        default=None, validation_alias="AWS_ACCESS_KEY_ID"
    )
    aws_secret_access_key: Optional[str] = Field(
        default=None, validation_alias="AWS_SECRET_ACCESS_KEY"
    )

    # Directory store: Redis hash or SQL table
    redis_url: Optional[str] = Field(default=None, validation_alias="REDIS_URL")
    redis_hash_key: str = Field(
        default="iconbox:icons", validation_alias="REDIS_HASH_KEY"
    )
    database_url: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, validation_alias="ICONBOX_USE_IN_MEMORY_BACKENDS"
    )

    # Server
    host: str = Field(default="127.0.0.1", validation_alias="ICONBOX_HOST")
    port: int = Field(default=8000, validation_alias="ICONBOX_PORT")
    log_level: str = Field(default="INFO", validation_alias="ICONBOX_LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
