"""Application configuration."""

import os
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    record_store_backend: Literal["supabase", "sqlite"] = "supabase"
    image_store_backend: Literal["s3", "supabase"] = "s3"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_bucket: str = "meal-images"
    sqlite_path: str = "meals.db"
    aws_region: str = "eu-north-1"
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_bucket_name: str | None = None
    image_base_url: str = ""
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uses_supabase(self) -> bool:
        """Whether any configured backend needs a Supabase client."""
        return "supabase" in {self.record_store_backend, self.image_store_backend}

    @model_validator(mode="after")
    def _check_backends(self) -> "Settings":
        if self.uses_supabase and not (self.supabase_url and self.supabase_service_key):
            raise ValueError(
                "supabase_url and supabase_service_key are required "
                "for the supabase backend"
            )
        if self.image_store_backend == "s3" and not self.aws_bucket_name:
            raise ValueError("aws_bucket_name is required for the s3 image store")
        return self

