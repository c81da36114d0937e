"""
Centralized configuration for the Clipvault backend.

All settings are loaded from environment variables with sensible defaults.
Collaborator settings are namespaced (e.g., JWT_*, S3_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Clipvault API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Logging
    log_level: str = "info"
    log_format: Literal["console", "json"] = "console"

    # Session tokens
    jwt_secret_key: str = ""
    jwt_expiration_hours: int = 24
    jwt_issuer: str = "clipvault"
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"

    # Password hashing
    bcrypt_rounds: int = 12

    # Uploads
    max_upload_bytes: int = 10 * 1024 * 1024
    storage_timeout_seconds: float = 120.0
    delete_orphaned_objects: bool = False

    # Supabase (relational store)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # direct Postgres URL, migrations only

    # S3 / MinIO (object store)
    s3_endpoint: str = ""
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    s3_bucket_name: str = "default-bucket"
    s3_region: str = "us-east-1"
    s3_use_path_style: bool = False

    # Development only: keep users, uploads and objects in process memory
    use_in_memory_backends: bool = False


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
