from __future__ import annotations
import os
from pydantic import BaseModel

class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "dev")
    app_name: str = os.getenv("APP_NAME", "commissiestrijd-api")
    app_display_name: str = os.getenv("APP_DISPLAY_NAME", "Commissiestrijd")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    git_sha: str = os.getenv("GIT_SHA", "dev")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    host_url: str = os.getenv("HOST_URL", "http://localhost:3000")
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", os.getenv("HOST_URL", "http://localhost:3000")).split(",")
    database_url: str = os.getenv("DATABASE_URL", "postgresql+asyncpg://postgres:postgres@db:5432/commissiestrijd")

    # Wall clock used for submission timestamps, period bounds and the nightly sweep
    timezone: str = os.getenv("TIMEZONE", "Europe/Amsterdam")

    # Image storage: local|s3
    image_store: str = os.getenv("IMAGE_STORE", "local")
    image_dir: str = os.getenv("IMAGE_DIR", "submittedimages")
    max_image_bytes: int = int(os.getenv("MAX_IMAGE_BYTES", str(5 * 1024 * 1024)))
    s3_endpoint: str = os.getenv("S3_ENDPOINT", "http://minio:9000")
    s3_access_key: str = os.getenv("S3_ACCESS_KEY", "minioadmin")
    s3_secret_key: str = os.getenv("S3_SECRET_KEY", "minioadmin")
    s3_bucket_uploads: str = os.getenv("S3_BUCKET_UPLOADS", "commissiestrijd-images")

    # OIDC provider queried for the is_admin claim
    oauth_provider_url: str = os.getenv("OAUTH_PROVIDER_URL", "https://koala.dev.svsticky.nl/")

    # Retention sweeper
    sweeper_enabled: bool = os.getenv("SWEEPER_ENABLED", "1") == "1"
    retention_years: int = int(os.getenv("RETENTION_YEARS", "1"))

settings = Settings()
