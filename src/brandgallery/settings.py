"""Application settings and environment configuration."""

from typing import Optional
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[2]
ENV_FILE = BASE_DIR / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_name: str = "Brand Gallery"
    debug: bool = False
    environment: str = "dev"  # 'dev' or 'prod'

    # Object storage
    storage_backend: str = "gcs"  # 'gcs', 'local' or 'memory'
    gcp_project_id: Optional[str] = None
    storage_bucket_name: str = "brandgallery-assets"
    public_base_url: str = ""  # Overrides the bucket URL when serving through a CDN
    local_storage_dir: str = str(BASE_DIR / "uploads")

    # Metadata documents (object keys)
    photos_document_key: str = "metadata/photos.json"
    sheets_document_key: str = "metadata/sheets.json"
    purchases_document_key: str = "metadata/purchases.json"

    # Session login
    session_secret: str = "change-me"
    admin_username: str = "admin"
    admin_password: str = "admin"
    boss_username: str = "boss"
    boss_password: str = "boss"

    # Views
    # Brands the boss role never sees, compared after key normalization.
    boss_excluded_brands: list[str] = []
    default_brand: str = "DefaultBrand"
    default_person: str = "DefaultPerson"
    default_date: str = "NoDate"

    # Uploads
    max_upload_bytes: int = 20 * 1024 * 1024  # 20 MB

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    api_workers: int = 1
    app_url: str = "http://localhost:8080"

    @property
    def storage_root(self) -> str:
        """Public URL prefix that storage keys are appended to."""
        base = (self.public_base_url or "").strip()
        if base:
            return f"{base.rstrip('/')}/"
        if self.storage_backend.lower() == "local":
            return "/uploads/"
        return f"https://storage.googleapis.com/{self.storage_bucket_name}/"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "prod"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "dev"


settings = Settings()
