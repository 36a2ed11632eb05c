from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    render_scale: float = Field(default=1.5, gt=0)
    max_render_pixels: int = Field(default=25_000_000, gt=0)

    fetch_timeout_seconds: float = Field(default=30.0, gt=0)
    fetch_max_redirects: int = Field(default=5, ge=0)
    fetch_max_bytes: int = Field(default=50 * 1024 * 1024, gt=0)
    require_pdf_url: bool = False

    storage_account_id: str = ""
    storage_access_key_id: str = ""
    storage_secret_access_key: str = ""
    storage_endpoint_url: str | None = None
    storage_region: str = "auto"
    storage_bucket_name: str = "recollect"
    storage_public_base_url: str = "https://media.recollect.so"
    storage_connect_timeout_seconds: int = 10
    storage_read_timeout_seconds: int = 30
    storage_max_attempts: int = Field(default=3, ge=1)
    storage_public_read: bool = True
    storage_signed_url_expires_seconds: int = Field(default=604_800, gt=0)

    thumbnail_key_prefix: str = "test"
