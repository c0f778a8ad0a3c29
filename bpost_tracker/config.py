"""Application configuration using pydantic-settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Instances are frozen: the allowed proxy origin and the rest of the
    configuration are fixed once the application has been created.
    """

    # Proxy / upstream
    allowed_origin: str = "https://track.bpost.cloud"
    proxy_user_agent: str = "BpostTracker/1.0"

    # HTTP Settings
    http_timeout: float = 30.0  # seconds

    # Static assets
    static_dir: Path = Path("public")
    index_document: str = "index.html"

    # Branding
    site_name: str = "bpost tracker"

    # Server
    port: int = 8080
    host: str = "0.0.0.0"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @property
    def tracking_endpoint(self) -> str:
        """Items lookup endpoint on the upstream tracking API."""
        return f"{self.allowed_origin.rstrip('/')}/track/items"
