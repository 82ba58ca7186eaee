"""Application configuration management."""

from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database Configuration
    postgres_host: str = Field(default="localhost", description="PostgreSQL host")
    postgres_port: int = Field(default=5432, description="PostgreSQL port")
    postgres_db: str = Field(default="recruitment", description="PostgreSQL database name")
    postgres_user: str = Field(default="recruitment", description="PostgreSQL username")
    postgres_password: str = Field(default="", description="PostgreSQL password")
    custom_database_url: Optional[str] = Field(
        default=None,
        description="Full database URL, overrides the PostgreSQL settings (e.g. sqlite:///./dev.db)"
    )
    create_tables_on_startup: bool = Field(
        default=True,
        description="Create missing tables from model metadata at startup"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=3000, description="API port")
    allowed_origins: str = Field(default="*", description="Comma separated CORS origins")

    # Application Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="development", description="Environment name")

    # Legacy API Configuration
    legacy_api_url: str = Field(default="http://localhost:4040", description="Legacy API base URL")
    legacy_api_key: str = Field(
        default="0194ec39-4437-7c7f-b720-7cd7b2c8d7f4",
        description="Value sent in the x-api-key header"
    )
    legacy_api_timeout_seconds: float = Field(default=5.0, description="Candidate sync timeout")
    legacy_health_timeout_seconds: float = Field(default=3.0, description="Health check timeout")
    legacy_api_max_redirects: int = Field(default=3, description="Maximum redirects followed")
    legacy_sync_workers: int = Field(default=4, description="Background sync worker threads")

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        if self.custom_database_url:
            return self.custom_database_url
        return (
            f"postgresql+psycopg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def cors_origins(self) -> List[str]:
        """Parse allowed origins into a list."""
        raw = self.allowed_origins.strip()
        if raw == "*":
            return ["*"]
        return [origin.strip() for origin in raw.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
