"""Centralized application configuration via Pydantic Settings.

Loads all env vars into a typed Settings instance, including the
length bounds the extraction endpoints enforce before parsing.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_ANON_KEY: str = Field(..., description="Supabase anon/public key")
    TRANSACTIONS_TABLE: str = Field(
        default="transactions",
        description="Table that receives extracted transactions",
    )

    # CORS
    ALLOWED_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Comma-separated allowed origins for CORS",
    )

    # Extraction
    MIN_TEXT_LENGTH: int = Field(
        default=5, ge=1, description="Shortest text accepted for extraction"
    )
    MAX_TEXT_LENGTH: int = Field(
        default=10_000, ge=1, description="Longest text accepted for extraction"
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Python log level")
    ENVIRONMENT: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # App
    APP_VERSION: str = Field(default="0.1.0", description="Application version")

    @property
    def allowed_origins(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def log_level(self) -> str:
        return self.LOG_LEVEL

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    model_config = {"env_file": ".env", "extra": "ignore"}


def get_settings() -> Settings:
    """Factory for Settings: allows test override."""
    return Settings()


settings = get_settings()
