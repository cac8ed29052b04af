"""
Configuration settings for the KNUST Enterprise Hub API.
Loads environment variables and provides application settings.
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import List

# settings.py is at backend/enterprise_hub/config/settings.py → 4 levels up
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent

# Placeholder signing key; production deployments must override it.
DEFAULT_JWT_SECRET = "change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - use absolute path to avoid working directory issues
    database_url: str = f"sqlite:///{_PROJECT_ROOT}/data/enterprise_hub.db"

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "http://localhost:3000,http://localhost:8000"
    log_level: str = "INFO"

    # Auth (tokens are issued elsewhere; we only verify them)
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"

    # Listings
    default_page_size: int = 10
    max_page_size: int = 100  # Larger limits are clamped
    business_review_limit: int = 10  # Reviews embedded in a business detail

    # Analytics
    analytics_window_days: int = 30  # Trailing window for daily order counts
    analytics_top_products: int = 5

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert CORS origins string to list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()
