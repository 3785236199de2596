"""
Application Configuration Module

Centralizes all application settings using Pydantic Settings.
Environment variables are loaded from .env file automatically.

Usage:
    from config.settings import settings

    print(settings.DATABASE_URL)
    print(settings.DEBUG)
"""

from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Variable names are case-insensitive.
    """

    # ==========================================================================
    # Database Configuration
    # ==========================================================================
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./data/dictionary.db",
        description="SQLAlchemy async connection string (SQLite or PostgreSQL)"
    )
    DATABASE_ECHO: bool = Field(
        default=False,
        description="Echo SQL statements to the log"
    )

    # ==========================================================================
    # Authentication & Security
    # ==========================================================================
    SECRET_KEY: str = Field(
        default="your-secret-key-change-in-production",
        description="JWT signing secret key"
    )
    ALGORITHM: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60 * 24,
        description="Session token lifetime in minutes (24 hours)"
    )
    BCRYPT_ROUNDS: int = Field(
        default=12,
        description="bcrypt cost factor for password hashing"
    )
    VERIFICATION_TOKEN_BYTES: int = Field(
        default=32,
        description="Random bytes in an email verification token (hex encoded)"
    )

    # ==========================================================================
    # Email Delivery
    # ==========================================================================
    SMTP_HOST: Optional[str] = Field(
        default=None,
        description="SMTP server host. When unset, emails are logged instead of sent"
    )
    SMTP_PORT: int = Field(
        default=587,
        description="SMTP server port"
    )
    SMTP_USERNAME: Optional[str] = Field(
        default=None,
        description="SMTP login"
    )
    SMTP_PASSWORD: Optional[str] = Field(
        default=None,
        description="SMTP password"
    )
    SMTP_USE_TLS: bool = Field(
        default=True,
        description="Upgrade the SMTP connection with STARTTLS"
    )
    MAIL_FROM: str = Field(
        default='"Cuvinte Banatene" <noreply@cuvintebanatene.ro>',
        description="Sender address for transactional emails"
    )
    FRONTEND_URL: str = Field(
        default="http://localhost:3000",
        description="Public frontend URL used in email links"
    )

    # ==========================================================================
    # Redis Configuration (for rate limiting)
    # ==========================================================================
    REDIS_URL: Optional[str] = Field(
        default=None,
        description="Redis connection URL for rate limit storage"
    )
    RATE_LIMIT_ENABLED: bool = Field(
        default=True,
        description="Enable request rate limiting"
    )

    # ==========================================================================
    # CORS Configuration
    # ==========================================================================
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    @property
    def cors_origins_list(self) -> list:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    # ==========================================================================
    # Seed Data
    # ==========================================================================
    SEED_ON_STARTUP: bool = Field(
        default=True,
        description="Insert sample words and default accounts into an empty database"
    )
    DEFAULT_ADMIN_PASSWORD: str = Field(
        default="admin123",
        description="Password for the seeded admin account"
    )
    DEFAULT_CONTRIBUTOR_PASSWORD: str = Field(
        default="contributor123",
        description="Password for the seeded contributor account"
    )

    # ==========================================================================
    # Application Settings
    # ==========================================================================
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Emit structured JSON logs"
    )
    API_PREFIX: str = Field(
        default="",
        description="Optional path prefix for every route (e.g. /api)"
    )
    APP_NAME: str = Field(
        default="Cuvinte Banatene",
        description="Application name for OpenAPI docs"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version"
    )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


# Singleton instance for easy import
settings = get_settings()
