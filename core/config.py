"""Application configuration using Pydantic Settings"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_SESSION_SECRET = "dev-secret-key"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Discord OAuth (login)
    discord_client_id: str = Field(default="", description="Discord OAuth Client ID")
    discord_client_secret: str = Field(default="", description="Discord OAuth Client Secret")

    # Discord bot credential (optional at startup, can be set from the dashboard)
    discord_bot_token: str = Field(default="", description="Discord bot token")
    discord_timeout: float = Field(default=10.0, description="Discord HTTP timeout in seconds")

    # Sessions
    session_secret: str = Field(
        default=DEFAULT_SESSION_SECRET, description="Secret used to sign session cookies"
    )
    session_expire_days: int = Field(default=7, description="Session lifetime in days")
    session_cookie_name: str = Field(default="dashboard_session", description="Cookie name")

    # Rate limiting
    rate_limit_window_seconds: int = Field(default=15 * 60, description="Rate limit window")
    rate_limit_general: int = Field(default=100, description="Requests per window for /api")
    rate_limit_auth: int = Field(default=5, description="Failed auth requests per window")

    # Environment
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")
    seed_demo_data: bool = Field(default=True, description="Load sample data at startup")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=5000, description="Server port")
    frontend_url: str = Field(default="http://localhost:5000", description="Frontend URL for CORS")

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        """Upper-case the level name; unknown names fall back to INFO"""
        level = v.strip().upper()
        if level in LOG_LEVELS:
            return level
        logger.warning(f"Unknown LOG_LEVEL '{v}', using INFO")
        return "INFO"

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS allowed origins"""
        return [self.frontend_url]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment.lower() == "development"

    @property
    def oauth_configured(self) -> bool:
        return bool(self.discord_client_id and self.discord_client_secret)

    def ensure_production_safe(self) -> None:
        """Refuse to start in production with a missing or default session secret."""
        if not self.is_production:
            return
        if not self.session_secret or self.session_secret == DEFAULT_SESSION_SECRET:
            raise RuntimeError("SESSION_SECRET must be configured in production")
        logger.info("Production security checks passed")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
