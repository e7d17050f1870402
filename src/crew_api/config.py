"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, PostgresDsn, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from crew_api.models.domain.employee import Role

# Roles counted by the compliance dashboard (managers are tracked separately)
DEFAULT_COMPLIANCE_ROLES = [
    Role.TRAINER,
    Role.TEAM_MEMBER,
    Role.MCCAFE_SPECIALIST,
    Role.HOST_GREETER,
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Crew Console API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database (required - no default for security)
    database_url: PostgresDsn = Field(
        description="PostgreSQL connection URL. Must be set via environment variable."
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Hosted auth provider (GoTrue-compatible REST API)
    auth_url: str = "http://localhost:9999"
    auth_api_key: str = ""
    # Secret used by the auth provider to sign access tokens; empty disables local verification
    auth_jwt_secret: str = ""
    auth_jwt_algorithm: str = "HS256"
    auth_jwt_audience: str = "authenticated"

    # Generative AI (task assignment advisor)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-3-flash-preview"
    gemini_timeout_seconds: float = 60.0

    # Compliance
    expiring_soon_days: int = Field(default=30, ge=0)
    compliance_roles: list[Role] = Field(default_factory=lambda: list(DEFAULT_COMPLIANCE_ROLES))

    # Activity feed
    activity_feed_limit: int = Field(default=100, ge=1, le=1000)

    # Roster lifecycle
    trash_retention_days: int = Field(default=30, ge=1)
    sweep_interval_minutes: int = Field(default=60, ge=1)
    scheduler_enabled: bool = True

    # Rate limiting (requests per minute)
    rate_limit_default: int = 100
    rate_limit_auth_sign_in: int = 5
    rate_limit_auth_sign_up: int = 3
    rate_limit_planning: int = 10
    # Comma-separated IPs / CIDR ranges allowed to set X-Forwarded-For
    trusted_proxies: str = ""

    # CORS settings
    cors_origins: str = "http://localhost:3000"  # Comma-separated list

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for security requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        url = str(self.database_url)
        if not url.startswith(("postgresql://", "postgres://")):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL starting with 'postgresql://' or 'postgres://'"
            )

        if self.environment == "production" and not self.auth_jwt_secret:
            raise ValueError("AUTH_JWT_SECRET must be set in production")

        return self

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy with asyncpg.

        Converts sslmode parameter to ssl for asyncpg compatibility.
        """
        url = str(self.database_url)
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        url = url.replace("sslmode=", "ssl=")
        return url

    @property
    def trusted_proxies_list(self) -> list[str]:
        """Get trusted proxies as a list."""
        return [proxy.strip() for proxy in self.trusted_proxies.split(",") if proxy.strip()]

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
