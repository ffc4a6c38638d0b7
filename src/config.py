"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./expenses.db")

    # Redis (Celery broker for the session sweep)
    redis_url: str = Field(default="redis://localhost:6379/0")

    # Sessions
    session_duration_days: int = Field(default=30, ge=1)
    session_cookie_name: str = Field(default="session")
    secure_cookie: bool = Field(default=False)
    login_url: str = Field(default="/login")
    session_cleanup_interval_minutes: int = Field(default=60, ge=1)

    # First-run admin account
    admin_user: str | None = Field(default=None)
    admin_password: str | None = Field(default=None)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.is_production:
            if self.admin_password in ("admin", "password", "changeme"):
                raise ValueError("ADMIN_PASSWORD must be changed in production")
            if "localhost" in self.database_url:
                raise ValueError("DATABASE_URL should not use localhost in production")
            if not self.secure_cookie:
                raise ValueError("SECURE_COOKIE must be enabled in production")
        return self

    @property
    def session_duration_seconds(self) -> int:
        """Session lifetime in seconds, used for cookie max-age."""
        return self.session_duration_days * 24 * 60 * 60

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
