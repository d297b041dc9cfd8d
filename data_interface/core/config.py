"""Data Interface Configuration - pydantic-settings."""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fallback signing secret used when JWT_SECRET is not configured.
# Insecure: anyone who knows it can mint valid tokens.
DEFAULT_JWT_SECRET = "your-secret-key-change-in-production"

_MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Data Interface Mock API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: str = "*"

    # JWT
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_hours: int = Field(default=24, ge=1)

    # Seconds between sweeps of expired blacklist entries. 0 keeps every
    # revoked token for the lifetime of the process.
    token_blacklist_sweep_interval: int = Field(default=0, ge=0)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.strip().lower()

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def effective_jwt_secret_key(self) -> str:
        """Signing secret, falling back to the built-in default when unset."""
        return self.jwt_secret or DEFAULT_JWT_SECRET

    def check_security_configuration(self) -> list[str]:
        """Return human-readable warnings about insecure settings."""
        warnings: list[str] = []

        if not self.jwt_secret:
            warnings.append(
                "JWT_SECRET is not set; tokens are signed with the built-in default secret. "
                "Set JWT_SECRET before any real deployment."
            )
        elif self.jwt_secret == DEFAULT_JWT_SECRET:
            warnings.append("JWT_SECRET is set to the built-in default value.")
        elif len(self.jwt_secret) < _MIN_SECRET_LENGTH:
            warnings.append(
                f"JWT_SECRET is shorter than {_MIN_SECRET_LENGTH} characters; "
                "use a longer random value."
            )

        if self.is_production and self.debug:
            warnings.append("DEBUG is enabled in production; API docs are exposed.")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
