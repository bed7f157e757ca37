from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal
from urllib.parse import quote_plus

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables with validation."""

    model_config = SettingsConfigDict(
        env_file=(str(Path(__file__).resolve().parents[1] / ".env"), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    app_name: str = Field(default="Subscription Service", alias="APP_NAME")
    app_env: Literal["development", "staging", "production", "test"] = Field(
        default="production",
        alias="APP_ENV",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    server_port: int = Field(ge=1, le=65535, alias="SERVER_PORT")

    cors_allow_origins: str = Field(default="*", alias="CORS_ORIGINS")

    db_host: str = Field(min_length=1, alias="DB_HOST")
    db_port: int = Field(ge=1, le=65535, alias="DB_PORT")
    db_user: str = Field(min_length=1, alias="DB_USER")
    db_password: SecretStr = Field(alias="DB_PASSWORD")
    db_name: str = Field(min_length=1, alias="DB_NAME")

    db_pool_size: int = Field(default=10, ge=1, le=100, alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, ge=0, le=200, alias="DB_MAX_OVERFLOW")
    db_pool_timeout: int = Field(default=30, ge=1, le=300, alias="DB_POOL_TIMEOUT")
    db_pool_recycle: int = Field(default=1800, ge=60, alias="DB_POOL_RECYCLE")
    db_connect_timeout: int = Field(default=10, ge=1, le=60, alias="DB_CONNECT_TIMEOUT")
    db_statement_timeout_ms: int = Field(default=5000, ge=0, alias="DB_STATEMENT_TIMEOUT_MS")
    db_auto_create: bool = Field(default=True, alias="DB_AUTO_CREATE")

    @field_validator("db_password")
    @classmethod
    def validate_db_password(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("DB_PASSWORD must not be empty.")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def cors_origins(self) -> list[str]:
        """Comma-separated CORS origins from the environment."""
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]

    @property
    def database_url(self) -> str:
        password = quote_plus(self.db_password.get_secret_value())
        return (
            f"postgresql+psycopg2://{quote_plus(self.db_user)}:{password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()


settings: Settings = get_settings()
