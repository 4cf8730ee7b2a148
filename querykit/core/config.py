"""Query translation settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``QUERYKIT_``-prefixed environment variables."""

    # Environment
    ENV: str = "dev"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"  # INFO for dev, WARNING for prod

    # SQL rendering
    RANDOM_ORDER_FUNCTION: str = "RANDOM()"  # "RAND()" for MySQL
    SQL_DIALECT: str = "postgresql"  # Dialect used by Relation.compile()

    model_config = SettingsConfigDict(
        env_prefix="QUERYKIT_",
        env_file=[".env", "../.env"],  # Try .env in current dir first, then parent dir
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields from .env that are not in Settings
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
