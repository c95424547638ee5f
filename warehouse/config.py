"""
Configuration settings for the warehouse seeder.

Uses Pydantic Settings to load environment variables for the database
connection, the connection pool and logging. Generation parameters (row
counts, batch size, seed) are deliberately not configurable.
"""
from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USERNAME")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("warehouse", alias="DB_NAME")

    # Pool
    pool_min_size: int = Field(1, alias="DB_POOL_MIN_SIZE")
    pool_max_size: int = Field(10, alias="DB_POOL_MAX_SIZE")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Reporting
    price_threshold: Decimal = Field(Decimal("50"), alias="PRICE_THRESHOLD")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def dsn(self) -> str:
        """Compose a libpq connection URL from the individual fields."""
        return (
            f"postgresql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
