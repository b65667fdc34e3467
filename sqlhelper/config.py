"""
Configuration settings for SQLHelper.

Uses Pydantic Settings to load the ambient knobs (logging, driver timeouts,
JDBC bridge classpath) from the environment. Connection parameters are never
read from here; they always come from the builder.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = Field("INFO", alias="SQLHELPER_LOG_LEVEL")
    json_logs: bool = Field(False, alias="SQLHELPER_JSON_LOGS")

    # Drivers
    connect_timeout: int = Field(10, alias="SQLHELPER_CONNECT_TIMEOUT")
    pool_timeout: float = Field(30.0, alias="SQLHELPER_POOL_TIMEOUT")
    h2_jar: Optional[str] = Field(None, alias="SQLHELPER_H2_JAR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
