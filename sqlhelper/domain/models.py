"""
Domain models for SQLHelper.

Defines the immutable connection parameters handed from the builder to the
façade, plus the fixed pool and statement-cache tuning values applied to
every pooled data source (and to direct MySQL connections).
"""
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field

MAX_POOL_SIZE = 20

STATEMENT_CACHE_PROPERTIES: Dict[str, str] = {
    "cachePrepStmts": "true",
    "prepStmtCacheSize": "250",
    "prepStmtCacheSqlLimit": "2048",
    "useServerPrepStmts": "true",
}


class ConnectionParameters(BaseModel):
    """
    Where and as whom to connect.
    """

    host: str = Field("", description="Server host name (server dialect only).")
    port: str = Field("", description="Server port (server dialect only).")
    database: str = Field("", description="Database name, or file path for embedded dialects.")
    username: str = Field("", description="Login user.")
    password: str = Field("", repr=False, description="Login password.")

    model_config = {
        "frozen": True,
        "coerce_numbers_to_str": True,
    }


__all__ = ["ConnectionParameters", "MAX_POOL_SIZE", "STATEMENT_CACHE_PROPERTIES"]
