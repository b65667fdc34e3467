"""
SQLHelper - a small façade over relational database connectivity.

Describe a database once (dialect, host, port, database, credentials), pick
pooled or direct mode, and run statements or fetch result sets without
repeating resource-management code. Supported dialects:

- MySQL (PyMySQL)
- SQLite (sqlite3)
- H2 (JDBC through JayDeBeApi)

Pooling is provided by SQLAlchemy's QueuePool.
"""

from __future__ import annotations

__version__ = "1.0.0"
__license__ = "MIT"

# Public API exports
from sqlhelper.config import Settings, get_settings
from sqlhelper.domain import ConnectionParameters, Dialect, format_url
from sqlhelper.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    QueryExecutionError,
    SQLHelperError,
)
from sqlhelper.helper import SQLBuilder, SQLHelper
from sqlhelper.results import Results
from sqlhelper.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Façade
    "SQLBuilder",
    "SQLHelper",
    "Results",
    # Domain
    "ConnectionParameters",
    "Dialect",
    "format_url",
    # Errors
    "SQLHelperError",
    "ConfigurationError",
    "DatabaseConnectionError",
    "QueryExecutionError",
    # Logging
    "configure_logging",
    "get_logger",
]
