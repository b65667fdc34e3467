"""
Driver and pool factories for SQLHelper.

Opens single DB-API connections from a dialect URL (PyMySQL, sqlite3 or the
JayDeBeApi JDBC bridge, picked by URL scheme) and builds bounded SQLAlchemy
connection pools on top of them. Every connection is opened in autocommit
mode so a statement takes effect without an explicit commit, as with JDBC.
"""

from __future__ import annotations

import importlib
import sqlite3
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Callable, Dict, Mapping, Tuple
from urllib.parse import parse_qs, urlsplit

import pymysql
from sqlalchemy.pool import QueuePool

from sqlhelper.config import get_settings
from sqlhelper.domain.models import MAX_POOL_SIZE
from sqlhelper.exceptions import ConfigurationError, DatabaseConnectionError, SQLHelperError
from sqlhelper.utils.logging import get_logger

log = get_logger(__name__)

H2_DRIVER_CLASS = "org.h2.Driver"


def register_driver(driver: str) -> ModuleType:
    """
    Import the DB-API module named by `driver`.

    Raises
    ------
    ImportError
        If the module is not installed.
    """
    return importlib.import_module(driver)


def _open_mysql(url: str, properties: Mapping[str, str]) -> Any:
    parts = urlsplit(url[len("jdbc:"):])
    try:
        port = parts.port or 3306
    except ValueError as exc:
        raise ConfigurationError(f"Invalid port in connection URL {url}", exc) from exc
    query = {key: values[-1] for key, values in parse_qs(parts.query).items()}

    kwargs: Dict[str, Any] = {
        "host": parts.hostname or "localhost",
        "port": port,
        "user": properties.get("user") or None,
        "password": properties.get("password", ""),
        "database": parts.path.lstrip("/") or None,
        "autocommit": True,
        "connect_timeout": get_settings().connect_timeout,
        "charset": "utf8mb4",
    }
    if query.get("useSSL", "").lower() == "false":
        kwargs["ssl_disabled"] = True
    if query.get("serverTimezone", "").upper() == "UTC":
        kwargs["init_command"] = "SET time_zone = '+00:00'"
    # JDBC statement-cache tunables have no PyMySQL counterpart.
    return pymysql.connect(**kwargs)


def _open_sqlite(url: str, properties: Mapping[str, str]) -> Any:
    del properties
    return sqlite3.connect(
        url[len("jdbc:sqlite:"):],
        isolation_level=None,
        check_same_thread=False,
    )


def _open_h2(url: str, properties: Mapping[str, str]) -> Any:
    jaydebeapi = register_driver("jaydebeapi")
    conn = jaydebeapi.connect(
        H2_DRIVER_CLASS,
        url,
        {key: str(value) for key, value in properties.items()},
        get_settings().h2_jar,
    )
    conn.jconn.setAutoCommit(True)
    return conn


_OPENERS: Tuple[Tuple[str, Callable[[str, Mapping[str, str]], Any]], ...] = (
    ("jdbc:mysql:", _open_mysql),
    ("jdbc:sqlite:", _open_sqlite),
    ("jdbc:h2:", _open_h2),
)


def open_connection(url: str, properties: Mapping[str, str]) -> Any:
    """
    Open a single DB-API connection for a dialect URL.

    Parameters
    ----------
    url : str
        A formatted dialect URL (see `sqlhelper.domain.format_url`).
    properties : Mapping[str, str]
        `user` and `password` plus optional driver tuning properties.

    Returns
    -------
    Any
        The driver's connection object.

    Raises
    ------
    DatabaseConnectionError
        If no driver accepts the URL or the driver fails to connect.
    """
    for prefix, opener in _OPENERS:
        if url.startswith(prefix):
            try:
                return opener(url, properties)
            except SQLHelperError:
                raise
            except Exception as exc:
                raise DatabaseConnectionError(f"Failed to connect to {url}", exc) from exc
    raise DatabaseConnectionError(f"No suitable driver found for {url}")


@dataclass
class PoolConfig:
    """
    Everything needed to build a connection pool.
    """

    driver: str
    url: str
    max_pool_size: int = MAX_POOL_SIZE
    username: str = ""
    password: str = field(default="", repr=False)
    data_source_properties: Dict[str, str] = field(default_factory=dict)

    def add_data_source_property(self, key: str, value: str) -> None:
        self.data_source_properties[key] = value

    def connection_properties(self) -> Dict[str, str]:
        """Credentials merged with the data source properties."""
        return {"user": self.username, "password": self.password, **self.data_source_properties}


def create_pool(config: PoolConfig) -> QueuePool:
    """
    Build a bounded connection pool and verify it can lend a connection.

    The pool holds at most `config.max_pool_size` connections with no
    overflow; borrowers wait up to the configured pool timeout.

    Raises
    ------
    ConfigurationError
        If the driver is missing or the first connection cannot be opened.
    """
    try:
        register_driver(config.driver)
    except ImportError as exc:
        raise ConfigurationError(f"Driver {config.driver!r} is not installed", exc) from exc

    properties = config.connection_properties()
    pool = QueuePool(
        lambda: open_connection(config.url, properties),
        pool_size=config.max_pool_size,
        max_overflow=0,
        timeout=get_settings().pool_timeout,
    )
    try:
        pool.connect().close()
    except Exception as exc:
        pool.dispose()
        raise ConfigurationError(f"Failed to initialize connection pool for {config.url}", exc) from exc

    log.debug(
        "Connection pool ready",
        extra={"url": config.url, "driver": config.driver, "pool_size": config.max_pool_size},
    )
    return pool


__all__ = [
    "PoolConfig",
    "create_pool",
    "open_connection",
    "register_driver",
]
