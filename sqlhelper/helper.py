"""
Connection façade for SQLHelper.

`SQLHelper` holds immutable connection parameters and a dialect, and either
builds a bounded connection pool or opens one direct connection on
`connect()`. Queries run through `execute_query` (no result consumption) or
`get_results` (returns a `Results` handle the caller must release).

Example
-------
    helper = (
        SQLHelper.builder(Dialect.MYSQL)
        .host("localhost")
        .port("3306")
        .database("mydb")
        .username("app")
        .password("secret")
        .pooling(True)
        .build()
    )
    helper.connect()
    helper.execute_query("CREATE TABLE IF NOT EXISTS t (id INT)")
    with helper.get_results("SELECT id FROM t") as results:
        for row in results:
            print(row)
    helper.disconnect()

Thread safety: pooled borrowing is safe from many threads. The direct-mode
connection is shared and unsynchronised; callers using it from several
threads must lock around it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from sqlhelper.domain.dialect import Dialect, format_url
from sqlhelper.domain.models import MAX_POOL_SIZE, STATEMENT_CACHE_PROPERTIES, ConnectionParameters
from sqlhelper.exceptions import DatabaseConnectionError, QueryExecutionError
from sqlhelper.infrastructure.db_factory import PoolConfig, create_pool, open_connection, register_driver
from sqlhelper.results import Results, close_quietly
from sqlhelper.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class _PooledHandle:
    pool: Any


@dataclass(frozen=True)
class _DirectHandle:
    connection: Any


_Handle = Union[_PooledHandle, _DirectHandle]


class SQLBuilder:
    """
    Accumulates connection options and produces an immutable SQLHelper.

    Every option starts empty and pooling starts disabled.
    """

    def __init__(self, dialect: Union[Dialect, str]) -> None:
        self._dialect = Dialect.parse(dialect)
        self._params: Dict[str, Any] = {
            "host": "",
            "port": "",
            "database": "",
            "username": "",
            "password": "",
        }
        self._pooling = False

    def host(self, host: str) -> "SQLBuilder":
        self._params["host"] = host
        return self

    def port(self, port: Union[str, int]) -> "SQLBuilder":
        self._params["port"] = port
        return self

    def database(self, database: str) -> "SQLBuilder":
        """Database name for the server dialect, file path for embedded ones."""
        self._params["database"] = database
        return self

    def username(self, username: str) -> "SQLBuilder":
        self._params["username"] = username
        return self

    def password(self, password: str) -> "SQLBuilder":
        self._params["password"] = password
        return self

    def pooling(self, enabled: bool = True) -> "SQLBuilder":
        self._pooling = enabled
        return self

    def dialect(self, dialect: Union[Dialect, str]) -> "SQLBuilder":
        self._dialect = Dialect.parse(dialect)
        return self

    def build(self) -> "SQLHelper":
        return SQLHelper(ConnectionParameters(**self._params), self._dialect, self._pooling)


class SQLHelper:
    """
    Connection façade over a pool or a single direct connection.

    The pooling flag is fixed at build time. At most one of the two handles is
    alive at a time. Calling `connect()` again without `disconnect()` is a
    caller error: the previous pool or connection is abandoned, not closed.
    """

    def __init__(
        self,
        parameters: ConnectionParameters,
        dialect: Dialect,
        pooling: bool = False,
    ) -> None:
        self._parameters = parameters
        self._dialect = dialect
        self._pooling = pooling
        self._handle: Optional[_Handle] = None

    @classmethod
    def builder(cls, dialect: Union[Dialect, str]) -> SQLBuilder:
        """Start configuring a helper for `dialect`."""
        return SQLBuilder(dialect)

    # ---------------------------- Getters ---------------------------- #

    @property
    def parameters(self) -> ConnectionParameters:
        return self._parameters

    @property
    def host(self) -> str:
        return self._parameters.host

    @property
    def port(self) -> str:
        return self._parameters.port

    @property
    def database(self) -> str:
        return self._parameters.database

    @property
    def username(self) -> str:
        return self._parameters.username

    @property
    def password(self) -> str:
        return self._parameters.password

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def pooling(self) -> bool:
        return self._pooling

    @property
    def is_connected(self) -> bool:
        return self._handle is not None

    # ---------------------------- Lifecycle ---------------------------- #

    def format_url(self) -> str:
        """
        Render this helper's connection URL.

        Raises
        ------
        ConfigurationError
            If the dialect has no URL template.
        """
        params = self._parameters
        return format_url(self._dialect, params.host, params.port, params.database)

    def _pool_config(self, url: str) -> PoolConfig:
        config = PoolConfig(
            driver=self._dialect.driver,
            url=url,
            max_pool_size=MAX_POOL_SIZE,
            username=self._parameters.username,
            password=self._parameters.password,
        )
        for key, value in STATEMENT_CACHE_PROPERTIES.items():
            config.add_data_source_property(key, value)
        return config

    def _driver_properties(self) -> Dict[str, str]:
        properties = {"user": self._parameters.username, "password": self._parameters.password}
        if self._dialect is Dialect.MYSQL:
            properties.update(STATEMENT_CACHE_PROPERTIES)
        return properties

    def connect(self) -> None:
        """
        Build the pool (pooled mode) or open the direct connection.

        Raises
        ------
        ConfigurationError
            If the URL cannot be formatted or the pool cannot be built.
        DatabaseConnectionError
            If the direct connection cannot be opened.
        """
        url = self.format_url()
        if self._handle is not None:
            log.warning(
                "connect() called on a connected helper; the previous handle is abandoned",
                extra={"dialect": self._dialect.name, "url": url},
            )

        if self._pooling:
            self._handle = _PooledHandle(create_pool(self._pool_config(url)))
        else:
            try:
                register_driver(self._dialect.driver)
            except ImportError:
                # Resolved again when the connection is opened.
                log.debug("Driver %s could not be registered", self._dialect.driver)
            self._handle = _DirectHandle(open_connection(url, self._driver_properties()))

        log.info(
            "Connected",
            extra={"dialect": self._dialect.name, "pooling": self._pooling, "url": url},
        )

    def disconnect(self) -> None:
        """
        Close the pool or the direct connection and forget it.

        The handle is cleared even if closing fails, so `connect()` can start
        over. Disconnecting an unconnected helper does nothing.

        Raises
        ------
        DatabaseConnectionError
            If the pool or connection fails to close.
        """
        handle = self._handle
        if handle is None:
            log.debug("disconnect() called on an unconnected helper")
            return
        try:
            if isinstance(handle, _PooledHandle):
                handle.pool.dispose()
            else:
                handle.connection.close()
        except Exception as exc:
            raise DatabaseConnectionError("Failed to disconnect", exc) from exc
        finally:
            self._handle = None
        log.info("Disconnected", extra={"dialect": self._dialect.name, "pooling": self._pooling})

    def __enter__(self) -> "SQLHelper":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        del exc_type, exc, tb
        self.disconnect()
        return False

    # ---------------------------- Queries ---------------------------- #

    def get_connection(self) -> Any:
        """
        Borrow a pooled connection, or return the shared direct one.

        A borrowed connection goes back to the pool on `close()`; do not keep
        it beyond one operation.

        Raises
        ------
        DatabaseConnectionError
            If not connected or the pool cannot lend a connection.
        """
        handle = self._handle
        if isinstance(handle, _PooledHandle):
            try:
                return handle.pool.connect()
            except Exception as exc:
                log.error(
                    "Failed to borrow a pooled connection",
                    exc_info=True,
                    extra={"dialect": self._dialect.name},
                )
                raise DatabaseConnectionError("Failed to borrow a pooled connection", exc) from exc
        if isinstance(handle, _DirectHandle):
            return handle.connection
        raise DatabaseConnectionError("Not connected; call connect() first")

    def execute_query(self, sql: str) -> None:
        """
        Prepare and execute `sql` without reading results.

        The statement is always closed; in pooled mode the borrowed connection
        is returned as well. The direct connection stays open.

        Raises
        ------
        QueryExecutionError
            If preparing or executing fails.
        """
        connection = self.get_connection()
        statement = None
        try:
            statement = connection.cursor()
            statement.execute(sql)
        except Exception as exc:
            raise QueryExecutionError(sql, exc) from exc
        finally:
            close_quietly(statement, "statement")
            if self._pooling:
                close_quietly(connection, "pooled connection")

    def get_results(self, sql: str) -> Results:
        """
        Prepare and execute `sql` and hand the live cursor to the caller.

        The returned Results must be released by the caller. On failure no
        handle is returned and anything acquired for the query is released.

        Raises
        ------
        QueryExecutionError
            If preparing or executing fails.
        """
        connection = self.get_connection()
        statement = None
        try:
            statement = connection.cursor()
            statement.execute(sql)
        except Exception as exc:
            Results(connection, statement, None, self._pooling).release()
            raise QueryExecutionError(sql, exc) from exc
        return Results(connection, statement, statement, self._pooling)

    def __repr__(self) -> str:
        params = self._parameters
        return (
            f"SQLHelper(dialect={self._dialect.name}, host={params.host!r}, "
            f"port={params.port!r}, database={params.database!r}, pooling={self._pooling})"
        )


__all__ = ["SQLBuilder", "SQLHelper"]
