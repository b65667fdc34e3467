"""
Result handle returned by `SQLHelper.get_results`.

Bundles the connection, statement and cursor of one executed query and
releases them together. With DB-API drivers the prepared statement and the
result cursor are usually the same cursor object; release still walks both
slots so a driver that separates them is handled too.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Sequence

from sqlhelper.utils.logging import get_logger

log = get_logger(__name__)


def close_quietly(resource: Any, what: str) -> None:
    """Close `resource` if set; failures are logged at debug and suppressed."""
    if resource is None:
        return
    try:
        resource.close()
    except Exception:
        log.debug("Failed to close %s", what, exc_info=True)


class Results:
    """
    Connection, statement and cursor of one executed query.

    The caller owns the handle and must call `release()` exactly once after
    consuming the cursor (or use it as a context manager). In pooled mode the
    connection was borrowed for this query and goes back to the pool on
    release; in direct mode the connection is shared and stays open.
    """

    def __init__(self, connection: Any, statement: Any, cursor: Any, pooling: bool) -> None:
        self._connection = connection
        self._statement = statement
        self._cursor = cursor
        self._pooling = pooling
        self._released = False

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def statement(self) -> Any:
        return self._statement

    @property
    def cursor(self) -> Any:
        return self._cursor

    @property
    def pooling(self) -> bool:
        return self._pooling

    @property
    def released(self) -> bool:
        return self._released

    def fetchone(self) -> Optional[Sequence[Any]]:
        return self._cursor.fetchone()

    def fetchmany(self, size: int) -> List[Sequence[Any]]:
        return list(self._cursor.fetchmany(size))

    def fetchall(self) -> List[Sequence[Any]]:
        return list(self._cursor.fetchall())

    def __iter__(self) -> Iterator[Sequence[Any]]:
        while True:
            row = self._cursor.fetchone()
            if row is None:
                return
            yield row

    def release(self) -> None:
        """
        Close cursor, then statement, then (pooled mode only) connection.

        Each step runs even if an earlier one failed. Errors are never raised.
        """
        if self._released:
            return
        self._released = True
        close_quietly(self._cursor, "result cursor")
        close_quietly(self._statement, "statement")
        if self._pooling:
            close_quietly(self._connection, "pooled connection")

    def __enter__(self) -> "Results":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        del exc_type, exc, tb
        self.release()
        return False


__all__ = ["Results", "close_quietly"]
