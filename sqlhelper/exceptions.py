"""
Exception hierarchy for SQLHelper.

Every error raised by the façade derives from SQLHelperError so callers can
catch the whole family at once, while the subclasses keep configuration,
connection and query failures distinguishable. The driver or pool exception
that caused the failure is kept on `original` (and chained via `__cause__`).
"""

from __future__ import annotations

from typing import Optional


class SQLHelperError(Exception):
    """
    Base class for all SQLHelper errors.

    Parameters
    ----------
    message : str
        Human-readable description of the failure.
    original : Exception, optional
        The underlying driver or pool exception, if any.
    """

    def __init__(self, message: str, original: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self._message = message
        self._original = original

    @property
    def message(self) -> str:
        return self._message

    @property
    def original(self) -> Optional[BaseException]:
        return self._original


class ConfigurationError(SQLHelperError):
    """Unknown dialect, unresolvable URL, or a pool that could not be built."""


class DatabaseConnectionError(SQLHelperError):
    """A driver or pool failed to open, lend, or close a connection."""


class QueryExecutionError(SQLHelperError):
    """Preparing or executing a statement failed."""

    def __init__(self, sql: str, original: Optional[BaseException] = None) -> None:
        super().__init__(f"Failed to execute query (Query: {sql})", original)
        self._sql = sql

    @property
    def sql(self) -> str:
        """The statement text that failed."""
        return self._sql


__all__ = [
    "SQLHelperError",
    "ConfigurationError",
    "DatabaseConnectionError",
    "QueryExecutionError",
]
