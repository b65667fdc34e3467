"""
Database dialects supported by SQLHelper.

Each dialect pairs a connection URL template with the DB-API driver module
that understands it. The server dialect is addressed by host, port and
database; the embedded dialects only by a database path.
"""

from __future__ import annotations

import enum
from typing import Union

from sqlhelper.exceptions import ConfigurationError


class Dialect(enum.Enum):
    """
    The supported database variants.

    Attributes
    ----------
    url_template : str
        Connection URL with `{host}`, `{port}` and/or `{database}` placeholders.
    driver : str
        Importable name of the DB-API module backing this dialect.
    """

    MYSQL = (
        "jdbc:mysql://{host}:{port}{database}"
        "?useSSL=false&seLegacyDatetimeCode=false&serverTimezone=UTC",
        "pymysql",
    )
    SQLITE = ("jdbc:sqlite:{database}", "sqlite3")
    H2 = ("jdbc:h2:./{database}", "jaydebeapi")

    def __init__(self, url_template: str, driver: str) -> None:
        self.url_template = url_template
        self.driver = driver

    @property
    def embedded(self) -> bool:
        """True for file-based dialects that take only a database path."""
        return self is not Dialect.MYSQL

    @classmethod
    def parse(cls, value: Union["Dialect", str]) -> "Dialect":
        """
        Resolve a Dialect from a member or its case-insensitive name.

        Raises
        ------
        ConfigurationError
            If the value does not name a supported dialect.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise ConfigurationError(f"Unsupported SQL dialect: {value!r}")


def format_url(dialect: Dialect, host: str, port: str, database: str) -> str:
    """
    Render the connection URL for a dialect.

    The server dialect gets exactly one leading "/" in front of a non-empty
    database name; the embedded dialects substitute the database path as is.

    Raises
    ------
    ConfigurationError
        If `dialect` is not a known Dialect.
    """
    if dialect is Dialect.MYSQL:
        if database and not database.startswith("/"):
            database = "/" + database
        return dialect.url_template.format(host=host, port=port, database=database)
    if dialect in (Dialect.SQLITE, Dialect.H2):
        return dialect.url_template.format(database=database)
    raise ConfigurationError(f"Failed to format the connection URL for dialect {dialect!r}")


__all__ = ["Dialect", "format_url"]
