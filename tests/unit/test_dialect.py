from __future__ import annotations

import pytest

from sqlhelper import ConfigurationError, Dialect, SQLHelper, format_url

MYSQL_SUFFIX = "?useSSL=false&seLegacyDatetimeCode=false&serverTimezone=UTC"


def test_mysql_url_inserts_single_leading_slash() -> None:
    url = format_url(Dialect.MYSQL, "localhost", "3306", "mydb")
    assert url == "jdbc:mysql://localhost:3306/mydb" + MYSQL_SUFFIX


def test_mysql_url_keeps_existing_leading_slash() -> None:
    url = format_url(Dialect.MYSQL, "db.internal", "3307", "/mydb")
    assert url == "jdbc:mysql://db.internal:3307/mydb" + MYSQL_SUFFIX


def test_mysql_url_with_empty_database_has_no_slash() -> None:
    url = format_url(Dialect.MYSQL, "localhost", "3306", "")
    assert url == "jdbc:mysql://localhost:3306" + MYSQL_SUFFIX


def test_sqlite_url_uses_database_path_verbatim() -> None:
    assert format_url(Dialect.SQLITE, "ignored", "1", "test.db") == "jdbc:sqlite:test.db"


def test_h2_url_is_relative_to_working_directory() -> None:
    assert format_url(Dialect.H2, "", "", "data/app") == "jdbc:h2:./data/app"


def test_unmapped_dialect_raises_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        format_url("oracle", "localhost", "1521", "xe")  # type: ignore[arg-type]


def test_helper_format_url_uses_built_parameters() -> None:
    helper = (
        SQLHelper.builder(Dialect.MYSQL).host("localhost").port(3306).database("mydb").build()
    )
    assert helper.format_url() == "jdbc:mysql://localhost:3306/mydb" + MYSQL_SUFFIX


@pytest.mark.parametrize(
    ("value", "expected"),
    [("mysql", Dialect.MYSQL), (" SQLite ", Dialect.SQLITE), (Dialect.H2, Dialect.H2)],
)
def test_parse_accepts_members_and_names(value, expected) -> None:
    assert Dialect.parse(value) is expected


def test_parse_rejects_unknown_names() -> None:
    with pytest.raises(ConfigurationError, match="postgres"):
        Dialect.parse("postgres")


def test_dialects_name_their_drivers() -> None:
    assert Dialect.MYSQL.driver == "pymysql"
    assert Dialect.SQLITE.driver == "sqlite3"
    assert Dialect.H2.driver == "jaydebeapi"
    assert not Dialect.MYSQL.embedded
    assert Dialect.SQLITE.embedded and Dialect.H2.embedded
