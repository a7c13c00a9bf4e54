import pytest

from polysql.dialects import CharacterSet, MariaDBDialect, MySQLDialect
from polysql.dialects.drivers import DriverType


def test_mysql_dialect_quotes_identifiers():
    dialect = MySQLDialect()
    assert dialect.quote_identifier("user`name") == "`user``name`"
    assert dialect.format_table("analytics.events") == "`analytics`.`events`"


def test_mysql_limit_clause():
    dialect = MySQLDialect()
    assert dialect.limit_clause(10, None) == "LIMIT 10"
    assert dialect.limit_clause(None, 5) == "LIMIT 18446744073709551615 OFFSET 5"
    assert dialect.limit_clause(10, 5) == "LIMIT 10 OFFSET 5"


def test_mysql_placeholder_and_escaping():
    dialect = MySQLDialect()
    assert dialect.parameter_placeholder() == "%s"
    assert dialect.escape_string("O'Brien \\ co") == "O''Brien \\\\ co"


@pytest.mark.parametrize("type_name", ["TINYINT", "SMALLINT", "MEDIUMINT", "INT", "INTEGER", "BIGINT"])
def test_mysql_autoincrement_accepts_integer_family(type_name):
    assert MySQLDialect().autoincrement_clause(type_name) == "PRIMARY KEY AUTO_INCREMENT"


def test_mysql_autoincrement_rejects_text():
    assert MySQLDialect().autoincrement_clause("VARCHAR") is None


def test_mysql_charset_names_are_lowercase_enum_names():
    dialect = MySQLDialect()
    assert dialect.charset_name(CharacterSet.UTF8MB4) == "utf8mb4"
    assert dialect.supports_charset(CharacterSet.UTF16)


def test_mariadb_extends_mysql_with_returning():
    dialect = MariaDBDialect()
    assert dialect.driver is DriverType.MARIADB
    assert dialect.name == "mariadb"
    assert dialect.capabilities.supports_returning
    assert not MySQLDialect().capabilities.supports_returning
    assert dialect.quote_identifier("a") == "`a`"
    assert dialect != MySQLDialect()
