import pytest

from polysql.errors import FeatureNotSupportedError, MissingRequiredFieldError, QueryConfigurationError
from polysql.query import InsertMethod
from polysql.query.providers import InsertQueryProvider


def upsert():
    return (
        InsertQueryProvider("users")
        .entry("email", "a@x.io")
        .entry("name", "A")
        .method(InsertMethod.INSERT_OR_UPDATE)
        .on_conflict("email")
    )


def test_plain_insert_inline():
    query = InsertQueryProvider("users").entry("name", "Bob").entry("age", 30)
    assert query.generate_sql_string() == "INSERT INTO users (name, age) VALUES ('Bob', 30)"


def test_multi_row_insert_bound():
    query = InsertQueryProvider("users").values(name="A", age=1).values({"name": "B", "age": 2})
    statement = query.compile("sqlite")
    assert statement.sql == "INSERT INTO users (name, age) VALUES (?, ?), (?, ?)"
    assert statement.params == ("A", 1, "B", 2)


def test_none_and_booleans():
    query = InsertQueryProvider("t").entry("a", None).entry("b", True)
    assert query.generate_sql_string("postgresql") == "INSERT INTO t (a, b) VALUES (NULL, TRUE)"
    assert query.generate_sql_string("mysql") == "INSERT INTO t (a, b) VALUES (NULL, 1)"


def test_rows_must_share_columns():
    query = InsertQueryProvider("t").values(a=1).values(b=2)
    with pytest.raises(QueryConfigurationError):
        query.generate_sql_string()


def test_missing_table_or_entries():
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        InsertQueryProvider("t").generate_sql_string()
    assert excinfo.value.field == "entries"
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        InsertQueryProvider().entry("a", 1).generate_sql_string()
    assert excinfo.value.field == "table"


def test_insert_ignore_per_dialect():
    query = InsertQueryProvider("users").entry("name", "Bob").method(InsertMethod.INSERT_IGNORE)
    assert query.generate_sql_string("mysql") == "INSERT IGNORE INTO users (name) VALUES ('Bob')"
    assert query.generate_sql_string("mariadb") == "INSERT IGNORE INTO users (name) VALUES ('Bob')"
    assert query.generate_sql_string("sqlite") == "INSERT OR IGNORE INTO users (name) VALUES ('Bob')"
    assert query.generate_sql_string("postgresql") == (
        "INSERT INTO users (name) VALUES ('Bob') ON CONFLICT DO NOTHING"
    )
    query.on_conflict("name")
    assert query.generate_sql_string("postgresql").endswith("ON CONFLICT (name) DO NOTHING")


@pytest.mark.parametrize("method", [InsertMethod.INSERT_IGNORE, InsertMethod.INSERT_OR_UPDATE])
def test_conflict_handling_needs_a_dialect(method):
    query = InsertQueryProvider("t").entry("a", 1).method(method)
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string()


def test_upsert_mysql():
    assert upsert().generate_sql_string("mysql") == (
        "INSERT INTO users (email, name) VALUES ('a@x.io', 'A') ON DUPLICATE KEY UPDATE name = 'A'"
    )
    statement = upsert().compile("mysql")
    assert statement.sql == (
        "INSERT INTO users (email, name) VALUES (%s, %s) ON DUPLICATE KEY UPDATE name = %s"
    )
    assert statement.params == ("a@x.io", "A", "A")


def test_upsert_mysql_multi_row_uses_values_function():
    query = upsert().values(email="b@x.io", name="B")
    assert query.generate_sql_string("mysql").endswith("ON DUPLICATE KEY UPDATE name = VALUES(name)")


@pytest.mark.parametrize("dialect", ["sqlite", "postgresql"])
def test_upsert_on_conflict(dialect):
    assert upsert().generate_sql_string(dialect) == (
        "INSERT INTO users (email, name) VALUES ('a@x.io', 'A') "
        "ON CONFLICT (email) DO UPDATE SET name = excluded.name"
    )


def test_upsert_postgres_requires_conflict_columns():
    query = InsertQueryProvider("t").entry("a", 1).method(InsertMethod.INSERT_OR_UPDATE)
    with pytest.raises(MissingRequiredFieldError):
        query.generate_sql_string("postgresql")
    assert query.generate_sql_string("sqlite") == (
        "INSERT INTO t (a) VALUES (1) ON CONFLICT DO UPDATE SET a = excluded.a"
    )


def test_upsert_restricted_update_columns():
    query = upsert().entry("visits", 1).update_on_conflict("visits")
    assert query.generate_sql_string("sqlite").endswith("DO UPDATE SET visits = excluded.visits")
    query.update_on_conflict("missing")
    with pytest.raises(QueryConfigurationError):
        query.generate_sql_string("sqlite")


def test_upsert_with_nothing_to_update():
    query = (
        InsertQueryProvider("tags")
        .entry("name", "x")
        .method(InsertMethod.INSERT_OR_UPDATE)
        .on_conflict("name")
    )
    assert query.generate_sql_string("mysql") == "INSERT IGNORE INTO tags (name) VALUES ('x')"
    assert query.generate_sql_string("postgresql").endswith("ON CONFLICT (name) DO NOTHING")


def test_returning():
    query = InsertQueryProvider("users").entry("name", "A").returning("id")
    assert query.returns_rows()
    assert query.generate_sql_string("postgresql") == "INSERT INTO users (name) VALUES ('A') RETURNING id"
    assert query.generate_sql_string("mariadb").endswith("RETURNING id")
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("mysql")
