import logging

import pytest

from polysql.errors import FeatureNotSupportedError, MissingRequiredFieldError
from polysql.query import Direction, Operator, Order
from polysql.query.providers import DeleteQueryProvider, UpdateQueryProvider


def test_update_bound_mysql():
    query = (
        UpdateQueryProvider("users")
        .entry("name", "Bob")
        .entry("age", 31)
        .where("id", Operator.EQUALS, 7)
    )
    statement = query.compile("mysql")
    assert statement.sql == "UPDATE users SET name = %s, age = %s WHERE id = %s"
    assert statement.params == ("Bob", 31, 7)


def test_update_inline():
    query = UpdateQueryProvider("users").set({"name": "O'Neil"}, active=False).where("id", Operator.IN, [1, 2])
    assert query.generate_sql_string("postgresql") == (
        "UPDATE users SET name = 'O''Neil', active = FALSE WHERE id IN (1, 2)"
    )


def test_update_requires_entries_and_table():
    with pytest.raises(MissingRequiredFieldError):
        UpdateQueryProvider("users").generate_sql_string()
    with pytest.raises(MissingRequiredFieldError):
        UpdateQueryProvider().entry("a", 1).generate_sql_string()


def test_update_priority_and_ignore_mysql():
    query = UpdateQueryProvider("users").entry("a", 1).low_priority().ignore()
    assert query.generate_sql_string("mysql") == "UPDATE LOW_PRIORITY IGNORE users SET a = 1"


def test_update_ignore_other_backends():
    query = UpdateQueryProvider("users").entry("a", 1).ignore()
    assert query.generate_sql_string("sqlite") == "UPDATE OR IGNORE users SET a = 1"
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("postgresql")


def test_update_low_priority_dropped_with_warning(caplog):
    query = UpdateQueryProvider("users").entry("a", 1).low_priority()
    with caplog.at_level(logging.WARNING, logger="polysql.query.update"):
        sql = query.generate_sql_string("postgresql")
    assert sql == "UPDATE users SET a = 1"
    assert any("LOW_PRIORITY" in record.getMessage() for record in caplog.records)


def test_update_order_and_limit():
    query = UpdateQueryProvider("users").entry("a", 1).order_by(Order().rule("id")).limit(5)
    assert query.generate_sql_string("mysql") == "UPDATE users SET a = 1 ORDER BY id ASC LIMIT 5"
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("sqlite")
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string()


def test_update_returning():
    query = UpdateQueryProvider("users").entry("a", 1).returning("id", "a")
    assert query.returns_rows()
    assert query.generate_sql_string("postgresql") == "UPDATE users SET a = 1 RETURNING id, a"
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("mysql")


def test_delete_all_rows():
    assert DeleteQueryProvider("users").generate_sql_string() == "DELETE FROM users"


def test_delete_with_order_and_limit_mysql():
    query = (
        DeleteQueryProvider("users")
        .where("age", Operator.LESS_THAN, 18)
        .order_by(Order().rule("age", Direction.DESCENDING))
        .limit(10)
    )
    assert query.generate_sql_string("mysql") == "DELETE FROM users WHERE age < 18 ORDER BY age DESC LIMIT 10"
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("postgresql")


def test_delete_bound_with_returning():
    query = DeleteQueryProvider("sessions").where("expired", Operator.EQUALS, True).returning("id")
    statement = query.compile("sqlite")
    assert statement.sql == "DELETE FROM sessions WHERE expired = ? RETURNING id"
    assert statement.params == (True,)
    assert query.returns_rows()
    assert not DeleteQueryProvider("sessions").returns_rows()


def test_delete_requires_table():
    with pytest.raises(MissingRequiredFieldError):
        DeleteQueryProvider().generate_sql_string()
