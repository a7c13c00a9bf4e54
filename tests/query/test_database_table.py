import logging

import pytest

from polysql.dialects.charsets import CharacterSet
from polysql.errors import FeatureNotSupportedError, MissingRequiredFieldError, QueryConfigurationError
from polysql.query import DropBehaviour, IdentityMode
from polysql.query.providers import (
    DatabaseCreateQueryProvider,
    DatabaseDropQueryProvider,
    TableCreateQueryProvider,
    TableDropQueryProvider,
    TableTruncateQueryProvider,
)
from polysql.schema import (
    Column,
    ColumnType,
    DataType,
    ForeignKeyAction,
    ForeignKeyConstraint,
    IndexConstraint,
    PrimaryKeyConstraint,
)


# Databases -------------------------------------------------------------
def test_create_database_mysql():
    query = DatabaseCreateQueryProvider("shop").if_not_exists().character_set(CharacterSet.UTF8MB4)
    assert query.generate_sql_string("mysql") == (
        "CREATE DATABASE IF NOT EXISTS shop CHARACTER SET utf8mb4"
    )


def test_create_database_postgres():
    query = DatabaseCreateQueryProvider("shop").character_set(CharacterSet.UTF8MB4)
    assert query.generate_sql_string("postgresql") == "CREATE DATABASE shop ENCODING 'UTF8'"
    with pytest.raises(FeatureNotSupportedError):
        query.if_not_exists().generate_sql_string("postgresql")
    with pytest.raises(FeatureNotSupportedError):
        DatabaseCreateQueryProvider("shop").character_set(CharacterSet.UTF16).generate_sql_string("postgresql")


def test_databases_unavailable_on_sqlite():
    with pytest.raises(FeatureNotSupportedError):
        DatabaseCreateQueryProvider("shop").generate_sql_string("sqlite")
    with pytest.raises(FeatureNotSupportedError):
        DatabaseDropQueryProvider("shop").generate_sql_string("sqlite")


def test_drop_database():
    query = DatabaseDropQueryProvider().database("shop").if_exists()
    assert query.generate_sql_string("mysql") == "DROP DATABASE IF EXISTS shop"
    assert query.generate_sql_string("postgresql") == "DROP DATABASE IF EXISTS shop"
    with pytest.raises(MissingRequiredFieldError):
        DatabaseDropQueryProvider().generate_sql_string()


# CREATE TABLE ----------------------------------------------------------
def posts_table():
    return (
        TableCreateQueryProvider("posts")
        .if_not_exists()
        .column("uuid", DataType.VARCHAR, 64, column_type=ColumnType.UNIQUE)
        .column("comment", DataType.LONGTEXT)
    )


def test_create_table_round_trip():
    assert posts_table().generate_sql_string("mysql") == (
        "CREATE TABLE IF NOT EXISTS posts (uuid VARCHAR(64) UNIQUE, comment LONGTEXT)"
    )
    assert posts_table().generate_sql_string("postgresql") == (
        "CREATE TABLE IF NOT EXISTS posts (uuid VARCHAR(64) UNIQUE, comment TEXT)"
    )


def test_create_table_requires_columns():
    with pytest.raises(MissingRequiredFieldError):
        TableCreateQueryProvider("empty").generate_sql_string()


def test_autoincrement_primary_key_per_dialect():
    query = TableCreateQueryProvider("users").columns(
        Column("id", DataType.INTEGER, column_type=ColumnType.PRIMARY_KEY_AUTOINCREMENT),
        Column("email", DataType.VARCHAR, 255, not_null=True),
    )
    assert query.generate_sql_string("sqlite") == (
        "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, email VARCHAR(255) NOT NULL)"
    )
    assert query.generate_sql_string("mysql") == (
        "CREATE TABLE users (id INTEGER PRIMARY KEY AUTO_INCREMENT, email VARCHAR(255) NOT NULL)"
    )


def test_composite_primary_key():
    query = TableCreateQueryProvider("pairs").columns(
        Column("a", DataType.INTEGER, column_type=ColumnType.PRIMARY_KEY),
        Column("b", DataType.INTEGER, column_type=ColumnType.PRIMARY_KEY),
    )
    assert query.generate_sql_string() == "CREATE TABLE pairs (a INTEGER, b INTEGER, PRIMARY KEY (a, b))"


def test_composite_primary_key_rejects_autoincrement():
    query = TableCreateQueryProvider("pairs").columns(
        Column("a", DataType.INTEGER, column_type=ColumnType.PRIMARY_KEY_AUTOINCREMENT),
        Column("b", DataType.INTEGER, column_type=ColumnType.PRIMARY_KEY),
    )
    with pytest.raises(QueryConfigurationError):
        query.generate_sql_string("mysql")


def test_primary_key_declared_twice():
    query = (
        TableCreateQueryProvider("t")
        .column("id", DataType.INTEGER, column_type=ColumnType.PRIMARY_KEY)
        .constraint(PrimaryKeyConstraint("pk_t", ("id",)))
    )
    with pytest.raises(QueryConfigurationError):
        query.generate_sql_string()


def test_foreign_key_constraint():
    query = (
        TableCreateQueryProvider("orders")
        .column("id", DataType.INTEGER, column_type=ColumnType.PRIMARY_KEY)
        .column("user_id", DataType.INTEGER)
        .constraint(
            ForeignKeyConstraint(
                "fk_orders_user", "user_id", "users", "id", on_delete=ForeignKeyAction.CASCADE
            )
        )
    )
    assert query.generate_sql_string("postgresql") == (
        "CREATE TABLE orders (id INTEGER PRIMARY KEY, user_id INTEGER, "
        "CONSTRAINT fk_orders_user FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE)"
    )


def test_index_constraint_inline_on_mysql():
    query = (
        TableCreateQueryProvider("users")
        .column("email", DataType.VARCHAR, 255)
        .constraint(IndexConstraint(None, ("email",), unique=True))
    )
    assert query.generate_sql_string("mysql") == (
        "CREATE TABLE users (email VARCHAR(255), UNIQUE KEY uq_users_email (email))"
    )
    assert len(query.compile_all("mysql")) == 1


def test_index_constraint_follow_up_elsewhere():
    query = (
        TableCreateQueryProvider("users")
        .column("email", DataType.VARCHAR, 255)
        .constraint(IndexConstraint(None, ("email",), unique=True))
    )
    statements = query.compile_all("sqlite")
    assert [statement.sql for statement in statements] == [
        "CREATE TABLE users (email VARCHAR(255))",
        "CREATE UNIQUE INDEX IF NOT EXISTS uq_users_email ON users (email)",
    ]


def test_inline_render_returns_index_follow_ups_on_postgres():
    query = (
        TableCreateQueryProvider("users")
        .column("email", DataType.VARCHAR, 255)
        .constraint(IndexConstraint("ix_email", ("email",)))
    )
    assert query.generate_sql_strings("postgresql") == [
        "CREATE TABLE users (email VARCHAR(255))",
        "CREATE INDEX IF NOT EXISTS ix_email ON users (email)",
    ]


def test_single_inline_render_warns_about_follow_ups(caplog):
    query = (
        TableCreateQueryProvider("users")
        .column("email", DataType.VARCHAR, 255)
        .constraint(IndexConstraint("ix_email", ("email",)))
    )
    with caplog.at_level(logging.WARNING, logger="polysql.query.provider"):
        sql = query.generate_sql_string("postgresql")
    assert sql == "CREATE TABLE users (email VARCHAR(255))"
    assert any("create index" in record.message for record in caplog.records)


def test_single_inline_render_is_quiet_without_follow_ups(caplog):
    query = TableCreateQueryProvider("users").column("email", DataType.VARCHAR, 255)
    with caplog.at_level(logging.WARNING, logger="polysql.query.provider"):
        query.generate_sql_string("postgresql")
    assert not [r for r in caplog.records if r.name == "polysql.query.provider"]


def test_mysql_table_options():
    query = (
        TableCreateQueryProvider("t")
        .temporary()
        .column("a", DataType.INTEGER)
        .engine("InnoDB")
        .character_set(CharacterSet.UTF8MB4)
        .comment("User's table")
    )
    assert query.generate_sql_string("mysql") == (
        "CREATE TEMPORARY TABLE t (a INTEGER) ENGINE=InnoDB "
        "DEFAULT CHARACTER SET utf8mb4 COMMENT='User''s table'"
    )


def test_table_options_outside_mysql():
    query = TableCreateQueryProvider("t").column("a", DataType.INTEGER).engine("InnoDB")
    assert query.generate_sql_string("postgresql") == "CREATE TABLE t (a INTEGER)"
    with pytest.raises(FeatureNotSupportedError):
        query.comment("nope").generate_sql_string("postgresql")


def test_table_character_set_needs_mysql():
    query = TableCreateQueryProvider("t").column("a", DataType.INTEGER).character_set(CharacterSet.UTF8MB4)
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("sqlite")
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string()


def test_raw_table_options():
    query = TableCreateQueryProvider("t").column("a", DataType.INTEGER).options(" WITHOUT ROWID ")
    assert query.generate_sql_string("sqlite") == "CREATE TABLE t (a INTEGER) WITHOUT ROWID"


def test_quoted_table_with_schema():
    query = TableCreateQueryProvider("public.users").column(
        "id", DataType.INTEGER, column_type=ColumnType.PRIMARY_KEY
    )
    assert query.generate_sql_string("postgresql", quote_identifiers=True) == (
        'CREATE TABLE "public"."users" ("id" INTEGER PRIMARY KEY)'
    )


# DROP / TRUNCATE -------------------------------------------------------
def test_drop_tables():
    query = TableDropQueryProvider("a", "b").if_exists()
    assert query.generate_sql_string("mysql") == "DROP TABLE IF EXISTS a, b"
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("sqlite")
    with pytest.raises(MissingRequiredFieldError):
        TableDropQueryProvider().generate_sql_string()


def test_drop_behaviour():
    query = TableDropQueryProvider("a").table("b").drop_behaviour(DropBehaviour.CASCADE)
    assert query.generate_sql_string("postgresql") == "DROP TABLE a, b CASCADE"
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("mysql")


def test_drop_temporary():
    query = TableDropQueryProvider("scratch").temporary()
    assert query.generate_sql_string("mysql") == "DROP TEMPORARY TABLE scratch"
    assert query.generate_sql_string("postgresql") == "DROP TABLE scratch"


def test_truncate():
    query = (
        TableTruncateQueryProvider("logs")
        .identity_mode(IdentityMode.RESTART)
        .drop_behaviour(DropBehaviour.CASCADE)
    )
    assert query.generate_sql_string("postgresql") == "TRUNCATE TABLE logs RESTART IDENTITY CASCADE"
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("mysql")
    assert TableTruncateQueryProvider("logs").generate_sql_string("mysql") == "TRUNCATE TABLE logs"
    with pytest.raises(FeatureNotSupportedError):
        TableTruncateQueryProvider("logs").generate_sql_string("sqlite")
