import pytest

from polysql.errors import FeatureNotSupportedError, MissingRequiredFieldError, QueryConfigurationError
from polysql.query import Direction, DropBehaviour, Operator
from polysql.query.providers import CreateIndexQueryProvider, DropIndexQueryProvider, IndexMethod


def test_generated_index_name():
    query = CreateIndexQueryProvider("users").columns("last", "first")
    assert query.generate_sql_string() == "CREATE INDEX idx_users_last_first ON users (last, first)"


def test_named_unique_descending():
    query = CreateIndexQueryProvider("users", "ix").unique().column("created", Direction.DESCENDING)
    assert query.generate_sql_string("sqlite") == "CREATE UNIQUE INDEX ix ON users (created DESC)"


def test_postgres_method_and_partial_index():
    query = (
        CreateIndexQueryProvider("users", "ix_active")
        .columns("email")
        .method(IndexMethod.HASH)
        .where("deleted_at", Operator.IS_NULL)
    )
    statement = query.compile("postgresql")
    assert statement.sql == (
        "CREATE INDEX ix_active ON users USING hash (email) WHERE deleted_at IS NULL"
    )
    assert statement.params == ()


def test_partial_index_inlines_values():
    query = CreateIndexQueryProvider("jobs", "ix_pending").columns("id").where("state", Operator.EQUALS, "pending")
    statement = query.compile("sqlite")
    assert statement.sql == "CREATE INDEX ix_pending ON jobs (id) WHERE state = 'pending'"
    assert statement.params == ()


def test_mysql_index_restrictions():
    base = CreateIndexQueryProvider("users", "ix").columns("email")
    assert base.method(IndexMethod.BTREE).generate_sql_string("mysql") == (
        "CREATE INDEX ix ON users (email) USING BTREE"
    )
    with pytest.raises(FeatureNotSupportedError):
        CreateIndexQueryProvider("users", "ix").columns("a").if_not_exists().generate_sql_string("mysql")
    with pytest.raises(FeatureNotSupportedError):
        CreateIndexQueryProvider("users", "ix").columns("a").method(IndexMethod.GIN).generate_sql_string("mysql")
    with pytest.raises(FeatureNotSupportedError):
        (
            CreateIndexQueryProvider("users", "ix")
            .columns("a")
            .where("a", Operator.IS_NOT_NULL)
            .generate_sql_string("mysql")
        )


def test_prefix_length():
    query = CreateIndexQueryProvider("users", "ix_bio").column("bio", length=10)
    assert query.generate_sql_string("mysql") == "CREATE INDEX ix_bio ON users (bio(10))"
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("postgresql")


def test_method_rejected_on_sqlite():
    query = CreateIndexQueryProvider("users", "ix").columns("a").method(IndexMethod.BTREE)
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("sqlite")


def test_create_index_requirements():
    with pytest.raises(MissingRequiredFieldError):
        CreateIndexQueryProvider("users").generate_sql_string()
    with pytest.raises(MissingRequiredFieldError):
        CreateIndexQueryProvider().columns("a").generate_sql_string()


def test_drop_index_mysql():
    query = DropIndexQueryProvider("ix").table("users")
    assert query.generate_sql_string("mysql") == "DROP INDEX ix ON users"
    with pytest.raises(MissingRequiredFieldError):
        DropIndexQueryProvider("ix").generate_sql_string("mysql")


def test_drop_index_if_exists_mysql_family():
    query = DropIndexQueryProvider("ix").table("users").if_exists()
    with pytest.raises(FeatureNotSupportedError):
        query.generate_sql_string("mysql")
    assert query.generate_sql_string("mariadb") == "DROP INDEX IF EXISTS ix ON users"


def test_drop_several_indexes():
    query = DropIndexQueryProvider("a", "b").if_exists().drop_behaviour(DropBehaviour.CASCADE)
    assert query.generate_sql_string("postgresql") == "DROP INDEX IF EXISTS a, b CASCADE"
    with pytest.raises(QueryConfigurationError):
        DropIndexQueryProvider("a", "b").generate_sql_string("sqlite")
    assert DropIndexQueryProvider("a").generate_sql_string("sqlite") == "DROP INDEX a"
