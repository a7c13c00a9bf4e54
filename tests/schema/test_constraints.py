import pytest

from polysql.errors import MissingRequiredFieldError
from polysql.query.compiler import SQLCompiler
from polysql.schema import (
    CheckConstraint,
    ForeignKeyAction,
    ForeignKeyConstraint,
    IndexConstraint,
    PrimaryKeyConstraint,
    UniqueConstraint,
)


def test_primary_key_and_unique():
    compiler = SQLCompiler()
    assert PrimaryKeyConstraint(None, ("a", "b")).render(compiler) == "PRIMARY KEY (a, b)"
    assert UniqueConstraint("uq_email", "email").render(compiler) == "CONSTRAINT uq_email UNIQUE (email)"
    with pytest.raises(MissingRequiredFieldError):
        PrimaryKeyConstraint("pk", ()).render(compiler)


def test_foreign_key():
    constraint = ForeignKeyConstraint(
        "fk_user",
        "user_id",
        "users",
        "id",
        on_delete=ForeignKeyAction.CASCADE,
        on_update=ForeignKeyAction.SET_NULL,
    )
    assert constraint.columns == ("user_id",)
    assert constraint.render(SQLCompiler()) == (
        "CONSTRAINT fk_user FOREIGN KEY (user_id) REFERENCES users (id) "
        "ON DELETE CASCADE ON UPDATE SET NULL"
    )


def test_foreign_key_defaults_to_same_column_names_and_quotes():
    constraint = ForeignKeyConstraint(None, ("org_id",), "public.orgs")
    compiler = SQLCompiler("postgresql", quote_identifiers=True)
    assert constraint.render(compiler) == 'FOREIGN KEY ("org_id") REFERENCES "public"."orgs" ("org_id")'


def test_foreign_key_validation():
    with pytest.raises(MissingRequiredFieldError):
        ForeignKeyConstraint(None, ("a", "b"), "t", ("id",)).render(SQLCompiler())
    with pytest.raises(MissingRequiredFieldError):
        ForeignKeyConstraint(None, ("a",), "").render(SQLCompiler())


def test_check_constraint():
    assert CheckConstraint("positive", "price > 0").render(SQLCompiler()) == "CONSTRAINT positive CHECK (price > 0)"
    with pytest.raises(MissingRequiredFieldError):
        CheckConstraint(None, "  ").render(SQLCompiler())


def test_inline_index():
    compiler = SQLCompiler("mysql")
    assert IndexConstraint(None, ("email",)).render(compiler, "idx_users_email") == "KEY idx_users_email (email)"
    assert IndexConstraint(None, ("a", "b"), unique=True).render(compiler, "uq") == "UNIQUE KEY uq (a, b)"
