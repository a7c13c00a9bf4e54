from decimal import Decimal

import pytest

from polysql.errors import InvalidValueTypeError, MissingRequiredFieldError
from polysql.query import Condition, ConditionType, Identifier, Operator, SelectFunction, SQLCompiler
from polysql.query.expressions import render_conditions


def test_numeric_comparison_is_unquoted():
    assert str(Condition("age", Operator.GREATER_THAN, 30)) == "age > 30"
    assert str(Condition("price", Operator.LESS_EQUALS, 9.5)) == "price <= 9.5"


def test_text_comparison_is_quoted_and_escaped():
    assert str(Condition("name", Operator.EQUALS, "Bob")) == "name = 'Bob'"
    assert str(Condition("name", Operator.NOT_EQUALS, "O'Brien")) == "name != 'O''Brien'"
    assert str(Condition("name", Operator.LIKE, "A%")) == "name LIKE 'A%'"


def test_null_checks_ignore_value():
    assert str(Condition("email", Operator.IS_NOT_NULL, "ignored")) == "email IS NOT NULL"
    assert str(Condition("email", Operator.IS_NULL)) == "email IS NULL"


@pytest.mark.parametrize("value", ["thirty", True, None])
def test_numeric_operator_rejects_non_numbers(value):
    condition = Condition("age", Operator.GREATER_THAN, value)
    expected = MissingRequiredFieldError if value is None else InvalidValueTypeError
    with pytest.raises(expected):
        str(condition)


def test_missing_key():
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        str(Condition(None, Operator.EQUALS, 1))
    assert excinfo.value.field == "key"


def test_identifier_values_are_not_quoted():
    assert str(Condition("o.user_id", Operator.EQUALS, Identifier("u.id"))) == "o.user_id = u.id"
    assert str(Condition("a", Operator.GREATER_THAN, Identifier("b"))) == "a > b"


def test_select_functions_wrap_key_and_value():
    condition = Condition(
        "name",
        Operator.EQUALS,
        "bob",
        key_function=SelectFunction.LOWER,
        value_function=SelectFunction.LOWER,
    )
    assert str(condition) == "LOWER(name) = LOWER('bob')"


def test_in_and_between():
    assert str(Condition("id", Operator.IN, [1, 2, 3])) == "id IN (1, 2, 3)"
    assert str(Condition("tag", Operator.NOT_IN, ("a", "b"))) == "tag NOT IN ('a', 'b')"
    assert str(Condition("age", Operator.BETWEEN, (18, 65))) == "age BETWEEN 18 AND 65"


@pytest.mark.parametrize(
    "operator, value",
    [(Operator.IN, "abc"), (Operator.IN, []), (Operator.BETWEEN, (1, 2, 3)), (Operator.BETWEEN, 5)],
)
def test_collection_operators_validate_values(operator, value):
    with pytest.raises(InvalidValueTypeError):
        str(Condition("x", operator, value))


def test_negation_and_folding_use_each_conditions_own_type():
    conditions = [
        Condition("a", Operator.GREATER_THAN, 1),
        Condition("b", Operator.GREATER_THAN, 2, type=ConditionType.OR),
        Condition("c", Operator.GREATER_THAN, 3, negated=True),
    ]
    assert render_conditions(conditions, SQLCompiler()) == "a > 1 OR b > 2 AND NOT c > 3"


def test_operator_composition():
    a = Condition("a", Operator.GREATER_THAN, 1)
    b = Condition("b", Operator.GREATER_THAN, 2)
    assert str(a | b) == "(a > 1 OR b > 2)"
    assert str(a & b) == "(a > 1 AND b > 2)"
    assert str(~a) == "NOT a > 1"
    assert str(~(a | b)) == "NOT (a > 1 OR b > 2)"
    assert a.negated is False


def test_nested_groups():
    group = Condition.group(
        Condition("a", Operator.GREATER_THAN, 1),
        Condition("b", Operator.LESS_THAN, 2, type=ConditionType.OR),
    )
    outer = [Condition("c", Operator.EQUALS, "x"), group]
    assert render_conditions(outer, SQLCompiler()) == "c = 'x' AND (a > 1 OR b < 2)"
    with pytest.raises(MissingRequiredFieldError):
        str(Condition.group())


def test_bound_mode_collects_parameters_in_order():
    compiler = SQLCompiler("postgresql", parameterized=True)
    conditions = [
        Condition("name", Operator.EQUALS, "Bob"),
        Condition("age", Operator.BETWEEN, (18, 30)),
        Condition("id", Operator.IN, [1, 2]),
    ]
    sql = render_conditions(conditions, compiler)
    assert sql == "name = %s AND age BETWEEN %s AND %s AND id IN (%s, %s)"
    assert compiler.params == ["Bob", 18, 30, 1, 2]


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), Decimal("NaN"), Decimal("Infinity")])
def test_non_finite_numbers_are_rejected(value):
    with pytest.raises(InvalidValueTypeError):
        str(Condition("age", Operator.GREATER_THAN, value))
    with pytest.raises(InvalidValueTypeError):
        str(Condition("score", Operator.IN, [1, value]))
    with pytest.raises(InvalidValueTypeError):
        Condition("age", Operator.LESS_THAN, value).render(SQLCompiler("postgresql", parameterized=True))
