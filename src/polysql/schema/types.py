"""
Column data type catalog and per-dialect type rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Sequence

from ..dialects.drivers import DriverType
from ..errors import FeatureNotSupportedError, MissingRequiredFieldError

if TYPE_CHECKING:
    from ..query.compiler import SQLCompiler


class TypeCategory(Enum):
    STRING = "string"
    TEXT = "text"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMERIC = "numeric"
    TEMPORAL = "temporal"
    BINARY = "binary"
    ENUMERATION = "enumeration"
    JSON = "json"
    OTHER = "other"


class UnsignedState(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

    def __bool__(self) -> bool:
        return self is UnsignedState.ACTIVE


@dataclass(frozen=True)
class DataType:
    """
    Logical column type with capability flags.

    Well-known types are exposed as class attributes (``DataType.VARCHAR``);
    anything else can be constructed directly, e.g. ``DataType("GEOMETRY")``.
    """

    name: str
    can_have_parameter: bool = False
    requires_parameter: bool = False
    can_be_unsigned: bool = False
    category: TypeCategory = TypeCategory.OTHER

    CHAR: ClassVar["DataType"]
    VARCHAR: ClassVar["DataType"]
    TINYTEXT: ClassVar["DataType"]
    TEXT: ClassVar["DataType"]
    MEDIUMTEXT: ClassVar["DataType"]
    LONGTEXT: ClassVar["DataType"]
    BOOLEAN: ClassVar["DataType"]
    TINYINT: ClassVar["DataType"]
    SMALLINT: ClassVar["DataType"]
    MEDIUMINT: ClassVar["DataType"]
    INTEGER: ClassVar["DataType"]
    BIGINT: ClassVar["DataType"]
    FLOAT: ClassVar["DataType"]
    DOUBLE: ClassVar["DataType"]
    DECIMAL: ClassVar["DataType"]
    DATE: ClassVar["DataType"]
    DATETIME: ClassVar["DataType"]
    TIMESTAMP: ClassVar["DataType"]
    TIME: ClassVar["DataType"]
    BINARY: ClassVar["DataType"]
    VARBINARY: ClassVar["DataType"]
    TINYBLOB: ClassVar["DataType"]
    BLOB: ClassVar["DataType"]
    MEDIUMBLOB: ClassVar["DataType"]
    LONGBLOB: ClassVar["DataType"]
    ENUM: ClassVar["DataType"]
    SET: ClassVar["DataType"]
    JSON: ClassVar["DataType"]

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise MissingRequiredFieldError("name", "Data type name must not be empty.")
        object.__setattr__(self, "name", self.name.strip().upper())
        if self.requires_parameter and not self.can_have_parameter:
            object.__setattr__(self, "can_have_parameter", True)

    @property
    def is_integer(self) -> bool:
        return self.category is TypeCategory.INTEGER

    def __str__(self) -> str:
        return self.name


def _builtin(name: str, category: TypeCategory, **flags: bool) -> DataType:
    return DataType(name, category=category, **flags)


DataType.CHAR = _builtin("CHAR", TypeCategory.STRING, can_have_parameter=True)
DataType.VARCHAR = _builtin("VARCHAR", TypeCategory.STRING, requires_parameter=True)
DataType.TINYTEXT = _builtin("TINYTEXT", TypeCategory.TEXT)
DataType.TEXT = _builtin("TEXT", TypeCategory.TEXT)
DataType.MEDIUMTEXT = _builtin("MEDIUMTEXT", TypeCategory.TEXT)
DataType.LONGTEXT = _builtin("LONGTEXT", TypeCategory.TEXT)
DataType.BOOLEAN = _builtin("BOOLEAN", TypeCategory.BOOLEAN)
DataType.TINYINT = _builtin("TINYINT", TypeCategory.INTEGER, can_have_parameter=True, can_be_unsigned=True)
DataType.SMALLINT = _builtin("SMALLINT", TypeCategory.INTEGER, can_have_parameter=True, can_be_unsigned=True)
DataType.MEDIUMINT = _builtin("MEDIUMINT", TypeCategory.INTEGER, can_have_parameter=True, can_be_unsigned=True)
DataType.INTEGER = _builtin("INTEGER", TypeCategory.INTEGER, can_have_parameter=True, can_be_unsigned=True)
DataType.BIGINT = _builtin("BIGINT", TypeCategory.INTEGER, can_have_parameter=True, can_be_unsigned=True)
DataType.FLOAT = _builtin("FLOAT", TypeCategory.NUMERIC, can_have_parameter=True, can_be_unsigned=True)
DataType.DOUBLE = _builtin("DOUBLE", TypeCategory.NUMERIC, can_be_unsigned=True)
DataType.DECIMAL = _builtin("DECIMAL", TypeCategory.NUMERIC, can_have_parameter=True, can_be_unsigned=True)
DataType.DATE = _builtin("DATE", TypeCategory.TEMPORAL)
DataType.DATETIME = _builtin("DATETIME", TypeCategory.TEMPORAL, can_have_parameter=True)
DataType.TIMESTAMP = _builtin("TIMESTAMP", TypeCategory.TEMPORAL, can_have_parameter=True)
DataType.TIME = _builtin("TIME", TypeCategory.TEMPORAL, can_have_parameter=True)
DataType.BINARY = _builtin("BINARY", TypeCategory.BINARY, can_have_parameter=True)
DataType.VARBINARY = _builtin("VARBINARY", TypeCategory.BINARY, requires_parameter=True)
DataType.TINYBLOB = _builtin("TINYBLOB", TypeCategory.BINARY)
DataType.BLOB = _builtin("BLOB", TypeCategory.BINARY)
DataType.MEDIUMBLOB = _builtin("MEDIUMBLOB", TypeCategory.BINARY)
DataType.LONGBLOB = _builtin("LONGBLOB", TypeCategory.BINARY)
DataType.ENUM = _builtin("ENUM", TypeCategory.ENUMERATION, requires_parameter=True)
DataType.SET = _builtin("SET", TypeCategory.ENUMERATION, requires_parameter=True)
DataType.JSON = _builtin("JSON", TypeCategory.JSON)

BUILTIN_TYPES: tuple[DataType, ...] = tuple(
    value for value in vars(DataType).values() if isinstance(value, DataType)
)


def enumeration_values(parameter: Any) -> list[str]:
    """
    Split an ENUM/SET parameter (``"a; b;;c"`` or a sequence) into clean tokens.
    """

    if isinstance(parameter, str):
        raw: Sequence[Any] = parameter.split(";")
    else:
        raw = list(parameter)
    return [token for token in (str(item).strip() for item in raw) if token]


def format_parameter(parameter: Any) -> str:
    if isinstance(parameter, (tuple, list)):
        return ", ".join(str(part) for part in parameter)
    return str(parameter)


def render_data_type(
    data_type: DataType,
    parameter: Any,
    unsigned: UnsignedState | bool,
    compiler: "SQLCompiler",
) -> str:
    """
    Render a type fragment such as ``VARCHAR(64)`` or ``INT UNSIGNED``.
    """

    if data_type.requires_parameter and parameter is None:
        raise MissingRequiredFieldError(
            "parameter", f"Data type {data_type.name} requires a parameter."
        )
    dialect = compiler.dialect

    if data_type.category is TypeCategory.ENUMERATION:
        if dialect is not None and not compiler.supports("enum_types"):
            raise FeatureNotSupportedError(compiler.driver, f"{data_type.name} type")
        values = enumeration_values(parameter)
        if not values:
            raise MissingRequiredFieldError(
                "parameter", f"Data type {data_type.name} requires at least one value."
            )
        escaped = (value.replace("'", "''") for value in values)
        rendered = ", ".join(f"'{value}'" for value in escaped)
        return f"{data_type.name}({rendered})"

    if data_type.category is TypeCategory.BINARY and dialect is not None:
        if not compiler.supports("binary_types"):
            raise FeatureNotSupportedError(compiler.driver, f"{data_type.name} type")

    name = dialect.type_name(data_type.name) if dialect is not None else data_type.name
    sql = name
    if data_type.can_have_parameter and parameter is not None:
        if dialect is None or dialect.keeps_type_parameter(data_type.name):
            sql += f"({format_parameter(parameter)})"

    if unsigned and data_type.can_be_unsigned:
        compiler.reject(DriverType.POSTGRESQL, feature="UNSIGNED")
        sql += " UNSIGNED"
    return sql
