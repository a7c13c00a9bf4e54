"""
PolySQL public package initialization.

Statement builders render SQL for MySQL, MariaDB, PostgreSQL and SQLite from
in-memory descriptors; ``Session`` runs them through a DB-API adapter.
"""

from .adapters import ConnectionConfig, create_adapter  # noqa: F401
from .dialects import DriverType, detect_dialect, get_dialect  # noqa: F401
from .dialects.charsets import CharacterSet  # noqa: F401
from .errors import (  # noqa: F401
    FeatureNotSupportedError,
    InvalidValueTypeError,
    MissingRequiredFieldError,
    PolySQLError,
    QueryConfigurationError,
)
from .persistence import ExecutionResult, Session  # noqa: F401
from .query import (  # noqa: F401
    Condition,
    ConditionGroup,
    ConditionType,
    CreateMethod,
    DeleteMethod,
    Direction,
    DropBehaviour,
    Group,
    Identifier,
    IdentityMode,
    InsertMethod,
    Join,
    JoinType,
    Limit,
    LockMode,
    LockWait,
    Offset,
    Operator,
    Order,
    SelectFunction,
    SelectType,
    UpdatePriority,
)
from .query.providers import (  # noqa: F401
    CreateIndexQueryProvider,
    CustomQueryProvider,
    DatabaseCreateQueryProvider,
    DatabaseDropQueryProvider,
    DeleteQueryProvider,
    DropIndexQueryProvider,
    InsertQueryProvider,
    SelectQueryProvider,
    TableCreateQueryProvider,
    TableDropQueryProvider,
    TableTruncateQueryProvider,
    UpdateQueryProvider,
)
from .schema import (  # noqa: F401
    CheckConstraint,
    Column,
    ColumnType,
    DataType,
    ForeignKeyAction,
    ForeignKeyConstraint,
    IndexConstraint,
    PrimaryKeyConstraint,
    UniqueConstraint,
    UnsignedState,
)

__version__ = "0.1.0"

__all__ = [
    "CharacterSet",
    "CheckConstraint",
    "Column",
    "ColumnType",
    "Condition",
    "ConditionGroup",
    "ConditionType",
    "ConnectionConfig",
    "CreateIndexQueryProvider",
    "CreateMethod",
    "CustomQueryProvider",
    "DataType",
    "DatabaseCreateQueryProvider",
    "DatabaseDropQueryProvider",
    "DeleteMethod",
    "DeleteQueryProvider",
    "Direction",
    "DriverType",
    "DropBehaviour",
    "DropIndexQueryProvider",
    "ExecutionResult",
    "FeatureNotSupportedError",
    "ForeignKeyAction",
    "ForeignKeyConstraint",
    "Group",
    "Identifier",
    "IdentityMode",
    "IndexConstraint",
    "InsertMethod",
    "InsertQueryProvider",
    "InvalidValueTypeError",
    "Join",
    "JoinType",
    "Limit",
    "LockMode",
    "LockWait",
    "MissingRequiredFieldError",
    "Offset",
    "Operator",
    "Order",
    "PolySQLError",
    "PrimaryKeyConstraint",
    "QueryConfigurationError",
    "SelectFunction",
    "SelectQueryProvider",
    "SelectType",
    "Session",
    "TableCreateQueryProvider",
    "TableDropQueryProvider",
    "TableTruncateQueryProvider",
    "UniqueConstraint",
    "UnsignedState",
    "UpdatePriority",
    "UpdateQueryProvider",
    "create_adapter",
    "detect_dialect",
    "get_dialect",
]
