"""
sqltpl: positional SQL query templating for MySQL.

Exports: Database, QueryBuilder, skip, SKIP and the error types.
"""

from sqltpl.core.errors import (
    ArgumentCountMismatch,
    ExpectedArray,
    QueryBuildError,
    UnsupportedValueType,
)
from sqltpl.database import Database
from sqltpl.engines.sql import SKIP, QueryBuilder, skip

__all__ = [
    "Database",
    "QueryBuilder",
    "skip",
    "SKIP",
    "QueryBuildError",
    "UnsupportedValueType",
    "ExpectedArray",
    "ArgumentCountMismatch",
]
