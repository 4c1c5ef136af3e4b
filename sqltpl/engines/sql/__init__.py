"""
Positional SQL template engine.

Exports: QueryBuilder, skip, SKIP, SkipMarker, parse_placeholders, check_template.
"""

from sqltpl.engines.sql.parser import count_placeholders, parse_placeholders
from sqltpl.engines.sql.safety import check_template
from sqltpl.engines.sql.template_engine import SKIP, QueryBuilder, SkipMarker, skip

__all__ = [
    "QueryBuilder",
    "skip",
    "SKIP",
    "SkipMarker",
    "parse_placeholders",
    "count_placeholders",
    "check_template",
]
