"""
Per-type formatters for query placeholders.

Each formatter turns one argument into the SQL text that replaces its
placeholder:

* ``?``  -> ``format_value`` (NULL, number, 1/0, or quoted + escaped string)
* ``?d`` -> ``format_int``
* ``?f`` -> ``format_float``
* ``?a`` -> ``format_array`` (``v1, v2`` or ```k` = v, ...``)
* ``?#`` -> ``format_identifiers``

String contents are escaped by the injected ``Escaper``; everything else is
rendered here.
"""

import math
import re
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any, Callable

from sqltpl.core.errors import ExpectedArray, QueryBuildError, UnsupportedValueType
from sqltpl.core.pool import Escaper

NULL = "NULL"

_IDENTIFIER_QUOTE = "`"

# Leading numeric prefix of a string, the way numeric casts read "5abc" as 5.
_NUMERIC_PREFIX = re.compile(
    r"[ \t\n\r\v\f]*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
)
_INTEGER_PREFIX = re.compile(r"[ \t\n\r\v\f]*[+-]?\d+")
_CANONICAL_INT = re.compile(r"-?(?:0|[1-9]\d*)")


def escape_identifier(name: str) -> str:
    """Quote a table/column name, doubling any backtick inside it."""
    if not isinstance(name, str):
        raise UnsupportedValueType(name, "identifier")
    escaped = name.replace(_IDENTIFIER_QUOTE, _IDENTIFIER_QUOTE * 2)
    return f"{_IDENTIFIER_QUOTE}{escaped}{_IDENTIFIER_QUOTE}"


def escape_string(value: str, escaper: Escaper) -> str:
    """Escape *value* through the connection collaborator and single-quote it."""
    return f"'{escaper.escape_string(value)}'"


def _string_to_number(value: str) -> int | float:
    m = _NUMERIC_PREFIX.match(value)
    if m is None:
        return 0
    prefix = m.group(0)
    if _INTEGER_PREFIX.fullmatch(prefix):
        return int(prefix)
    return float(prefix)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = _string_to_number(value)
        if isinstance(value, int):
            return value
    if isinstance(value, (float, Decimal)):
        if not math.isfinite(value):
            return 0
        return int(value)
    raise UnsupportedValueType(value, "integer")


def _to_float(value: Any) -> float:
    if isinstance(value, str):
        number = _string_to_number(value)
    elif isinstance(value, (bool, int, float, Decimal)):
        number = value
    else:
        raise UnsupportedValueType(value, "float")
    try:
        return float(number)
    except OverflowError:
        raise UnsupportedValueType(
            value, "float", "Number is too large to render as a SQL float."
        ) from None


def _render_float(value: float) -> str:
    if not math.isfinite(value):
        raise UnsupportedValueType(
            value, "float", f"Cannot render non-finite float {value!r} as SQL."
        )
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def format_int(value: Any) -> str:
    """``?d``: None -> NULL; otherwise truncate to an integer."""
    if value is None:
        return NULL
    return str(_to_int(value))


def format_float(value: Any) -> str:
    """``?f``: None -> NULL; otherwise coerce to float."""
    if value is None:
        return NULL
    return _render_float(_to_float(value))


def format_value(value: Any, escaper: Escaper) -> str:
    """
    ``?``: render a scalar by its runtime type.

    None -> NULL; bool -> 1/0; int/float -> decimal text; str -> quoted and
    escaped. Anything else raises ``UnsupportedValueType``.
    """
    if value is None:
        return NULL
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, str):
        return escape_string(value, escaper)
    raise UnsupportedValueType(value)


def _is_label(key: Any) -> bool:
    """Keys that name a column; integers and "3"-style strings are positions."""
    return isinstance(key, str) and not _CANONICAL_INT.fullmatch(key)


def _iter_entries(value: Any, specifier: str) -> Iterable[tuple[Any, Any]]:
    if isinstance(value, Mapping):
        return value.items()
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ExpectedArray(value, specifier)
    return enumerate(value)


def format_array(value: Any, escaper: Escaper) -> str:
    """
    ``?a``: comma-joined values, or ```col` = value`` pairs for labelled keys.

    [1, 2, 3]            -> 1, 2, 3
    {"a": 1, "b": "x"}   -> `a` = 1, `b` = 'x'
    """
    parts: list[str] = []
    for key, item in _iter_entries(value, "a"):
        if _is_label(key):
            parts.append(f"{escape_identifier(key)} = {format_value(item, escaper)}")
        else:
            parts.append(format_value(item, escaper))
    return ", ".join(parts)


def format_identifiers(value: Any) -> str:
    """``?#``: one quoted name, or a comma-joined list of quoted names."""
    if isinstance(value, str):
        return escape_identifier(value)
    if isinstance(value, Mapping):
        value = value.values()
    elif not isinstance(value, Iterable) or isinstance(value, bytes):
        raise ExpectedArray(value, "#")
    names = list(value)
    if not all(isinstance(name, str) for name in names):
        raise ExpectedArray(
            value, "#", "Placeholder ?# expected identifier names as strings."
        )
    return ", ".join(escape_identifier(name) for name in names)


def get_formatter(specifier: str, escaper: Escaper) -> Callable[[Any], str]:
    """Return the one-argument formatter for a placeholder specifier."""
    if specifier == "d":
        return format_int
    if specifier == "f":
        return format_float
    if specifier == "a":
        return lambda v: format_array(v, escaper)
    if specifier == "#":
        return format_identifiers
    if specifier == "":
        return lambda v: format_value(v, escaper)
    raise QueryBuildError(f"Unknown placeholder specifier: ?{specifier}")
