"""
Positional SQL template engine.

``QueryBuilder.build_query(template, args)`` replaces each placeholder with
the next argument, formatted by its specifier, and resolves conditional
blocks ``{ ... }`` against the skip sentinel returned by ``skip()``.

Skip scope:

* ``"block"``: a block consumes the arguments of its own placeholders and is
  dropped iff one of them is the skip sentinel. Other blocks are unaffected.
* ``"global"``: if the sentinel appears anywhere in ``args`` every block is
  dropped before placeholders are resolved; placeholders inside dropped
  blocks consume no arguments.

Missing arguments render as NULL and surplus arguments are ignored, unless
the builder is strict, in which case both raise ``ArgumentCountMismatch``.
"""

import logging
from collections.abc import Sequence
from typing import Any, Literal

from sqltpl.core.config import settings
from sqltpl.core.errors import ArgumentCountMismatch
from sqltpl.core.pool import Escaper, StaticEscaper
from sqltpl.engines.sql.filters import get_formatter
from sqltpl.engines.sql.parser import (
    BLOCK_PATTERN,
    PLACEHOLDER_PATTERN,
    TOKEN_PATTERN,
    count_placeholders,
)
from sqltpl.engines.sql.safety import check_template

_log = logging.getLogger(__name__)

SkipScope = Literal["block", "global"]


class SkipMarker:
    """Marker type of the skip sentinel."""

    _instance: "SkipMarker | None" = None

    def __new__(cls) -> "SkipMarker":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SKIP"

    def __reduce__(self) -> str:
        return "SKIP"


SKIP = SkipMarker()


def skip() -> SkipMarker:
    """Return the sentinel that marks a conditional block for omission."""
    return SKIP


def _is_skip(value: Any) -> bool:
    return value is SKIP


class _Cursor:
    """Hands out arguments left to right; past the end it yields None."""

    def __init__(self, args: Sequence[Any]) -> None:
        self._args = args
        self.position = 0

    def take(self, n: int = 1) -> list[Any]:
        start = self.position
        self.position += n
        taken = list(self._args[start : self.position])
        return taken + [None] * (n - len(taken))


class QueryBuilder:
    """Builds finished SQL strings from ``?``-placeholder templates."""

    def __init__(
        self,
        escaper: Escaper | None = None,
        *,
        skip_scope: SkipScope | None = None,
        strict: bool | None = None,
    ) -> None:
        self.escaper = escaper if escaper is not None else StaticEscaper()
        self.skip_scope: SkipScope = skip_scope or settings.QUERY_SKIP_SCOPE
        if self.skip_scope not in ("block", "global"):
            raise ValueError(f"Unknown skip scope: {self.skip_scope!r}")
        self.strict = settings.QUERY_STRICT_ARGS if strict is None else strict

    def skip(self) -> SkipMarker:
        return SKIP

    def build_query(self, template: str, args: Sequence[Any] = ()) -> str:
        """Render *template* with positional *args* to a final SQL string."""
        args = list(args)
        if _log.isEnabledFor(logging.DEBUG):
            for warning in check_template(template):
                _log.debug("Template check (%s): %s", warning["kind"], warning["message"])
        if self.skip_scope == "global":
            return self._build_global(template, args)
        return self._build_block_scoped(template, args)

    def _substitute(self, text: str, cursor: _Cursor) -> str:
        def replace(m):
            (arg,) = cursor.take()
            return get_formatter(m.group("spec") or "", self.escaper)(arg)

        return PLACEHOLDER_PATTERN.sub(replace, text)

    def _check_count(self, placeholders: int, bound: int) -> None:
        if placeholders == bound:
            return
        if self.strict:
            raise ArgumentCountMismatch(placeholders, bound)
        _log.warning(
            "Placeholder/argument count differs: %d placeholder(s), %d argument(s)",
            placeholders,
            bound,
        )

    def _build_global(self, template: str, args: list[Any]) -> str:
        elide = any(_is_skip(a) for a in args)
        body = BLOCK_PATTERN.sub("" if elide else r"\g<body>", template)
        placeholders = count_placeholders(body)
        bound = len(args)
        if elide:
            # Sentinels carried only to trigger elision are not bound.
            bound -= sum(1 for a in args if _is_skip(a))
        self._check_count(placeholders, bound)
        _log.debug(
            "Building query (global scope): %d placeholder(s), %d argument(s), blocks %s",
            placeholders,
            len(args),
            "elided" if elide else "kept",
        )
        return self._substitute(body, _Cursor(args))

    def _build_block_scoped(self, template: str, args: list[Any]) -> str:
        self._check_count(count_placeholders(template), len(args))
        cursor = _Cursor(args)
        elided = 0

        def replace(m):
            nonlocal elided
            body = m.group("body")
            if body is None:
                (arg,) = cursor.take()
                return get_formatter(m.group("spec") or "", self.escaper)(arg)
            block_args = cursor.take(count_placeholders(body))
            if any(_is_skip(a) for a in block_args):
                elided += 1
                return ""
            return self._substitute(body, _Cursor(block_args))

        sql = TOKEN_PATTERN.sub(replace, template)
        _log.debug(
            "Built query (block scope): %d argument(s), %d block(s) elided",
            len(args),
            elided,
        )
        return sql
