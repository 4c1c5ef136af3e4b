"""
Connection-bound query builder.

``Database`` pairs a pymysql connection with a ``QueryBuilder`` whose
string escaping goes through that connection::

    db = Database(connect())
    sql = db.build_query(
        "SELECT ?# FROM users WHERE user_id = ?d{ AND block = ?d}",
        [["name", "email"], 2, db.skip()],
    )

A single connection is not safe for concurrent escaping; share a
``Database`` only within one thread.
"""

import logging
from collections.abc import Sequence
from typing import Any

from sqltpl.core.pool import ConnectionEscaper
from sqltpl.engines.sql import QueryBuilder, SkipMarker
from sqltpl.engines.sql.template_engine import SkipScope

_log = logging.getLogger(__name__)


class Database:
    def __init__(
        self,
        conn: Any,
        *,
        skip_scope: SkipScope | None = None,
        strict: bool | None = None,
    ) -> None:
        self.conn = conn
        self._builder = QueryBuilder(
            ConnectionEscaper(conn), skip_scope=skip_scope, strict=strict
        )
        _log.debug("Database bound (skip scope: %s)", self._builder.skip_scope)

    def build_query(self, template: str, args: Sequence[Any] = ()) -> str:
        return self._builder.build_query(template, args)

    def skip(self) -> SkipMarker:
        return self._builder.skip()
