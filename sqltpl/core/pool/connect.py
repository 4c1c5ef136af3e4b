"""
MySQL connection and string-escaping collaborators.

The query builder needs exactly one thing from the database: escaping the
contents of a string literal. Escaping rules depend on the session (charset,
``NO_BACKSLASH_ESCAPES``), so the live connection does it when one exists.
"""

from typing import Any, Protocol

import pymysql
from pymysql.converters import escape_string as _static_escape_string

from sqltpl.core.config import settings


class Escaper(Protocol):
    def escape_string(self, value: str) -> str: ...


class ConnectionEscaper:
    """Escape through a live pymysql connection."""

    def __init__(self, conn: Any) -> None:
        self._conn = conn

    def escape_string(self, value: str) -> str:
        return self._conn.escape_string(value)


class StaticEscaper:
    """Connection-independent MySQL escaping (backslash style).

    Deterministic; suitable for tests and for rendering SQL offline.
    """

    def escape_string(self, value: str) -> str:
        return _static_escape_string(value)


def _get(params: Any, key: str) -> Any:
    """Get attribute or dict key from a dict or settings-like object."""
    if isinstance(params, dict):
        return params.get(key)
    return getattr(params, key, None)


def connect(params: dict | None = None) -> Any:
    """
    Open a pymysql connection.

    - params: dict with host, port, database, username, password, charset.
      When omitted, MYSQL_* values from settings are used.
    """
    if params is None:
        params = {
            "host": settings.MYSQL_HOST,
            "port": settings.MYSQL_PORT,
            "database": settings.MYSQL_DATABASE,
            "username": settings.MYSQL_USER,
            "password": settings.MYSQL_PASSWORD,
            "charset": settings.MYSQL_CHARSET,
        }
    host = _get(params, "host")
    port = _get(params, "port") or 3306
    database = _get(params, "database")
    username = _get(params, "username")
    password = _get(params, "password")
    charset = _get(params, "charset") or settings.MYSQL_CHARSET

    for name, val in [
        ("host", host),
        ("database", database),
        ("username", username),
    ]:
        if val is None:
            raise ValueError(f"connection params must provide {name}")
    password = password if password is not None else ""

    return pymysql.connect(
        host=host,
        port=int(port),
        database=database,
        user=username,
        password=password,
        charset=charset,
        connect_timeout=settings.EXTERNAL_DB_CONNECT_TIMEOUT,
    )
