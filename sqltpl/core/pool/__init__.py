"""
MySQL connection helpers and the string-escaping collaborators built on them.
"""

from .connect import ConnectionEscaper, Escaper, StaticEscaper, connect

__all__ = [
    "connect",
    "Escaper",
    "ConnectionEscaper",
    "StaticEscaper",
]
