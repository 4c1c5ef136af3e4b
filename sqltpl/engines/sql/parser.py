"""
Tokenize query templates: placeholders (``?``, ``?d``, ``?f``, ``?a``, ``?#``)
and single-level conditional blocks (``{ ... }``).
"""

import re

PLACEHOLDER_PATTERN = re.compile(r"\?(?P<spec>[dfa#])?")
BLOCK_PATTERN = re.compile(r"\{(?P<body>[^{}]*)\}")
# Blocks first so that a placeholder inside a block is matched as part of it.
TOKEN_PATTERN = re.compile(r"\{(?P<body>[^{}]*)\}|\?(?P<spec>[dfa#])?")


def parse_placeholders(template: str) -> list[str]:
    """
    Return the specifier of every placeholder in template order
    ('' for a bare ``?``), including placeholders inside blocks.
    """
    return [m.group("spec") or "" for m in PLACEHOLDER_PATTERN.finditer(template)]


def count_placeholders(template: str) -> int:
    return sum(1 for _ in PLACEHOLDER_PATTERN.finditer(template))
