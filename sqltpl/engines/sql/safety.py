"""
Static checks for query templates.

Conditional blocks are single-level: nested or unbalanced braces are not
matched as one block and end up as literal text in the SQL. A block with
no placeholder can never receive the skip sentinel in block scope, so it
is always kept.

Usage::

    warnings = check_template("SELECT * FROM t {WHERE {a = ?d}}")
    # [{"kind": "nested_block", "position": 23, "message": "..."}]
"""

from typing import Any

from sqltpl.engines.sql.parser import BLOCK_PATTERN, count_placeholders


def _warning(kind: str, position: int, message: str) -> dict[str, Any]:
    return {"kind": kind, "position": position, "message": message}


def _brace_warnings(template: str) -> list[dict[str, Any]]:
    warnings: list[dict[str, Any]] = []
    open_positions: list[int] = []
    for pos, ch in enumerate(template):
        if ch == "{":
            if open_positions:
                warnings.append(
                    _warning(
                        "nested_block",
                        pos,
                        f"'{{' at {pos} opens a block inside the block at "
                        f"{open_positions[-1]}; nested blocks are not supported.",
                    )
                )
            open_positions.append(pos)
        elif ch == "}":
            if not open_positions:
                warnings.append(
                    _warning(
                        "unmatched_close",
                        pos,
                        f"'}}' at {pos} has no matching '{{' and will appear in the SQL.",
                    )
                )
            else:
                open_positions.pop()
    for pos in open_positions:
        warnings.append(
            _warning(
                "unclosed_block",
                pos,
                f"'{{' at {pos} is never closed and will appear in the SQL.",
            )
        )
    return warnings


def check_template(template: str) -> list[dict[str, Any]]:
    """Return warnings for a template, sorted by position.

    Each warning is a dict with ``kind``, ``position`` and ``message`` keys.
    An empty list means no issues detected.
    """
    warnings = _brace_warnings(template)
    for m in BLOCK_PATTERN.finditer(template):
        if count_placeholders(m.group("body")) == 0:
            warnings.append(
                _warning(
                    "static_block",
                    m.start(),
                    f"Block at {m.start()} has no placeholder and is always kept "
                    "unless skip scope is global.",
                )
            )
    return sorted(warnings, key=lambda w: w["position"])
