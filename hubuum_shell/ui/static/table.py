#!/usr/bin/env python3
# hubuum_shell/ui/static/table.py
from __future__ import annotations

"""
Plain-text renderers for API records: ASCII tables for lists and aligned
key/value blocks for single entities.
"""

from typing import Any, List, Optional, Sequence

from hubuum_shell.ui.utils import strip_ansi


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    """Visual column widths, ignoring ANSI sequences."""
    widths: List[int] = []
    for row in rows:
        for index, cell in enumerate(row):
            length = len(strip_ansi(cell))
            if index >= len(widths):
                widths.append(length)
            elif length > widths[index]:
                widths[index] = length
    return widths


def format_table(
    rows: Sequence[Sequence[Any]],
    headers: Optional[Sequence[Any]] = None,
    *,
    padding: int = 1,
) -> str:
    """Return an ASCII table string; None renders as '-'."""
    body = [[_cell(value) for value in row] for row in rows]
    head = [_cell(h) for h in headers] if headers is not None else None
    widths = _column_widths(([head] if head else []) + body)
    if not widths:
        return ""

    pad = " " * padding
    rule = "-" * (sum(widths) + 2 * padding * len(widths) + len(widths) + 1)

    def render(row: Sequence[str]) -> str:
        cells = [
            f"{pad}{cell}{' ' * (widths[i] - len(strip_ansi(cell)))}{pad}"
            for i, cell in enumerate(row)
        ]
        return "|" + "|".join(cells) + "|"

    lines = [rule]
    if head:
        lines.append(render(head))
        lines.append(render(["-" * w for w in widths]))
    lines.extend(render(row) for row in body)
    lines.append(rule)
    return "\n".join(lines)


def format_key_value(key: str, value: Any, padding: int = 15) -> str:
    """One aligned 'Key : value' line."""
    return f"{key.ljust(padding)} : {_cell(value)}"
