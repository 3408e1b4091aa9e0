#!/usr/bin/env python3
# hubuum_shell/interface/output.py
from __future__ import annotations

"""
Per-line output buffering.

One OutputSink is created for every submitted line. Commands append output
lines; the handler appends categorized warnings/errors. The REPL driver
flushes the sink once the line is done: output lines pass through the
optional filter to stdout, messages go to stderr in color.
"""

import re
import sys
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, TextIO

from hubuum_shell.errors import FilterError
from hubuum_shell.ui import colorize, format_key_value, format_table, print_line


@dataclass(frozen=True)
class OutputFilter:
    """Regular expression applied to output lines; `invert` keeps non-matches."""

    pattern: str
    invert: bool = False
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "_regex", re.compile(self.pattern))
        except re.error as exc:
            raise FilterError(self.pattern, exc) from None

    def keep(self, line: str) -> bool:
        return bool(self._regex.search(line)) != self.invert


@dataclass
class OutputSink:
    output_filter: Optional[OutputFilter] = None
    lines: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    # ---------------- Producers ----------------

    def append_line(self, text: Any) -> None:
        self.lines.extend(str(text).splitlines() or [""])

    def append_key_value(self, key: str, value: Any, padding: int = 15) -> None:
        self.lines.append(format_key_value(key, value, padding))

    def append_table(self, rows: Sequence[Sequence[Any]], headers: Sequence[Any]) -> None:
        self.append_line(format_table(rows, headers=headers))

    def add_warning(self, message: Any) -> None:
        self.warnings.append(str(message))

    def add_error(self, message: Any) -> None:
        self.errors.append(str(message))

    # ---------------- Consumers ----------------

    def visible_lines(self) -> list[str]:
        if self.output_filter is None:
            return list(self.lines)
        return [line for line in self.lines if self.output_filter.keep(line)]

    def is_empty(self) -> bool:
        return not (self.lines or self.warnings or self.errors)

    def clear(self) -> None:
        self.lines.clear()
        self.warnings.clear()
        self.errors.clear()

    def flush(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        """Write buffered output and messages, then clear the buffers."""
        out = out if out is not None else sys.stdout
        err = err if err is not None else sys.stderr
        for line in self.visible_lines():
            print_line(line, file=out)
        for message in self.warnings:
            print_line(colorize(message, "yellow"), file=err)
        for message in self.errors:
            print_line(colorize(message, "red"), file=err)
        out.flush()
        err.flush()
        self.clear()
