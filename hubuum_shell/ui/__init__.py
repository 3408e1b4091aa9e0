#!/usr/bin/env python3
# hubuum_shell/ui/__init__.py
from __future__ import annotations
"""Terminal helpers: colors, line output, tables and the log file."""

from .static import PlainFormatter, format_key_value, format_table, init_logger, log_timing
from .utils import clear_screen, colorize, enable_windows_vt, print_line, strip_ansi

__all__ = [
    "PlainFormatter",
    "format_key_value",
    "format_table",
    "init_logger",
    "log_timing",
    "clear_screen",
    "colorize",
    "enable_windows_vt",
    "print_line",
    "strip_ansi",
]
