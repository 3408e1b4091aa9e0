#!/usr/bin/env python3
# hubuum_shell/ui/utils/ansi.py
from __future__ import annotations

import functools
import os
import re

# SGR codes used for status lines: warnings, errors, boot failures.
ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
}

_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

# SetConsoleMode flag on Windows 10+
_VT_PROCESSING = 0x0004
_STD_OUTPUT = -11


def strip_ansi(text: str) -> str:
    return _ESCAPE_RE.sub("", text)


def _windows_console_vt() -> bool:
    import ctypes

    kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
    handle = kernel32.GetStdHandle(_STD_OUTPUT)
    mode = ctypes.c_uint()
    if handle in (0, -1) or not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
        return False
    return bool(kernel32.SetConsoleMode(handle, mode.value | _VT_PROCESSING))


@functools.lru_cache(maxsize=1)
def enable_windows_vt() -> bool:
    """
    Make sure escape sequences render; returns whether they will.
    POSIX terminals and Windows Terminal need nothing. NO_COLOR disables
    colors everywhere.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.name != "nt" or os.environ.get("WT_SESSION"):
        return True
    try:
        return _windows_console_vt()
    except (AttributeError, OSError):
        return False


def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


def colorize(text: str, *styles: str) -> str:
    """Wrap `text` in the named styles, or return it as-is without color support."""
    codes = "".join(ANSI[name] for name in styles if name in ANSI)
    if not codes or not enable_windows_vt():
        return text
    return f"{codes}{text}{ANSI['reset']}"
