#!/usr/bin/env python3
# hubuum_shell/ui/utils/__init__.py
from __future__ import annotations
from .ansi import clear_screen, colorize, enable_windows_vt, strip_ansi
from .console import print_line

__all__ = ["clear_screen", "colorize", "enable_windows_vt", "strip_ansi", "print_line"]
