#!/usr/bin/env python3
# hubuum_shell/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: Startup pipeline; failing steps print a red [FAILED] line.
- BootState: Dataclass with config, logger, API client, dispatcher, completion engine and module count.
"""


from .boot import BootState, boot_sequence

__all__ = ["boot_sequence", "BootState"]
