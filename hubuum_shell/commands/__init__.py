#!/usr/bin/env python3
# hubuum_shell/commands/__init__.py
from __future__ import annotations

"""
Package for command definitions and the command tree.

Provides:
- Data structures and protocols (`Command`, `OptionSpec`, `ParsedInvocation`,
  `CommandContext`, `CommandResult`, `CommandCallback`).
- The scope tree and decorators (`Scope`, `TREE`, `command`, `register_command`).
- Schema hydration and help rendering (`bind_options`, `build_usage`,
  `format_command_help`).
- Shell built-ins: help, exit, quit, clear (`register_builtins`).
"""


# Re-export from submodules
from .command_types import (
    HELP_KEYS,
    Command,
    CommandCallback,
    CommandContext,
    CommandResult,
    OptionSpec,
    ParsedInvocation,
)
from .commands import TREE, Resolution, Scope, command, register_command
from .schema import bind_options, build_usage, format_command_help
from .builtins import HELP_TEXT, register_builtins

__all__ = [
    "HELP_KEYS",
    "Command",
    "CommandCallback",
    "CommandContext",
    "CommandResult",
    "OptionSpec",
    "ParsedInvocation",
    "TREE",
    "Resolution",
    "Scope",
    "command",
    "register_command",
    "bind_options",
    "build_usage",
    "format_command_help",
    "HELP_TEXT",
    "register_builtins",
]
