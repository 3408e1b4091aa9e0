#!/usr/bin/env python3
# hubuum_shell/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console interface and command dispatch.

Provides:
- Lexer, output filter extraction, option tokenizer and value resolver.
- Per-line output buffering.
- Command dispatcher and line-level error handling.
- Token-aware completion engine and remote completion providers.
- Dynamic command loader for the plugins package.
- CLI frontends (prompt_toolkit / readline / plain) and REPL drivers.
"""


from .output import OutputFilter, OutputSink
from .parser import extract_filter, lex, resolve_value, tokenize

from .handler import Dispatcher, handle_line, report_error

# Completion FIRST (cli depends on it)
from .completion import (
    AutocompleteEngine,
    CompletionRequest,
    complete_classes,
    complete_namespaces,
    make_request,
    objects_from_class,
)

from .loader import load_commands

from .cli import BaseCLI, PlainCLI, PromptToolkitCLI, ReadlineCLI, ShellCompleter, make_cli
from .repl import process_line, run_interactive, run_script

__all__ = [
    # output
    "OutputFilter",
    "OutputSink",
    # parser
    "extract_filter",
    "lex",
    "resolve_value",
    "tokenize",
    # handler
    "Dispatcher",
    "handle_line",
    "report_error",
    # completion
    "AutocompleteEngine",
    "CompletionRequest",
    "complete_classes",
    "complete_namespaces",
    "make_request",
    "objects_from_class",
    # loader
    "load_commands",
    # cli
    "BaseCLI",
    "PlainCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "ShellCompleter",
    "make_cli",
    # repl
    "process_line",
    "run_interactive",
    "run_script",
]
