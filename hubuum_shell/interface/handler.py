#!/usr/bin/env python3
# hubuum_shell/interface/handler.py
from __future__ import annotations

"""
Command dispatch and per-line error handling.

Flow for one line:
  extract filter -> lex -> tree walk -> tokenize -> help or execute

`Dispatcher.dispatch` raises AppError subclasses; `handle_line` is the
boundary that turns every failure into a buffered warning or error on the
line's OutputSink so the REPL keeps running.
"""

import dataclasses
import functools
import logging
from typing import Any, Optional

from hubuum_shell.commands import (
    TREE,
    CommandContext,
    CommandResult,
    Scope,
    bind_options,
    format_command_help,
)
from hubuum_shell.errors import AppError, CommandExecutionError
from hubuum_shell.interface.output import OutputSink
from hubuum_shell.interface.parser import extract_filter, lex, resolve_value, tokenize
from hubuum_shell.ui import log_timing

logger = logging.getLogger(__name__)


class Dispatcher:
    """Resolves lines against a command tree and runs the matched command."""

    def __init__(
        self,
        tree: Scope | None = None,
        client: Any = None,
        *,
        resolve_timeout: float | None = None,
    ) -> None:
        self.tree = TREE if tree is None else tree
        self.client = client
        self._resolver = functools.partial(resolve_value, timeout=resolve_timeout)

    def dispatch(self, line: str, sink: OutputSink) -> None:
        """Execute one (filter-free) line, writing results into `sink`."""
        words = lex(line)
        if not words:
            return

        resolution = self.tree.resolve(words)
        command_obj = resolution.command
        with log_timing(logger, f"Command {' '.join(words)!r}"):
            # only the words after the tree walk; the scope path is already known
            parsed = tokenize(
                [command_obj.name, *resolution.remaining],
                command_obj.name,
                aliases=command_obj.alias_map,
                flags=command_obj.flag_names(),
                resolver=self._resolver,
            )
            invocation = dataclasses.replace(parsed, scopes=resolution.scopes)
            logger.debug("Executing %s %s: options=%s positionals=%s",
                         list(resolution.scopes), command_obj.name,
                         sorted(invocation.options), invocation.positionals)

            if invocation.wants_help():
                sink.append_line(format_command_help(command_obj, resolution.scopes))
                return

            arguments = bind_options(command_obj, invocation)
            ctx = CommandContext(
                client=self.client,
                sink=sink,
                invocation=invocation,
                scopes=resolution.scopes,
                tree=self.tree,
            )
            result = command_obj.invoke(ctx, arguments)
            _record_result(result, sink)


def _record_result(result: Any, sink: OutputSink) -> None:
    """Normalize a callback return value into sink output."""
    if result is None:
        return
    if isinstance(result, CommandResult):
        if not result.ok:
            raise CommandExecutionError(str(result))
        if result.message:
            sink.append_line(result.message)
        return
    sink.append_line(result)


def report_error(exc: AppError, sink: OutputSink) -> None:
    """Buffer `exc` on the sink according to its level."""
    if exc.level == "quiet":
        return
    if exc.level == "warning":
        sink.add_warning(exc)
    else:
        sink.add_error(exc)


def handle_line(dispatcher: Dispatcher, input_line: str, sink: Optional[OutputSink] = None) -> OutputSink:
    """
    Parse and execute one input line.

    Returns the line's sink (created here unless given). SystemExit from the
    exit built-ins propagates; every other failure is recorded on the sink.
    """
    sink = sink if sink is not None else OutputSink()
    try:
        command_part, output_filter = extract_filter(input_line)
        sink.output_filter = output_filter
        dispatcher.dispatch(command_part, sink)
    except SystemExit:
        raise
    except AppError as exc:
        logger.debug("Line %r failed: %s", input_line, exc)
        report_error(exc, sink)
    except Exception as exc:
        logger.exception("Unexpected failure handling %r", input_line)
        sink.add_error(f"{type(exc).__name__}: {exc}")
    return sink
