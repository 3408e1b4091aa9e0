#!/usr/bin/env python3
# hubuum_shell/interface/repl.py
from __future__ import annotations

"""
Read-eval-print drivers.

- process_line: run one line through the handler and flush its sink.
- run_script: batch mode for --source files and --command strings.
- run_interactive: the prompt loop (Ctrl-C discards the line, EOF exits).
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, TextIO

from hubuum_shell.interface.handler import Dispatcher, handle_line
from hubuum_shell.interface.output import OutputSink
from hubuum_shell.ui import colorize, print_line

logger = logging.getLogger(__name__)


def process_line(
    dispatcher: Dispatcher,
    line: str,
    *,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> OutputSink:
    """Execute `line` and print its buffered output. Returns the (flushed) sink."""
    sink = handle_line(dispatcher, line)
    had_errors = bool(sink.errors)
    sink.flush(out, err)
    if had_errors:
        logger.debug("Line finished with errors: %r", line)
    return sink


def _script_lines(source: str | Path | Iterable[str]) -> list[str]:
    if isinstance(source, (str, Path)):
        # OSError here is fatal for the caller (unreadable batch source)
        return Path(source).expanduser().read_text(encoding="utf-8").splitlines()
    return list(source)


def run_script(
    dispatcher: Dispatcher,
    source: str | Path | Iterable[str],
    *,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """
    Run every line of `source` in order.

    Blank lines and lines starting with '#' are skipped. A failing line is
    reported and the next one still runs. `exit`/`quit` stop the script.
    Returns the number of lines executed.
    """
    executed = 0
    for raw in _script_lines(source):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        logger.debug("Batch line: %r", line)
        try:
            process_line(dispatcher, line, out=out, err=err)
        except SystemExit:
            break
        executed += 1
    return executed


def run_interactive(frontend, dispatcher: Dispatcher) -> int:
    """
    Prompt loop over a CLI frontend. Returns the process exit code.

    KeyboardInterrupt discards the line being typed or abandons the running
    command; EOFError ends the session.
    """
    with frontend:
        while True:
            try:
                line = frontend.get_line()
            except KeyboardInterrupt:
                continue
            except EOFError:
                return 0

            if not line.strip():
                continue
            try:
                process_line(dispatcher, line)
            except KeyboardInterrupt:
                # Ctrl-C while a command runs abandons that line only
                logger.info("Interrupted: %r", line)
                print_line(colorize("Interrupted", "yellow"), file=sys.stderr)
            except SystemExit as exc:
                return exc.code if isinstance(exc.code, int) else 0
