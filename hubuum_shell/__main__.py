#!/usr/bin/env python3
# hubuum_shell/__main__.py
from __future__ import annotations

"""
Command-line entry point.

    hubuum-shell [--config FILE] [--hostname H] [--port P] ...
                 [--command LINE | --source FILE]

Without --command/--source the interactive prompt starts.
"""

import argparse
import logging
import sys
from typing import Any, Optional, Sequence

from hubuum_shell import __version__
from hubuum_shell.boot import boot_sequence
from hubuum_shell.commands import HELP_TEXT
from hubuum_shell.errors import AppError
from hubuum_shell.interface import make_cli, process_line, run_interactive, run_script
from hubuum_shell.ui import colorize, print_line

logger = logging.getLogger("hubuum_shell")


def _bool_arg(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in {"1", "true", "yes", "y", "on"}:
        return True
    if lowered in {"0", "false", "no", "n", "off"}:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hubuum-shell",
        description="Interactive shell for the Hubuum management API.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", metavar="FILE", help="Configuration file (TOML or JSON)")

    server = parser.add_argument_group("server")
    server.add_argument("--hostname", help="API server hostname")
    server.add_argument("--port", type=int, help="API server port")
    server.add_argument("--protocol", choices=("http", "https"), help="API protocol")
    server.add_argument("--ssl-validation", type=_bool_arg, metavar="BOOL",
                        help="Validate the server certificate")
    server.add_argument("--username", help="Login username")
    server.add_argument("--password", help="Login password (prompted when absent)")

    parser.add_argument("--completion-api-disable", action="store_true", default=None,
                        help="Do not query the API for completion candidates")
    parser.add_argument("--log-level", choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
                        help="Log file verbosity")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-c", "--command", metavar="LINE", help="Run one line and exit")
    mode.add_argument("-s", "--source", metavar="FILE", help="Run every line of FILE and exit")
    return parser


def _overrides(ns: argparse.Namespace) -> dict[str, Any]:
    return {
        "SERVER_HOSTNAME": ns.hostname,
        "SERVER_PORT": ns.port,
        "SERVER_PROTOCOL": ns.protocol,
        "SERVER_SSL_VALIDATION": ns.ssl_validation,
        "SERVER_USERNAME": ns.username,
        "SERVER_PASSWORD": ns.password,
        "COMPLETION_DISABLE_API_RELATED": ns.completion_api_disable,
        "LOG_LEVEL": ns.log_level,
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    ns = build_parser().parse_args(argv)

    try:
        state = boot_sequence(_overrides(ns), ns.config)
    except (AppError, OSError) as exc:
        print_line(colorize(f"Setup failed: {exc}", "red"), file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        return 1

    if ns.command is not None:
        try:
            process_line(state.dispatcher, ns.command)
        except SystemExit as exc:
            return exc.code if isinstance(exc.code, int) else 0
        return 0

    if ns.source is not None:
        try:
            run_script(state.dispatcher, ns.source)
        except OSError as exc:
            print_line(colorize(f"Cannot read {ns.source}: {exc}", "red"), file=sys.stderr)
            return 1
        return 0

    logger.info("Interactive session started against %s", state.config.base_url)
    print_line(f"Connected to {state.config.base_url}. {HELP_TEXT}")
    frontend = make_cli(state.engine, state.config.prompt, state.config.history_file_path)
    return run_interactive(frontend, state.dispatcher)


if __name__ == "__main__":
    sys.exit(main())
