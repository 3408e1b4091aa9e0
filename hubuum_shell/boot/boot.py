#!/usr/bin/env python3
# hubuum_shell/boot/boot.py
from __future__ import annotations
"""
Boot sequence for the Hubuum shell.

Order matters: configuration first (everything else reads it), then logging,
then the API session, then the command tree. The tree is frozen before the
dispatcher and completion engine see it.
"""

import getpass
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from hubuum_shell.client import HubuumClient
from hubuum_shell.commands import TREE, Scope, register_builtins
from hubuum_shell.config import AppConfig, load_config
from hubuum_shell.interface import AutocompleteEngine, Dispatcher, load_commands
from hubuum_shell.ui import colorize, enable_windows_vt, init_logger, print_line

logger = logging.getLogger("hubuum_shell.boot")

PLUGINS_PACKAGE = "hubuum_plugins"


@dataclass(slots=True)
class BootState:
    config: AppConfig
    logger: logging.Logger
    client: HubuumClient
    dispatcher: Dispatcher
    engine: AutocompleteEngine
    loaded_count: int


def _step(label: str, fn: Callable[[], Any]) -> Any:
    """Run a boot step; failures are reported on stderr and re-raised."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red"),
            file=sys.stderr,
        )
        raise
    logger.debug("[  OK  ] %s", label)
    return out


def _password(config: AppConfig, prompt: Callable[[str], str]) -> str:
    if config.password is not None:
        return config.password
    return prompt(f"Password for {config.username}@{config.hostname}: ")


def _build_tree(tree: Scope, package: str) -> int:
    if tree.get_command("help") is None:
        register_builtins(tree)
    loaded = load_commands(package, tree=tree)
    tree.freeze()
    return loaded


def boot_sequence(
    overrides: Optional[Mapping[str, Any]] = None,
    config_path: str | Path | None = None,
    *,
    password_prompt: Callable[[str], str] = getpass.getpass,
    client_factory: Callable[[AppConfig], HubuumClient] | None = None,
) -> BootState:
    # ---------- console ----------
    _step("Enable ANSI sequences", enable_windows_vt)

    # ---------- config ----------
    config: AppConfig = _step(
        "Load configuration", lambda: load_config(config_path, overrides))

    # ---------- logging ----------
    level = getattr(logging, config.log_level or "INFO")
    app_logger = _step(
        "Initialize logger",
        lambda: init_logger("hubuum_shell", level=level, logfile=config.log_file_path),
    )
    logger.debug("Configuration loaded: %s (ssl validation: %s)",
                 config.base_url, config.ssl_validation)

    # ---------- API session ----------
    def _make_client() -> HubuumClient:
        if client_factory is not None:
            return client_factory(config)
        return HubuumClient(
            config.base_url,
            verify_ssl=config.ssl_validation,
            timeout=config.timeout,
        )

    client = _step("Create API client", _make_client)
    _step(
        f"Log in as {config.username}",
        lambda: client.login(config.username, _password(config, password_prompt)),
    )

    # ---------- commands ----------
    loaded_count = _step(
        f"Load commands from '{PLUGINS_PACKAGE}'",
        lambda: _build_tree(TREE, PLUGINS_PACKAGE),
    )

    dispatcher = Dispatcher(TREE, client, resolve_timeout=config.timeout)
    engine = AutocompleteEngine(
        TREE, client, api_enabled=not config.disable_api_completion)
    _step("Boot complete", lambda: None)

    return BootState(
        config=config,
        logger=app_logger,
        client=client,
        dispatcher=dispatcher,
        engine=engine,
        loaded_count=loaded_count,
    )
