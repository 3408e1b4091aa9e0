#!/usr/bin/env python3
# hubuum_shell/config/files.py
from __future__ import annotations

"""Well-known per-user locations (XDG on POSIX, LOCALAPPDATA on Windows)."""

import os
from pathlib import Path

APP_DIR_NAME = "hubuum_cli"


def config_dir() -> Path:
    if os.name == "nt":
        base = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(base) / APP_DIR_NAME
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_DIR_NAME


def data_dir() -> Path:
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
        return Path(base) / APP_DIR_NAME
    base = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(base) / APP_DIR_NAME


def default_log_file() -> Path:
    return data_dir() / "hubuum_cli.log"


def default_history_file() -> Path:
    return data_dir() / "history"
