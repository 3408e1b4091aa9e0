#!/usr/bin/env python3
# hubuum_shell/config/__init__.py
from __future__ import annotations

"""
Package for configuration and per-user file locations.

Provides:
- Configuration loader with file, environment and CLI overrides (`config`).
- Config/data directory helpers for logs and history (`files`).
"""


from .config import DEFAULTS, ENV_PREFIX, AppConfig, load_config
from .files import config_dir, data_dir, default_history_file, default_log_file

__all__ = [
    "DEFAULTS",
    "ENV_PREFIX",
    "AppConfig",
    "load_config",
    "config_dir",
    "data_dir",
    "default_history_file",
    "default_log_file",
]
