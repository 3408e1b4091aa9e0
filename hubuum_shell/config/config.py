#!/usr/bin/env python3
# hubuum_shell/config/config.py
from __future__ import annotations

"""
Layered configuration for the shell.

Sources, weakest first:
  1) DEFAULTS below
  2) --config FILE, or else config.toml / config.json from the user config
     directory and then the working directory (a later file wins)
  3) HUBUUM_CLI__<SECTION>__<KEY> environment variables
  4) explicit overrides (the command line); None means "not given"

Every source is reduced to flat SECTION_KEY names before merging, so
`[server] hostname = ...` in a file, HUBUUM_CLI__SERVER__HOSTNAME and the
--hostname flag all set SERVER_HOSTNAME.
"""

import json
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from hubuum_shell.config.files import config_dir, default_history_file, default_log_file
from hubuum_shell.errors import ConfigError

ENV_PREFIX = "HUBUUM_CLI__"
CONFIG_NAMES = ("config.toml", "config.json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULTS: dict[str, Any] = {
    "SERVER_HOSTNAME": "localhost",
    "SERVER_PORT": 8080,
    "SERVER_PROTOCOL": "https",
    "SERVER_SSL_VALIDATION": True,
    "SERVER_USERNAME": "admin",
    "SERVER_PASSWORD": None,
    "COMPLETION_DISABLE_API_RELATED": False,
    "LOG_LEVEL": None,
    "LOG_FILE_PATH": None,          # data dir when unset
    "HISTORY_FILE_PATH": None,      # data dir when unset
    "TIMEOUT": 30,                  # seconds, API and value fetches
}

_ENV_KEY_RE = re.compile(r"[A-Z0-9_]+")
_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})
_FALSY = frozenset({"0", "false", "no", "n", "off"})


@dataclass(frozen=True)
class AppConfig:
    hostname: str
    port: int
    protocol: str
    ssl_validation: bool
    username: str
    password: str | None
    disable_api_completion: bool
    log_level: str | None
    log_file_path: Path
    history_file_path: Path
    timeout: int
    # keys no setting claims, kept so typos show up in the debug log
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.hostname}:{self.port}"

    @property
    def prompt(self) -> str:
        return f"{self.username}@{self.hostname}:{self.port} > "


# ---------- sources ----------

def _read_file(path: Path) -> dict[str, Any]:
    """Parse one config file; a missing file contributes nothing."""
    try:
        if path.suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            with path.open("rb") as fh:
                data = tomllib.load(fh)
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"{path}: {exc}") from None
    if not isinstance(data, Mapping):
        raise ConfigError(f"{path}: top level must be a table")
    return dict(data)


def _flatten(table: Mapping[str, Any], section: str = "") -> dict[str, Any]:
    """{'server': {'hostname': 'h'}} -> {'SERVER_HOSTNAME': 'h'}"""
    flat: dict[str, Any] = {}
    for name, value in table.items():
        key = f"{section}_{name}" if section else str(name)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, key))
        else:
            flat[key.upper().replace("-", "_")] = value
    return flat


def _candidate_files(explicit: Path | None) -> Iterable[Path]:
    if explicit is not None:
        if not explicit.exists():
            raise ConfigError(f"config file not found: {explicit}")
        return (explicit,)
    return [base / name for base in (config_dir(), Path.cwd()) for name in CONFIG_NAMES]


def _from_environment(environ: Mapping[str, str]) -> dict[str, Any]:
    found: dict[str, Any] = {}
    for name, value in environ.items():
        if name.startswith(ENV_PREFIX) and _ENV_KEY_RE.fullmatch(name):
            found[name[len(ENV_PREFIX):].replace("__", "_")] = value
    return found


# ---------- coercion ----------

def _blank(value: Any) -> bool:
    return value is None or str(value).strip().lower() in ("", "none")


def _text(value: Any) -> str | None:
    return None if _blank(value) else str(value)


def _boolean(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUTHY or word in _FALSY:
        return word in _TRUTHY
    raise ConfigError(f"{key}: expected boolean, got {value!r}")


def _integer(key: str, value: Any, minimum: int, maximum: int | None = None) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key}: expected integer, got {value!r}")
    try:
        number = value if isinstance(value, int) else int(str(value).strip())
    except ValueError:
        raise ConfigError(f"{key}: expected integer, got {value!r}") from None
    if number < minimum or (maximum is not None and number > maximum):
        upper = "" if maximum is None else f"..{maximum}"
        raise ConfigError(f"{key}: {number} outside {minimum}{upper}")
    return number


def _choice(key: str, value: Any, choices: Iterable[str], *, upper: bool = False) -> str:
    word = str(value).strip()
    word = word.upper() if upper else word.lower()
    allowed = tuple(choices)
    if word not in allowed:
        raise ConfigError(f"{key} must be one of {', '.join(allowed)}; got {value!r}")
    return word


def _location(value: Any, fallback: Path) -> Path:
    if _blank(value):
        return fallback
    return Path(os.path.expandvars(os.path.expanduser(str(value)))).resolve()


def _required(key: str, value: Any) -> str:
    text = _text(value)
    if text is None:
        raise ConfigError(f"{key} must be set")
    return text


def _build(raw: Mapping[str, Any]) -> AppConfig:
    log_level = raw.get("LOG_LEVEL")
    return AppConfig(
        hostname=_required("SERVER_HOSTNAME", raw.get("SERVER_HOSTNAME")),
        port=_integer("SERVER_PORT", raw.get("SERVER_PORT"), 1, 65535),
        protocol=_choice("SERVER_PROTOCOL", raw.get("SERVER_PROTOCOL"), ("http", "https")),
        ssl_validation=_boolean("SERVER_SSL_VALIDATION", raw.get("SERVER_SSL_VALIDATION")),
        username=_required("SERVER_USERNAME", raw.get("SERVER_USERNAME")),
        password=_text(raw.get("SERVER_PASSWORD")),
        disable_api_completion=_boolean(
            "COMPLETION_DISABLE_API_RELATED", raw.get("COMPLETION_DISABLE_API_RELATED")),
        log_level=None if _blank(log_level) else _choice(
            "LOG_LEVEL", log_level, LOG_LEVELS, upper=True),
        log_file_path=_location(raw.get("LOG_FILE_PATH"), default_log_file()),
        history_file_path=_location(raw.get("HISTORY_FILE_PATH"), default_history_file()),
        timeout=_integer("TIMEOUT", raw.get("TIMEOUT"), 1),
        extra={k: v for k, v in raw.items() if k not in DEFAULTS},
    )


def load_config(
    config_path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Merge every source and validate the result. Raises ConfigError on a
    missing explicit file, an unparsable file or an invalid value. Nothing is
    created on disk.
    """
    explicit = Path(config_path).expanduser() if config_path else None
    merged: dict[str, Any] = dict(DEFAULTS)
    for path in _candidate_files(explicit):
        merged.update(_flatten(_read_file(path)))
    merged.update(_from_environment(os.environ if environ is None else environ))
    merged.update({k.upper(): v for k, v in (overrides or {}).items() if v is not None})
    return _build(merged)
