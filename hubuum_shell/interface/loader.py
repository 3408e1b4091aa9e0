#!/usr/bin/env python3
# hubuum_shell/interface/loader.py
from __future__ import annotations

"""
Plugin discovery.

Every public module below the plugin package is imported. A plugin package
names its scope (SCOPE, defaulting to the package name) and describes it
(SCOPE_DESCRIPTION, else the first docstring line); its `entrypoint` module
holds the @command definitions, which register themselves on import.

    hubuum_plugins/
        classes/__init__.py      SCOPE = "class"
        classes/entrypoint.py    @command(scope=("class",), ...)
"""

import importlib
import logging
import pkgutil
from types import ModuleType

from hubuum_shell.commands import TREE, Scope

logger = logging.getLogger(__name__)

ENTRYPOINT = "entrypoint"


def load_commands(commands_package: str = "hubuum_plugins", tree: Scope | None = None) -> int:
    """Import the plugins of `commands_package`; returns how many modules were imported."""
    root = TREE if tree is None else tree
    package = importlib.import_module(commands_package)
    search_path = getattr(package, "__path__", None)
    if not search_path:
        raise RuntimeError(f"'{commands_package}' is a module, not a plugin package.")

    imported = 0
    for info in pkgutil.iter_modules(search_path, prefix=f"{commands_package}."):
        if info.name.rsplit(".", 1)[-1].startswith("_"):
            continue
        module = importlib.import_module(info.name)
        imported += 1
        if info.ispkg:
            _describe_scope(root, module)
            entrypoint = _import_entrypoint(module)
            if entrypoint is not None:
                _register_commands(root, entrypoint)
                imported += 1
            logger.debug("Loaded plugin package %s", info.name)
        else:
            _register_commands(root, module)
    return imported


def _import_entrypoint(package: ModuleType) -> ModuleType | None:
    names = {info.name for info in pkgutil.iter_modules(package.__path__)}
    if ENTRYPOINT not in names:
        return None
    return importlib.import_module(f"{package.__name__}.{ENTRYPOINT}")


def _register_commands(root: Scope, module: ModuleType) -> int:
    """
    Add the @command functions of `module` to `root`.

    Decorators register into the global tree on first import; this puts the
    same Command objects into any other tree, and makes reloading a no-op.
    """
    added = 0
    for value in list(vars(module).values()):
        command_obj = getattr(value, "__command__", None)
        if command_obj is None or getattr(value, "__module__", None) != module.__name__:
            continue
        node = root.scope(getattr(value, "__command_scope__", ()))
        if node.get_command(command_obj.name) is command_obj:
            continue
        node.add_command(command_obj)
        added += 1
    return added


def _describe_scope(root: Scope, module: ModuleType) -> None:
    name = getattr(module, "SCOPE", None) or module.__name__.rsplit(".", 1)[-1]
    description = getattr(module, "SCOPE_DESCRIPTION", None)
    if not isinstance(description, str):
        lines = (module.__doc__ or "").strip().splitlines()
        description = lines[0] if lines else ""
    root.add_scope(name, description.strip())
