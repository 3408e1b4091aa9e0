#!/usr/bin/env python3
# hubuum_shell/commands/commands.py
from __future__ import annotations

"""
Command tree and decorator utilities.

This module provides:
- Scope: a named node owning child scopes and child commands.
- Resolution: the outcome of walking the tree with a token list.
- TREE: the process-wide root scope that plugins register into.
- command: decorator registering a function as a command under a scope path.
- register_command: explicit API to register pre-built Command objects.
"""

import difflib
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from hubuum_shell.commands.command_types import Command, OptionSpec
from hubuum_shell.errors import CommandNotFound


@dataclass(frozen=True, slots=True)
class Resolution:
    """Scope path consumed, words left after the command, matched command."""

    scopes: tuple[str, ...]
    remaining: tuple[str, ...]
    command: Command


class Scope:
    """Holds child scopes and commands; read-only once frozen."""

    def __init__(self, name: str = "", description: str = "") -> None:
        self.name = name
        self.description = description
        self._scopes: Dict[str, Scope] = {}
        self._commands: Dict[str, Command] = {}
        self._frozen = False

    # ---------------- Registration ----------------

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError(
                f"Scope '{self.name or '<root>'}' is frozen; the command tree is read-only.")

    def add_scope(self, name: str, description: str = "") -> "Scope":
        """Return the child scope `name`, creating it if needed."""
        existing = self._scopes.get(name)
        if existing is not None:
            if description and not existing.description:
                self._check_mutable()
                existing.description = description
            return existing
        self._check_mutable()
        if name in self._commands:
            raise ValueError(
                f"Scope '{name}' collides with a command of the same name.")
        child = Scope(name, description)
        self._scopes[name] = child
        return child

    def scope(self, path: Sequence[str]) -> "Scope":
        """Return (creating as needed) the scope at `path` below this one."""
        node = self
        for part in path:
            node = node.add_scope(part)
        return node

    def add_command(self, command_obj: Command) -> None:
        """Register a command, ensuring no collisions with siblings."""
        self._check_mutable()
        if command_obj.name in self._scopes:
            raise ValueError(
                f"Command '{command_obj.name}' collides with a scope of the same name.")
        if command_obj.name in self._commands:
            raise ValueError(
                f"Command '{command_obj.name}' already registered in scope '{self.name or '<root>'}'.")
        self._commands[command_obj.name] = command_obj

    def freeze(self) -> None:
        """Make this scope and all descendants read-only."""
        self._frozen = True
        for child in self._scopes.values():
            child.freeze()

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ---------------- Lookup ----------------

    def get_scope(self, name: str) -> Optional["Scope"]:
        return self._scopes.get(name)

    def get_command(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def scopes(self) -> list["Scope"]:
        return list(self._scopes.values())

    def commands(self) -> list[Command]:
        return list(self._commands.values())

    def names(self) -> list[str]:
        """Child scope and command names, in registration order."""
        return [*self._scopes.keys(), *self._commands.keys()]

    def walk(self, prefix: tuple[str, ...] = ()) -> Iterable[tuple[tuple[str, ...], Command]]:
        """Yield (scope path, command) for every command below this scope."""
        for command_obj in self._commands.values():
            yield prefix, command_obj
        for child in self._scopes.values():
            yield from child.walk(prefix + (child.name,))

    def resolve(self, tokens: Sequence[str]) -> Resolution:
        """
        Walk the tree greedily with `tokens`.

        A token naming a child scope descends; a token naming a child command
        ends the walk. Anything else raises CommandNotFound.
        """
        node = self
        path: list[str] = []
        for index, token in enumerate(tokens):
            child = node.get_scope(token)
            if child is not None:
                path.append(token)
                node = child
                continue
            command_obj = node.get_command(token)
            if command_obj is not None:
                return Resolution(tuple(path), tuple(tokens[index + 1:]), command_obj)
            raise CommandNotFound(token, node._suggest(token))

        available = ", ".join(node.names())
        hint = f"Available in '{' '.join(path)}': {available}" if path and available else ""
        raise CommandNotFound(" ".join(tokens), hint)

    def _suggest(self, token: str) -> str:
        """Short suggestion string for misspelled names."""
        matches = difflib.get_close_matches(token, self.names(), n=3, cutoff=0.6)
        return f"Did you mean: {', '.join(matches)}?" if matches else ""


# Global tree used across the app
TREE = Scope()


def command(
    *,
    scope: str | Sequence[str] = (),
    name: str | None = None,
    description: str | None = None,
    options: Sequence[OptionSpec] = (),
    positionals: Sequence[str] = (),
    variadic: bool = False,
    examples: Sequence[str] = (),
    long_description: str = "",
    tree: Scope | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to register a function as a command under `scope`.

    - `scope` is a space-separated path or a sequence of scope names.
    - Function name is transformed from snake_case to kebab-case for `name`
      if not provided.
    - The function keeps `__command__` and `__command_scope__` so a loader can
      register the same command into another tree.
    """
    path = tuple(scope.split()) if isinstance(scope, str) else tuple(scope)

    def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
        command_obj = Command(
            name=name or func.__name__.replace("_", "-"),
            description=(description or (func.__doc__ or "")).strip(),
            callback=func,
            options=tuple(options),
            positionals=tuple(positionals),
            variadic=variadic,
            examples=tuple(examples),
            long_description=long_description,
            module=func.__module__,
        )
        register_command(command_obj, path, tree=tree)
        func.__command__ = command_obj  # type: ignore[attr-defined]
        func.__command_scope__ = path  # type: ignore[attr-defined]
        return func

    return wrapper


def register_command(
    command_obj: Command,
    scope: Sequence[str] = (),
    *,
    tree: Scope | None = None,
) -> None:
    """Explicit API for modules that construct Command objects directly."""
    root = TREE if tree is None else tree
    root.scope(scope).add_command(command_obj)
