#!/usr/bin/env python3
# hubuum_shell/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- OptionSpec: one declared option of a command (aliases, kind, completion).
- ParsedInvocation: the tokenizer's view of one input line.
- CommandContext: what a command callback receives besides its arguments.
- CommandResult: a normalized result container for command outputs.
- Command: a leaf of the command tree with its schema and callable.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from hubuum_shell.interface.output import OutputSink

# Option keys every command understands as a help request.
HELP_KEYS: tuple[str, ...] = ("help", "h")

OPTION_KINDS: frozenset[str] = frozenset({"str", "int", "bool", "json", "flag"})


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """
    A declared option.

    Attributes:
        name: Canonical key used in the hydrated argument mapping.
        short: Single-dash alias without the dash (e.g. 'n').
        long: Double-dash alias without dashes; defaults to `name`.
        kind: One of OPTION_KINDS; 'flag' takes no value.
        required: Whether hydration fails when the option is absent.
        help: One-line description for help output.
        completer: Optional provider called as
            completer(engine, text=..., parts=...) -> Iterable[str].
    """

    name: str
    short: str | None = None
    long: str | None = None
    kind: str = "str"
    required: bool = False
    help: str = ""
    completer: Callable[..., Any] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.kind not in OPTION_KINDS:
            raise ValueError(
                f"Option '{self.name}' has unknown kind {self.kind!r}")
        if self.long is None:
            object.__setattr__(self, "long", self.name.replace("_", "-"))

    @property
    def takes_value(self) -> bool:
        return self.kind != "flag"

    def aliases(self) -> tuple[str, ...]:
        return tuple(a for a in (self.long, self.short) if a)


@dataclass(slots=True)
class ParsedInvocation:
    """Result of tokenizing one line: scopes, command, options, positionals."""

    scopes: tuple[str, ...]
    command: str
    options: dict[str, str] = field(default_factory=dict)
    positionals: list[str] = field(default_factory=list)

    def wants_help(self) -> bool:
        return any(key in self.options for key in HELP_KEYS)


@dataclass(slots=True)
class CommandContext:
    """Everything a command callback may touch while executing."""

    client: Any
    sink: "OutputSink"
    invocation: ParsedInvocation
    scopes: tuple[str, ...] = ()
    tree: Any = None
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("hubuum_shell.commands"))


class CommandCallback(Protocol):
    """Protocol for any command function."""

    def __call__(self, ctx: CommandContext, args: Mapping[str, Any]) -> Any:  # pragma: no cover - signature only
        ...


@dataclass(slots=True)
class CommandResult:
    """
    Normalized result container from command execution.

    Attributes:
        ok: True if the command completed successfully.
        message: Human-readable summary or primary output.
        data: Optional machine-readable payload.
    """
    ok: bool = True
    message: str = ""
    data: Any = None

    def __str__(self) -> str:
        return self.message if self.message else ("ok" if self.ok else "error")


@dataclass(slots=True)
class Command:
    """
    A command leaf with metadata, declared schema and a callable.

    Important fields:
        name: Name unique within its scope.
        description: Short, user-facing description.
        callback: Function implementing the command.
        options: Declared options, in help order.
        positionals: Ordered slot names; slot i fills the option of that
            name when it was not given explicitly.
        variadic: Accept positionals beyond the declared slots.
        examples: Example argument lines shown in help.
        module: Python module path where the command is defined.
    """

    name: str
    description: str
    callback: CommandCallback
    options: tuple[OptionSpec, ...] = ()
    positionals: tuple[str, ...] = ()
    variadic: bool = False
    examples: tuple[str, ...] = ()
    long_description: str = ""
    module: str = field(default="", repr=False)
    _alias_map: dict[str, str] = field(
        init=False, default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        alias_map: dict[str, str] = {key: "help" for key in HELP_KEYS}
        names: set[str] = set()
        for spec in self.options:
            if spec.name in names:
                raise ValueError(
                    f"Command '{self.name}' declares option '{spec.name}' twice.")
            names.add(spec.name)
            for alias in spec.aliases():
                if alias in alias_map:
                    raise ValueError(
                        f"Alias '{alias}' of option '{spec.name}' collides in command '{self.name}'.")
                alias_map[alias] = spec.name
        for slot in self.positionals:
            if slot not in names:
                raise ValueError(
                    f"Positional slot '{slot}' of '{self.name}' has no matching option.")
        self._alias_map = alias_map

    @property
    def alias_map(self) -> Mapping[str, str]:
        """Alias (long or short, no dashes) -> canonical option key."""
        return self._alias_map

    def flag_names(self) -> frozenset[str]:
        return frozenset({"help"} | {s.name for s in self.options if s.kind == "flag"})

    def option(self, key: str) -> Optional[OptionSpec]:
        """Look up an option by canonical name or alias."""
        canonical = self._alias_map.get(key, key)
        for spec in self.options:
            if spec.name == canonical:
                return spec
        return None

    def invoke(self, ctx: CommandContext, args: Mapping[str, Any]) -> Any:
        """Execute the underlying command callback."""
        return self.callback(ctx, args)
