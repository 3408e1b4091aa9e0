#!/usr/bin/env python3
# hubuum_shell/commands/schema.py
from __future__ import annotations

"""
Argument hydration and usage rendering for commands.

Responsibilities:
- Bind a ParsedInvocation to a command's declared OptionSpec schema with
  type coercion, positional fill-in and required-key checks.
- Render compact usage strings and full help text from the schema.
"""

import json
from typing import Any

from hubuum_shell.commands.command_types import Command, OptionSpec, ParsedInvocation
from hubuum_shell.errors import (
    InvalidOption,
    InvalidOptionValue,
    MissingOptions,
    PopulatedFlagOptions,
    TooManyPositionals,
)
from hubuum_shell.ui import format_table

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _coerce_value(spec: OptionSpec, text_value: str) -> Any:
    """
    Convert a string to the option's declared kind.

    Supported kinds:
        - str  -> original text
        - int  -> int constructor
        - bool -> '1,true,yes,y,on' / '0,false,no,n,off' (case-insensitive)
        - json -> json.loads
    """
    if spec.kind == "str":
        return text_value
    if spec.kind == "int":
        try:
            return int(text_value.strip())
        except ValueError:
            raise InvalidOptionValue(spec.name, text_value, "an integer") from None
    if spec.kind == "bool":
        lowered = text_value.strip().lower()
        if lowered in _BOOL_TRUE:
            return True
        if lowered in _BOOL_FALSE:
            return False
        raise InvalidOptionValue(spec.name, text_value, "a boolean")
    if spec.kind == "json":
        try:
            return json.loads(text_value)
        except json.JSONDecodeError as exc:
            raise InvalidOptionValue(spec.name, text_value, f"JSON ({exc.msg})") from None
    return text_value


def bind_options(command_obj: Command, invocation: ParsedInvocation) -> dict[str, Any]:
    """
    Bind tokenized options and positionals to `command_obj`'s schema.

    Returns a mapping canonical option name -> coerced value; absent optional
    options are left out. Flags map to True when present.
    """
    raw: dict[str, str] = {}
    for key, value in invocation.options.items():
        if key == "help":
            continue
        spec = command_obj.option(key)
        if spec is None:
            raise InvalidOption(key, f"not an option of '{command_obj.name}'")
        raw[spec.name] = value

    positionals = list(invocation.positionals)
    if len(positionals) > len(command_obj.positionals) and not command_obj.variadic:
        raise TooManyPositionals(positionals[len(command_obj.positionals):])
    for slot, value in zip(command_obj.positionals, positionals):
        # An explicit option wins over its positional slot.
        raw.setdefault(slot, value)

    populated_flags = sorted(
        name for name, value in raw.items()
        if command_obj.option(name).kind == "flag" and value != ""  # type: ignore[union-attr]
    )
    if populated_flags:
        raise PopulatedFlagOptions(populated_flags)

    missing = [spec.name for spec in command_obj.options
               if spec.required and spec.name not in raw]
    if missing:
        raise MissingOptions(missing)

    bound: dict[str, Any] = {}
    for spec in command_obj.options:
        if spec.name not in raw:
            continue
        bound[spec.name] = True if spec.kind == "flag" else _coerce_value(
            spec, raw[spec.name])
    return bound


def _option_token(spec: OptionSpec) -> str:
    switch = f"-{spec.short}" if spec.short else f"--{spec.long}"
    token = switch if spec.kind == "flag" else f"{switch} <{spec.long}>"
    return token if spec.required else f"[{token}]"


def build_usage(command_obj: Command, scopes: tuple[str, ...] = ()) -> str:
    """
    Render a compact usage string from the command schema.

    Example:
        'class new -n <name> -i <namespace-id> [-s <schema>] [--validate]'
    """
    parts = [*scopes, command_obj.name]
    parts.extend(f"[{slot}]" for slot in command_obj.positionals)
    parts.extend(_option_token(spec) for spec in command_obj.options)
    return " ".join(parts)


def format_command_help(command_obj: Command, scopes: tuple[str, ...] = ()) -> str:
    """Render help for a command: summary, usage, option table, examples."""
    lines = [
        f"Name:        {' '.join([*scopes, command_obj.name])}",
        f"Description: {command_obj.description or '(none)'}",
        f"Usage:       {build_usage(command_obj, scopes)}",
    ]
    if command_obj.long_description:
        lines.extend(["", command_obj.long_description])

    rows = []
    for spec in command_obj.options:
        rows.append([
            f"-{spec.short}" if spec.short else "",
            f"--{spec.long}",
            spec.kind,
            "yes" if spec.required else "",
            spec.help,
        ])
    rows.append(["-h", "--help", "flag", "", "Show this help"])
    lines.extend(["", format_table(rows, headers=["Short", "Long", "Type", "Required", "Description"])])

    if command_obj.examples:
        prefix = " ".join([*scopes, command_obj.name])
        lines.extend(["", "Examples:"])
        lines.extend(f"  {prefix} {example}" for example in command_obj.examples)
    return "\n".join(lines)
