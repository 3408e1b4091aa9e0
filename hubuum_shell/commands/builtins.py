#!/usr/bin/env python3
# hubuum_shell/commands/builtins.py
from __future__ import annotations

"""
Shell built-ins registered at the tree root: help, exit, quit, clear.
"""

from typing import Any, Mapping

from hubuum_shell.commands.command_types import Command, CommandContext
from hubuum_shell.commands.commands import TREE, Scope, register_command
from hubuum_shell.commands.schema import format_command_help
from hubuum_shell.errors import CommandNotFound
from hubuum_shell.ui import clear_screen, format_table

# Short hint shown at startup and after help listings
HELP_TEXT = "Type 'help <scope> [command]' or '<command> --help' for details."


def _format_scope_listing(node: Scope, path: tuple[str, ...]) -> str:
    """Render the child scopes and commands of `node`."""
    blocks: list[str] = []
    scopes = sorted(node.scopes(), key=lambda s: s.name)
    if scopes:
        rows = []
        for child in scopes:
            count = sum(1 for _ in child.walk())
            rows.append([child.name,
                         f"{count} command{'s' if count != 1 else ''}",
                         child.description])
        blocks.append(format_table(rows, headers=["Scope", "Commands", "Description"]))

    commands = sorted(node.commands(), key=lambda c: c.name)
    if commands:
        rows = [[c.name, c.description] for c in commands]
        blocks.append(format_table(rows, headers=["Command", "Description"]))

    if not blocks:
        where = " ".join(path) or "<root>"
        return f"Nothing registered in '{where}'."
    return "\n\n".join([*blocks, HELP_TEXT])


def _help(ctx: CommandContext, args: Mapping[str, Any]) -> str:
    node: Scope = ctx.tree if ctx.tree is not None else TREE
    path: list[str] = []
    for word in ctx.invocation.positionals:
        child = node.get_scope(word)
        if child is not None:
            node = child
            path.append(word)
            continue
        command_obj = node.get_command(word)
        if command_obj is None:
            raise CommandNotFound(" ".join([*path, word]), node._suggest(word))
        return format_command_help(command_obj, tuple(path))
    return _format_scope_listing(node, tuple(path))


def _exit(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    raise SystemExit(0)


def _clear(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    clear_screen()


def register_builtins(tree: Scope | None = None) -> int:
    """Register the built-ins on the root of `tree`. Returns how many."""
    builtins = (
        Command(
            name="help",
            description="List scopes and commands, or show help for one command",
            callback=_help,
            variadic=True,
            examples=("", "class", "class new"),
        ),
        Command(name="exit", description="Leave the shell", callback=_exit),
        Command(name="quit", description="Leave the shell", callback=_exit),
        Command(name="clear", description="Clear the screen", callback=_clear),
    )
    for command_obj in builtins:
        register_command(command_obj, (), tree=tree)
    return len(builtins)
