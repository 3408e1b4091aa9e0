# hubuum_plugins/namespaces/entrypoint.py
from __future__ import annotations

"""
Namespace command entrypoint:

Commands:
    - namespace new:    create a namespace owned by a group
    - namespace list:   list namespaces
    - namespace info:   show one namespace
    - namespace delete: delete one namespace
"""

from typing import Any, Mapping

from hubuum_shell.commands import CommandContext, OptionSpec, command
from hubuum_shell.interface import complete_namespaces

from .._common import filters_from, render_list, render_record
from . import SCOPE

NAMESPACE_FIELDS = (
    ("Name", "name"),
    ("ID", "id"),
    ("Description", "description"),
    ("Created", "created_at"),
    ("Updated", "updated_at"),
)

NAMESPACE_COLUMNS = (
    ("ID", "id"),
    ("Name", "name"),
    ("Description", "description"),
)


def _name_option(required: bool = False) -> OptionSpec:
    return OptionSpec("name", "n", required=required, help="Name of the namespace",
                      completer=complete_namespaces)


@command(
    scope=SCOPE,
    name="new",
    description="Create a new namespace",
    options=(
        OptionSpec("name", "n", required=True, help="Name of the namespace"),
        OptionSpec("description", "d", required=True, help="Description of the namespace"),
        OptionSpec("group_id", "g", kind="int", required=True,
                   help="ID of the group granted ownership"),
    ),
    examples=('-n infra -d "Infrastructure" -g 1',),
)
def namespace_new(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    payload = {
        "name": args["name"],
        "description": args["description"],
        "group_id": args["group_id"],
    }
    render_record(ctx.sink, ctx.client.namespaces().create(payload), NAMESPACE_FIELDS)


@command(
    scope=SCOPE,
    name="list",
    description="List namespaces",
    options=(
        _name_option(),
        OptionSpec("description", "d", help="Description of the namespace"),
    ),
)
def namespace_list(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    namespaces = ctx.client.namespaces().find(**filters_from(args, "name", "description"))
    render_list(ctx.sink, namespaces, NAMESPACE_COLUMNS, "No namespaces found.")


@command(
    scope=SCOPE,
    name="info",
    description="Show information about a namespace",
    options=(_name_option(required=True),),
    positionals=("name",),
    examples=("infra",),
)
def namespace_info(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    found = ctx.client.namespaces().get_single(name=args["name"])
    render_record(ctx.sink, found, NAMESPACE_FIELDS)


@command(
    scope=SCOPE,
    name="delete",
    description="Delete a namespace",
    options=(_name_option(required=True),),
    positionals=("name",),
    examples=("infra",),
)
def namespace_delete(ctx: CommandContext, args: Mapping[str, Any]) -> str:
    found = ctx.client.namespaces().get_single(name=args["name"])
    ctx.client.namespaces().delete(found["id"])
    return f"Namespace '{found.get('name')}' deleted"
