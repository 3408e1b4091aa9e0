# hubuum_plugins/classes/entrypoint.py
from __future__ import annotations

"""
Class command entrypoint:

Commands:
    - class new:    create a class in a namespace
    - class list:   list classes, optionally filtered
    - class info:   show one class (by id or name)
    - class delete: delete one class (by id or name)
"""

from typing import Any, Mapping

from hubuum_shell.commands import CommandContext, OptionSpec, command
from hubuum_shell.interface import complete_classes

from .._common import filters_from, render_list, render_record, require_one
from . import SCOPE

CLASS_FIELDS = (
    ("Name", "name"),
    ("ID", "id"),
    ("Namespace", "namespace_id"),
    ("Description", "description"),
    ("Schema", "json_schema"),
    ("Validate", "validate_schema"),
    ("Created", "created_at"),
    ("Updated", "updated_at"),
)

CLASS_COLUMNS = (
    ("ID", "id"),
    ("Name", "name"),
    ("Namespace", "namespace_id"),
    ("Description", "description"),
    ("Validate", "validate_schema"),
)


def _lookup(ctx: CommandContext, args: Mapping[str, Any]) -> dict:
    require_one(args, "id", "name")
    return ctx.client.classes().get_single(**filters_from(args, "id", "name", "description"))


@command(
    scope=SCOPE,
    name="new",
    description="Create a new class",
    long_description="Create a new class with the specified properties.",
    options=(
        OptionSpec("name", "n", required=True, help="Name of the class"),
        OptionSpec("namespace_id", "i", kind="int", required=True, help="Namespace ID"),
        OptionSpec("description", "d", required=True, help="Description of the class"),
        OptionSpec("schema", "s", kind="json", help="JSON schema for the class"),
        OptionSpec("validate", "v", kind="bool",
                   help="Validate against schema, requires schema to be set"),
    ),
    examples=(
        '-n MyClass -i 1 -d "My class description"',
        "--name MyClass --namespace-id 1 --description 'My class' --schema file://schema.json",
    ),
)
def class_new(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    payload = {
        "name": args["name"],
        "namespace_id": args["namespace_id"],
        "description": args["description"],
        "json_schema": args.get("schema"),
        "validate_schema": args.get("validate"),
    }
    ctx.logger.debug("Creating class %s in namespace %s", args["name"], args["namespace_id"])
    render_record(ctx.sink, ctx.client.classes().create(payload), CLASS_FIELDS)


@command(
    scope=SCOPE,
    name="list",
    description="List classes",
    options=(
        OptionSpec("name", "n", help="Name of the class", completer=complete_classes),
        OptionSpec("description", "d", help="Description of the class"),
    ),
    examples=("", "-n MyClass"),
)
def class_list(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    classes = ctx.client.classes().find(**filters_from(args, "name", "description"))
    render_list(ctx.sink, classes, CLASS_COLUMNS, "No classes found.")


@command(
    scope=SCOPE,
    name="info",
    description="Show information about a class",
    options=(
        OptionSpec("id", "i", kind="int", help="ID of the class"),
        OptionSpec("name", "n", help="Name of the class", completer=complete_classes),
        OptionSpec("description", "d", help="Description of the class"),
    ),
    positionals=("name",),
    examples=("MyClass", "-i 3"),
)
def class_info(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    render_record(ctx.sink, _lookup(ctx, args), CLASS_FIELDS)


@command(
    scope=SCOPE,
    name="delete",
    description="Delete a class",
    options=(
        OptionSpec("id", "i", kind="int", help="ID of the class"),
        OptionSpec("name", "n", help="Name of the class", completer=complete_classes),
    ),
    positionals=("name",),
    examples=("MyClass", "-i 3"),
)
def class_delete(ctx: CommandContext, args: Mapping[str, Any]) -> str:
    found = _lookup(ctx, args)
    ctx.client.classes().delete(found["id"])
    return f"Deleted class '{found.get('name')}' (id {found['id']})"
