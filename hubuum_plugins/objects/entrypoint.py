# hubuum_plugins/objects/entrypoint.py
from __future__ import annotations

"""
Object command entrypoint:

Commands:
    - object new:    create an object in a class and namespace
    - object list:   list the objects of a class
    - object info:   show one object of a class
    - object delete: delete one object of a class

Objects live below their class, so every command needs --class.
"""

from typing import Any, Mapping

from hubuum_shell.commands import CommandContext, OptionSpec, command
from hubuum_shell.interface import complete_classes, complete_namespaces, objects_from_class

from .._common import filters_from, render_list, render_record, require_one
from . import SCOPE

OBJECT_FIELDS = (
    ("Name", "name"),
    ("ID", "id"),
    ("Class", "hubuum_class_id"),
    ("Namespace", "namespace_id"),
    ("Description", "description"),
    ("Data", "data"),
    ("Created", "created_at"),
    ("Updated", "updated_at"),
)

OBJECT_COLUMNS = (
    ("ID", "id"),
    ("Name", "name"),
    ("Namespace", "namespace_id"),
    ("Description", "description"),
)


def _class_option(required: bool = True) -> OptionSpec:
    return OptionSpec("class", "c", required=required,
                      help="Name of the class the object belongs to",
                      completer=complete_classes)


def _object_name_option() -> OptionSpec:
    return OptionSpec("name", "n", help="Name of the object", completer=objects_from_class())


def _objects_of(ctx: CommandContext, classname: str):
    cls = ctx.client.classes().get_single(name=classname)
    return ctx.client.objects(cls["id"])


@command(
    scope=SCOPE,
    name="new",
    description="Create a new object",
    long_description="Create a new object in a specific class with the specified properties.",
    options=(
        OptionSpec("name", "n", required=True, help="Name of the object"),
        _class_option(),
        OptionSpec("namespace", "N", required=True, help="Namespace name",
                   completer=complete_namespaces),
        OptionSpec("description", "d", required=True, help="Description of the object"),
        OptionSpec("data", "D", kind="json", help="JSON data for the object"),
    ),
    examples=(
        '-n MyObject -c MyClass -N namespace_1 -d "My object description"',
        "--name MyObject --class MyClass --namespace namespace_1 --description 'My object' --data '{\"key\": \"val\"}'",
    ),
)
def object_new(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    namespace = ctx.client.namespaces().get_single(name=args["namespace"])
    cls = ctx.client.classes().get_single(name=args["class"])
    payload = {
        "name": args["name"],
        "hubuum_class_id": cls["id"],
        "namespace_id": namespace["id"],
        "description": args["description"],
        "data": args.get("data"),
    }
    created = ctx.client.objects(cls["id"]).create(payload)
    render_record(ctx.sink, created, OBJECT_FIELDS)


@command(
    scope=SCOPE,
    name="list",
    description="List objects of a class",
    options=(
        _class_option(),
        _object_name_option(),
        OptionSpec("description", "d", help="Description of the object"),
    ),
    examples=("-c MyClass", "-c MyClass -n MyObject"),
)
def object_list(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    objects = _objects_of(ctx, args["class"]).find(**filters_from(args, "name", "description"))
    render_list(ctx.sink, objects, OBJECT_COLUMNS, f"No objects found in class '{args['class']}'.")


@command(
    scope=SCOPE,
    name="info",
    description="Show information about an object",
    options=(
        _class_option(),
        OptionSpec("id", "i", kind="int", help="ID of the object"),
        _object_name_option(),
    ),
    positionals=("name",),
    examples=("MyObject -c MyClass", "-c MyClass -i 12"),
)
def object_info(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    require_one(args, "id", "name")
    found = _objects_of(ctx, args["class"]).get_single(**filters_from(args, "id", "name"))
    render_record(ctx.sink, found, OBJECT_FIELDS)


@command(
    scope=SCOPE,
    name="delete",
    description="Delete an object",
    options=(
        _class_option(),
        OptionSpec("id", "i", kind="int", help="ID of the object"),
        _object_name_option(),
    ),
    positionals=("name",),
    examples=("MyObject -c MyClass",),
)
def object_delete(ctx: CommandContext, args: Mapping[str, Any]) -> str:
    require_one(args, "id", "name")
    objects = _objects_of(ctx, args["class"])
    found = objects.get_single(**filters_from(args, "id", "name"))
    objects.delete(found["id"])
    return f"Deleted object '{found.get('name')}' (id {found['id']})"
