# hubuum_plugins/users/entrypoint.py
from __future__ import annotations

"""
User command entrypoint:

Commands:
    - user new:    create a user; the generated password is shown once
    - user list:   list users
    - user info:   show one user
    - user delete: delete one user
"""

import secrets
import string
from typing import Any, Mapping

from hubuum_shell.commands import CommandContext, OptionSpec, command
from hubuum_shell.ui import log_timing

from .._common import PADDING, filters_from, render_list, render_record
from . import SCOPE

PASSWORD_LENGTH = 20
PASSWORD_ALPHABET = string.ascii_letters + string.digits

USER_FIELDS = (
    ("Username", "username"),
    ("ID", "id"),
    ("Email", "email"),
    ("Created", "created_at"),
    ("Updated", "updated_at"),
)

USER_COLUMNS = (
    ("ID", "id"),
    ("Username", "username"),
    ("Email", "email"),
    ("Created", "created_at"),
)


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    """Random alphanumeric password from a CSPRNG."""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def _username_option(required: bool = False) -> OptionSpec:
    return OptionSpec("username", "u", required=required, help="Username of the user")


@command(
    scope=SCOPE,
    name="new",
    description="Create a new user",
    long_description="The password is generated and printed once; it cannot be shown again.",
    options=(
        _username_option(required=True),
        OptionSpec("email", "e", help="Email address for the user"),
    ),
    examples=("-u alice -e alice@example.com",),
)
def user_new(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    password = generate_password()
    payload = {
        "username": args["username"],
        "email": args.get("email"),
        "password": password,
    }
    with log_timing(ctx.logger, "Creating user"):
        created = ctx.client.users().create(payload)
    render_record(ctx.sink, created, USER_FIELDS)
    ctx.sink.append_key_value("Password", password, PADDING)


@command(
    scope=SCOPE,
    name="list",
    description="List users",
    options=(
        _username_option(),
        OptionSpec("email", "e", help="Email address for the user"),
    ),
)
def user_list(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    users = ctx.client.users().find(**filters_from(args, "username", "email"))
    render_list(ctx.sink, users, USER_COLUMNS, "No users found.")


@command(
    scope=SCOPE,
    name="info",
    description="Show information about a user",
    options=(_username_option(required=True),),
    positionals=("username",),
    examples=("alice",),
)
def user_info(ctx: CommandContext, args: Mapping[str, Any]) -> None:
    with log_timing(ctx.logger, "User get"):
        found = ctx.client.users().get_single(username=args["username"])
    render_record(ctx.sink, found, USER_FIELDS)


@command(
    scope=SCOPE,
    name="delete",
    description="Delete a user",
    options=(_username_option(required=True),),
    positionals=("username",),
    examples=("alice",),
)
def user_delete(ctx: CommandContext, args: Mapping[str, Any]) -> str:
    with log_timing(ctx.logger, "User get"):
        found = ctx.client.users().get_single(username=args["username"])
    with log_timing(ctx.logger, "User delete"):
        ctx.client.users().delete(found["id"])
    return f"User '{found.get('username')}' deleted"
