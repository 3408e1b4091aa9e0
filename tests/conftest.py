from __future__ import annotations

import itertools
from typing import Any

import pytest

from hubuum_shell.commands import TREE, Command, OptionSpec, Scope, register_builtins
from hubuum_shell.errors import EntityNotFound, MultipleEntitiesFound
from hubuum_shell.interface import Dispatcher, OutputSink, load_commands


class FakeResource:
    """In-memory stand-in for hubuum_shell.client.Resource."""

    def __init__(self, label: str, records: list[dict], ids: itertools.count) -> None:
        self.label = label
        self.records = records
        self._ids = ids
        self.queries: list[dict] = []

    def _matches(self, record: dict, filters: dict[str, Any]) -> bool:
        for key, value in filters.items():
            if key.endswith("__startswith"):
                if not str(record.get(key[: -len("__startswith")], "")).startswith(str(value)):
                    return False
            elif record.get(key) != value:
                return False
        return True

    def find(self, **filters: Any) -> list[dict]:
        self.queries.append(filters)
        return [r for r in self.records if self._matches(r, filters)]

    def get_single(self, **filters: Any) -> dict:
        matches = self.find(**filters)
        if not matches:
            raise EntityNotFound(self.label)
        if len(matches) > 1:
            raise MultipleEntitiesFound(self.label, len(matches))
        return matches[0]

    def create(self, payload: dict) -> dict:
        record = {"id": next(self._ids), **payload}
        self.records.append(record)
        return record

    def delete(self, entity_id: Any) -> None:
        self.records[:] = [r for r in self.records if r["id"] != entity_id]


class FakeClient:
    def __init__(self) -> None:
        self._ids = itertools.count(100)
        self.class_records = [
            {"id": 1, "name": "Host", "namespace_id": 1, "description": "Servers"},
            {"id": 2, "name": "HostGroup", "namespace_id": 1, "description": "Groups of servers"},
            {"id": 3, "name": "Room", "namespace_id": 2, "description": "Rooms"},
        ]
        self.namespace_records = [
            {"id": 1, "name": "infra", "description": "Infrastructure"},
            {"id": 2, "name": "facilities", "description": "Buildings"},
        ]
        self.user_records = [{"id": 1, "username": "admin", "email": None}]
        self.object_records = {
            1: [
                {"id": 10, "name": "web01", "hubuum_class_id": 1, "namespace_id": 1, "data": {"os": "linux"}},
                {"id": 11, "name": "web02", "hubuum_class_id": 1, "namespace_id": 1, "data": None},
                {"id": 12, "name": "db01", "hubuum_class_id": 1, "namespace_id": 1, "data": None},
            ],
        }
        self._resources: dict[Any, FakeResource] = {}

    def _resource(self, key: Any, label: str, records: list[dict]) -> FakeResource:
        if key not in self._resources:
            self._resources[key] = FakeResource(label, records, self._ids)
        return self._resources[key]

    def classes(self) -> FakeResource:
        return self._resource("classes", "class", self.class_records)

    def namespaces(self) -> FakeResource:
        return self._resource("namespaces", "namespace", self.namespace_records)

    def users(self) -> FakeResource:
        return self._resource("users", "user", self.user_records)

    def objects(self, class_id: int) -> FakeResource:
        records = self.object_records.setdefault(class_id, [])
        return self._resource(("objects", class_id), "object", records)


class BrokenClient:
    """Every resource lookup fails."""

    def __getattr__(self, name: str):
        def _fail(*args: Any, **kwargs: Any):
            raise ConnectionError("server unreachable")
        return _fail


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture(scope="session")
def plugin_tree() -> Scope:
    """The global tree with built-ins and every plugin loaded, frozen."""
    if TREE.get_command("help") is None:
        register_builtins(TREE)
    load_commands("hubuum_plugins")
    TREE.freeze()
    return TREE


@pytest.fixture
def dispatcher(plugin_tree: Scope, fake_client: FakeClient) -> Dispatcher:
    return Dispatcher(plugin_tree, fake_client)


@pytest.fixture
def sample_tree() -> Scope:
    """
    Small standalone tree:
        ns list [-n name] [-v] [--limit int]
        status
    """
    calls: list[dict] = []
    tree = Scope()
    tree.scope(["ns"]).add_command(Command(
        name="list",
        description="List namespaces",
        callback=lambda ctx, args: calls.append(dict(args)) or f"listed {args.get('name', '*')}",
        options=(
            OptionSpec("name", "n", help="Name filter"),
            OptionSpec("verbose", "v", kind="flag"),
            OptionSpec("limit", kind="int"),
        ),
        positionals=("name",),
    ))
    tree.add_command(Command(name="status", description="Show status",
                             callback=lambda ctx, args: "ok"))
    tree.calls = calls  # type: ignore[attr-defined]
    return tree


@pytest.fixture
def sink() -> OutputSink:
    return OutputSink()
