# hubuum_plugins/_common.py
from __future__ import annotations

"""Rendering and lookup helpers shared by the plugin entrypoints."""

import json
from typing import Any, Iterable, Mapping, Sequence

from hubuum_shell.errors import MissingOptions
from hubuum_shell.interface import OutputSink

# Key column width for single-entity output
PADDING = 15


def _display(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True)
    return value


def render_record(sink: OutputSink, record: Mapping[str, Any], fields: Sequence[tuple[str, str]]) -> None:
    """Append one aligned 'Label : value' line per (label, key) in `fields`."""
    for label, key in fields:
        sink.append_key_value(label, _display(record.get(key)), PADDING)


def render_list(
    sink: OutputSink,
    records: Iterable[Mapping[str, Any]],
    columns: Sequence[tuple[str, str]],
    empty: str,
) -> None:
    """Append a table with one row per record, or `empty` when there is none."""
    rows = [[_display(r.get(key)) for _, key in columns] for r in records]
    if not rows:
        sink.append_line(empty)
        return
    sink.append_table(rows, headers=[label for label, _ in columns])


def filters_from(args: Mapping[str, Any], *keys: str) -> dict[str, Any]:
    """Exact-match query filters for the options present in `args`."""
    return {key: args[key] for key in keys if args.get(key) is not None}


def require_one(args: Mapping[str, Any], *keys: str) -> None:
    """At least one of `keys` must be given; the last one is reported as missing."""
    if not any(args.get(key) is not None for key in keys):
        raise MissingOptions([keys[-1]])
