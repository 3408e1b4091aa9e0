#!/usr/bin/env python3
# hubuum_shell/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

This module offers token-aware suggestions for:
- Scope and command names while walking the tree.
- Option switches (--long / -s) of the resolved command.
- Option values: true/false for booleans, and remote lookups (classes,
  namespaces, objects of a class) through per-option providers.

Completion is best effort: providers that fail degrade to no candidates.
"""

import logging
import shlex
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence

from hubuum_shell.commands import TREE, Command, Scope

logger = logging.getLogger(__name__)

BOOL_CANDIDATES: frozenset[str] = frozenset({"true", "false"})


@dataclass(frozen=True, slots=True)
class CompletionRequest:
    """Partial word under the cursor plus every token typed so far."""

    prefix: str
    parts: tuple[str, ...]


def _split_current_token(raw_input: str) -> tuple[list[str], str]:
    """
    Return (parts, current_prefix).

    Behavior:
      - Use shlex.split for shell-like parsing (POSIX).
      - If trailing whitespace exists, append an empty token to signal a new one.
      - On malformed quotes, fall back to whitespace splitting.
    """
    if not raw_input:
        return [""], ""

    try:
        parts = shlex.split(raw_input, posix=True)
    except ValueError:
        parts = raw_input.split()
    if raw_input[-1].isspace() or not parts:
        parts.append("")
    return parts, parts[-1]


def make_request(text_before_cursor: str) -> CompletionRequest:
    parts, prefix = _split_current_token(text_before_cursor.lstrip())
    return CompletionRequest(prefix=prefix, parts=tuple(parts))


class AutocompleteEngine:
    """Produces completion candidates from the command tree and the API."""

    def __init__(
        self,
        tree: Scope | None = None,
        client: Any = None,
        *,
        api_enabled: bool = True,
    ) -> None:
        self.tree = TREE if tree is None else tree
        self.client = client
        self.api_enabled = api_enabled and client is not None

    def suggest(self, text_before_cursor: str) -> list[str]:
        """Sorted candidates for frontends."""
        return sorted(self.complete(make_request(text_before_cursor)))

    def complete(self, request: CompletionRequest) -> set[str]:
        prefix = request.prefix
        typed = request.parts[:-1] if request.parts else ()

        node = self.tree
        command_obj: Optional[Command] = None
        arguments: Sequence[str] = ()
        for index, word in enumerate(typed):
            child = node.get_scope(word)
            if child is not None:
                node = child
                continue
            command_obj = node.get_command(word)
            if command_obj is None:
                return set()
            arguments = typed[index + 1:]
            break

        if command_obj is None:
            return {name for name in node.names() if name.startswith(prefix)}

        if arguments and arguments[-1].startswith("-"):
            spec = command_obj.option(arguments[-1].lstrip("-"))
            if spec is not None and spec.takes_value:
                return self._complete_value(spec, prefix, request.parts)

        if prefix.startswith("-") or not prefix:
            return self._complete_switches(command_obj, arguments, prefix)
        return set()

    # ---------------- helpers ----------------

    def _complete_switches(self, command_obj: Command, arguments: Sequence[str], prefix: str) -> set[str]:
        used = {
            command_obj.alias_map.get(word.lstrip("-"), word.lstrip("-"))
            for word in arguments if word.startswith("-")
        }
        candidates = {"--help"} if "help" not in used else set()
        for spec in command_obj.options:
            if spec.name in used:
                continue
            candidates.add(f"--{spec.long}")
            if spec.short:
                candidates.add(f"-{spec.short}")
        return {c for c in candidates if c.startswith(prefix)}

    def _complete_value(self, spec, prefix: str, parts: Sequence[str]) -> set[str]:
        if spec.kind == "bool":
            return {c for c in BOOL_CANDIDATES if c.startswith(prefix.lower())}
        if spec.completer is None or not self.api_enabled:
            return set()
        try:
            return set(spec.completer(self, text=prefix, parts=list(parts)))
        except Exception as exc:
            logger.warning("Completion for option '%s' failed: %s", spec.name, exc)
            return set()


# ---------------------------------------------------------------------------
# Remote providers
# ---------------------------------------------------------------------------

def _names(records: Iterable[dict], key: str = "name") -> set[str]:
    return {str(r[key]) for r in records if r.get(key) is not None}


def _starts_with(text: str) -> dict[str, str]:
    return {"name__startswith": text} if text else {}


def complete_classes(engine: AutocompleteEngine, *, text: str, parts: Sequence[str]) -> set[str]:
    """Class names starting with `text`."""
    logger.debug("Autocompleting classes with prefix %r", text)
    try:
        return _names(engine.client.classes().find(**_starts_with(text)))
    except Exception as exc:
        logger.warning("Failed to fetch classes for autocomplete: %s", exc)
        return set()


def complete_namespaces(engine: AutocompleteEngine, *, text: str, parts: Sequence[str]) -> set[str]:
    """Namespace names starting with `text`."""
    logger.debug("Autocompleting namespaces with prefix %r", text)
    try:
        return _names(engine.client.namespaces().find(**_starts_with(text)))
    except Exception as exc:
        logger.warning("Failed to fetch namespaces for autocomplete: %s", exc)
        return set()


def _anchor_value(parts: Sequence[str], anchors: Sequence[str]) -> Optional[str]:
    """Word right after the first anchor token, if any."""
    for current, following in zip(parts, parts[1:]):
        if current in anchors and following:
            return following
    return None


def objects_from_class(*anchors: str) -> Callable[..., set[str]]:
    """
    Provider for object names of the class named after one of `anchors`
    (default: --class / -c).

    Nothing is suggested unless the anchor value matches exactly one class.
    """
    anchors = anchors or ("--class", "-c")

    def _provider(engine: AutocompleteEngine, *, text: str, parts: Sequence[str]) -> set[str]:
        classname = _anchor_value(parts[:-1], anchors)
        if classname is None:
            return set()
        try:
            classes = engine.client.classes().find(name=classname)
            if len(classes) != 1:
                return set()
            objects = engine.client.objects(classes[0]["id"]).find(**_starts_with(text))
        except Exception as exc:
            logger.warning("Failed to fetch objects for autocomplete via %s: %s", anchors[0], exc)
            return set()
        return _names(objects)

    return _provider
