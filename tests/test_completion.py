from __future__ import annotations

from hubuum_shell.commands import Command, OptionSpec, Scope
from hubuum_shell.interface import (
    AutocompleteEngine,
    complete_classes,
    complete_namespaces,
    make_request,
    objects_from_class,
)

from conftest import BrokenClient, FakeClient


def _noop(ctx, args):
    return None


def test_request_marks_new_token_after_space() -> None:
    request = make_request("ns list ")
    assert request.prefix == ""
    assert request.parts == ("ns", "list", "")


def test_request_handles_unbalanced_quotes() -> None:
    request = make_request("ns list -n 'my cl")
    assert request.prefix == "cl"


def test_root_names(sample_tree: Scope) -> None:
    engine = AutocompleteEngine(sample_tree)
    assert engine.suggest("") == ["ns", "status"]
    assert engine.suggest("n") == ["ns"]


def test_scope_children(sample_tree: Scope) -> None:
    assert AutocompleteEngine(sample_tree).suggest("ns ") == ["list"]


def test_unknown_path_has_no_candidates(sample_tree: Scope) -> None:
    assert AutocompleteEngine(sample_tree).suggest("bogus ") == []


def test_switches(sample_tree: Scope) -> None:
    assert AutocompleteEngine(sample_tree).suggest("ns list ") == [
        "--help", "--limit", "--name", "--verbose", "-n", "-v",
    ]


def test_used_switches_are_not_offered_again(sample_tree: Scope) -> None:
    candidates = AutocompleteEngine(sample_tree).suggest("ns list -n x ")
    assert "--name" not in candidates
    assert "-n" not in candidates
    assert "--limit" in candidates


def test_switch_prefix(sample_tree: Scope) -> None:
    assert AutocompleteEngine(sample_tree).suggest("ns list --l") == ["--limit"]


def _value_tree(completer=None) -> Scope:
    tree = Scope()
    tree.scope(["cfg"]).add_command(Command(
        name="set", description="", callback=_noop,
        options=(
            OptionSpec("enabled", "e", kind="bool"),
            OptionSpec("target", "t", completer=completer),
        ),
    ))
    return tree


def test_bool_values() -> None:
    engine = AutocompleteEngine(_value_tree())
    assert engine.suggest("cfg set --enabled ") == ["false", "true"]
    assert engine.suggest("cfg set -e t") == ["true"]


def test_value_provider_receives_text_and_parts() -> None:
    seen = {}

    def provider(engine, *, text, parts):
        seen["text"], seen["parts"] = text, parts
        return ["alpha", "beta"]

    engine = AutocompleteEngine(_value_tree(provider), FakeClient())
    assert engine.suggest("cfg set -t al") == ["alpha", "beta"]
    assert seen == {"text": "al", "parts": ["cfg", "set", "-t", "al"]}


def test_value_provider_skipped_when_api_disabled() -> None:
    def provider(engine, *, text, parts):
        raise AssertionError("must not be called")

    engine = AutocompleteEngine(_value_tree(provider), FakeClient(), api_enabled=False)
    assert engine.suggest("cfg set -t ") == []
    assert AutocompleteEngine(_value_tree(provider)).suggest("cfg set -t ") == []


def test_failing_provider_yields_nothing() -> None:
    def provider(engine, *, text, parts):
        raise RuntimeError("down")

    engine = AutocompleteEngine(_value_tree(provider), FakeClient())
    assert engine.suggest("cfg set -t x") == []


# ---------------- remote providers ----------------

def test_complete_classes_by_prefix() -> None:
    engine = AutocompleteEngine(Scope(), FakeClient())
    assert complete_classes(engine, text="Ho", parts=[]) == {"Host", "HostGroup"}
    assert complete_classes(engine, text="", parts=[]) == {"Host", "HostGroup", "Room"}


def test_complete_namespaces_by_prefix() -> None:
    engine = AutocompleteEngine(Scope(), FakeClient())
    assert complete_namespaces(engine, text="in", parts=[]) == {"infra"}


def test_providers_degrade_on_failure() -> None:
    engine = AutocompleteEngine(Scope(), BrokenClient())
    assert complete_classes(engine, text="", parts=[]) == set()
    assert complete_namespaces(engine, text="", parts=[]) == set()
    provider = objects_from_class()
    assert provider(engine, text="", parts=["-c", "Host", "-n", ""]) == set()


def test_objects_from_class_uses_anchor() -> None:
    engine = AutocompleteEngine(Scope(), FakeClient())
    provider = objects_from_class()
    parts = ["object", "info", "--class", "Host", "-n", "web"]
    assert provider(engine, text="web", parts=parts) == {"web01", "web02"}


def test_objects_from_class_needs_exactly_one_class() -> None:
    engine = AutocompleteEngine(Scope(), FakeClient())
    provider = objects_from_class()
    assert provider(engine, text="", parts=["object", "info", "-n", ""]) == set()
    assert provider(engine, text="", parts=["object", "info", "-c", "Nope", "-n", ""]) == set()


def test_objects_from_class_custom_anchor() -> None:
    engine = AutocompleteEngine(Scope(), FakeClient())
    provider = objects_from_class("--kind")
    assert provider(engine, text="db", parts=["--kind", "Host", "-n", "db"]) == {"db01"}


# ---------------- plugin tree ----------------

def test_plugin_tree_root_includes_builtins_and_scopes(plugin_tree: Scope) -> None:
    candidates = AutocompleteEngine(plugin_tree).suggest("")
    for name in ("class", "object", "namespace", "user", "help", "exit", "quit", "clear"):
        assert name in candidates


def test_plugin_tree_object_names(plugin_tree: Scope) -> None:
    engine = AutocompleteEngine(plugin_tree, FakeClient())
    assert engine.suggest("object info -c Host -n w") == ["web01", "web02"]


def test_plugin_tree_class_option(plugin_tree: Scope) -> None:
    engine = AutocompleteEngine(plugin_tree, FakeClient())
    assert engine.suggest("object list --class R") == ["Room"]


def test_plugin_tree_bool_option(plugin_tree: Scope) -> None:
    assert AutocompleteEngine(plugin_tree).suggest("class new --validate ") == ["false", "true"]
