from __future__ import annotations

from pathlib import Path

from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from hubuum_shell.commands import Scope
from hubuum_shell.interface import AutocompleteEngine, PlainCLI, PromptToolkitCLI, ShellCompleter
from hubuum_shell.interface import cli as cli_module


def _completions(engine: AutocompleteEngine, text: str) -> list[tuple[str, int]]:
    completer = ShellCompleter(engine)
    found = completer.get_completions(Document(text, len(text)), CompleteEvent())
    return [(c.text, c.start_position) for c in found]


def test_completer_replaces_the_current_word(sample_tree: Scope) -> None:
    assert _completions(AutocompleteEngine(sample_tree), "ns li") == [("list", -2)]


def test_completer_after_space_inserts(sample_tree: Scope) -> None:
    assert ("--limit", 0) in _completions(AutocompleteEngine(sample_tree), "ns list ")


def test_plain_cli_reads_input(monkeypatch) -> None:
    prompts: list[str] = []

    def fake_input(prompt: str) -> str:
        prompts.append(prompt)
        return "help"

    monkeypatch.setattr("builtins.input", fake_input)
    with PlainCLI("admin@h:1 > ") as frontend:
        assert frontend.get_line() == "help"
    assert prompts == ["admin@h:1 > "]


def test_make_cli_falls_back_when_prompt_toolkit_fails(monkeypatch, tmp_path: Path,
                                                       sample_tree: Scope) -> None:
    def refuse(self, *args, **kwargs):
        raise RuntimeError("not a terminal")

    monkeypatch.setattr(PromptToolkitCLI, "__init__", refuse)
    frontend = cli_module.make_cli(AutocompleteEngine(sample_tree), "> ", tmp_path / "history")
    assert not isinstance(frontend, PromptToolkitCLI)
    assert frontend.prompt == "> "


def test_history_directory_is_created(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "history"
    assert cli_module._prepare_history(path)
    assert path.exists()
