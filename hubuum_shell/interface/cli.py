#!/usr/bin/env python3
# hubuum_shell/interface/cli.py
from __future__ import annotations

"""
Line editors for the interactive shell.

make_cli() prefers prompt_toolkit (live completion, persistent history),
falls back to readline (tab completion, history) and finally to input().
All three read one line per get_line() call and raise EOFError on Ctrl-D.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from prompt_toolkit.completion import Completer, Completion

from hubuum_shell.interface.completion import AutocompleteEngine, make_request

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "> "


def _prepare_history(path: Path) -> bool:
    """Create the history file and its directory; False if that is not possible."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch(exist_ok=True)
    except OSError as exc:
        logger.warning("History file %s unavailable: %s", path, exc)
        return False
    return True


class ShellCompleter(Completer):
    """Feeds AutocompleteEngine candidates to prompt_toolkit."""

    def __init__(self, engine: AutocompleteEngine) -> None:
        self.engine = engine

    def get_completions(self, document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        # candidates replace the word under the cursor, not the whole line
        start = -len(make_request(text).prefix)
        for word in self.engine.suggest(text):
            yield Completion(word, start_position=start)


class BaseCLI:
    """
    A line source. `with frontend:` runs setup() and guarantees teardown(),
    which is where history gets saved.
    """

    def __init__(self, prompt: str = DEFAULT_PROMPT) -> None:
        self.prompt = prompt

    def setup(self) -> None:
        pass

    def get_line(self) -> str:
        raise NotImplementedError

    def teardown(self) -> None:
        pass

    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.teardown()
        except OSError as teardown_exc:
            logger.debug("Frontend teardown failed: %s", teardown_exc)


class PromptToolkitCLI(BaseCLI):
    """Completion menu that follows typing; history kept in a file."""

    def __init__(self, engine: AutocompleteEngine, prompt: str, history_path: Path) -> None:
        super().__init__(prompt)
        from prompt_toolkit import PromptSession
        from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
        from prompt_toolkit.history import FileHistory, InMemoryHistory
        from prompt_toolkit.key_binding import KeyBindings

        history = (FileHistory(str(history_path)) if _prepare_history(history_path)
                   else InMemoryHistory())

        bindings = KeyBindings()

        @bindings.add("backspace")
        def _reopen_menu(event) -> None:
            # deleting a character refreshes the candidates right away
            buffer = event.app.current_buffer
            if buffer.read_only():
                return
            if buffer.selection_state:
                buffer.cut_selection()
            else:
                buffer.delete_before_cursor(1)
            buffer.start_completion(select_first=False)

        self._session = PromptSession(
            history=history,
            completer=ShellCompleter(engine),
            complete_while_typing=True,
            auto_suggest=AutoSuggestFromHistory(),
            key_bindings=bindings,
        )

    def get_line(self) -> str:
        return self._session.prompt(self.prompt)


class ReadlineCLI(BaseCLI):
    """GNU readline: completion on Tab, history loaded and saved around the session."""

    def __init__(self, engine: AutocompleteEngine, prompt: str, history_path: Path) -> None:
        super().__init__(prompt)
        import readline

        self._readline = readline
        self.engine = engine
        self.history_path = history_path

    def _complete(self, fragment: str, index: int) -> Optional[str]:
        line = self._readline.get_line_buffer()[: self._readline.get_endidx()]
        matches = [word for word in self.engine.suggest(line) if word.startswith(fragment)]
        return matches[index] if index < len(matches) else None

    def setup(self) -> None:
        if _prepare_history(self.history_path):
            try:
                self._readline.read_history_file(str(self.history_path))
            except OSError as exc:
                logger.debug("Could not read history %s: %s", self.history_path, exc)
        self._readline.set_completer_delims(" \t\n")
        self._readline.set_completer(self._complete)
        self._readline.parse_and_bind("tab: complete")

    def get_line(self) -> str:
        return input(self.prompt)

    def teardown(self) -> None:
        self._readline.write_history_file(str(self.history_path))


class PlainCLI(BaseCLI):
    """input() only."""

    def get_line(self) -> str:
        return input(self.prompt)


def make_cli(engine: AutocompleteEngine, prompt: str, history_path: Path) -> BaseCLI:
    """Build the best frontend the running terminal supports."""
    try:
        return PromptToolkitCLI(engine, prompt, history_path)
    except Exception as exc:
        # prompt_toolkit refuses some consoles (no tty, unsupported Windows host)
        logger.debug("prompt_toolkit frontend unavailable: %s", exc)
    try:
        return ReadlineCLI(engine, prompt, history_path)
    except ImportError:
        logger.debug("readline frontend unavailable")
    return PlainCLI(prompt)
