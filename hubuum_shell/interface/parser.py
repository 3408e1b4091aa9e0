#!/usr/bin/env python3
# hubuum_shell/interface/parser.py
from __future__ import annotations

"""
Input parsing helpers for the shell.

Responsibilities:
- Split the trailing output filter (`| pattern`, `| !pattern`) off a line.
- Tokenize a command line into shell-like words.
- Split the words after the scope path into options and positionals.
- Dereference option values given as file:// paths or http(s):// URLs.
"""

import logging
import shlex
import urllib.error
import urllib.request
from pathlib import Path
from typing import Callable, Collection, Iterator, Mapping, Optional, Sequence

from hubuum_shell.client import USER_AGENT
from hubuum_shell.commands import HELP_KEYS, ParsedInvocation
from hubuum_shell.errors import (
    AppError,
    CommandNotFound,
    DuplicateOption,
    InvalidOption,
    NetworkError,
    OptionBeforeCommand,
    ParseError,
    ResolveError,
    ResolveIOError,
)
from hubuum_shell.interface.output import OutputFilter

logger = logging.getLogger(__name__)

HTTP_PREFIXES: tuple[str, ...] = ("http://", "https://")
FILE_PREFIX = "file://"


def lex(line: str) -> list[str]:
    """Split a raw command line into tokens using POSIX rules."""
    try:
        return shlex.split(line, posix=True)
    except ValueError as exc:
        # shlex reports unbalanced quotes and trailing backslashes this way
        raise ParseError(str(exc)) from None


def extract_filter(line: str) -> tuple[str, Optional[OutputFilter]]:
    """
    Split `line` at the first '|' outside quotes.

    Returns (command part, filter). A '!' right after the bar inverts the
    filter; an empty pattern means no filter.
    """
    quote: str | None = None
    escaped = False
    for index, char in enumerate(line):
        if escaped:
            escaped = False
        elif char == "\\" and quote != "'":
            escaped = True
        elif quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "|":
            pattern = line[index + 1:].strip()
            invert = pattern.startswith("!")
            if invert:
                pattern = pattern[1:].strip()
            command_part = line[:index].strip()
            if not pattern:
                return command_part, None
            return command_part, OutputFilter(pattern, invert=invert)
    return line, None


def resolve_value(value: str, *, timeout: float | None = None) -> str:
    """
    Replace a dereference operator with the content it points to.

    - http:// or https://: body of a GET request, trailing whitespace trimmed
    - file://: content of the local file, trailing whitespace trimmed
    - anything else: returned unchanged
    """
    if value.startswith(HTTP_PREFIXES):
        logger.debug("Fetching option value from %s", value)
        request = urllib.request.Request(value, headers={"User-Agent": USER_AGENT})
        try:
            with urllib.request.urlopen(request, timeout=timeout) as response:
                charset = response.headers.get_content_charset() or "utf-8"
                body = response.read().decode(charset, errors="replace")
        except urllib.error.HTTPError as exc:
            raise NetworkError(value, f"status {exc.code} {exc.reason}") from None
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise NetworkError(value, getattr(exc, "reason", exc)) from None
        return body.rstrip()

    if value.startswith(FILE_PREFIX):
        path = Path(value[len(FILE_PREFIX):]).expanduser()
        logger.debug("Reading option value from %s", path)
        try:
            return path.read_text(encoding="utf-8").rstrip()
        except (OSError, UnicodeDecodeError) as exc:
            raise ResolveIOError(value, exc) from None

    return value


def tokenize(
    words: Sequence[str],
    command_name: str,
    *,
    aliases: Mapping[str, str] | None = None,
    flags: Collection[str] = ("help", "h"),
    resolver: Callable[[str], str] = resolve_value,
) -> ParsedInvocation:
    """
    Split lexed `words` into scopes, command, options and positionals.

    - Words before `command_name` are scope path elements; an option there
      raises OptionBeforeCommand.
    - After the command, '-x'/'--long' words are option keys, mapped through
      `aliases` to their canonical name. The following word is the value;
      keys listed in `flags` only take it when it is not itself an option.
    - Every option value passes through `resolver` before it is stored.
    - Bare words before the first option are positionals; bare words after
      options have started are rejected.

    Errors after the command word (duplicates, empty keys, late positionals,
    unresolvable values) are raised once the whole line is read, and only
    when no help key was given: help always wins.
    """
    scopes: list[str] = []
    command: str | None = None
    options: dict[str, str] = {}
    positionals: list[str] = []
    alias_map = aliases or {}

    iterator: Iterator[str] = iter(words)
    pending: str | None = None
    deferred: AppError | None = None
    in_options = False

    def _defer(exc: AppError) -> None:
        nonlocal deferred
        if deferred is None:
            deferred = exc

    def _next_word() -> str | None:
        nonlocal pending
        if pending is not None:
            word, pending = pending, None
            return word
        return next(iterator, None)

    while (word := _next_word()) is not None:
        if command is None:
            if word == command_name:
                command = word
            elif word.startswith("-"):
                raise OptionBeforeCommand(word)
            else:
                scopes.append(word)
            continue

        if not word.startswith("-"):
            if in_options:
                _defer(InvalidOption(word, "positional arguments must precede options"))
            else:
                positionals.append(word)
            continue

        in_options = True
        key = word[2:] if word.startswith("--") else word[1:]
        key = alias_map.get(key, key)

        raw_value = _next_word()
        if raw_value is None:
            raw_value = ""
        elif key in flags and raw_value.startswith("-"):
            # A flag followed by another option: give that word back.
            pending, raw_value = raw_value, ""

        if not key:
            _defer(InvalidOption(word, "empty option name"))
        elif key in options:
            _defer(DuplicateOption(key))
        else:
            try:
                options[key] = resolver(raw_value)
            except ResolveError as exc:
                options[key] = raw_value
                _defer(exc)

    if command is None:
        raise CommandNotFound(command_name)
    if deferred is not None and not any(key in options for key in HELP_KEYS):
        raise deferred

    return ParsedInvocation(
        scopes=tuple(scopes),
        command=command,
        options=options,
        positionals=positionals,
    )
