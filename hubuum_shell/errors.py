#!/usr/bin/env python3
# hubuum_shell/errors.py
from __future__ import annotations

"""
Error taxonomy for the shell.

Every per-line failure is an AppError subclass. The REPL driver catches them
at the line boundary and turns them into buffered user messages; `level`
decides whether the message is shown as a warning or an error.
"""

from typing import Sequence


class AppError(Exception):
    """Base class for all errors the shell reports to the user."""

    level = "error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message or type(self).__name__


class Quiet(AppError):
    """A message was already emitted; report nothing more."""

    level = "quiet"


class ParseError(AppError):
    """Malformed quoting or escaping in the input line."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Error parsing input: {detail}")
        self.detail = detail


class CommandNotFound(AppError):
    level = "warning"

    def __init__(self, token: str, hint: str = "") -> None:
        message = f"Command not found: {token}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)
        self.token = token
        self.hint = hint


class CommandExecutionError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to execute command: {detail}")


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

class TokenizeError(AppError):
    level = "warning"


class OptionBeforeCommand(TokenizeError):
    def __init__(self, option: str) -> None:
        super().__init__(f"Option '{option}' given before the command name")
        self.option = option


class DuplicateOption(TokenizeError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Duplicate option: {key}")
        self.key = key


class InvalidOption(TokenizeError):
    def __init__(self, option: str, reason: str = "") -> None:
        message = f"Invalid option: {option!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.option = option


# ---------------------------------------------------------------------------
# Value dereferencing
# ---------------------------------------------------------------------------

class ResolveError(AppError):
    level = "warning"
    kind = "Resolve"

    def __init__(self, value: str, cause: object) -> None:
        super().__init__(f"{self.kind} error resolving {value!r}: {cause}")
        self.value = value
        self.cause = cause


class NetworkError(ResolveError):
    kind = "HTTP"


class ResolveIOError(ResolveError):
    kind = "IO"


# ---------------------------------------------------------------------------
# Schema hydration
# ---------------------------------------------------------------------------

class ValidationError(AppError):
    level = "warning"


class MissingOptions(ValidationError):
    def __init__(self, names: Sequence[str]) -> None:
        super().__init__(f"Missing required options: {', '.join(names)}")
        self.names = list(names)


class InvalidOptionValue(ValidationError):
    def __init__(self, name: str, value: str, kind: str) -> None:
        super().__init__(f"Option '{name}' expects {kind}, got {value!r}")
        self.name = name
        self.value = value
        self.kind = kind


class PopulatedFlagOptions(ValidationError):
    def __init__(self, names: Sequence[str]) -> None:
        super().__init__(
            f"Boolean flag options given a value: {', '.join(names)}")
        self.names = list(names)


class TooManyPositionals(ValidationError):
    def __init__(self, extra: Sequence[str]) -> None:
        super().__init__(f"Too many positional arguments: {' '.join(extra)}")
        self.extra = list(extra)


# ---------------------------------------------------------------------------
# Remote API
# ---------------------------------------------------------------------------

class ApiError(AppError):
    def __init__(self, status: int | None, message: str) -> None:
        if status is None:
            text = f"API Error: {message}"
        else:
            text = f"API Error: Status {status} - {message}"
        super().__init__(text)
        self.status = status
        self.detail = message


class EntityNotFound(AppError):
    level = "warning"

    def __init__(self, what: str) -> None:
        super().__init__(f"Entity not found: {what}")


class MultipleEntitiesFound(AppError):
    level = "warning"

    def __init__(self, what: str, count: int) -> None:
        super().__init__(f"Multiple entities found ({count}): {what}")
        self.count = count


# ---------------------------------------------------------------------------
# Output / configuration
# ---------------------------------------------------------------------------

class FilterError(AppError):
    level = "warning"

    def __init__(self, pattern: str, cause: object) -> None:
        super().__init__(f"Invalid output filter {pattern!r}: {cause}")
        self.pattern = pattern


class ConfigError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Error reading configuration: {detail}")
