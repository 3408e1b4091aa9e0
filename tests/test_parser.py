from __future__ import annotations

import io
import shlex
import urllib.error

import pytest

from hubuum_shell.errors import (
    CommandNotFound,
    DuplicateOption,
    InvalidOption,
    NetworkError,
    OptionBeforeCommand,
    ParseError,
    ResolveIOError,
)
from hubuum_shell.interface import parser
from hubuum_shell.interface.parser import extract_filter, lex, resolve_value, tokenize


def _identity(value: str) -> str:
    return value


# ---------------- lex ----------------

@pytest.mark.parametrize("line", [
    "class list",
    'class new -n "My Class" -d \'quoted text\'',
    "object new -D '{\"key\": \"val\"}'",
    "   ",
    "a\\ b c",
])
def test_lex_rejoin_is_idempotent(line: str) -> None:
    words = lex(line)
    assert lex(shlex.join(words)) == words


def test_lex_quotes_group_words() -> None:
    assert lex('class new -n "My Class"') == ["class", "new", "-n", "My Class"]


def test_lex_empty_line() -> None:
    assert lex("") == []
    assert lex("   \t ") == []


def test_lex_unbalanced_quote_is_parse_error() -> None:
    with pytest.raises(ParseError) as excinfo:
        lex('class new -n "oops')
    assert excinfo.value.level == "error"


# ---------------- extract_filter ----------------

def test_extract_filter_inverted() -> None:
    command_part, output_filter = extract_filter("list | !error")
    assert command_part == "list"
    assert output_filter is not None
    assert output_filter.pattern == "error"
    assert output_filter.invert is True
    assert output_filter.keep("all good")
    assert not output_filter.keep("an error happened")


def test_extract_filter_plain() -> None:
    command_part, output_filter = extract_filter("class list | Host")
    assert command_part == "class list"
    assert output_filter.pattern == "Host"
    assert output_filter.invert is False


def test_extract_filter_ignores_quoted_bar() -> None:
    line = "class new -d 'a | b'"
    assert extract_filter(line) == (line, None)


def test_extract_filter_empty_pattern_means_no_filter() -> None:
    assert extract_filter("class list |") == ("class list", None)


def test_extract_filter_without_bar() -> None:
    assert extract_filter("class list") == ("class list", None)


# ---------------- tokenize ----------------

def test_tokenize_splits_scopes_options_positionals() -> None:
    inv = tokenize(["ns", "list", "foo", "-n", "x", "--limit", "3"], "list", resolver=_identity)
    assert inv.scopes == ("ns",)
    assert inv.command == "list"
    assert inv.positionals == ["foo"]
    assert inv.options == {"n": "x", "limit": "3"}


def test_tokenize_is_deterministic() -> None:
    words = ["ns", "list", "-n", "x", "--verbose"]
    first = tokenize(words, "list", resolver=_identity)
    second = tokenize(words, "list", resolver=_identity)
    assert first == second


def test_tokenize_canonicalizes_aliases() -> None:
    inv = tokenize(["list", "-n", "x"], "list", aliases={"n": "name"}, resolver=_identity)
    assert inv.options == {"name": "x"}


def test_tokenize_rejects_duplicate_keys() -> None:
    with pytest.raises(DuplicateOption):
        tokenize(["list", "--name", "a", "--name", "b"], "list", resolver=_identity)


def test_tokenize_rejects_duplicates_across_aliases() -> None:
    with pytest.raises(DuplicateOption) as excinfo:
        tokenize(["list", "-n", "a", "--name", "b"], "list",
                 aliases={"n": "name", "name": "name"}, resolver=_identity)
    assert excinfo.value.key == "name"


@pytest.mark.parametrize("word", ["-", "--"])
def test_tokenize_rejects_zero_length_key(word: str) -> None:
    with pytest.raises(InvalidOption):
        tokenize(["list", word, "x"], "list", resolver=_identity)


def test_tokenize_option_before_command() -> None:
    with pytest.raises(OptionBeforeCommand):
        tokenize(["ns", "-n", "x", "list"], "list", resolver=_identity)


def test_tokenize_positional_after_option_is_rejected() -> None:
    with pytest.raises(InvalidOption):
        tokenize(["list", "-n", "x", "stray"], "list", resolver=_identity)


def test_tokenize_missing_command_word() -> None:
    with pytest.raises(CommandNotFound):
        tokenize(["ns"], "list", resolver=_identity)


def test_tokenize_trailing_option_gets_empty_value() -> None:
    inv = tokenize(["list", "--name"], "list", resolver=_identity)
    assert inv.options == {"name": ""}


def test_tokenize_flag_does_not_swallow_next_option() -> None:
    inv = tokenize(["list", "--help", "-n", "x"], "list", resolver=_identity)
    assert inv.options == {"help": "", "n": "x"}
    assert inv.wants_help()


def test_tokenize_value_may_look_like_an_option() -> None:
    inv = tokenize(["list", "--name", "-x"], "list", resolver=_identity)
    assert inv.options == {"name": "-x"}


def test_tokenize_passes_values_through_resolver() -> None:
    inv = tokenize(["list", "-n", "x"], "list", resolver=str.upper)
    assert inv.options == {"n": "X"}


# ---------------- resolve_value ----------------

def test_resolve_plain_value_unchanged() -> None:
    assert resolve_value("plain") == "plain"
    assert resolve_value("") == ""


def test_resolve_file_trims_trailing_whitespace(tmp_path) -> None:
    path = tmp_path / "schema.json"
    path.write_text('{"type": "object"}\n\n  \n', encoding="utf-8")
    assert resolve_value(f"file://{path}") == '{"type": "object"}'


def test_resolve_file_keeps_leading_whitespace(tmp_path) -> None:
    path = tmp_path / "text.txt"
    path.write_text("  indented\n", encoding="utf-8")
    assert resolve_value(f"file://{path}") == "  indented"


def test_resolve_missing_file_is_io_error(tmp_path) -> None:
    with pytest.raises(ResolveIOError) as excinfo:
        resolve_value(f"file://{tmp_path / 'nope.txt'}")
    assert excinfo.value.kind == "IO"
    assert excinfo.value.level == "warning"


class _FakeResponse(io.BytesIO):
    class _Headers:
        def get_content_charset(self):
            return "utf-8"

    headers = _Headers()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def test_resolve_http_body_trimmed(monkeypatch) -> None:
    seen = {}

    def fake_urlopen(request, timeout=None):
        seen["url"] = request.full_url
        seen["timeout"] = timeout
        return _FakeResponse(b"remote body \n\n")

    monkeypatch.setattr(parser.urllib.request, "urlopen", fake_urlopen)
    assert resolve_value("https://example.invalid/data", timeout=5) == "remote body"
    assert seen == {"url": "https://example.invalid/data", "timeout": 5}


def test_resolve_http_error_status(monkeypatch) -> None:
    def fake_urlopen(request, timeout=None):
        raise urllib.error.HTTPError(request.full_url, 404, "Not Found", None, None)

    monkeypatch.setattr(parser.urllib.request, "urlopen", fake_urlopen)
    with pytest.raises(NetworkError) as excinfo:
        resolve_value("http://example.invalid/missing")
    assert "404" in str(excinfo.value)
    assert excinfo.value.kind == "HTTP"


def test_resolve_http_transport_failure(monkeypatch) -> None:
    def fake_urlopen(request, timeout=None):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(parser.urllib.request, "urlopen", fake_urlopen)
    with pytest.raises(NetworkError, match="connection refused"):
        resolve_value("http://example.invalid/")


def test_tokenize_help_suppresses_duplicate_error() -> None:
    invocation = tokenize(["list", "-n", "a", "-n", "b", "-h"], "list",
                          aliases={"h": "help"}, resolver=_identity)
    assert invocation.wants_help()
    assert invocation.options["n"] == "a"


def test_tokenize_help_suppresses_resolve_error(tmp_path) -> None:
    missing = f"file://{tmp_path / 'absent.txt'}"
    invocation = tokenize(["list", "--help", "-n", missing], "list")
    assert invocation.wants_help()
    assert invocation.options["n"] == missing


def test_tokenize_resolve_error_without_help(tmp_path) -> None:
    with pytest.raises(ResolveIOError):
        tokenize(["list", "-n", f"file://{tmp_path / 'absent.txt'}"], "list")


def test_tokenize_reports_the_first_problem() -> None:
    with pytest.raises(InvalidOption, match="empty option name"):
        tokenize(["list", "-", "x", "stray", "-n", "a", "-n", "b"], "list", resolver=_identity)
