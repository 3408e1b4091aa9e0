from __future__ import annotations

import io

import pytest

from hubuum_shell.errors import FilterError
from hubuum_shell.interface import OutputFilter, OutputSink
from hubuum_shell.ui import format_table, strip_ansi


def test_append_line_splits_multiline_text(sink: OutputSink) -> None:
    sink.append_line("one\ntwo")
    sink.append_line("")
    assert sink.lines == ["one", "two", ""]


def test_table_renders_none_and_bools(sink: OutputSink) -> None:
    sink.append_table([[1, None, True]], headers=["ID", "Email", "Active"])
    text = "\n".join(sink.lines)
    assert "| -     |" in text
    assert "true" in text
    assert sink.lines[0].startswith("-")


def test_format_table_without_rows_or_headers() -> None:
    assert format_table([]) == ""


def test_filter_keeps_matching_lines(sink: OutputSink) -> None:
    sink.append_line("Host\nRoom\nHostGroup")
    sink.output_filter = OutputFilter("^Host")
    assert sink.visible_lines() == ["Host", "HostGroup"]
    sink.output_filter = OutputFilter("^Host", invert=True)
    assert sink.visible_lines() == ["Room"]


def test_invalid_filter_raises_filter_error() -> None:
    with pytest.raises(FilterError):
        OutputFilter("(")


def test_flush_routes_streams_and_clears(sink: OutputSink) -> None:
    out, err = io.StringIO(), io.StringIO()
    sink.append_line("result")
    sink.add_warning("careful")
    sink.add_error("broken")
    sink.flush(out, err)

    assert out.getvalue() == "result\n"
    assert strip_ansi(err.getvalue()).splitlines() == ["careful", "broken"]
    assert sink.is_empty()


def test_flush_applies_filter_to_output_only(sink: OutputSink) -> None:
    out, err = io.StringIO(), io.StringIO()
    sink.output_filter = OutputFilter("keep")
    sink.append_line("keep me\ndrop me")
    sink.add_error("error is never filtered")
    sink.flush(out, err)
    assert out.getvalue() == "keep me\n"
    assert "error is never filtered" in strip_ansi(err.getvalue())
