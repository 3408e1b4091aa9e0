from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from hubuum_shell.ui import colorize, init_logger, log_timing


def _close(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_file_logging_strips_escapes(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)
    logfile = tmp_path / "logs" / "shell.log"
    logger = init_logger("hubuum_shell.test_file", level=logging.DEBUG, logfile=logfile)
    try:
        logger.warning("state %s", colorize("red text", "red"))
        for handler in logger.handlers:
            handler.flush()
        content = logfile.read_text(encoding="utf-8")
    finally:
        _close(logger)
    assert "WARNING" in content
    assert "state red text" in content
    assert "\x1b[" not in content


def test_repeated_init_does_not_stack_handlers(tmp_path: Path) -> None:
    logfile = tmp_path / "shell.log"
    init_logger("hubuum_shell.test_twice", logfile=logfile)
    logger = init_logger("hubuum_shell.test_twice", logfile=logfile)
    try:
        assert sum(isinstance(h, RotatingFileHandler) for h in logger.handlers) == 1
    finally:
        _close(logger)


def test_without_logfile_nothing_reaches_the_console(capsys) -> None:
    logger = init_logger("hubuum_shell.test_quiet")
    logger.error("hidden")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
    _close(logger)


def test_log_timing_logs_even_when_the_block_raises(caplog) -> None:
    logger = logging.getLogger("hubuum_shell.test_timing")
    logger.propagate = True
    with caplog.at_level(logging.DEBUG, logger="hubuum_shell.test_timing"):
        try:
            with log_timing(logger, "dispatch 'x'"):
                raise ValueError("boom")
        except ValueError:
            pass
    assert any("dispatch 'x' took" in r.getMessage() for r in caplog.records)
