from __future__ import annotations

import io
import logging as py_logging
from pathlib import Path

import pytest

import termcanvas.logging as tc_logging
from termcanvas import cli


@pytest.fixture(autouse=True)
def _reset_termcanvas_logger():
    yield
    logger = py_logging.getLogger(tc_logging.LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("debug", "DEBUG"), (" Info ", "INFO"), ("warning", "WARN"), ("WARN", "WARN")],
)
def test_normalize_level_accepts_cli_spellings(raw: str, expected: str) -> None:
    assert tc_logging.normalize_level(raw) == expected


def test_normalize_level_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        tc_logging.normalize_level("TRACE")


def test_log_path_follows_xdg_config_home(tmp_path: Path) -> None:
    path = tc_logging.default_log_path({"XDG_CONFIG_HOME": str(tmp_path)})

    assert path == tmp_path / "termcanvas" / "logs" / "termcanvas.log"


def test_relative_xdg_config_home_is_ignored() -> None:
    path = tc_logging.default_log_path({"XDG_CONFIG_HOME": "relative/dir"})

    assert path.is_absolute()
    assert path.parts[-3:] == ("termcanvas", "logs", "termcanvas.log")


def test_adapter_messages_are_emitted_as_key_value_lines() -> None:
    stream = io.StringIO()
    tc_logging.configure_logging("INFO", stream)

    py_logging.getLogger("termcanvas.terminal.backends.base").info(
        "spawn reused kind=%s handle=%s", "tmux", "%5"
    )

    line = stream.getvalue().strip()
    assert "level=INFO" in line
    assert "logger=termcanvas.terminal.backends.base" in line
    assert line.endswith("spawn reused kind=tmux handle=%5")


def test_console_level_filters_but_file_keeps_debug(tmp_path: Path) -> None:
    stream = io.StringIO()
    log_file = tmp_path / "logs" / "termcanvas.log"
    tc_logging.configure_logging("ERROR", stream, log_file=log_file)

    py_logging.getLogger("termcanvas.terminal.registry").debug("registry clear kind=%s", "kitty")
    for handler in py_logging.getLogger(tc_logging.LOGGER_NAME).handlers:
        handler.flush()

    assert stream.getvalue() == ""
    assert "registry clear kind=kitty" in log_file.read_text(encoding="utf-8")


def test_unwritable_log_file_leaves_console_logging(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    logger = tc_logging.configure_logging("INFO", log_file=blocker / "termcanvas.log")

    assert [type(handler) for handler in logger.handlers] == [py_logging.StreamHandler]
    assert logger.propagate is False


def test_cli_writes_command_trace_to_requested_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "cli.log"

    code = cli.main(["--log-file", str(log_file), "env"], environ={})

    assert code == 0
    assert "Starting command=env" in log_file.read_text(encoding="utf-8")
