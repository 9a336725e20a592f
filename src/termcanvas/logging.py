"""Logging setup for the ``termcanvas`` logger tree.

Messages are written as ``event key=value`` pairs; the formatter adds the
level and logger name in the same shape so a log line greps the same way
whether it came from the CLI or a backend adapter.
"""

from __future__ import annotations

import logging as py_logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

LOGGER_NAME = "termcanvas"
LEVEL_NAMES = ("DEBUG", "INFO", "WARN", "ERROR")
LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
LOG_FORMAT = "%(asctime)s level=%(levelname)s logger=%(name)s %(message)s"
_LOG_RELATIVE_PATH = Path("termcanvas") / "logs" / "termcanvas.log"


def normalize_level(value: str) -> str:
    """Map a user-supplied level name onto one of ``LEVEL_NAMES``.

    ``WARNING`` is accepted as an alias of ``WARN``; anything else unknown
    raises ``ValueError``.
    """
    normalized = value.strip().upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in LOG_LEVELS:
        raise ValueError(f"unknown log level: {value}")
    return normalized


def default_log_path(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    config_home = env.get("XDG_CONFIG_HOME", "").strip()
    if config_home and Path(config_home).is_absolute():
        return Path(config_home) / _LOG_RELATIVE_PATH
    try:
        return Path("~/.config").expanduser() / _LOG_RELATIVE_PATH
    except RuntimeError:
        # No resolvable home directory.
        return (Path.cwd() / ".termcanvas" / "logs" / "termcanvas.log").resolve()


def configure_logging(
    level: str = "WARN",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    try:
        resolved = LOG_LEVELS[normalize_level(level)]
    except ValueError:
        resolved = py_logging.WARNING

    logger = py_logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)
    for stale in logger.handlers:
        stale.close()
    logger.handlers.clear()
    logger.propagate = False
    formatter = py_logging.Formatter(LOG_FORMAT)

    handler = py_logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file).expanduser().resolve()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = py_logging.FileHandler(log_path, encoding="utf-8")
        except OSError as exc:
            logger.debug("logging file-unavailable path=%s error=%s", log_path, exc)
        else:
            # The file keeps DEBUG detail regardless of the console level.
            logger.setLevel(py_logging.DEBUG)
            file_handler.setLevel(py_logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
