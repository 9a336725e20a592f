"""Persisted session handles, one slot per terminal backend."""

from __future__ import annotations

import asyncio
import fcntl
import logging as py_logging
import os
import tempfile
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager, suppress
from pathlib import Path
from typing import Protocol

from termcanvas.config import DEFAULT_STATE_DIR
from termcanvas.terminal.models import TerminalKind

logger = py_logging.getLogger(__name__)

HANDLE_FILE_NAMES: dict[TerminalKind, str] = {
    TerminalKind.TMUX: "canvas-tmux-pane",
    TerminalKind.ITERM2: "canvas-iterm2-session",
    TerminalKind.APPLE_TERMINAL: "canvas-terminal-window",
    TerminalKind.WEZTERM: "canvas-wezterm-pane",
    TerminalKind.KITTY: "canvas-kitty-window",
    TerminalKind.ALACRITTY: "canvas-alacritty-pid",
    TerminalKind.VSCODE: "canvas-vscode-pid",
    TerminalKind.GHOSTTY: "canvas-ghostty-pid",
}

LOCK_POLL_INTERVAL = 0.02


class SessionStore(Protocol):
    def get(self, key: str) -> str: ...

    def set(self, key: str, value: str) -> None: ...

    def lock(self, key: str) -> AbstractAsyncContextManager[None]: ...


class MemorySessionStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    def get(self, key: str) -> str:
        return self.values.get(key, "")

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
        self.writes.append((key, value))

    @asynccontextmanager
    async def lock(self, key: str) -> AsyncIterator[None]:
        del key
        yield


class FileSessionStore:
    """One plaintext file per key inside a shared directory.

    Writes go through a temp file and ``os.replace`` so readers never observe
    a half-written handle. ``lock`` takes an exclusive ``flock`` on a sibling
    ``.lock`` file, serialising invocations that target the same backend. The
    lock is polled with ``LOCK_NB`` so a contended slot never blocks the event loop.
    """

    def __init__(
        self,
        directory: str | Path = DEFAULT_STATE_DIR,
        *,
        poll_interval: float = LOCK_POLL_INTERVAL,
    ) -> None:
        self.directory = Path(directory)
        self.poll_interval = poll_interval

    def path_for(self, key: str) -> Path:
        return self.directory / key

    def get(self, key: str) -> str:
        try:
            return self.path_for(key).read_text(encoding="utf-8").strip()
        except (FileNotFoundError, IsADirectoryError):
            return ""
        except (OSError, UnicodeDecodeError):
            logger.debug("registry read-failed key=%s", key, exc_info=True)
            return ""

    def set(self, key: str, value: str) -> None:
        target = self.path_for(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(prefix=f".{key}.", dir=target.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(temp_name, target)
        except BaseException:
            with suppress(OSError):
                os.unlink(temp_name)
            raise

    @asynccontextmanager
    async def lock(self, key: str) -> AsyncIterator[None]:
        lock_path = self.path_for(f"{key}.lock")
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        with lock_path.open("a") as handle:
            await _acquire(handle.fileno(), key, self.poll_interval)
            try:
                yield
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


class SessionRegistry:
    def __init__(self, store: SessionStore | None = None) -> None:
        self.store: SessionStore = store if store is not None else FileSessionStore()

    @staticmethod
    def key_for(kind: TerminalKind) -> str:
        try:
            return HANDLE_FILE_NAMES[kind]
        except KeyError:
            raise ValueError(f"No session slot for terminal kind: {kind.value}") from None

    def read(self, kind: TerminalKind) -> str:
        return self.store.get(self.key_for(kind)).strip()

    def write(self, kind: TerminalKind, identifier: str) -> None:
        logger.debug("registry write kind=%s handle=%s", kind.value, identifier)
        self.store.set(self.key_for(kind), identifier.strip())

    def clear(self, kind: TerminalKind) -> None:
        logger.debug("registry clear kind=%s", kind.value)
        self.store.set(self.key_for(kind), "")

    @asynccontextmanager
    async def hold(self, kind: TerminalKind) -> AsyncIterator[None]:
        async with self.store.lock(self.key_for(kind)):
            yield


async def _acquire(fd: int, key: str, poll_interval: float) -> None:
    waited = False
    while True:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            if not waited:
                logger.debug("registry lock-contended key=%s", key)
                waited = True
            await asyncio.sleep(poll_interval)
        else:
            return
