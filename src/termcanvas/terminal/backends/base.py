"""Shared verify → reuse-or-create lifecycle for terminal backends."""

from __future__ import annotations

import logging as py_logging
from abc import ABC, abstractmethod
from typing import ClassVar

from termcanvas.config import CanvasSettings
from termcanvas.terminal.models import SpawnResult, TerminalKind
from termcanvas.terminal.process import CommandResult, ProcessRunner
from termcanvas.terminal.registry import SessionRegistry

logger = py_logging.getLogger(__name__)

INTERRUPT = "\x03"


class BackendAdapter(ABC):
    """Drives one terminal product through probe, reuse and create.

    ``spawn`` reads the persisted handle, probes it, tries to reuse a live
    session and otherwise clears the handle and creates a new one. ``create``
    returns ``None`` on failure; the orchestrator turns that into an error.
    """

    kind: ClassVar[TerminalKind]

    def __init__(
        self,
        registry: SessionRegistry,
        runner: ProcessRunner,
        settings: CanvasSettings | None = None,
    ) -> None:
        self.registry = registry
        self.runner = runner
        self.settings = settings or CanvasSettings()

    @property
    def method(self) -> str:
        return self.kind.value

    async def spawn(self, command: str) -> SpawnResult | None:
        handle = await self.resolve_handle()
        if handle:
            if await self.reuse(handle, command):
                logger.info("spawn reused kind=%s handle=%s", self.kind.value, handle)
                return SpawnResult(method=self.method)
            logger.info("spawn reuse-failed kind=%s handle=%s", self.kind.value, handle)
            self.registry.clear(self.kind)

        result = await self.create(command)
        if result is None:
            logger.warning("spawn create-failed kind=%s", self.kind.value)
        else:
            logger.info("spawn created kind=%s pid=%s", self.kind.value, result.pid or "-")
        return result

    async def resolve_handle(self) -> str:
        handle = self.registry.read(self.kind)
        if not handle:
            return ""
        if await self.probe(handle):
            return handle
        logger.info("spawn probe-failed kind=%s handle=%s", self.kind.value, handle)
        self.registry.clear(self.kind)
        return ""

    @abstractmethod
    async def probe(self, handle: str) -> bool:
        """Return True when ``handle`` still names a live, controllable session."""

    @abstractmethod
    async def reuse(self, handle: str, command: str) -> bool:
        """Interrupt the live session and run ``command`` in it."""

    @abstractmethod
    async def create(self, command: str) -> SpawnResult | None:
        """Create a new session running ``command`` and persist its identifier."""

    async def settle(self) -> None:
        await self.runner.sleep(self.settings.settle_delay)

    async def run(self, *argv: str, timeout: float | None = None) -> CommandResult:
        return await self.runner.run(list(argv), timeout=timeout)


class DetachedWindowAdapter(BackendAdapter):
    """Backends with no reuse transport; the identity is a process id.

    A live process is terminated and a fresh window or process is spawned in
    its place. Spawned processes are never supervised.
    """

    async def probe(self, handle: str) -> bool:
        pid = parse_pid(handle)
        return pid is not None and self.runner.pid_alive(pid)

    async def reuse(self, handle: str, command: str) -> bool:
        del command
        pid = parse_pid(handle)
        if pid is not None:
            logger.debug("spawn terminate kind=%s pid=%s", self.kind.value, pid)
            self.runner.terminate(pid)
            await self.runner.sleep(self.settings.terminate_grace)
        return False

    def remember_pid(self, pid: int) -> None:
        self.registry.write(self.kind, str(pid))


def parse_pid(value: str) -> int | None:
    try:
        pid = int(value.strip(), 10)
    except ValueError:
        return None
    return pid if pid > 0 else None
