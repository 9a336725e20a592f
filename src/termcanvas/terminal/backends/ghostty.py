"""Ghostty backend: new window per spawn, launched differently on macOS."""

from __future__ import annotations

import logging as py_logging

from termcanvas.terminal.backends.applescript import osascript, right_half_script
from termcanvas.terminal.backends.base import DetachedWindowAdapter, parse_pid
from termcanvas.terminal.models import SpawnResult, TerminalKind

logger = py_logging.getLogger(__name__)


class GhosttyAdapter(DetachedWindowAdapter):
    kind = TerminalKind.GHOSTTY

    async def create(self, command: str) -> SpawnResult | None:
        if self.runner.is_macos:
            return await self._create_macos(command)
        pid = self.runner.spawn_detached(["ghostty", "-e", "/bin/sh", "-c", command])
        if pid is None:
            return None
        self.remember_pid(pid)
        return SpawnResult(method=self.method, pid=pid)

    async def _create_macos(self, command: str) -> SpawnResult | None:
        # The ghostty CLI cannot open the emulator on macOS; go through `open`.
        launcher_pid = self.runner.spawn_detached(
            ["open", "-na", "Ghostty.app", "--args", "-e", "/bin/sh", "-c", command]
        )
        if launcher_pid is None:
            return None

        # `open` exits immediately, so its pid is not the terminal's. Take the
        # newest ghostty process once the window has had time to appear.
        await self.runner.sleep(self.settings.ghostty_pid_delay_ms / 1000)
        newest = await self.run("pgrep", "-n", "ghostty")
        pid = parse_pid(newest.stdout) if newest.ok else None
        if pid is not None:
            self.remember_pid(pid)
        else:
            logger.warning("ghostty pid-unresolved launcher_pid=%s", launcher_pid)

        self.runner.spawn_detached(osascript(right_half_script("ghostty")))
        return SpawnResult(method=self.method, pid=pid)
