"""Alacritty backend: a detached new window per spawn, tracked by pid."""

from __future__ import annotations

from termcanvas.terminal.backends.applescript import osascript, right_half_script
from termcanvas.terminal.backends.base import DetachedWindowAdapter
from termcanvas.terminal.models import SpawnResult, TerminalKind


class AlacrittyAdapter(DetachedWindowAdapter):
    kind = TerminalKind.ALACRITTY

    async def create(self, command: str) -> SpawnResult | None:
        pid = self.runner.spawn_detached(
            ["alacritty", "--title", self.settings.window_title, "-e", "/bin/sh", "-c", command]
        )
        if pid is None:
            return None
        self.remember_pid(pid)
        if self.runner.is_macos:
            await self.runner.sleep(self.settings.window_position_delay_ms / 1000)
            self.runner.spawn_detached(osascript(right_half_script("Alacritty")))
        return SpawnResult(method=self.method, pid=pid)
