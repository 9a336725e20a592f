"""tmux backend: split the current window and drive the pane with send-keys."""

from __future__ import annotations

from termcanvas.terminal.backends.base import BackendAdapter
from termcanvas.terminal.models import SpawnResult, TerminalKind


class TmuxAdapter(BackendAdapter):
    kind = TerminalKind.TMUX

    async def probe(self, handle: str) -> bool:
        result = await self.run("tmux", "display-message", "-t", handle, "-p", "#{pane_id}")
        return result.ok and result.stdout.strip() == handle

    async def reuse(self, handle: str, command: str) -> bool:
        interrupt = await self.run("tmux", "send-keys", "-t", handle, "C-c")
        if not interrupt.ok:
            return False
        await self.settle()
        result = await self.run("tmux", "send-keys", "-t", handle, f"clear && {command}", "Enter")
        return result.ok

    async def create(self, command: str) -> SpawnResult | None:
        result = await self.run(
            "tmux",
            "split-window",
            "-h",
            "-l",
            f"{self.settings.split_percent}%",
            "-P",
            "-F",
            "#{pane_id}",
            command,
        )
        if not result.ok:
            return None
        pane_id = result.stdout.strip()
        if pane_id:
            self.registry.write(self.kind, pane_id)
        return SpawnResult(method=self.method)
