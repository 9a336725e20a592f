"""VS Code backend: the integrated terminal has no split API, so run a detached shell."""

from __future__ import annotations

from termcanvas.terminal.backends.base import DetachedWindowAdapter
from termcanvas.terminal.models import SpawnResult, TerminalKind

SPLIT_HINT = (
    "Started in new process. Use VS Code's split terminal (Cmd/Ctrl+Shift+5) "
    "to view side-by-side."
)


class VSCodeAdapter(DetachedWindowAdapter):
    kind = TerminalKind.VSCODE

    async def create(self, command: str) -> SpawnResult | None:
        pid = self.runner.spawn_detached(["bash", "-c", command])
        if pid is None:
            return None
        self.remember_pid(pid)
        return SpawnResult(method=self.method, pid=pid, hint=SPLIT_HINT)
