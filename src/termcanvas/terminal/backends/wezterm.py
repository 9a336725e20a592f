"""WezTerm backend: split panes and send-text through the wezterm CLI."""

from __future__ import annotations

import json
import logging as py_logging

from termcanvas.terminal.backends.base import INTERRUPT, BackendAdapter
from termcanvas.terminal.models import SpawnResult, TerminalKind

logger = py_logging.getLogger(__name__)


def _pane_ids(payload: str) -> set[str]:
    try:
        panes = json.loads(payload or "[]")
    except json.JSONDecodeError:
        logger.debug("wezterm list-unparseable")
        return set()
    if not isinstance(panes, list):
        return set()
    return {
        str(pane["pane_id"]) for pane in panes if isinstance(pane, dict) and "pane_id" in pane
    }


class WezTermAdapter(BackendAdapter):
    kind = TerminalKind.WEZTERM

    async def probe(self, handle: str) -> bool:
        result = await self.run("wezterm", "cli", "list", "--format", "json")
        return result.ok and handle in _pane_ids(result.stdout)

    async def _send_text(self, handle: str, text: str) -> bool:
        result = await self.run(
            "wezterm", "cli", "send-text", "--pane-id", handle, "--no-paste", text
        )
        return result.ok

    async def reuse(self, handle: str, command: str) -> bool:
        if not await self._send_text(handle, INTERRUPT):
            return False
        await self.settle()
        return await self._send_text(handle, f"clear && {command}\n")

    async def create(self, command: str) -> SpawnResult | None:
        result = await self.run(
            "wezterm",
            "cli",
            "split-pane",
            "--right",
            "--percent",
            str(self.settings.split_percent),
            "--",
            "bash",
            "-c",
            command,
        )
        if not result.ok:
            return None
        pane_id = result.stdout.strip()
        if pane_id:
            self.registry.write(self.kind, pane_id)
        return SpawnResult(method=self.method)
