"""Kitty backend: remote-control splits when reachable, plain new window otherwise."""

from __future__ import annotations

import json
import logging as py_logging
from typing import Any

from termcanvas.terminal.backends.base import INTERRUPT, BackendAdapter
from termcanvas.terminal.models import SpawnResult, TerminalKind

logger = py_logging.getLogger(__name__)


def window_ids(payload: str) -> set[str]:
    """Collect window ids from ``kitty @ ls`` output (OS windows → tabs → windows)."""
    try:
        os_windows = json.loads(payload or "[]")
    except json.JSONDecodeError:
        logger.debug("kitty ls-unparseable")
        return set()
    found: set[str] = set()
    if not isinstance(os_windows, list):
        return found
    for os_window in os_windows:
        if not isinstance(os_window, dict):
            continue
        for tab in os_window.get("tabs") or []:
            if not isinstance(tab, dict):
                continue
            for window in tab.get("windows") or []:
                if isinstance(window, dict) and "id" in window:
                    found.add(str(window["id"]))
    return found


class KittyAdapter(BackendAdapter):
    kind = TerminalKind.KITTY

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.remote_control = False
        self._live_ids: set[str] = set()

    async def resolve_handle(self) -> str:
        listing = await self.run(
            "kitty", "@", "ls", timeout=self.settings.remote_probe_timeout_ms / 1000
        )
        self.remote_control = listing.ok
        if not self.remote_control:
            # Without remote control there is nothing to probe or drive.
            logger.debug("kitty remote-control unavailable")
            return ""
        self._live_ids = window_ids(listing.stdout)
        return await super().resolve_handle()

    async def probe(self, handle: str) -> bool:
        return handle in self._live_ids

    async def _send_text(self, handle: str, text: str) -> bool:
        result = await self.run("kitty", "@", "send-text", "--match", f"id:{handle}", text)
        return result.ok

    async def reuse(self, handle: str, command: str) -> bool:
        if not await self._send_text(handle, INTERRUPT):
            return False
        await self.settle()
        return await self._send_text(handle, f"clear && {command}\n")

    async def create(self, command: str) -> SpawnResult | None:
        title = f"--title={self.settings.window_title}"
        if not self.remote_control:
            pid = self.runner.spawn_detached(["kitty", title, "bash", "-c", command])
            if pid is None:
                return None
            return SpawnResult(method=self.method, pid=pid)

        result = await self.run(
            "kitty",
            "@",
            "launch",
            "--location=vsplit",
            "--cwd=current",
            title,
            "bash",
            "-c",
            command,
        )
        if not result.ok:
            return None
        window_id = result.stdout.strip()
        if window_id:
            self.registry.write(self.kind, window_id)
        return SpawnResult(method=self.method)
