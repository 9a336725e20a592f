"""Apple Terminal backend: one dedicated window, addressed by numeric window id."""

from __future__ import annotations

from termcanvas.terminal.backends.applescript import escape_applescript, osascript
from termcanvas.terminal.backends.base import BackendAdapter
from termcanvas.terminal.models import SpawnResult, TerminalKind

_PROBE = """
tell application "Terminal"
    repeat with w in windows
        if id of w is {window_id} then
            return "exists"
        end if
    end repeat
    return "not_found"
end tell
"""

_REUSE = """
tell application "Terminal"
    repeat with w in windows
        if id of w is {window_id} then
            set frontmost of w to true
            do script "clear && {command}" in w
            return "success"
        end if
    end repeat
    return "not_found"
end tell
"""

_CREATE = """
tell application "Terminal"
    do script "{command}"
    set canvasWindow to front window
    set windowId to id of canvasWindow
    tell application "Finder"
        set screenBounds to bounds of window of desktop
        set screenWidth to item 3 of screenBounds
        set screenHeight to item 4 of screenBounds
    end tell
    set bounds of canvasWindow to {{(screenWidth / 2), 0, screenWidth, screenHeight}}
    set custom title of canvasWindow to "{title}"
    return windowId
end tell
"""


def _window_id(handle: str) -> int | None:
    try:
        return int(handle.strip(), 10)
    except ValueError:
        return None


class AppleTerminalAdapter(BackendAdapter):
    kind = TerminalKind.APPLE_TERMINAL

    async def probe(self, handle: str) -> bool:
        window_id = _window_id(handle)
        if window_id is None:
            return False
        result = await self.run(*osascript(_PROBE.format(window_id=window_id)))
        return result.ok and result.stdout.strip() == "exists"

    async def reuse(self, handle: str, command: str) -> bool:
        window_id = _window_id(handle)
        if window_id is None:
            return False
        script = _REUSE.format(window_id=window_id, command=escape_applescript(command))
        result = await self.run(*osascript(script))
        return result.ok and result.stdout.strip() == "success"

    async def create(self, command: str) -> SpawnResult | None:
        script = _CREATE.format(
            command=escape_applescript(command),
            title=escape_applescript(self.settings.window_title),
        )
        result = await self.run(*osascript(script))
        window_id = _window_id(result.stdout)
        if not result.ok or window_id is None:
            return None
        self.registry.write(self.kind, str(window_id))
        return SpawnResult(method=self.method)
