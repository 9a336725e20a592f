"""iTerm2 backend: AppleScript split panes addressed by session unique ID."""

from __future__ import annotations

from termcanvas.terminal.backends.applescript import escape_applescript, osascript
from termcanvas.terminal.backends.base import BackendAdapter
from termcanvas.terminal.models import SpawnResult, TerminalKind

_FIND_SESSION = """
tell application "iTerm2"
    repeat with w in windows
        repeat with t in tabs of w
            repeat with s in sessions of t
                if unique ID of s is "{session_id}" then
{body}
                end if
            end repeat
        end repeat
    end repeat
    return "not_found"
end tell
"""

_CREATE_SPLIT = """
tell application "iTerm2"
    tell current session of current tab of current window
        set newSession to split vertically with same profile
        tell newSession
            write text "{command}"
        end tell
        return unique ID of newSession
    end tell
end tell
"""


def _find_session_script(session_id: str, body: str) -> str:
    return _FIND_SESSION.format(session_id=escape_applescript(session_id), body=body)


class ITerm2Adapter(BackendAdapter):
    kind = TerminalKind.ITERM2

    async def probe(self, handle: str) -> bool:
        script = _find_session_script(handle, '                    return "exists"')
        result = await self.run(*osascript(script))
        return result.ok and result.stdout.strip() == "exists"

    async def reuse(self, handle: str, command: str) -> bool:
        delay = f"{self.settings.settle_delay:.3f}"
        body = "\n".join(
            [
                "                    tell s",
                "                        write text (ASCII character 3)",
                f"                        delay {delay}",
                f'                        write text "clear && {escape_applescript(command)}"',
                "                    end tell",
                '                    return "success"',
            ]
        )
        result = await self.run(*osascript(_find_session_script(handle, body)))
        return result.ok and result.stdout.strip() == "success"

    async def create(self, command: str) -> SpawnResult | None:
        script = _CREATE_SPLIT.format(command=escape_applescript(command))
        result = await self.run(*osascript(script))
        session_id = result.stdout.strip()
        if not result.ok or not session_id:
            return None
        self.registry.write(self.kind, session_id)
        return SpawnResult(method=self.method)
