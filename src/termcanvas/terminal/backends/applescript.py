"""AppleScript helpers shared by the macOS automation backends."""

from __future__ import annotations

RIGHT_HALF_TEMPLATE = """
tell application "System Events"
    tell process "{process}"
        set frontmost to true
        tell application "Finder"
            set screenBounds to bounds of window of desktop
            set screenWidth to item 3 of screenBounds
            set screenHeight to item 4 of screenBounds
        end tell
        try
            set position of front window to {{(screenWidth / 2), 0}}
            set size of front window to {{(screenWidth / 2), screenHeight}}
        end try
    end tell
end tell
"""


def escape_applescript(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def right_half_script(process_name: str) -> str:
    return RIGHT_HALF_TEMPLATE.format(process=escape_applescript(process_name))


def osascript(script: str) -> list[str]:
    return ["osascript", "-e", script]
