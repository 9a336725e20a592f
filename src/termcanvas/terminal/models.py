"""Terminal orchestration domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TerminalKind(str, Enum):
    TMUX = "tmux"
    ITERM2 = "iterm2"
    APPLE_TERMINAL = "apple-terminal"
    KITTY = "kitty"
    WEZTERM = "wezterm"
    ALACRITTY = "alacritty"
    VSCODE = "vscode"
    GHOSTTY = "ghostty"
    NONE = "none"


# Detection precedence, highest first.
PRECEDENCE: tuple[TerminalKind, ...] = (
    TerminalKind.TMUX,
    TerminalKind.ITERM2,
    TerminalKind.KITTY,
    TerminalKind.WEZTERM,
    TerminalKind.ALACRITTY,
    TerminalKind.VSCODE,
    TerminalKind.GHOSTTY,
    TerminalKind.APPLE_TERMINAL,
)

DISPLAY_NAMES: dict[TerminalKind, str] = {
    TerminalKind.TMUX: "tmux",
    TerminalKind.ITERM2: "iTerm2",
    TerminalKind.APPLE_TERMINAL: "Apple Terminal",
    TerminalKind.KITTY: "Kitty",
    TerminalKind.WEZTERM: "WezTerm",
    TerminalKind.ALACRITTY: "Alacritty",
    TerminalKind.VSCODE: "VS Code",
    TerminalKind.GHOSTTY: "Ghostty",
}

SUMMARIES: dict[TerminalKind, str] = {
    TerminalKind.TMUX: "tmux",
    TerminalKind.ITERM2: "iTerm2",
    TerminalKind.KITTY: "Kitty",
    TerminalKind.WEZTERM: "WezTerm",
    TerminalKind.ALACRITTY: "Alacritty (new window mode)",
    TerminalKind.VSCODE: "VS Code (new terminal)",
    TerminalKind.GHOSTTY: "Ghostty (new window mode)",
    TerminalKind.APPLE_TERMINAL: "Apple Terminal (new window mode)",
    TerminalKind.NONE: "unsupported terminal",
}

SUPPORTED_ORDER: tuple[TerminalKind, ...] = (
    TerminalKind.ITERM2,
    TerminalKind.TMUX,
    TerminalKind.KITTY,
    TerminalKind.WEZTERM,
    TerminalKind.ALACRITTY,
    TerminalKind.VSCODE,
    TerminalKind.GHOSTTY,
    TerminalKind.APPLE_TERMINAL,
)


def supported_terminals_text(*, conjunction: str = "or") -> str:
    names = [DISPLAY_NAMES[kind] for kind in SUPPORTED_ORDER]
    if not conjunction:
        return ", ".join(names)
    return f"{', '.join(names[:-1])}, {conjunction} {names[-1]}"


@dataclass(frozen=True)
class TerminalEnvironment:
    in_tmux: bool
    in_iterm2: bool
    in_apple_terminal: bool
    in_kitty: bool
    in_wezterm: bool
    in_alacritty: bool
    in_vscode: bool
    in_ghostty: bool
    terminal_type: TerminalKind
    summary: str

    def flags(self) -> dict[TerminalKind, bool]:
        return {
            TerminalKind.TMUX: self.in_tmux,
            TerminalKind.ITERM2: self.in_iterm2,
            TerminalKind.APPLE_TERMINAL: self.in_apple_terminal,
            TerminalKind.KITTY: self.in_kitty,
            TerminalKind.WEZTERM: self.in_wezterm,
            TerminalKind.ALACRITTY: self.in_alacritty,
            TerminalKind.VSCODE: self.in_vscode,
            TerminalKind.GHOSTTY: self.in_ghostty,
        }


@dataclass(frozen=True)
class SpawnResult:
    method: str
    pid: int | None = None
    hint: str = ""
