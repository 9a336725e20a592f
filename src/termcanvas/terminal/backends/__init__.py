"""Terminal backend adapters, one per supported product."""

from __future__ import annotations

from termcanvas.errors import CanvasError, ExitCode
from termcanvas.terminal.backends.alacritty import AlacrittyAdapter
from termcanvas.terminal.backends.apple_terminal import AppleTerminalAdapter
from termcanvas.terminal.backends.base import BackendAdapter, DetachedWindowAdapter
from termcanvas.terminal.backends.ghostty import GhosttyAdapter
from termcanvas.terminal.backends.iterm2 import ITerm2Adapter
from termcanvas.terminal.backends.kitty import KittyAdapter
from termcanvas.terminal.backends.tmux import TmuxAdapter
from termcanvas.terminal.backends.vscode import VSCodeAdapter
from termcanvas.terminal.backends.wezterm import WezTermAdapter
from termcanvas.terminal.models import TerminalKind

ADAPTERS: dict[TerminalKind, type[BackendAdapter]] = {
    TerminalKind.TMUX: TmuxAdapter,
    TerminalKind.ITERM2: ITerm2Adapter,
    TerminalKind.APPLE_TERMINAL: AppleTerminalAdapter,
    TerminalKind.WEZTERM: WezTermAdapter,
    TerminalKind.KITTY: KittyAdapter,
    TerminalKind.ALACRITTY: AlacrittyAdapter,
    TerminalKind.VSCODE: VSCodeAdapter,
    TerminalKind.GHOSTTY: GhosttyAdapter,
}


def adapter_for(kind: TerminalKind) -> type[BackendAdapter]:
    try:
        return ADAPTERS[kind]
    except KeyError:
        raise CanvasError(
            f"No backend for terminal kind: {kind.value}",
            code=ExitCode.UNSUPPORTED_TERMINAL,
        ) from None


__all__ = [
    "ADAPTERS",
    "AlacrittyAdapter",
    "AppleTerminalAdapter",
    "BackendAdapter",
    "DetachedWindowAdapter",
    "GhosttyAdapter",
    "ITerm2Adapter",
    "KittyAdapter",
    "TmuxAdapter",
    "VSCodeAdapter",
    "WezTermAdapter",
    "adapter_for",
]
