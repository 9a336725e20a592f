"""Terminal product detection from process environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping

from termcanvas.terminal.models import PRECEDENCE, SUMMARIES, TerminalEnvironment, TerminalKind


def _term_program_is(env: Mapping[str, str], value: str) -> bool:
    return env.get("TERM_PROGRAM", "") == value


def _has(env: Mapping[str, str], name: str) -> bool:
    return bool(env.get(name, ""))


def classify(flags: Mapping[TerminalKind, bool]) -> TerminalKind:
    for kind in PRECEDENCE:
        if flags.get(kind, False):
            return kind
    return TerminalKind.NONE


def detect_terminal(environ: Mapping[str, str] | None = None) -> TerminalEnvironment:
    env = os.environ if environ is None else environ
    flags = {
        TerminalKind.TMUX: _has(env, "TMUX"),
        TerminalKind.ITERM2: _term_program_is(env, "iTerm.app") or _has(env, "ITERM_SESSION_ID"),
        TerminalKind.APPLE_TERMINAL: _term_program_is(env, "Apple_Terminal"),
        TerminalKind.KITTY: _term_program_is(env, "kitty") or _has(env, "KITTY_PID"),
        TerminalKind.WEZTERM: _term_program_is(env, "WezTerm"),
        TerminalKind.ALACRITTY: _term_program_is(env, "Alacritty") or _has(env, "ALACRITTY_SOCKET"),
        TerminalKind.VSCODE: _term_program_is(env, "vscode") or _has(env, "VSCODE_INJECTION"),
        TerminalKind.GHOSTTY: (
            _term_program_is(env, "ghostty") or _has(env, "GHOSTTY_RESOURCES_DIR")
        ),
    }
    terminal_type = classify(flags)
    return TerminalEnvironment(
        in_tmux=flags[TerminalKind.TMUX],
        in_iterm2=flags[TerminalKind.ITERM2],
        in_apple_terminal=flags[TerminalKind.APPLE_TERMINAL],
        in_kitty=flags[TerminalKind.KITTY],
        in_wezterm=flags[TerminalKind.WEZTERM],
        in_alacritty=flags[TerminalKind.ALACRITTY],
        in_vscode=flags[TerminalKind.VSCODE],
        in_ghostty=flags[TerminalKind.GHOSTTY],
        terminal_type=terminal_type,
        summary=SUMMARIES[terminal_type],
    )
