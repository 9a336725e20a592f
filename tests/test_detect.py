from __future__ import annotations

import pytest

from termcanvas.terminal import TerminalKind, detect_terminal


@pytest.mark.parametrize(
    ("environ", "expected"),
    [
        ({"TMUX": "/tmp/tmux-501/default,1234,0"}, TerminalKind.TMUX),
        ({"TERM_PROGRAM": "iTerm.app"}, TerminalKind.ITERM2),
        ({"ITERM_SESSION_ID": "w0t0p0:ABC"}, TerminalKind.ITERM2),
        ({"TERM_PROGRAM": "Apple_Terminal"}, TerminalKind.APPLE_TERMINAL),
        ({"TERM_PROGRAM": "kitty"}, TerminalKind.KITTY),
        ({"KITTY_PID": "991"}, TerminalKind.KITTY),
        ({"TERM_PROGRAM": "WezTerm"}, TerminalKind.WEZTERM),
        ({"TERM_PROGRAM": "Alacritty"}, TerminalKind.ALACRITTY),
        ({"ALACRITTY_SOCKET": "/tmp/Alacritty.sock"}, TerminalKind.ALACRITTY),
        ({"TERM_PROGRAM": "vscode"}, TerminalKind.VSCODE),
        ({"VSCODE_INJECTION": "1"}, TerminalKind.VSCODE),
        ({"TERM_PROGRAM": "ghostty"}, TerminalKind.GHOSTTY),
        ({"GHOSTTY_RESOURCES_DIR": "/usr/share/ghostty"}, TerminalKind.GHOSTTY),
        ({}, TerminalKind.NONE),
        ({"TERM_PROGRAM": "xterm"}, TerminalKind.NONE),
    ],
)
def test_single_signal_classification(environ: dict[str, str], expected: TerminalKind) -> None:
    assert detect_terminal(environ).terminal_type == expected


def test_tmux_inside_vscode_is_classified_as_tmux() -> None:
    env = detect_terminal({"TMUX": "x", "TERM_PROGRAM": "vscode", "VSCODE_INJECTION": "1"})

    assert env.in_tmux is True
    assert env.in_vscode is True
    assert env.terminal_type == TerminalKind.TMUX
    assert env.summary == "tmux"


def test_empty_variables_do_not_count_as_present() -> None:
    env = detect_terminal({"TMUX": "", "KITTY_PID": "", "GHOSTTY_RESOURCES_DIR": ""})

    assert env.terminal_type == TerminalKind.NONE
    assert env.summary == "unsupported terminal"


def test_new_window_backends_describe_their_mode() -> None:
    assert detect_terminal({"TERM_PROGRAM": "Alacritty"}).summary == "Alacritty (new window mode)"
    assert detect_terminal({"TERM_PROGRAM": "vscode"}).summary == "VS Code (new terminal)"
    assert (
        detect_terminal({"TERM_PROGRAM": "Apple_Terminal"}).summary
        == "Apple Terminal (new window mode)"
    )


def test_detect_reads_process_environment_by_default(monkeypatch) -> None:
    for name in ("TMUX", "ITERM_SESSION_ID", "KITTY_PID", "ALACRITTY_SOCKET", "VSCODE_INJECTION"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("GHOSTTY_RESOURCES_DIR", raising=False)
    monkeypatch.setenv("TERM_PROGRAM", "WezTerm")

    assert detect_terminal().terminal_type == TerminalKind.WEZTERM
