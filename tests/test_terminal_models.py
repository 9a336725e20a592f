from __future__ import annotations

import pytest

from termcanvas.terminal.models import (
    DISPLAY_NAMES,
    PRECEDENCE,
    SUMMARIES,
    SpawnResult,
    TerminalKind,
    supported_terminals_text,
)
from termcanvas.terminal.registry import HANDLE_FILE_NAMES


def test_every_backend_has_a_name_summary_and_registry_slot() -> None:
    backends = [kind for kind in TerminalKind if kind != TerminalKind.NONE]
    assert set(PRECEDENCE) == set(backends)
    for kind in backends:
        assert DISPLAY_NAMES[kind]
        assert SUMMARIES[kind]
        assert HANDLE_FILE_NAMES[kind].startswith("canvas-")
    assert SUMMARIES[TerminalKind.NONE] == "unsupported terminal"


def test_registry_file_names_are_unique() -> None:
    assert len(set(HANDLE_FILE_NAMES.values())) == len(HANDLE_FILE_NAMES)


def test_supported_terminals_text_variants() -> None:
    assert supported_terminals_text().endswith(", Ghostty, or Apple Terminal")
    assert supported_terminals_text(conjunction="") == (
        "iTerm2, tmux, Kitty, WezTerm, Alacritty, VS Code, Ghostty, Apple Terminal"
    )


def test_spawn_result_is_immutable() -> None:
    result = SpawnResult(method="tmux")
    assert result.pid is None
    assert result.hint == ""
    with pytest.raises(AttributeError):
        result.method = "kitty"  # type: ignore[misc]
