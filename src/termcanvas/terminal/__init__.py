"""Terminal detection, session registry and spawn orchestration."""

from .models import SpawnResult, TerminalEnvironment, TerminalKind
from .detect import classify, detect_terminal
from .command import CanvasCommand, build_canvas_command
from .process import CommandResult, ProcessRunner
from .registry import FileSessionStore, MemorySessionStore, SessionRegistry
from .orchestrator import spawn_canvas

__all__ = [
    "build_canvas_command",
    "CanvasCommand",
    "classify",
    "CommandResult",
    "detect_terminal",
    "FileSessionStore",
    "MemorySessionStore",
    "ProcessRunner",
    "SessionRegistry",
    "spawn_canvas",
    "SpawnResult",
    "TerminalEnvironment",
    "TerminalKind",
]
