"""Pick exactly one terminal backend from the environment and drive it."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Mapping

from termcanvas.config import CanvasSettings
from termcanvas.errors import CanvasError, ExitCode
from termcanvas.terminal.backends import adapter_for
from termcanvas.terminal.command import build_canvas_command
from termcanvas.terminal.detect import detect_terminal
from termcanvas.terminal.models import (
    DISPLAY_NAMES,
    SpawnResult,
    TerminalKind,
    supported_terminals_text,
)
from termcanvas.terminal.process import ProcessRunner
from termcanvas.terminal.registry import FileSessionStore, SessionRegistry

logger = py_logging.getLogger(__name__)


def unsupported_terminal_message() -> str:
    return f"Canvas requires a supported terminal: {supported_terminals_text()}."


async def spawn_canvas(
    kind: str,
    canvas_id: str,
    config: str | Mapping[str, object] | None = None,
    *,
    socket_path: str | None = None,
    scenario: str | None = None,
    environ: Mapping[str, str] | None = None,
    registry: SessionRegistry | None = None,
    runner: ProcessRunner | None = None,
    settings: CanvasSettings | None = None,
) -> SpawnResult:
    cfg = settings or CanvasSettings()
    env = detect_terminal(environ)
    logger.info("spawn detected kind=%s summary=%s", env.terminal_type.value, env.summary)
    if env.terminal_type == TerminalKind.NONE:
        raise CanvasError(
            unsupported_terminal_message(),
            code=ExitCode.UNSUPPORTED_TERMINAL,
            hint="Run from inside one of the supported terminals.",
        )

    command = build_canvas_command(
        kind,
        canvas_id,
        config,
        socket_path=socket_path,
        scenario=scenario,
        settings=cfg,
    )
    sessions = registry or SessionRegistry(FileSessionStore(cfg.state_dir))
    adapter = adapter_for(env.terminal_type)(sessions, runner or ProcessRunner(), cfg)
    logger.debug(
        "spawn adapter-selected kind=%s adapter=%s",
        env.terminal_type.value,
        type(adapter).__name__,
    )

    async with sessions.hold(env.terminal_type):
        result = await adapter.spawn(command.text)

    if result is None:
        raise CanvasError(
            unsupported_terminal_message(),
            code=ExitCode.SPAWN_ERROR,
            hint=(
                f"Launching a {DISPLAY_NAMES[env.terminal_type]} session failed; "
                "see the log for details."
            ),
        )
    return result
