"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging as py_logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from . import __version__
from .config import CanvasSettings, load_settings
from .errors import CanvasError, ExitCode, user_facing_error
from .ipc import check_canvas_id, request, send_update, socket_path_for
from .logging import LEVEL_NAMES, configure_logging, default_log_path, normalize_level
from .render import RendererLoader, load_renderer, show_canvas
from .terminal import SessionRegistry, TerminalKind, detect_terminal, spawn_canvas
from .terminal.models import supported_terminals_text
from .terminal.process import ProcessRunner

_DEFAULT_KIND = "demo"
_DEFAULT_SCENARIO = "display"

_ENV_NOTES: dict[TerminalKind, tuple[str, ...]] = {
    TerminalKind.WEZTERM: ("WezTerm detected - canvas will open in a split pane to the right.",),
    TerminalKind.VSCODE: (
        "VS Code detected - canvas will spawn in a new process.",
        "   Use Cmd/Ctrl+Shift+5 to split your terminal for side-by-side view.",
    ),
    TerminalKind.APPLE_TERMINAL: (
        "Apple Terminal detected - canvas will open in a new window.",
        "   The window will be positioned on the right side of your screen.",
    ),
    TerminalKind.ALACRITTY: ("Alacritty detected - canvas will open in a new window.",),
    TerminalKind.GHOSTTY: (
        "Ghostty detected - canvas will open in a new window.",
        "   The window will be positioned on the right side of your screen.",
    ),
}


def _log_level_type(value: str) -> str:
    try:
        return normalize_level(value)
    except ValueError as exc:
        accepted = ", ".join(LEVEL_NAMES)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}") from exc


def _canvas_id_type(value: str) -> str:
    try:
        return check_canvas_id(value)
    except CanvasError as exc:
        raise argparse.ArgumentTypeError(exc.message) from exc


def _timeout_type(value: str) -> int:
    try:
        timeout = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--timeout-ms must be an integer") from exc
    if timeout <= 0:
        raise argparse.ArgumentTypeError("--timeout-ms must be positive")
    return timeout


def _add_canvas_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("kind", nargs="?", default=_DEFAULT_KIND)
    parser.add_argument(
        "--id", dest="canvas_id", type=_canvas_id_type, default=None, help="Canvas ID"
    )
    parser.add_argument("--config", default=None, help="Canvas configuration (JSON)")
    parser.add_argument("--socket", default=None, help="Unix socket path for IPC")
    parser.add_argument(
        "--scenario", default=None, help="Scenario name (e.g., display, meeting-picker)"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termcanvas", description="Interactive terminal canvases for agents"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", type=_log_level_type, default="WARN")
    parser.add_argument("--log-file", type=Path, default=None)
    parser.add_argument("--config-file", type=Path, default=None)
    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="Show a canvas in the current terminal")
    _add_canvas_options(show)

    spawn = commands.add_parser("spawn", help="Spawn a canvas in a new terminal pane or window")
    _add_canvas_options(spawn)

    commands.add_parser("env", help="Show detected terminal environment")

    update = commands.add_parser("update", help="Send updated config to a running canvas via IPC")
    update.add_argument("canvas_id", metavar="id", type=_canvas_id_type)
    update.add_argument("--config", default=None, help="New canvas configuration (JSON)")
    update.add_argument("--socket", default=None, help="Unix socket path for IPC")

    for name, help_text in (
        ("selection", "Get the current selection from a running document canvas"),
        ("content", "Get the current content from a running document canvas"),
    ):
        query = commands.add_parser(name, help=help_text)
        query.add_argument("canvas_id", metavar="id", type=_canvas_id_type)
        query.add_argument("--socket", default=None, help="Unix socket path for IPC")
        query.add_argument("--timeout-ms", type=_timeout_type, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def _parse_config(raw: str | None) -> dict[str, Any] | None:
    if raw is None:
        return None
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CanvasError(
            "Invalid --config JSON.",
            code=ExitCode.INVALID_ARGS,
            hint=f"{exc.msg} at position {exc.pos}.",
        ) from exc
    if not isinstance(parsed, dict):
        raise CanvasError(
            "Invalid --config JSON.",
            code=ExitCode.INVALID_ARGS,
            hint="The configuration must be a JSON object.",
        )
    return parsed


def _socket_for(namespace: argparse.Namespace, settings: CanvasSettings) -> str:
    return namespace.socket or socket_path_for(namespace.canvas_id, settings.socket_dir)


def _format_env(environ: Mapping[str, str] | None) -> list[str]:
    env = detect_terminal(environ)
    lines = [
        "Terminal Environment:",
        f"  In tmux: {str(env.in_tmux).lower()}",
        f"  In iTerm2: {str(env.in_iterm2).lower()}",
        f"  In Kitty: {str(env.in_kitty).lower()}",
        f"  In WezTerm: {str(env.in_wezterm).lower()}",
        f"  In Alacritty: {str(env.in_alacritty).lower()}",
        f"  In VS Code: {str(env.in_vscode).lower()}",
        f"  In Ghostty: {str(env.in_ghostty).lower()}",
        f"  In Apple Terminal: {str(env.in_apple_terminal).lower()}",
        f"  Terminal type: {env.terminal_type.value}",
        "",
        f"Summary: {env.summary}",
    ]
    if env.terminal_type == TerminalKind.NONE:
        lines.extend(
            [
                "",
                "No supported terminal detected.",
                f"   Supported: {supported_terminals_text(conjunction='')}",
            ]
        )
    elif env.terminal_type in _ENV_NOTES:
        lines.append("")
        lines.extend(_ENV_NOTES[env.terminal_type])
    return lines


def _report_query_failure(command: str, canvas_id: str, exc: Exception) -> None:
    print(f"Failed to get {command} from canvas '{canvas_id}': {exc}", file=sys.stderr)


async def _run_command(
    namespace: argparse.Namespace,
    settings: CanvasSettings,
    *,
    environ: Mapping[str, str] | None,
    runner: ProcessRunner | None,
    registry: SessionRegistry | None,
    renderer_loader: RendererLoader,
) -> int:
    logger = py_logging.getLogger("termcanvas.cli")
    command = namespace.command

    if command == "env":
        print("\n".join(_format_env(environ)))
        return int(ExitCode.SUCCESS)

    if command == "show":
        canvas_id = namespace.canvas_id or f"{namespace.kind}-1"
        await show_canvas(
            namespace.kind,
            canvas_id,
            _parse_config(namespace.config),
            socket_path=namespace.socket,
            scenario=namespace.scenario or _DEFAULT_SCENARIO,
            loader=renderer_loader,
        )
        return int(ExitCode.SUCCESS)

    if command == "spawn":
        canvas_id = namespace.canvas_id or f"{namespace.kind}-1"
        if namespace.config is not None:
            _parse_config(namespace.config)
        result = await spawn_canvas(
            namespace.kind,
            canvas_id,
            namespace.config,
            socket_path=namespace.socket,
            scenario=namespace.scenario,
            environ=environ,
            registry=registry,
            runner=runner,
            settings=settings,
        )
        print(f"Spawned {namespace.kind} canvas '{canvas_id}' via {result.method}")
        if result.hint:
            print(f"[Canvas] {result.hint}", file=sys.stderr)
        return int(ExitCode.SUCCESS)

    if command == "update":
        config = _parse_config(namespace.config) or {}
        socket_path = _socket_for(namespace, settings)
        try:
            await send_update(socket_path, config)
        except OSError as exc:
            logger.warning("ipc update-failed socket=%s error=%s", socket_path, exc)
            print(f"Failed to connect to canvas '{namespace.canvas_id}': {exc}", file=sys.stderr)
            return int(ExitCode.SUCCESS)
        print(f"Sent update to canvas '{namespace.canvas_id}'")
        return int(ExitCode.SUCCESS)

    request_type, expected_type = {
        "selection": ("getSelection", "selection"),
        "content": ("getContent", "content"),
    }[command]
    socket_path = _socket_for(namespace, settings)
    timeout_ms = namespace.timeout_ms or settings.query_timeout_ms
    try:
        payload = await request(socket_path, request_type, expected_type, timeout_ms)
    except CanvasError as exc:
        _report_query_failure(command, namespace.canvas_id, exc)
        return int(exc.code)
    except OSError as exc:
        _report_query_failure(command, namespace.canvas_id, exc)
        return int(ExitCode.IPC_ERROR)
    print(payload)
    return int(ExitCode.SUCCESS)


def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    runner: ProcessRunner | None = None,
    registry: SessionRegistry | None = None,
    renderer_loader: RendererLoader = load_renderer,
) -> int:
    log_path = default_log_path(environ)
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    logger = configure_logging(level=namespace.log_level, log_file=log_path)

    try:
        settings = load_settings(namespace.config_file, environ=environ)
        logger.debug("Starting command=%s", namespace.command)
        return asyncio.run(
            _run_command(
                namespace,
                settings,
                environ=environ,
                runner=runner,
                registry=registry,
                renderer_loader=renderer_loader,
            )
        )
    except CanvasError as exc:
        logger.error(
            "Handled CanvasError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        hint = f"Inspect logs: {log_path}"
        print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
