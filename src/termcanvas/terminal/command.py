"""Shell command construction for running a canvas inside a terminal."""

from __future__ import annotations

import json
import logging as py_logging
import shlex
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from termcanvas.config import CanvasSettings
from termcanvas.ipc import check_canvas_id, socket_path_for

logger = py_logging.getLogger(__name__)


@dataclass(frozen=True)
class CanvasCommand:
    text: str
    socket_path: str
    config_path: Path | None = None


def config_path_for(canvas_id: str, state_dir: str | Path) -> Path:
    return Path(state_dir) / f"canvas-config-{check_canvas_id(canvas_id)}.json"


def serialize_config(config: str | Mapping[str, object]) -> str:
    if isinstance(config, str):
        return config
    return json.dumps(config, separators=(",", ":"))


def build_canvas_command(
    kind: str,
    canvas_id: str,
    config: str | Mapping[str, object] | None = None,
    *,
    socket_path: str | None = None,
    scenario: str | None = None,
    settings: CanvasSettings | None = None,
) -> CanvasCommand:
    cfg = settings or CanvasSettings()
    resolved_socket = socket_path or socket_path_for(canvas_id, cfg.socket_dir)

    parts = [
        cfg.launcher_command(),
        "show",
        shlex.quote(kind),
        "--id",
        shlex.quote(canvas_id),
    ]

    config_path: Path | None = None
    if config is not None:
        # The JSON travels through a file so it never has to survive shell quoting.
        config_path = config_path_for(canvas_id, cfg.state_dir)
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(serialize_config(config), encoding="utf-8")
        parts.extend(["--config", f'"$(cat {shlex.quote(str(config_path))})"'])

    parts.extend(["--socket", shlex.quote(resolved_socket)])
    if scenario:
        parts.extend(["--scenario", shlex.quote(scenario)])

    text = " ".join(parts)
    logger.debug("command built kind=%s id=%s config_file=%s", kind, canvas_id, config_path or "-")
    return CanvasCommand(text=text, socket_path=resolved_socket, config_path=config_path)
