"""Handoff from `show` to an installed canvas renderer."""

from __future__ import annotations

import inspect
import logging as py_logging
import sys
from collections.abc import Callable, Mapping
from importlib.metadata import entry_points
from typing import Any, TextIO

from termcanvas.errors import CanvasError, ExitCode

logger = py_logging.getLogger(__name__)

ENTRY_POINT_GROUP = "termcanvas.canvases"
DEFAULT_RENDERER = "default"

Renderer = Callable[..., Any]
RendererLoader = Callable[[str], Renderer]


def window_title_sequence(title: str) -> str:
    return f"\x1b]0;{title}\x07"


def set_window_title(title: str, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    out.write(window_title_sequence(title))
    out.flush()


def load_renderer(kind: str) -> Renderer:
    """Resolve the renderer for ``kind`` from the ``termcanvas.canvases`` group.

    An entry point named after the kind wins over one named ``default``.
    """
    available = {item.name: item for item in entry_points(group=ENTRY_POINT_GROUP)}
    for name in (kind, DEFAULT_RENDERER):
        if name in available:
            logger.debug("render entry-point name=%s value=%s", name, available[name].value)
            renderer = available[name].load()
            if not callable(renderer):
                break
            return renderer
    raise CanvasError(
        f"No renderer installed for canvas kind '{kind}'.",
        code=ExitCode.RENDER_ERROR,
        hint=f"Install a package that registers a '{ENTRY_POINT_GROUP}' entry point.",
    )


async def show_canvas(
    kind: str,
    canvas_id: str,
    config: Mapping[str, object] | None,
    *,
    socket_path: str | None = None,
    scenario: str = "display",
    loader: RendererLoader = load_renderer,
    stream: TextIO | None = None,
) -> None:
    set_window_title(f"canvas: {kind}", stream)
    renderer = loader(kind)
    outcome = renderer(kind, canvas_id, config, socket_path=socket_path, scenario=scenario)
    if inspect.isawaitable(outcome):
        await outcome
