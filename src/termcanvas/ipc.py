"""Line-delimited JSON client for talking to a running canvas over a Unix socket."""

from __future__ import annotations

import asyncio
import json
import logging as py_logging
from collections.abc import Mapping
from pathlib import Path

from typing_extensions import TypedDict

from termcanvas.config import DEFAULT_QUERY_TIMEOUT_MS, DEFAULT_SOCKET_DIR
from termcanvas.errors import CanvasError, ExitCode

logger = py_logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = DEFAULT_QUERY_TIMEOUT_MS


class RequestMessage(TypedDict):
    type: str


class UpdateMessage(TypedDict):
    type: str
    config: Mapping[str, object]


def check_canvas_id(canvas_id: str) -> str:
    """Reject ids that cannot be embedded in a single file name."""
    if not canvas_id or "/" in canvas_id or "\0" in canvas_id:
        raise CanvasError(
            f"Invalid canvas id: {canvas_id!r}",
            code=ExitCode.INVALID_ARGS,
            hint="Canvas ids name socket and config files and cannot contain '/'.",
        )
    return canvas_id


def socket_path_for(canvas_id: str, socket_dir: str | Path = DEFAULT_SOCKET_DIR) -> str:
    return str(Path(socket_dir) / f"canvas-{check_canvas_id(canvas_id)}.sock")


def encode_frame(message: Mapping[str, object]) -> bytes:
    return (json.dumps(message) + "\n").encode("utf-8")


def _decode_reply(line: bytes, expected_type: str) -> str:
    try:
        reply = json.loads(line.decode("utf-8").strip())
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CanvasError(
            "Malformed response from canvas.",
            code=ExitCode.IPC_ERROR,
            hint="The canvas replied with something other than a JSON line.",
        ) from exc
    if isinstance(reply, dict) and reply.get("type") == expected_type:
        return json.dumps(reply.get("data"))
    logger.debug("ipc reply-type-mismatch expected=%s", expected_type)
    return json.dumps(None)


async def _exchange(socket_path: str, request_type: str, expected_type: str) -> str:
    reader, writer = await asyncio.open_unix_connection(socket_path)
    try:
        message: RequestMessage = {"type": request_type}
        writer.write(encode_frame(message))
        await writer.drain()
        line = await reader.readline()
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            logger.debug("ipc close-failed socket=%s", socket_path, exc_info=True)
    if not line:
        # Peer closed without replying.
        return json.dumps(None)
    return _decode_reply(line, expected_type)


async def request(
    socket_path: str,
    request_type: str,
    expected_type: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> str:
    """Send one request frame and return the reply payload serialized as JSON.

    A reply whose ``type`` differs from ``expected_type`` yields ``"null"``.
    Raises ``CanvasError`` with ``IPC_TIMEOUT`` when no reply arrives within
    ``timeout_ms``; connection failures propagate as ``OSError``.
    """
    logger.debug("ipc request socket=%s type=%s", socket_path, request_type)
    try:
        return await asyncio.wait_for(
            _exchange(socket_path, request_type, expected_type),
            timeout=timeout_ms / 1000,
        )
    except asyncio.TimeoutError as exc:
        raise CanvasError(
            "Timeout waiting for response",
            code=ExitCode.IPC_TIMEOUT,
            hint=f"No reply from {socket_path} within {timeout_ms} ms.",
        ) from exc


async def send_update(socket_path: str, config: Mapping[str, object]) -> None:
    reader, writer = await asyncio.open_unix_connection(socket_path)
    del reader
    message: UpdateMessage = {"type": "update", "config": config}
    try:
        writer.write(encode_frame(message))
        await writer.drain()
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            logger.debug("ipc close-failed socket=%s", socket_path, exc_info=True)
    logger.debug("ipc update-sent socket=%s", socket_path)


async def get_selection(socket_path: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> str:
    return await request(socket_path, "getSelection", "selection", timeout_ms)


async def get_content(socket_path: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> str:
    return await request(socket_path, "getContent", "content", timeout_ms)
