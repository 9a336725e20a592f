"""Child-process execution for terminal automation tools."""

from __future__ import annotations

import asyncio
import logging as py_logging
import os
import signal
import subprocess
import sys
from collections.abc import Sequence
from contextlib import suppress
from dataclasses import dataclass

logger = py_logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    # None when the executable could not be launched or timed out.
    returncode: int | None
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner:
    """Runs automation tools, spawns detached windows and checks pids."""

    def __init__(self, *, platform: str | None = None) -> None:
        self.platform = platform or sys.platform

    @property
    def is_macos(self) -> bool:
        return self.platform == "darwin"

    async def run(self, argv: Sequence[str], *, timeout: float | None = None) -> CommandResult:
        command = list(argv)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            logger.debug("process launch-failed command=%s error=%s", command[0], exc)
            return CommandResult(None, "", str(exc))

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            with suppress(ProcessLookupError, PermissionError):
                process.kill()
            await process.wait()
            logger.debug("process timed-out command=%s timeout=%s", command[0], timeout)
            return CommandResult(None, "", "Command timed out")

        return CommandResult(
            process.returncode,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    def spawn_detached(self, argv: Sequence[str]) -> int | None:
        command = list(argv)
        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError:
            logger.debug("process detached-launch-failed command=%s", command[0], exc_info=True)
            return None
        logger.debug("process detached-launched command=%s pid=%s", command[0], process.pid)
        return process.pid

    def pid_alive(self, pid: int) -> bool:
        if pid <= 0:
            return False
        try:
            os.kill(pid, 0)
        except OSError:
            return False
        return True

    def terminate(self, pid: int) -> None:
        if pid <= 0:
            return
        with suppress(ProcessLookupError, PermissionError):
            os.kill(pid, signal.SIGTERM)

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

