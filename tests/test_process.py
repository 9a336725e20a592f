from __future__ import annotations

import os
import sys
from contextlib import suppress

import pytest

from termcanvas.terminal import ProcessRunner


@pytest.mark.asyncio
async def test_run_collects_output_until_exit() -> None:
    result = await ProcessRunner().run([sys.executable, "-c", "print('pane-7')"])

    assert result.ok
    assert result.returncode == 0
    assert result.stdout.strip() == "pane-7"


@pytest.mark.asyncio
async def test_nonzero_exit_is_distinguished_from_launch_error() -> None:
    runner = ProcessRunner()

    nonzero = await runner.run([sys.executable, "-c", "import sys; sys.exit(3)"])
    missing = await runner.run(["termcanvas-definitely-missing-binary"])

    assert nonzero.returncode == 3
    assert not nonzero.ok
    assert missing.returncode is None
    assert not missing.ok


@pytest.mark.asyncio
async def test_run_timeout_kills_the_child() -> None:
    result = await ProcessRunner().run(
        [sys.executable, "-c", "import time; time.sleep(30)"], timeout=0.2
    )

    assert result.returncode is None
    assert "timed out" in result.stderr


def test_detached_spawn_returns_pid_and_pid_checks() -> None:
    runner = ProcessRunner()

    pid = runner.spawn_detached([sys.executable, "-c", "import time; time.sleep(30)"])

    assert pid is not None
    try:
        assert runner.pid_alive(pid)
    finally:
        runner.terminate(pid)
        with suppress(ChildProcessError):
            os.waitpid(pid, 0)
    assert not runner.pid_alive(pid)


def test_detached_spawn_of_missing_binary_returns_none() -> None:
    assert ProcessRunner().spawn_detached(["termcanvas-definitely-missing-binary"]) is None


def test_invalid_pids_are_never_alive() -> None:
    runner = ProcessRunner()

    assert not runner.pid_alive(0)
    assert not runner.pid_alive(-1)
    runner.terminate(0)


def test_platform_override() -> None:
    assert ProcessRunner(platform="darwin").is_macos
    assert not ProcessRunner(platform="linux").is_macos
