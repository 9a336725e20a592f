from __future__ import annotations

import sys
from pathlib import Path

from termcanvas.config import (
    DEFAULT_SETTLE_DELAY_MS,
    LAUNCHER_ENV,
    STATE_DIR_ENV,
    CanvasSettings,
    load_settings,
)


def test_missing_config_file_uses_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "missing.toml", environ={})

    assert settings == CanvasSettings()
    assert settings.settle_delay_ms == DEFAULT_SETTLE_DELAY_MS
    assert settings.settle_delay == 0.15
    assert settings.state_dir == "/tmp"


def test_valid_values_are_loaded(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        'settle_delay_ms = 300\nsplit_percent = 50\nwindow_title = "Board"\n', encoding="utf-8"
    )

    settings = load_settings(path, environ={})

    assert settings.settle_delay_ms == 300
    assert settings.split_percent == 50
    assert settings.window_title == "Board"


def test_invalid_values_are_dropped_individually(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('split_percent = 500\nsettle_delay_ms = "soon"\nterminate_grace_ms = 10\n')

    settings = load_settings(path, environ={})

    assert settings.split_percent == 67
    assert settings.settle_delay_ms == DEFAULT_SETTLE_DELAY_MS
    assert settings.terminate_grace_ms == 10


def test_broken_toml_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("settle_delay_ms = [", encoding="utf-8")

    assert load_settings(path, environ={}) == CanvasSettings()


def test_environment_overrides_state_dir_and_launcher(tmp_path: Path) -> None:
    settings = load_settings(
        tmp_path / "missing.toml",
        environ={STATE_DIR_ENV: str(tmp_path), LAUNCHER_ENV: "/opt/canvas/run-canvas.sh"},
    )

    assert settings.state_dir == str(tmp_path)
    assert settings.launcher_command() == "/opt/canvas/run-canvas.sh"


def test_default_launcher_runs_this_package_with_current_interpreter() -> None:
    command = CanvasSettings().launcher_command()

    assert command.endswith("-m termcanvas")
    assert Path(sys.executable).name in command
