"""XDG config loading for spawn tuning and state locations."""

from __future__ import annotations

import os
import shlex
import sys
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

DEFAULT_CONFIG_PATH = Path("~/.config/termcanvas/config.toml").expanduser()
DEFAULT_STATE_DIR = "/tmp"
DEFAULT_SOCKET_DIR = "/tmp"
DEFAULT_WINDOW_TITLE = "Canvas"
DEFAULT_SPLIT_PERCENT = 67
DEFAULT_SETTLE_DELAY_MS = 150
DEFAULT_TERMINATE_GRACE_MS = 200
DEFAULT_QUERY_TIMEOUT_MS = 2000

STATE_DIR_ENV = "TERMCANVAS_STATE_DIR"
SOCKET_DIR_ENV = "TERMCANVAS_SOCKET_DIR"
LAUNCHER_ENV = "TERMCANVAS_LAUNCHER"


class CanvasSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    state_dir: str = DEFAULT_STATE_DIR
    socket_dir: str = DEFAULT_SOCKET_DIR
    launcher: str = ""
    window_title: str = Field(default=DEFAULT_WINDOW_TITLE, min_length=1)
    split_percent: int = Field(default=DEFAULT_SPLIT_PERCENT, ge=10, le=90)
    # Empirical pause between the interrupt and the retyped command; there is
    # no acknowledgement that the shell has its prompt back.
    settle_delay_ms: int = Field(default=DEFAULT_SETTLE_DELAY_MS, ge=0, le=10_000)
    terminate_grace_ms: int = Field(default=DEFAULT_TERMINATE_GRACE_MS, ge=0, le=10_000)
    remote_probe_timeout_ms: int = Field(default=2000, ge=100, le=60_000)
    ghostty_pid_delay_ms: int = Field(default=1000, ge=0, le=10_000)
    window_position_delay_ms: int = Field(default=500, ge=0, le=10_000)
    query_timeout_ms: int = Field(default=DEFAULT_QUERY_TIMEOUT_MS, ge=1, le=600_000)

    @property
    def settle_delay(self) -> float:
        return self.settle_delay_ms / 1000

    @property
    def terminate_grace(self) -> float:
        return self.terminate_grace_ms / 1000

    def launcher_command(self) -> str:
        if self.launcher.strip():
            return self.launcher.strip()
        return shlex.join([sys.executable, "-m", "termcanvas"])


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _sanitize(raw: Mapping[str, object], environ: Mapping[str, str]) -> CanvasSettings:
    cfg = CanvasSettings()
    for name in CanvasSettings.model_fields:
        if name not in raw:
            continue
        try:
            setattr(cfg, name, raw[name])
        except ValidationError:
            continue

    for env_name, field_name in (
        (STATE_DIR_ENV, "state_dir"),
        (SOCKET_DIR_ENV, "socket_dir"),
        (LAUNCHER_ENV, "launcher"),
    ):
        value = environ.get(env_name, "").strip()
        if value:
            setattr(cfg, field_name, value)
    return cfg


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> CanvasSettings:
    env = os.environ if environ is None else environ
    resolved = get_config_path(path)
    raw: dict[str, object] = {}
    if resolved.exists():
        try:
            with resolved.open("rb") as handle:
                loaded = tomllib.load(handle)
        except (tomllib.TOMLDecodeError, OSError):
            loaded = {}
        if isinstance(loaded, dict):
            raw = loaded
    return _sanitize(raw, env)
