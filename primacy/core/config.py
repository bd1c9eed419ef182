from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from primacy.core.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "configs" / "primacy.default.yaml"

FAILURE_MODES = ("strict", "exit_status")


@dataclass
class WindowConfig:
    title: str = "PRIMACY"
    width: int = 1024
    height: int = 768
    background: str = "#000"


@dataclass
class AppConfig:
    app_dir: Path = field(default_factory=Path.cwd)
    view_prefix: str = "module"
    view_extension: str = "html"
    transfer_file: str = "args.json"
    stage_dir: str = "lib/pipeline"
    interpreter: str | None = None
    stage_timeout: float | None = None
    failure_mode: str = "strict"
    window: WindowConfig = field(default_factory=WindowConfig)

    @property
    def transfer_path(self) -> Path:
        return self.app_dir / self.transfer_file

    @property
    def stage_path(self) -> Path:
        return self.app_dir / self.stage_dir

    @property
    def interpreter_command(self) -> str:
        return self.interpreter or sys.executable


def _check_keys(section: str, raw: dict[str, Any], allowed: set[str]) -> None:
    unknown = sorted(str(key) for key in set(raw) - allowed)
    if unknown:
        raise ConfigError(f"Unknown {section} keys: {', '.join(unknown)}")


def _coerce(section: str, raw: dict[str, Any], key: str, kind: type) -> None:
    """Convert ``raw[key]`` to ``kind`` in place; None stays None."""
    value = raw.get(key)
    if value is None:
        return
    if isinstance(value, bool) or (kind is str and not isinstance(value, str)):
        raise ConfigError(f"'{section}.{key}' must be a {kind.__name__}, got {value!r}")
    try:
        raw[key] = kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{section}.{key}' must be a {kind.__name__}, got {value!r}") from e


def config_from_dict(raw: dict[str, Any] | None, base_dir: Path | None = None) -> AppConfig:
    """Build an AppConfig from a parsed mapping.

    Relative ``app_dir`` values resolve against ``base_dir`` (the directory of
    the config file) when one is given.
    """
    raw = dict(raw or {})
    _check_keys("config", raw, {f.name for f in fields(AppConfig)})

    window_raw = raw.pop("window", None) or {}
    if not isinstance(window_raw, dict):
        raise ConfigError("'window' must be a mapping")
    window_raw = dict(window_raw)
    _check_keys("window", window_raw, {f.name for f in fields(WindowConfig)})
    for key in ("width", "height"):
        _coerce("window", window_raw, key, int)
    for key in ("title", "background"):
        _coerce("window", window_raw, key, str)

    _coerce("config", raw, "stage_timeout", float)
    for key in ("view_prefix", "view_extension", "transfer_file", "stage_dir", "interpreter", "failure_mode"):
        _coerce("config", raw, key, str)

    _coerce("config", raw, "app_dir", str)
    app_dir = raw.pop("app_dir", None)
    if app_dir is None:
        resolved_dir = Path.cwd()
    else:
        resolved_dir = Path(app_dir).expanduser()
        if not resolved_dir.is_absolute() and base_dir is not None:
            resolved_dir = base_dir / resolved_dir

    config = AppConfig(app_dir=resolved_dir.resolve(), window=WindowConfig(**window_raw), **raw)

    if config.failure_mode not in FAILURE_MODES:
        raise ConfigError(
            f"Invalid failure_mode '{config.failure_mode}', expected one of {', '.join(FAILURE_MODES)}"
        )
    if config.stage_timeout is not None and config.stage_timeout <= 0:
        raise ConfigError("stage_timeout must be positive")
    return config


def load_config(config_path: str | Path | None = None) -> AppConfig:
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return config_from_dict({})
        path = DEFAULT_CONFIG_PATH
    else:
        path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse config file {path}: {e}") from e
    if raw is not None and not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return config_from_dict(raw, base_dir=path.resolve().parent)
