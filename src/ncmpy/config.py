"""User configuration for ncmpy."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from ncmpy.columns import COLOR_DEFAULT, COLOR_NAMES, DEFAULT_COLUMNS_FORMAT

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6600


@dataclass(frozen=True)
class ColorConfig:
    """Color ids for each screen region; -1 keeps the terminal default."""

    header_window: int = COLOR_DEFAULT
    main_window: int = COLOR_DEFAULT
    main_window_highlight: int = COLOR_DEFAULT
    progressbar: int = COLOR_DEFAULT
    progressbar_elapsed: int = COLOR_DEFAULT
    state_flags: int = COLOR_DEFAULT
    state_line: int = COLOR_DEFAULT
    statusbar: int = COLOR_DEFAULT
    volume: int = COLOR_DEFAULT


@dataclass(frozen=True)
class AppConfig:
    """Immutable user configuration loaded from disk."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    bindings_path: Optional[str] = None
    song_columns_list_format: str = DEFAULT_COLUMNS_FORMAT
    cyclic_scrolling: bool = False
    display_bitrate: bool = False
    display_remaining_time: bool = False
    display_volume_level: bool = True
    header_text_scrolling: bool = True
    volume_change_step: int = 2
    colors: ColorConfig = field(default_factory=ColorConfig)


def get_config_dir(app_name: str = "ncmpy") -> Path:
    """Return the per-user config directory for the current platform."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            root = Path(base)
        else:
            root = Path.home() / "AppData" / "Roaming"
        return root / app_name
    if _is_macos():
        return Path.home() / "Library" / "Application Support" / app_name
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / app_name


def get_config_path() -> Path:
    """Return the full config file path."""
    return get_config_dir() / "config.json"


def get_bindings_path(cfg: AppConfig) -> Path:
    """Return the binding file to load for ``cfg``."""
    if cfg.bindings_path:
        return Path(cfg.bindings_path).expanduser()
    return get_config_dir() / "bindings"


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration from disk, falling back to defaults on error."""
    if path is None:
        path = get_config_path()
        if not path.exists():
            return AppConfig()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.exception("Failed to load config from %s", path)
        return AppConfig()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: top level is not an object", path)
        return AppConfig()
    return _config_from_mapping(raw)


def apply_environment(cfg: AppConfig, environ: Mapping[str, str]) -> AppConfig:
    """Override the daemon address with MPD_HOST / MPD_PORT when set."""
    host = environ.get("MPD_HOST") or cfg.host
    port = cfg.port
    raw_port = environ.get("MPD_PORT")
    if raw_port:
        try:
            port = _valid_port(int(raw_port), cfg.port)
        except ValueError:
            logger.warning("Ignoring invalid MPD_PORT=%r", raw_port)
    return replace(cfg, host=host, port=port)


def _is_macos() -> bool:
    """Return True when running on macOS."""
    return os.uname().sysname == "Darwin" if hasattr(os, "uname") else False  # pyright: ignore[reportAttributeAccessIssue]


def _valid_port(value: int, default: int) -> int:
    return value if 0 < value < 65536 else default


def _get_bool(raw: dict[str, Any], key: str, default: bool) -> bool:
    """Fetch a boolean value; ncmpcpp-style "yes"/"no" strings are accepted."""
    value = raw.get(key, default)
    if isinstance(value, bool):
        return value
    if value in ("yes", "no"):
        return value == "yes"
    return default


def _get_int(
    raw: dict[str, Any],
    key: str,
    default: int,
    *,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    """Fetch an integer value with optional clamping."""
    value = raw.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool):
        value = default
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def _get_str(
    raw: dict[str, Any],
    key: str,
    default: str,
    *,
    allow_empty: bool = False,
) -> str:
    """Fetch a string value, optionally allowing empty strings."""
    value = raw.get(key, default)
    if not isinstance(value, str):
        return default
    if not value and not allow_empty:
        return default
    return value


def _get_color(raw: dict[str, Any], key: str) -> int:
    """Fetch a color given by name; unknown names keep the default color."""
    value = raw.get(key)
    if isinstance(value, str):
        return COLOR_NAMES.get(value, COLOR_DEFAULT)
    return COLOR_DEFAULT


def _colors_from_mapping(raw: Any) -> ColorConfig:
    if not isinstance(raw, dict):
        return ColorConfig()
    return ColorConfig(
        **{
            name: _get_color(raw, name)
            for name in ColorConfig.__dataclass_fields__
            if name in raw
        }
    )


def _config_from_mapping(raw: dict[str, Any]) -> AppConfig:
    """Normalize raw JSON data into an AppConfig."""
    bindings_path = raw.get("bindings_path")
    if bindings_path is not None and not isinstance(bindings_path, str):
        bindings_path = None
    port = _valid_port(_get_int(raw, "port", DEFAULT_PORT), DEFAULT_PORT)
    return AppConfig(
        host=_get_str(raw, "host", DEFAULT_HOST),
        port=port,
        bindings_path=bindings_path,
        song_columns_list_format=_get_str(
            raw, "song_columns_list_format", DEFAULT_COLUMNS_FORMAT
        ),
        cyclic_scrolling=_get_bool(raw, "cyclic_scrolling", False),
        display_bitrate=_get_bool(raw, "display_bitrate", False),
        display_remaining_time=_get_bool(raw, "display_remaining_time", False),
        display_volume_level=_get_bool(raw, "display_volume_level", True),
        header_text_scrolling=_get_bool(raw, "header_text_scrolling", True),
        volume_change_step=_get_int(
            raw, "volume_change_step", 2, min_value=1, max_value=100
        ),
        colors=_colors_from_mapping(raw.get("colors")),
    )
