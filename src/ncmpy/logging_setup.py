"""Logging setup for ncmpy."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
from typing import Optional

LOG_LEVEL_ENV = "NCMPY_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"
LOG_MAX_BYTES = 2_000_000
LOG_BACKUPS = 5
# python-mpd2 traces every protocol command at DEBUG.
MPD_LOGGER = "mpd"


def _default_log_dir() -> Path:
    local_appdata = os.getenv("LOCALAPPDATA")
    if local_appdata:
        return Path(local_appdata) / "ncmpy" / "logs"
    state_home = os.getenv("XDG_STATE_HOME")
    if state_home:
        return Path(state_home) / "ncmpy" / "logs"
    return Path.home() / ".ncmpy" / "logs"


def resolve_level(name: Optional[str]) -> int:
    """Return the logging level for ``name`` (a level name or number)."""
    if not name:
        return logging.INFO
    name = name.strip()
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _is_console(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(
        handler, logging.FileHandler
    )


def init_logging(
    level_name: Optional[str] = None,
    *,
    app_name: str = "ncmpy",
    log_dir: Optional[Path] = None,
) -> Path:
    """Initialize logging and return the log file path.

    ``level_name`` wins over the NCMPY_LOG_LEVEL environment variable.
    Calling this again only updates levels; handlers are added once.
    """
    log_dir = log_dir or _default_log_dir()
    log_path = log_dir / f"{app_name}.log"
    level = resolve_level(level_name or os.getenv(LOG_LEVEL_ENV))

    root = logging.getLogger()
    root.setLevel(level)
    logging.getLogger(MPD_LOGGER).setLevel(max(level, logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT)

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            file_handler = RotatingFileHandler(
                log_path,
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUPS,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        if not any(_is_console(h) for h in root.handlers):
            stream_handler = logging.StreamHandler()
            stream_handler.setFormatter(formatter)
            root.addHandler(stream_handler)
    except OSError:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        logging.getLogger(app_name).warning("Cannot write logs under %s", log_dir)

    for handler in root.handlers:
        if isinstance(handler, RotatingFileHandler) or _is_console(handler):
            handler.setLevel(level)
    logging.getLogger(app_name).info("Logging initialized at %s", log_path)
    return log_path


def set_console_level(level: int) -> None:
    """Adjust console (stderr) handler level."""
    for handler in logging.getLogger().handlers:
        if _is_console(handler):
            handler.setLevel(level)
