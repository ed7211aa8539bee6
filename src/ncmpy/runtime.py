"""Compile configuration sources into the data the UI runs on."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Optional

from ncmpy.actions import ActionCatalog
from ncmpy.bindings import BindingEntry, load_bindings
from ncmpy.columns import DEFAULT_COLUMNS_FORMAT, ColumnDescriptor, parse_columns
from ncmpy.config import AppConfig, get_bindings_path
from ncmpy.dispatch import DispatchTable, build_dispatch_table
from ncmpy.errors import ConfigError, ConfigIOError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Runtime:
    """Columns and key dispatch for one configuration snapshot."""

    columns: tuple[ColumnDescriptor, ...]
    dispatch: DispatchTable
    problems: tuple[str, ...] = field(default_factory=tuple)


def compile_columns(cfg: AppConfig, problems: list[str]) -> list[ColumnDescriptor]:
    try:
        return parse_columns(
            cfg.song_columns_list_format, source="song_columns_list_format"
        )
    except ConfigError as exc:
        logger.warning("Invalid column format, using default: %s", exc)
        problems.append(f"Column format: {exc}")
        return parse_columns(DEFAULT_COLUMNS_FORMAT)


def compile_bindings(
    path: Path, problems: list[str], *, required: bool
) -> list[BindingEntry]:
    try:
        return load_bindings(path)
    except ConfigIOError as exc:
        if required:
            logger.warning("%s", exc)
            problems.append(str(exc))
        else:
            logger.debug("No binding file loaded: %s", exc)
        return []
    except ConfigError as exc:
        logger.warning("Invalid binding file, using default keys: %s", exc)
        problems.append(f"Bindings: {exc}")
        return []


def load_runtime(
    cfg: AppConfig,
    catalog: ActionCatalog,
    *,
    bindings_path: Optional[Path] = None,
) -> Runtime:
    """Build columns and dispatch from ``cfg``; never raises on bad input.

    A missing default binding file is normal; a missing file that was named
    explicitly, or any parse failure, is reported in ``Runtime.problems``.
    """
    problems: list[str] = []
    columns = compile_columns(cfg, problems)
    required = bindings_path is not None or bool(cfg.bindings_path)
    path = bindings_path or get_bindings_path(cfg)
    custom = compile_bindings(path, problems, required=required)
    dispatch = build_dispatch_table(catalog, custom)
    logger.info(
        "Runtime ready: %d columns, %d bound keys (%d custom blocks)",
        len(columns),
        len(dispatch),
        len(custom),
    )
    return Runtime(columns=tuple(columns), dispatch=dispatch, problems=tuple(problems))
