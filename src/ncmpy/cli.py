"""Command-line interface for ncmpy."""

from __future__ import annotations

import argparse
from dataclasses import replace
from importlib import metadata
import logging
import os
from pathlib import Path
import sys
import threading
from types import TracebackType
from typing import Iterable, Mapping, Optional, Tuple

from ncmpy.actions import build_catalog
from ncmpy.client import MpdClient
from ncmpy.config import AppConfig, apply_environment, load_config
from ncmpy.errors import ClientError
from ncmpy.logging_setup import init_logging
from ncmpy.model import Model
from ncmpy.runtime import Runtime, load_runtime

logger = logging.getLogger(__name__)


def _version() -> str:
    try:
        return metadata.version("ncmpy")
    except metadata.PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(prog="ncmpy", description="ncmpy MPD client")
    parser.add_argument("--host", default=None, help="MPD host (overrides MPD_HOST)")
    parser.add_argument(
        "--port", type=int, default=None, help="MPD port (overrides MPD_PORT)"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to the JSON configuration file",
    )
    parser.add_argument(
        "-b",
        "--bindings",
        type=Path,
        default=None,
        help="Path to the key binding file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (overrides NCMPY_LOG_LEVEL)",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s {_version()}"
    )
    return parser


def resolve_config(
    args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None
) -> AppConfig:
    """Merge config file, environment and command-line overrides."""
    cfg = load_config(args.config)
    cfg = apply_environment(cfg, os.environ if environ is None else environ)
    if args.host:
        cfg = replace(cfg, host=args.host)
    if args.port is not None:
        if 0 < args.port < 65536:
            cfg = replace(cfg, port=args.port)
        else:
            logger.warning("Ignoring invalid --port %s", args.port)
    return cfg


def _run_tui(model: Model, runtime: Runtime, client: MpdClient) -> int:
    try:
        from ncmpy.tui import run_tui
    except RuntimeError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return run_tui(model, runtime, server_info=client)


def _install_excepthooks() -> None:
    def excepthook(exc_type, exc, tb) -> None:
        logger.exception("Uncaught exception", exc_info=(exc_type, exc, tb))

    sys.excepthook = excepthook

    if hasattr(threading, "excepthook"):

        def thread_hook(args: threading.ExceptHookArgs) -> None:
            exc_value = args.exc_value or RuntimeError("unknown")
            exc_info: Tuple[
                type[BaseException], BaseException, Optional[TracebackType]
            ] = (
                args.exc_type,
                exc_value,
                args.exc_traceback,
            )
            thread_name = args.thread.name if args.thread else "thread"
            logger.exception("Thread exception in %s", thread_name, exc_info=exc_info)

        threading.excepthook = thread_hook


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    init_logging(args.log_level)
    logger.info("App start")
    _install_excepthooks()

    cfg = resolve_config(args)
    try:
        client = MpdClient(cfg.host, cfg.port)
    except RuntimeError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    try:
        client.connect()
    except ClientError as exc:
        print(
            f"Cannot connect to MPD at {cfg.host}:{cfg.port}: {exc}", file=sys.stderr
        )
        return 2

    try:
        catalog = build_catalog()
        runtime = load_runtime(cfg, catalog, bindings_path=args.bindings)
        model = Model(client, cfg, catalog)
        exit_code = _run_tui(model, runtime, client)
    finally:
        client.close()
    logger.info("App exit code=%s", exit_code)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
