"""Tests for CLI parsing and startup."""

from __future__ import annotations

import builtins
import logging
from pathlib import Path
import sys
import threading
from types import SimpleNamespace

import pytest

from ncmpy import cli
from ncmpy.config import AppConfig
from ncmpy.errors import ClientError


class DummyClient:
    def __init__(self, host: str, port: int, *, fail: bool = False) -> None:
        self.host = host
        self.port = port
        self.fail = fail
        self.closed = False

    def connect(self) -> None:
        if self.fail:
            raise ClientError("connect failed: refused")

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def quiet_startup(monkeypatch) -> None:
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)
    monkeypatch.setattr(cli, "init_logging", lambda level=None: Path("ncmpy.log"))
    monkeypatch.setattr(cli, "load_config", lambda path: AppConfig())


def test_parse_defaults() -> None:
    args = cli.build_parser().parse_args([])
    assert args.host is None
    assert args.port is None
    assert args.config is None
    assert args.bindings is None
    assert args.log_level is None


def test_parse_options() -> None:
    args = cli.build_parser().parse_args(
        ["--host", "box", "--port", "6601", "-c", "cfg.json", "-b", "keys"]
    )
    assert args.host == "box"
    assert args.port == 6601
    assert args.config == Path("cfg.json")
    assert args.bindings == Path("keys")


def test_version_flag_exits(capsys) -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--version"])
    assert "ncmpy" in capsys.readouterr().out


def test_resolve_config_precedence() -> None:
    args = cli.build_parser().parse_args(["--port", "7001"])
    cfg = cli.resolve_config(args, {"MPD_HOST": "envhost", "MPD_PORT": "7000"})
    assert cfg.host == "envhost"
    assert cfg.port == 7001
    args = cli.build_parser().parse_args(["--host", "clihost", "--port", "99999"])
    cfg = cli.resolve_config(args, {"MPD_PORT": "7000"})
    assert (cfg.host, cfg.port) == ("clihost", 7000)


def test_run_tui_handles_import_error(monkeypatch, capsys) -> None:
    original_import = builtins.__import__

    def fake_import(name, *args, **kwargs):
        if name == "ncmpy.tui":
            raise RuntimeError("boom")
        return original_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    result = cli._run_tui(object(), object(), object())  # type: ignore[arg-type]
    assert result == 1
    assert "boom" in capsys.readouterr().err


def test_main_runs_tui(monkeypatch) -> None:
    clients: list[DummyClient] = []

    def make_client(host: str, port: int) -> DummyClient:
        clients.append(DummyClient(host, port))
        return clients[-1]

    seen: dict[str, object] = {}

    def fake_run(model, runtime, client) -> int:
        seen["model"] = model
        seen["runtime"] = runtime
        return 0

    monkeypatch.setattr(cli, "MpdClient", make_client)
    monkeypatch.setattr(cli, "_run_tui", fake_run)
    monkeypatch.delenv("MPD_HOST", raising=False)
    monkeypatch.delenv("MPD_PORT", raising=False)
    exit_code = cli.main(["--host", "box", "-b", "missing-bindings"])
    assert exit_code == 0
    assert clients[0].host == "box"
    assert clients[0].closed
    assert seen["model"].client is clients[0]  # type: ignore[attr-defined]
    assert seen["runtime"].problems  # type: ignore[attr-defined]


def test_main_reports_connection_failure(monkeypatch, capsys) -> None:
    monkeypatch.setattr(
        cli, "MpdClient", lambda host, port: DummyClient(host, port, fail=True)
    )
    exit_code = cli.main([])
    assert exit_code == 2
    assert "Cannot connect to MPD" in capsys.readouterr().err


def test_main_passes_log_level(monkeypatch) -> None:
    levels: list[object] = []

    def fake_init(level=None) -> Path:
        levels.append(level)
        return Path("ncmpy.log")

    monkeypatch.setattr(cli, "init_logging", fake_init)
    monkeypatch.setattr(
        cli, "MpdClient", lambda host, port: DummyClient(host, port, fail=True)
    )
    cli.main(["--log-level", "debug"])
    assert levels == ["debug"]


def test_main_handles_missing_mpd_library(monkeypatch, capsys) -> None:
    def boom(host: str, port: int) -> DummyClient:
        raise RuntimeError("MPD support is unavailable.")

    monkeypatch.setattr(cli, "MpdClient", boom)
    exit_code = cli.main([])
    assert exit_code == 1
    assert "unavailable" in capsys.readouterr().err


def test_thread_exceptions_are_logged(caplog) -> None:
    cli._install_excepthooks()
    fake_args = SimpleNamespace(
        exc_type=RuntimeError,
        exc_value=RuntimeError("boom"),
        exc_traceback=None,
        thread=SimpleNamespace(name="worker"),
    )
    with caplog.at_level(logging.ERROR, logger="ncmpy.cli"):
        threading.excepthook(fake_args)  # type: ignore[arg-type]
    assert "Thread exception in worker" in caplog.text
