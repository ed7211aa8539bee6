"""Tests for the MPD client wrapper."""

from __future__ import annotations

import os
from types import SimpleNamespace
from typing import Any

import pytest

from ncmpy import client
from ncmpy.errors import ClientError


class FakeMPDError(Exception):
    pass


class FakeConnectionError(FakeMPDError):
    pass


class FakeMPDClient:
    def __init__(self) -> None:
        self.timeout: float | None = None
        self.mpd_version = "0.23.5"
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail_on: set[str] = set()
        self.drop_on: set[str] = set()
        self.disconnected = False

    def __getattr__(self, name: str):
        def command(*args: Any) -> Any:
            self.calls.append((name, args))
            if name in self.fail_on:
                raise FakeMPDError(f"{name} rejected")
            if name in self.drop_on:
                raise FakeConnectionError("Connection lost while reading line")
            return FAKE_REPLIES.get(name)

        return command

    def disconnect(self) -> None:
        self.disconnected = True


FAKE_REPLIES: dict[str, Any] = {
    "status": {"state": "play", "volume": "40"},
    "currentsong": {},
    "playlistinfo": [{"file": "a.flac"}, {"file": "b.flac"}],
    "stats": {"songs": "2"},
    "urlhandlers": ["http://"],
    "tagtypes": ["Artist", "Title"],
}


@pytest.fixture
def fake_mpd(monkeypatch) -> SimpleNamespace:
    module = SimpleNamespace(
        MPDClient=FakeMPDClient,
        MPDError=FakeMPDError,
        ConnectionError=FakeConnectionError,
    )
    monkeypatch.setattr(client, "mpd", module)
    monkeypatch.setattr(client, "_MPD_IMPORT_ERROR", None)
    return module


def _connected(fake_mpd: SimpleNamespace) -> client.MpdClient:
    wrapper = client.MpdClient("localhost", 6600, timeout=3.0)
    wrapper.connect()
    return wrapper


def test_connect_and_read(fake_mpd) -> None:
    wrapper = _connected(fake_mpd)
    inner = wrapper._client
    assert inner.timeout == 3.0
    assert inner.calls[0] == ("connect", ("localhost", 6600))
    assert wrapper.version == "0.23.5"
    assert wrapper.status()["volume"] == "40"
    assert wrapper.current_song() is None
    assert [song["file"] for song in wrapper.queue()] == ["a.flac", "b.flac"]
    assert wrapper.stats() == {"songs": "2"}
    assert wrapper.url_handlers() == ["http://"]
    assert wrapper.tag_types() == ["Artist", "Title"]


def test_playback_commands(fake_mpd) -> None:
    wrapper = _connected(fake_mpd)
    wrapper.play()
    wrapper.play(3)
    wrapper.pause(True)
    wrapper.set_volume(140)
    wrapper.set_random(False)
    wrapper.seek_current(-2.0)
    assert wrapper._client.calls[1:] == [
        ("play", ()),
        ("play", (3,)),
        ("pause", (1,)),
        ("setvol", (100,)),
        ("random", (0,)),
        ("seekcur", (0.0,)),
    ]


def test_command_failure_becomes_client_error(fake_mpd) -> None:
    wrapper = _connected(fake_mpd)
    wrapper._client.fail_on.add("next")
    with pytest.raises(ClientError) as excinfo:
        wrapper.next()
    assert "next" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, FakeMPDError)


def test_socket_failure_becomes_client_error(fake_mpd, monkeypatch) -> None:
    wrapper = client.MpdClient("localhost", 6600)

    def refuse(*_args: Any) -> None:
        raise ConnectionRefusedError(111, "Connection refused")

    monkeypatch.setattr(wrapper._client, "connect", refuse, raising=False)
    with pytest.raises(ClientError):
        wrapper.connect()


def test_protocol_error_keeps_connection(fake_mpd) -> None:
    wrapper = _connected(fake_mpd)
    wrapper._client.fail_on.add("play")
    with pytest.raises(ClientError):
        wrapper.play()
    assert wrapper.connected


def test_lost_connection_then_reconnect(fake_mpd) -> None:
    wrapper = _connected(fake_mpd)
    inner = wrapper._client
    inner.drop_on.add("status")
    with pytest.raises(ClientError):
        wrapper.status()
    assert not wrapper.connected
    inner.drop_on.clear()
    wrapper.reconnect()
    assert inner.disconnected
    assert wrapper.connected
    assert [name for name, _ in inner.calls].count("connect") == 2


def test_failed_reconnect_stays_disconnected(fake_mpd) -> None:
    wrapper = _connected(fake_mpd)
    wrapper._client.fail_on.add("connect")
    with pytest.raises(ClientError):
        wrapper.reconnect()
    assert not wrapper.connected


def test_close_after_lost_connection_releases_socket(fake_mpd) -> None:
    wrapper = _connected(fake_mpd)
    inner = wrapper._client
    inner.drop_on.add("status")
    with pytest.raises(ClientError):
        wrapper.status()
    wrapper.close()
    assert inner.disconnected
    assert ("close", ()) not in inner.calls


def test_close_is_idempotent(fake_mpd) -> None:
    wrapper = _connected(fake_mpd)
    wrapper.close()
    wrapper.close()
    assert wrapper._client.disconnected


def test_missing_library_raises_runtime_error(monkeypatch) -> None:
    monkeypatch.setattr(client, "mpd", None)
    monkeypatch.setattr(client, "_MPD_IMPORT_ERROR", ImportError("no mpd"))
    with pytest.raises(RuntimeError, match="python-mpd2"):
        client.MpdClient("localhost", 6600)


@pytest.mark.mpd
def test_live_daemon_status() -> None:
    host = os.environ.get("MPD_HOST", "localhost")
    port = int(os.environ.get("MPD_PORT", "6600"))
    try:
        wrapper = client.MpdClient(host, port, timeout=2.0)
        wrapper.connect()
    except (RuntimeError, ClientError) as exc:
        pytest.skip(f"MPD daemon not reachable: {exc}")
    try:
        assert "state" in wrapper.status()
    finally:
        wrapper.close()
