"""Tests for the server info view."""

from __future__ import annotations

from ncmpy.errors import ClientError
from ncmpy.ui.server_info import build_server_info_text


class DummySource:
    version = "0.23.5"

    def __init__(self, *, fail_lists: bool = False) -> None:
        self.fail_lists = fail_lists

    def stats(self) -> dict[str, str]:
        return {
            "uptime": "90061",
            "playtime": "125",
            "db_playtime": "3600",
            "artists": "12",
            "albums": "34",
            "songs": "567",
            "db_update": "0",
        }

    def url_handlers(self) -> list[str]:
        if self.fail_lists:
            raise ClientError("urlhandlers failed")
        return ["http://", "nfs://"]

    def tag_types(self) -> list[str]:
        if self.fail_lists:
            raise ClientError("tagtypes failed")
        return ["Artist", "Album"]


class BrokenStats(DummySource):
    def stats(self) -> dict[str, str]:
        raise ClientError("stats failed")


def test_server_info_lists_stats() -> None:
    text = build_server_info_text(DummySource()).plain
    assert "Version: 0.23.5" in text
    assert "Uptime: 1d, 1h, 1m, 1s" in text
    assert "Time playing: 2:05" in text
    assert "Songs in database: 567" in text
    assert "URL Handlers: http://, nfs://" in text
    assert "Tag Types: Artist, Album" in text


def test_server_info_tolerates_failures() -> None:
    text = build_server_info_text(DummySource(fail_lists=True)).plain
    assert "URL Handlers" not in text
    text = build_server_info_text(BrokenStats()).plain
    assert "Songs in database: 0" in text
