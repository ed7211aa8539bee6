"""Daemon statistics view."""

from __future__ import annotations

import logging
from typing import Protocol

from rich.text import Text
from textual.widgets import Static

from ncmpy.errors import ClientError
from ncmpy.ui.tui_formatters import format_clock, format_date, format_duration

logger = logging.getLogger(__name__)


class ServerInfoSource(Protocol):
    @property
    def version(self) -> str: ...
    def stats(self) -> dict[str, str]: ...
    def url_handlers(self) -> list[str]: ...
    def tag_types(self) -> list[str]: ...


def _number(stats: dict[str, str], key: str) -> float:
    try:
        return float(stats.get(key, 0))
    except ValueError:
        return 0.0


def build_server_info_text(source: ServerInfoSource) -> Text:
    try:
        stats = source.stats()
    except ClientError:
        stats = {}

    content = Text()
    content.append("MPD server info\n\n", style="bold")

    def entry(name: str, value: str) -> None:
        content.append(f"  {name}", style="bold")
        content.append(": ", style="bold")
        content.append(f"{value}\n")

    entry("Version", source.version)
    entry("Uptime", format_duration(_number(stats, "uptime")))
    entry("Time playing", format_clock(_number(stats, "playtime")))
    content.append("\n")
    entry("Total playtime", format_duration(_number(stats, "db_playtime")))
    entry("Artist names", stats.get("artists", "0"))
    entry("Album names", stats.get("albums", "0"))
    entry("Songs in database", stats.get("songs", "0"))
    content.append("\n")
    entry("Last DB update", format_date(_number(stats, "db_update")))
    try:
        handlers = source.url_handlers()
    except ClientError:
        logger.debug("URL handlers unavailable")
    else:
        content.append("\n")
        entry("URL Handlers", ", ".join(handlers))
    try:
        tags = source.tag_types()
    except ClientError:
        logger.debug("Tag types unavailable")
    else:
        content.append("\n")
        entry("Tag Types", ", ".join(tags))
    return content


class ServerInfoView(Static):
    """Panel showing daemon version and database statistics."""

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__("", markup=False, id=id)

    def show(self, source: ServerInfoSource) -> None:
        self.update(build_server_info_text(source))
