"""Tests for playlist rendering."""

from __future__ import annotations

from ncmpy.columns import parse_columns
from ncmpy.ui.playlist_view import render_playlist, rich_color, visible_start

COLUMNS = parse_columns("(1)[]{a} (5f)[red]{l}")
QUEUE = [
    {"file": f"song{i}.ogg", "artist": f"Artist {i}", "time": str(60 + i)}
    for i in range(10)
]


def test_rich_color() -> None:
    assert rich_color(-1) is None
    assert rich_color(1) == "red"


def test_visible_start_keeps_selection_centered() -> None:
    assert visible_start(None, 10, 4) == 0
    assert visible_start(1, 10, 4) == 0
    assert visible_start(5, 10, 4) == 3
    assert visible_start(9, 10, 4) == 6
    assert visible_start(2, 3, 0) == 0


def test_render_header_and_rows() -> None:
    text = render_playlist(COLUMNS, QUEUE, width=20, height=5)
    lines = text.plain.split("\n")
    assert len(lines) == 5
    assert lines[0] == "Artist         Time "
    assert lines[1] == "─" * 20
    assert lines[2] == "Artist 0       1:00 "
    assert lines[4].startswith("Artist 2")


def test_render_follows_selection() -> None:
    text = render_playlist(
        COLUMNS, QUEUE, width=20, height=6, selected=9, highlighting=True
    )
    lines = text.plain.split("\n")
    assert lines[-1].startswith("Artist 9")
    assert lines[2].startswith("Artist 6")


def test_render_without_room_for_rows() -> None:
    text = render_playlist(COLUMNS, QUEUE, width=10, height=1)
    assert text.plain.count("\n") == 1


def _row_styles(text, row: int) -> list:
    line_start = 0
    for _ in range(row):
        line_start = text.plain.index("\n", line_start) + 1
    line_end = text.plain.find("\n", line_start)
    if line_end < 0:
        line_end = len(text.plain)
    return [
        span.style
        for span in text.spans
        if span.start >= line_start and span.end <= line_end
    ]


def test_selected_row_uses_highlight_color() -> None:
    text = render_playlist(
        COLUMNS,
        QUEUE,
        width=20,
        height=5,
        selected=1,
        highlighting=True,
        highlight_color=3,
    )
    selected = _row_styles(text, 3)
    assert selected
    assert all(style.reverse for style in selected)
    assert all(style.color.name == "yellow" for style in selected)
    other = _row_styles(text, 2)
    assert [style.color.name if style.color else None for style in other] == [
        None,
        "red",
    ]


def test_highlight_color_ignored_without_highlighting() -> None:
    text = render_playlist(
        COLUMNS, QUEUE, width=20, height=5, selected=1, highlight_color=3
    )
    styles = _row_styles(text, 3)
    assert not any(style.reverse for style in styles)
    assert styles[1].color.name == "red"
