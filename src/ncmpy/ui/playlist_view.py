"""Playlist grid rendering."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.style import Style
from rich.text import Text
from textual import events
from textual.message import Message
from textual.widgets import Static

from ncmpy.client import Song
from ncmpy.columns import COLOR_DEFAULT, COLOR_NAMES, ColumnDescriptor
from ncmpy.layout import layout
from ncmpy.ui.tui_formatters import fit_cell, song_field

HEADER_ROWS = 2

_RICH_COLORS = {color_id: name for name, color_id in COLOR_NAMES.items()}


def rich_color(color_id: int) -> Optional[str]:
    """Return the Rich color name for a column color id, None for default."""
    return _RICH_COLORS.get(color_id)


def visible_start(selected: Optional[int], total: int, max_height: int) -> int:
    """Return the first row index to show so the selection stays centered."""
    if selected is None or max_height <= 0:
        return 0
    half = max_height // 2
    if selected < half:
        return 0
    if selected < total - half:
        return selected - half
    return max(0, total - max_height)


def render_playlist(
    columns: Sequence[ColumnDescriptor],
    queue: Sequence[Song],
    *,
    width: int,
    height: int,
    current: Optional[int] = None,
    selected: Optional[int] = None,
    highlighting: bool = False,
    highlight_color: int = COLOR_DEFAULT,
) -> Text:
    """Render the column header and the visible rows of ``queue``.

    The selected row, while highlighted, is drawn reversed in
    ``highlight_color`` instead of the column colors.
    """
    widths = layout(width, columns)
    last = len(columns) - 1
    content = Text(no_wrap=True, overflow="crop")

    for index, column in enumerate(columns):
        content.append(
            fit_cell(column.prop.label, widths[index], gap=index != last),
            style="bold",
        )
    content.append("\n")
    content.append("─" * max(0, width))

    max_rows = max(0, height - HEADER_ROWS)
    start = visible_start(selected, len(queue), max_rows)
    for row, song in enumerate(queue[start : start + max_rows]):
        position = start + row
        content.append("\n")
        marked = highlighting and position == selected
        emphasis = Style(bold=position == current, reverse=marked)
        for index, column in enumerate(columns):
            cell = fit_cell(
                song_field(song, column.prop), widths[index], gap=index != last
            )
            color_id = highlight_color if marked else column.color
            color = Style(color=rich_color(color_id))
            content.append(cell, style=color + emphasis)
    return content


class PlaylistView(Static):
    """Playlist grid; clicks are reported as row positions."""

    class RowClicked(Message):
        def __init__(self, row: Optional[int], button: int) -> None:
            super().__init__()
            self.row = row
            self.button = button

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__("", markup=False, id=id)
        self.first_row = 0

    def show(
        self,
        columns: Sequence[ColumnDescriptor],
        queue: Sequence[Song],
        *,
        current: Optional[int],
        selected: Optional[int],
        highlighting: bool,
        highlight_color: int = COLOR_DEFAULT,
    ) -> None:
        size = self.content_size
        self.first_row = visible_start(
            selected, len(queue), max(0, size.height - HEADER_ROWS)
        )
        self.update(
            render_playlist(
                columns,
                queue,
                width=size.width,
                height=size.height,
                current=current,
                selected=selected,
                highlighting=highlighting,
                highlight_color=highlight_color,
            )
        )

    def on_click(self, event: events.Click) -> None:
        row = event.y - HEADER_ROWS
        position = self.first_row + row if row >= 0 else None
        self.post_message(self.RowClicked(position, event.button))
