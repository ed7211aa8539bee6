"""Playlist column format strings.

A format is a sequence of columns such as::

    (20)[]{a} (6f)[green]{NE} (50)[white]{t|f:Title} (7f)[magenta]{l}

``(WIDTH)`` is a relative weight, or an absolute cell count with an ``f``
suffix. ``[COLOR]`` is empty or a basic color name. ``{TAG}`` selects the song
property by its first character; the rest of the tag is kept but not
interpreted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ncmpy.grammar import Scanner

DEFAULT_COLUMNS_FORMAT = (
    "(20)[]{a} (6f)[green]{NE} (50)[white]{t|f:Title} (20)[cyan]{b} (7f)[magenta]{l}"
)

COLOR_DEFAULT = -1

COLOR_NAMES: dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}


class SongProperty(Enum):
    """Song field shown by a playlist column; the value is its header label."""

    ALBUM = "Album"
    ALBUM_ARTIST = "Album Artist"
    ARTIST = "Artist"
    COMMENT = "Comment"
    COMPOSER = "Composer"
    DATE = "Date"
    DIRECTORY = "Directory"
    DISC = "Disc"
    FILENAME = "Filename"
    GENRE = "Genre"
    LENGTH = "Time"
    PERFORMER = "Performer"
    PRIORITY = "Priority"
    TITLE = "Title/Filename"
    TRACK = "Track"
    TRACK_FULL = "Full Track"

    @property
    def label(self) -> str:
        return self.value


TAG_PROPERTIES: dict[str, SongProperty] = {
    "l": SongProperty.LENGTH,
    "f": SongProperty.FILENAME,
    "D": SongProperty.DIRECTORY,
    "a": SongProperty.ARTIST,
    "A": SongProperty.ALBUM_ARTIST,
    "t": SongProperty.TITLE,
    "b": SongProperty.ALBUM,
    "y": SongProperty.DATE,
    "n": SongProperty.TRACK,
    "N": SongProperty.TRACK_FULL,
    "g": SongProperty.GENRE,
    "c": SongProperty.COMPOSER,
    "p": SongProperty.PERFORMER,
    "d": SongProperty.DISC,
    "C": SongProperty.COMMENT,
    "P": SongProperty.PRIORITY,
}


@dataclass(frozen=True)
class ColumnDescriptor:
    """One playlist column."""

    prop: SongProperty
    width: int
    is_fixed: bool = False
    color: int = COLOR_DEFAULT
    tag: str = ""


def color_id(name: str) -> int:
    """Return the color id for ``name``; unknown names give COLOR_DEFAULT."""
    return COLOR_NAMES.get(name, COLOR_DEFAULT)


def _expect(scanner: Scanner, literal: str) -> None:
    if not scanner.take(literal):
        found = scanner.peek() or "end of input"
        raise scanner.error(f"expected {literal!r}, found {found!r}")


def _delimited(scanner: Scanner, close: str, what: str) -> str:
    start = scanner.pos
    value = scanner.take_until(close)
    if value is None:
        raise scanner.error(f"unterminated {what}, missing {close!r}", start)
    scanner.take(close)
    return value


def _width(scanner: Scanner) -> tuple[int, bool]:
    start = scanner.pos
    raw = _delimited(scanner, ")", "width")
    is_fixed = raw.endswith("f")
    digits = raw[:-1] if is_fixed else raw
    if not (digits.isascii() and digits.isdigit()):
        raise scanner.error(f"invalid column width {raw!r}", start)
    return int(digits), is_fixed


def _column(scanner: Scanner) -> ColumnDescriptor:
    _expect(scanner, "(")
    width, is_fixed = _width(scanner)
    _expect(scanner, "[")
    color = _delimited(scanner, "]", "color")
    _expect(scanner, "{")
    tag_start = scanner.pos
    tag = _delimited(scanner, "}", "property tag")
    prop = TAG_PROPERTIES.get(tag[:1])
    if prop is None:
        raise scanner.error(f"unknown column property {tag!r}", tag_start)
    return ColumnDescriptor(
        prop=prop,
        width=width,
        is_fixed=is_fixed,
        color=color_id(color),
        tag=tag,
    )


def parse_columns(text: str, *, source: Optional[str] = None) -> list[ColumnDescriptor]:
    """Parse a column format string into column descriptors.

    Raises:
        ConfigParseError: the format is malformed or has no column.
    """
    scanner = Scanner(text, source=source)
    columns: list[ColumnDescriptor] = []
    while True:
        scanner.take_while(str.isspace)
        if scanner.at_end():
            break
        columns.append(_column(scanner))
    if not columns:
        raise scanner.error("expected at least one column")
    return columns
