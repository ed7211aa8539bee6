from __future__ import annotations

from datetime import datetime
import os
from typing import Optional

from ncmpy.client import Song
from ncmpy.columns import SongProperty

UNKNOWN = "unknown"

# Tag names used by MPD for properties that map one to one.
_SONG_TAGS: dict[SongProperty, str] = {
    SongProperty.ALBUM: "album",
    SongProperty.ALBUM_ARTIST: "albumartist",
    SongProperty.ARTIST: "artist",
    SongProperty.COMMENT: "comment",
    SongProperty.COMPOSER: "composer",
    SongProperty.DATE: "date",
    SongProperty.DISC: "disc",
    SongProperty.GENRE: "genre",
    SongProperty.PERFORMER: "performer",
    SongProperty.PRIORITY: "prio",
}


def _tag(song: Song, key: str) -> Optional[str]:
    value = song.get(key)
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None or value == "":
        return None
    return str(value)


def _song_seconds(song: Song) -> int:
    raw = _tag(song, "duration") or _tag(song, "time")
    try:
        return int(float(raw)) if raw is not None else 0
    except ValueError:
        return 0


def _track_parts(song: Song) -> tuple[int, Optional[int]]:
    raw = _tag(song, "track") or ""
    number, _, total = raw.partition("/")
    try:
        track = int(number)
    except ValueError:
        track = 0
    try:
        count: Optional[int] = int(total)
    except ValueError:
        count = None
    return track, count


def song_field(song: Song, prop: SongProperty) -> str:
    """Return the text shown for ``prop`` of ``song``."""
    if prop is SongProperty.TITLE:
        return _tag(song, "title") or os.path.basename(_tag(song, "file") or UNKNOWN)
    if prop is SongProperty.LENGTH:
        minutes, seconds = divmod(_song_seconds(song), 60)
        return f"{minutes}:{seconds:02d}"
    if prop is SongProperty.TRACK:
        track, _ = _track_parts(song)
        return f"{track:02d}"
    if prop is SongProperty.TRACK_FULL:
        track, total = _track_parts(song)
        if total is None:
            return f"{track:02d}"
        return f"{track:02d}/{total:02d}"
    if prop is SongProperty.FILENAME:
        return os.path.basename(_tag(song, "file") or UNKNOWN)
    if prop is SongProperty.DIRECTORY:
        return os.path.dirname(_tag(song, "file") or "") or "/"
    return _tag(song, _SONG_TAGS[prop]) or UNKNOWN


def fit_cell(text: str, width: int, *, gap: bool = True) -> str:
    """Pad or cut ``text`` to exactly ``width`` cells.

    With ``gap`` the last cell is kept blank to separate adjacent columns.
    """
    if width <= 0:
        return ""
    room = width - 1 if gap else width
    return text[: max(0, room)].ljust(width)


def format_clock(seconds: float) -> str:
    """Format a duration as ``m:ss`` or ``h:m:ss``."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    hours, minutes = divmod(minutes, 60)
    if hours == 0:
        return f"{minutes}:{secs:02d}"
    return f"{hours}:{minutes}:{secs:02d}"


def format_duration(seconds: float) -> str:
    """Format a long duration, e.g. ``34d, 5h, 57m, 53s``."""
    total = max(0, int(seconds))
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    parts = [
        f"{value}{unit}"
        for value, unit in ((days, "d"), (hours, "h"), (minutes, "m"), (secs, "s"))
        if value > 0
    ]
    return ", ".join(parts)


def format_date(timestamp: float) -> str:
    """Format a Unix timestamp like ``11/26/2014 07:51:29 PM``."""
    return datetime.fromtimestamp(timestamp).strftime("%m/%d/%Y %I:%M:%S %p")


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}{'s' if value > 1 else ''}"


def playlist_summary(queue: list[Song]) -> str:
    """Return the header summary of the queue length and total duration."""
    if not queue:
        return "0 item"
    total = sum(_song_seconds(song) for song in queue)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return (
        f"{len(queue)} items, length: {_plural(hours, 'hour')}, "
        f"{_plural(minutes, 'minute')}, {_plural(secs, 'second')}"
    )


def format_track_time(
    elapsed: float,
    duration: float,
    *,
    bitrate: Optional[int] = None,
    remaining: bool = False,
) -> str:
    """Return the status bar time block, e.g. ``(320 kbps) [1:02/3:45]``."""
    prefix = f"({bitrate} kbps) " if bitrate else ""
    if remaining:
        shown = f"-{format_clock(max(0.0, duration - elapsed))}"
    else:
        shown = format_clock(elapsed)
    return f"{prefix}[{shown}/{format_clock(duration)}]"


def playback_mode(state: str) -> str:
    return {"play": "Playing", "pause": "Paused", "stop": "Stopped"}.get(
        state, "Stopped"
    )


def render_progress_bar(width: int, ratio: float) -> tuple[str, str]:
    """Split a ``width``-cell bar into its elapsed and remaining parts."""
    if width <= 0:
        return "", ""
    filled = int(max(0.0, min(1.0, ratio)) * width)
    if filled >= width:
        return "━" * width, ""
    return "━" * filled + "╸", "─" * max(0, width - filled - 1)


def ratio_from_click(x: int, width: int) -> float:
    """Map a click x position to a 0..1 ratio."""
    if width <= 1:
        return 0.0
    clamped = max(0, min(x, width - 1))
    return clamped / float(width - 1)
