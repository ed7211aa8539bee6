"""Help view listing the active key bindings."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from rich.text import Text
from textual.binding import Binding
from textual.widgets import Static

_SECTION_ACTIONS: dict[str, list[str]] = {
    "Keys - Movement": [
        "scroll_up",
        "scroll_down",
        "move_home",
        "move_end",
        "show_help",
        "show_playlist",
        "show_server_info",
    ],
    "Keys - Global": [
        "playlist_stop",
        "playlist_pause",
        "playlist_play",
        "playlist_next",
        "playlist_previous",
        "volume_down",
        "volume_up",
        "toggle_repeat",
        "toggle_random",
        "toggle_bitrate_visibility",
        "execute_command",
        "quit",
    ],
    "Keys - Playlist": [
        "play_selected",
        "playlist_delete_items",
        "playlist_clear",
    ],
}

_MOUSE_HELP: list[tuple[str, str]] = [
    ("Left click", "Select pointed item"),
    ("Right click", "Play"),
    ("Click on progress bar", "Seek"),
]

_KEY_SYMBOLS: dict[str, str] = {
    "left": "←",
    "right": "→",
    "up": "↑",
    "down": "↓",
}

KEY_COLUMN_WIDTH = 20


def _format_key(key: str) -> str:
    if key in _KEY_SYMBOLS:
        return _KEY_SYMBOLS[key]
    if len(key) == 1:
        return key
    if key.startswith("ctrl_") and len(key) == 6:
        return f"Ctrl-{key[5].upper()}"
    return " ".join(part.capitalize() for part in key.split("_"))


def _labels(volume_step: int) -> dict[str, str]:
    return {
        "scroll_up": "Move cursor up",
        "scroll_down": "Move cursor down",
        "move_home": "Home",
        "move_end": "End",
        "volume_down": f"Decrease volume by {volume_step}%",
        "volume_up": f"Increase volume by {volume_step}%",
        "playlist_delete_items": "Delete selected item(s) from playlist",
    }


def build_help_text(bindings: Iterable[Binding], *, volume_step: int = 2) -> Text:
    by_action: dict[str, list[str]] = defaultdict(list)
    by_desc: dict[str, str] = {}
    for binding in bindings:
        by_action[binding.action].append(binding.key)
        if binding.description:
            by_desc[binding.action] = binding.description
    labels = _labels(volume_step)

    content = Text()
    for section, actions in _SECTION_ACTIONS.items():
        content.append(f"\n  {section}\n\n", style="bold")
        for action in actions:
            keys = by_action.get(action)
            if not keys:
                continue
            key_text = " ".join(_format_key(key) for key in keys)
            label = labels.get(action, by_desc.get(action, action))
            content.append(f"    {key_text.ljust(KEY_COLUMN_WIDTH)}: {label}\n")

    content.append("\n  Mouse - Playlist\n\n", style="bold")
    for label, description in _MOUSE_HELP:
        content.append(f"    {label.ljust(KEY_COLUMN_WIDTH)}: {description}\n")
    return content


class HelpView(Static):
    """Scrollable help text; ``offset`` is the first line shown."""

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__("", markup=False, id=id)
        self._text = Text()
        self._offset = 0

    def set_bindings(self, bindings: Iterable[Binding], *, volume_step: int) -> None:
        self._text = build_help_text(bindings, volume_step=volume_step)
        self._refresh_text()

    def scroll_to_line(self, offset: int) -> int:
        """Show the help from line ``offset``; return the clamped offset."""
        lines = self._text.plain.count("\n")
        self._offset = max(0, min(offset, lines))
        self._refresh_text()
        return self._offset

    def _refresh_text(self) -> None:
        if self._offset == 0:
            self.update(self._text)
            return
        parts = self._text.split("\n", allow_blank=True)
        self.update(Text("\n").join(parts[self._offset :]))
