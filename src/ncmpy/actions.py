"""Catalog of the commands a key can trigger."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional


class ActionKind(Enum):
    EXECUTE_COMMAND = "execute_command"
    PLAYLIST_PLAY = "playlist_play"
    PLAYLIST_PAUSE = "playlist_pause"
    PLAYLIST_STOP = "playlist_stop"
    PLAYLIST_CLEAR = "playlist_clear"
    PLAYLIST_DELETE_ITEMS = "playlist_delete_items"
    PLAYLIST_PREVIOUS = "playlist_previous"
    PLAYLIST_NEXT = "playlist_next"
    PLAY_SELECTED = "play_selected"
    PROCESS_MOUSE = "process_mouse"
    RESIZE_WINDOWS = "resize_windows"
    SCROLL_DOWN = "scroll_down"
    SCROLL_UP = "scroll_up"
    MOVE_HOME = "move_home"
    MOVE_END = "move_end"
    SHOW_HELP = "show_help"
    SHOW_PLAYLIST = "show_playlist"
    SHOW_SERVER_INFO = "show_server_info"
    TOGGLE_BITRATE_VISIBILITY = "toggle_bitrate_visibility"
    TOGGLE_RANDOM = "toggle_random"
    TOGGLE_REPEAT = "toggle_repeat"
    VOLUME_DOWN = "volume_down"
    VOLUME_UP = "volume_up"
    QUIT = "quit"


ACTION_DESCRIPTIONS: dict[ActionKind, str] = {
    ActionKind.EXECUTE_COMMAND: "Execute a command",
    ActionKind.PLAYLIST_PLAY: "Play the playlist",
    ActionKind.PLAYLIST_PAUSE: "Pause the playlist",
    ActionKind.PLAYLIST_STOP: "Stop the playlist",
    ActionKind.PLAYLIST_CLEAR: "Clear the playlist",
    ActionKind.PLAYLIST_DELETE_ITEMS: "Delete songs from the playlist",
    ActionKind.PLAYLIST_PREVIOUS: "Play the playlist's previous song",
    ActionKind.PLAYLIST_NEXT: "Play the playlist's next song",
    ActionKind.PLAY_SELECTED: "Play the selected song",
    ActionKind.PROCESS_MOUSE: "Process mouse events",
    ActionKind.RESIZE_WINDOWS: "Resize the windows",
    ActionKind.SCROLL_DOWN: "Scroll down in a list",
    ActionKind.SCROLL_UP: "Scroll up in a list",
    ActionKind.MOVE_HOME: "Move to the start of a list",
    ActionKind.MOVE_END: "Move to the end of a list",
    ActionKind.SHOW_HELP: "Show the help view",
    ActionKind.SHOW_PLAYLIST: "Show the playlist view",
    ActionKind.SHOW_SERVER_INFO: "Show the MPD server information",
    ActionKind.TOGGLE_BITRATE_VISIBILITY: "Toggle the bitrate visibility",
    ActionKind.TOGGLE_RANDOM: 'Toggle the "random" mode',
    ActionKind.TOGGLE_REPEAT: 'Toggle the "repeat" mode',
    ActionKind.VOLUME_DOWN: "Lower the volume",
    ActionKind.VOLUME_UP: "Raise the volume",
    ActionKind.QUIT: "Quit",
}

# Default key for each action, as key names understood by ncmpy.keys.
DEFAULT_BINDINGS: tuple[tuple[str, str], ...] = (
    ("c", "playlist_clear"),
    ("delete", "playlist_delete_items"),
    ("p", "playlist_pause"),
    ("s", "playlist_stop"),
    ("<", "playlist_previous"),
    (">", "playlist_next"),
    ("right", "volume_up"),
    ("left", "volume_down"),
    ("enter", "play_selected"),
    ("down", "scroll_down"),
    ("up", "scroll_up"),
    ("home", "move_home"),
    ("end", "move_end"),
    ("f1", "show_help"),
    ("1", "show_playlist"),
    ("@", "show_server_info"),
    ("#", "toggle_bitrate_visibility"),
    ("z", "toggle_random"),
    ("r", "toggle_repeat"),
    (":", "execute_command"),
    ("mouse", "process_mouse"),
    ("resize", "resize_windows"),
    ("q", "quit"),
)


@dataclass(frozen=True)
class ActionDescriptor:
    kind: ActionKind
    description: str

    @property
    def name(self) -> str:
        return self.kind.value


class ActionCatalog(Mapping[str, ActionDescriptor]):
    """Read-only mapping from action name to descriptor."""

    def __init__(self, actions: Mapping[str, ActionDescriptor]) -> None:
        self._actions = MappingProxyType(dict(actions))

    def __getitem__(self, name: str) -> ActionDescriptor:
        return self._actions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def find(self, name: str) -> Optional[ActionDescriptor]:
        return self._actions.get(name)


def build_catalog() -> ActionCatalog:
    """Return the catalog of every built-in action."""
    return ActionCatalog(
        {
            kind.value: ActionDescriptor(
                kind, ACTION_DESCRIPTIONS.get(kind, "Missing description")
            )
            for kind in ActionKind
        }
    )


def execute(action: ActionDescriptor, target: object) -> None:
    """Run ``action`` against ``target``, which has a method per action kind."""
    handler = getattr(target, action.kind.value, None)
    if not callable(handler):
        raise TypeError(
            f"{type(target).__name__} does not implement action {action.name!r}"
        )
    handler()
