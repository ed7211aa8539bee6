"""Client state and the implementation of every bindable action."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import time
from typing import Callable, Optional, Protocol

from ncmpy.actions import ActionCatalog, ActionDescriptor, execute
from ncmpy.client import Song
from ncmpy.config import AppConfig
from ncmpy.errors import ClientError

logger = logging.getLogger(__name__)

MESSAGE_TIMEOUT = 5.0
SELECTION_HIGHLIGHT = 5.0
RECONNECT_INTERVAL = 2.0


class PlaybackClient(Protocol):
    def reconnect(self) -> None: ...
    def status(self) -> dict[str, str]: ...
    def current_song(self) -> Optional[Song]: ...
    def queue(self) -> list[Song]: ...
    def play(self, position: Optional[int] = None) -> None: ...
    def pause(self, paused: bool) -> None: ...
    def stop(self) -> None: ...
    def previous(self) -> None: ...
    def next(self) -> None: ...
    def clear(self) -> None: ...
    def delete(self, position: int) -> None: ...
    def set_volume(self, volume: int) -> None: ...
    def set_random(self, enabled: bool) -> None: ...
    def set_repeat(self, enabled: bool) -> None: ...
    def seek_current(self, seconds: float) -> None: ...


class ActiveView(Enum):
    PLAYLIST = "Playlist"
    HELP = "Help"
    SERVER_INFO = "ServerInfo"


class MouseAction(Enum):
    SET_PROGRESS = "set_progress"
    SELECT = "select"
    PLAY = "play"
    SCROLL_DOWN = "scroll_down"
    SCROLL_UP = "scroll_up"
    WAKE_UP = "wake_up"


@dataclass(frozen=True)
class MouseEvent:
    action: MouseAction
    value: float = 0.0


@dataclass(frozen=True)
class InfoMessage:
    text: str
    timestamp: float


class Model:
    """Daemon snapshot plus UI state, mutated by actions."""

    def __init__(
        self,
        client: PlaybackClient,
        config: AppConfig,
        catalog: ActionCatalog,
        *,
        now: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.config = config
        self.catalog = catalog
        self._now = now
        self.status: dict[str, str] = {}
        self.current_song: Optional[Song] = None
        self.queue: list[Song] = []
        self._playlist_version: Optional[str] = None
        self.active_view = ActiveView.PLAYLIST
        self.selected: Optional[int] = None
        self._selected_at = 0.0
        self.display_bitrate = config.display_bitrate
        self.help_offset = 0
        self.exit_requested = False
        self.layout_dirty = True
        self.pending_mouse: Optional[MouseEvent] = None
        self.command_prompt: Optional[Callable[[Callable[[str], None]], None]] = None
        self._message: Optional[InfoMessage] = None
        self.online = True
        self._next_reconnect = 0.0

    # --- Snapshot ---
    def refresh(self) -> bool:
        """Pull status and queue from the daemon; return False on failure.

        After a failed refresh, later ones try to reconnect first, at most
        once every RECONNECT_INTERVAL seconds.
        """
        if not self.online:
            if self._now() < self._next_reconnect:
                return False
            self._next_reconnect = self._now() + RECONNECT_INTERVAL
            try:
                self.client.reconnect()
            except ClientError:
                return False
            self._playlist_version = None
        try:
            self.status = self.client.status()
            version = self.status.get("playlist")
            if version is None or version != self._playlist_version:
                self.queue = self.client.queue()
                self._playlist_version = version
                self._clamp_selection()
            self.current_song = self.client.current_song()
        except ClientError:
            self.status = {}
            self.current_song = None
            self.online = False
            return False
        self.online = True
        return True

    @property
    def state(self) -> str:
        return self.status.get("state", "stop")

    @property
    def volume(self) -> int:
        return _as_int(self.status.get("volume"), -1)

    @property
    def random(self) -> bool:
        return self.status.get("random") == "1"

    @property
    def repeat(self) -> bool:
        return self.status.get("repeat") == "1"

    @property
    def bitrate(self) -> int:
        return _as_int(self.status.get("bitrate"), 0)

    @property
    def elapsed(self) -> float:
        return _as_float(self.status.get("elapsed"), 0.0)

    @property
    def duration(self) -> float:
        raw = self.status.get("duration")
        if raw is None and self.current_song:
            raw = self.current_song.get("duration") or self.current_song.get("time")
        return _as_float(raw, 0.0)

    @property
    def current_position(self) -> Optional[int]:
        raw = self.status.get("song")
        return _as_int(raw, -1) if raw is not None else None

    def state_flags(self) -> list[str]:
        flags: list[str] = []
        if self.repeat:
            flags.append("r")
        if self.random:
            flags.append("z")
        if self.status.get("single") == "1":
            flags.append("s")
        if self.status.get("consume") == "1":
            flags.append("c")
        if _as_float(self.status.get("xfade"), 0.0) > 0:
            flags.append("x")
        return flags

    # --- Messages ---
    def update_message(self, text: str) -> None:
        self._message = InfoMessage(text=text, timestamp=self._now())

    @property
    def message(self) -> Optional[str]:
        if self._message is None:
            return None
        if self._now() < self._message.timestamp + MESSAGE_TIMEOUT:
            return self._message.text
        self._message = None
        return None

    def _command(self, label: str, call: Callable[[], None]) -> None:
        try:
            call()
        except ClientError:
            self.update_message(f"Error: {label} failed")

    # --- Selection ---
    @property
    def highlighting(self) -> bool:
        return self.selected is not None and (
            self._now() < self._selected_at + SELECTION_HIGHLIGHT
        )

    def select(self, index: int) -> None:
        self.selected = index
        self._selected_at = self._now()

    def _clamp_selection(self) -> None:
        if self.selected is None:
            return
        if not self.queue:
            self.selected = None
        elif self.selected >= len(self.queue):
            self.selected = len(self.queue) - 1

    # --- Actions ---
    def execute_command(self) -> None:
        if self.command_prompt is None:
            self.update_message("Command prompt unavailable")
            return
        self.command_prompt(self.run_command)

    def run_command(self, name: str) -> None:
        """Run the catalog action called ``name``."""
        name = name.strip()
        action = self.catalog.find(name)
        if action is None:
            self.update_message(f'No command named "{name}"')
            return
        self.run_action(action)
        self.update_message(f'Executing command "{name}"')

    def run_action(self, action: ActionDescriptor) -> None:
        logger.debug("Running action %s", action.name)
        execute(action, self)

    def playlist_play(self) -> None:
        self._command("play", self.client.play)

    def playlist_pause(self) -> None:
        state = self.state
        if state == "play":
            self._command("pause", lambda: self.client.pause(True))
        elif state == "pause":
            self._command("unpause", lambda: self.client.pause(False))

    def playlist_stop(self) -> None:
        self._command("stop", self.client.stop)

    def playlist_clear(self) -> None:
        self._command("playlist clear", self.client.clear)

    def playlist_delete_items(self) -> None:
        if self.selected is None:
            return
        index = self.selected
        self._command("delete", lambda: self.client.delete(index))

    def playlist_previous(self) -> None:
        self._command("previous song", self.client.previous)

    def playlist_next(self) -> None:
        self._command("next song", self.client.next)

    def play_selected(self) -> None:
        if self.selected is None:
            return
        index = self.selected
        self._command("play selected", lambda: self.client.play(index))

    def set_volume(self, volume: int) -> None:
        volume = max(0, min(100, volume))
        self._command("volume set", lambda: self.client.set_volume(volume))

    def volume_up(self) -> None:
        if self.volume < 0:
            return
        self.set_volume(self.volume + self.config.volume_change_step)

    def volume_down(self) -> None:
        if self.volume < 0:
            return
        self.set_volume(self.volume - self.config.volume_change_step)

    def toggle_bitrate_visibility(self) -> None:
        self.display_bitrate = not self.display_bitrate

    def toggle_random(self) -> None:
        enabled = not self.random
        self._command("random toggle", lambda: self.client.set_random(enabled))

    def toggle_repeat(self) -> None:
        enabled = not self.repeat
        self._command("repeat toggle", lambda: self.client.set_repeat(enabled))

    def set_song_progress(self, ratio: float) -> None:
        target = self.duration * max(0.0, min(1.0, ratio))
        self._command("seek", lambda: self.client.seek_current(target))

    def process_mouse(self) -> None:
        event = self.pending_mouse
        self.pending_mouse = None
        if event is None:
            return
        if event.action is MouseAction.WAKE_UP:
            if self.selected is not None:
                self.select(self.selected)
        elif event.action is MouseAction.SCROLL_DOWN:
            self.scroll_down()
        elif event.action is MouseAction.SCROLL_UP:
            self.scroll_up()
        elif event.action is MouseAction.SET_PROGRESS:
            self.set_song_progress(event.value)
        elif event.action in (MouseAction.SELECT, MouseAction.PLAY):
            index = int(event.value)
            if 0 <= index < len(self.queue):
                self.select(index)
                if event.action is MouseAction.PLAY:
                    self.play_selected()

    def resize_windows(self) -> None:
        self.layout_dirty = True

    def scroll_down(self) -> None:
        if self.active_view is ActiveView.HELP:
            self.help_offset += 1
        elif self.active_view is ActiveView.PLAYLIST:
            self._scroll_playlist(1)

    def scroll_up(self) -> None:
        if self.active_view is ActiveView.HELP:
            self.help_offset = max(0, self.help_offset - 1)
        elif self.active_view is ActiveView.PLAYLIST:
            self._scroll_playlist(-1)

    def _scroll_playlist(self, step: int) -> None:
        size = len(self.queue)
        if size == 0:
            return
        if self.selected is None:
            self.select(0)
            return
        target = self.selected + step
        if 0 <= target < size:
            self.select(target)
        elif self.config.cyclic_scrolling:
            self.select(target % size)
        else:
            self.select(self.selected)

    def move_home(self) -> None:
        if self.queue:
            self.select(0)

    def move_end(self) -> None:
        if self.queue:
            self.select(len(self.queue) - 1)

    def show_help(self) -> None:
        self.active_view = ActiveView.HELP

    def show_playlist(self) -> None:
        self.active_view = ActiveView.PLAYLIST

    def show_server_info(self) -> None:
        self.active_view = ActiveView.SERVER_INFO

    def quit(self) -> None:
        self.exit_requested = True


def _as_int(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def _as_float(raw: Optional[str], default: float) -> float:
    if raw is None:
        return default
    try:
        return float(raw)
    except (TypeError, ValueError):
        return default
