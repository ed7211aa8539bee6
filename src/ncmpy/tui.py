"""Textual-based TUI for ncmpy."""

from __future__ import annotations

import logging
from typing import Callable, Optional

try:
    from textual.app import App, ComposeResult
    from textual.containers import Container, Horizontal
    from textual import events
    from textual.message import Message
    from textual.screen import ModalScreen
    from textual.widgets import Input, Static
    from rich.text import Text
except Exception as exc:  # pragma: no cover - depends on environment
    raise RuntimeError(
        "Textual is required for the TUI. Install the 'textual' dependency."
    ) from exc

from ncmpy.columns import SongProperty
from ncmpy.dispatch import describe_unmapped
from ncmpy.keys import KEY_MOUSE, KEY_RESIZE
from ncmpy.logging_setup import set_console_level
from ncmpy.model import ActiveView, Model, MouseAction, MouseEvent
from ncmpy.runtime import Runtime
from ncmpy.ui.bindings import help_bindings
from ncmpy.ui.help_view import HelpView
from ncmpy.ui.keymap import key_code
from ncmpy.ui.marquee import Marquee
from ncmpy.ui.playlist_view import PlaylistView, rich_color
from ncmpy.ui.server_info import ServerInfoSource, ServerInfoView
from ncmpy.ui.tui_formatters import (
    format_track_time,
    playback_mode,
    playlist_summary,
    ratio_from_click,
    render_progress_bar,
    song_field,
)

logger = logging.getLogger(__name__)

LEFT_BUTTON = 1
RIGHT_BUTTON = 3


# UI components
class ProgressBar(Static):
    """One-line song progress bar; clicks request a seek."""

    class Seek(Message):
        def __init__(self, ratio: float) -> None:
            super().__init__()
            self.ratio = ratio

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__("", markup=False, id=id)
        self.ratio = 0.0
        self.elapsed_color: Optional[str] = None
        self.rest_color: Optional[str] = None

    def set_ratio(self, ratio: float) -> None:
        self.ratio = ratio
        self.refresh()

    def render(self) -> Text:
        elapsed, rest = render_progress_bar(self.size.width, self.ratio)
        content = Text(no_wrap=True, overflow="crop")
        content.append(elapsed, style=self.elapsed_color or "")
        content.append(rest, style=self.rest_color or "")
        return content

    def on_click(self, event: events.Click) -> None:
        self.post_message(self.Seek(ratio_from_click(event.x, self.size.width)))


class CommandPrompt(ModalScreen[Optional[str]]):
    """Modal prompt reading an action name."""

    def compose(self) -> ComposeResult:
        with Container(id="command_prompt"):
            yield Static("Command:", id="prompt_title")
            yield Input(id="prompt_input")

    def on_mount(self) -> None:
        self.query_one("#prompt_input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value.strip() or None)

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            event.stop()
            self.dismiss(None)


# Main application
class NcmpyApp(App):
    """ncmpy Textual application."""

    TITLE = "ncmpy"
    TICK_INTERVAL = 0.25

    CSS = """
    Screen {
        layout: vertical;
    }
    #header_row, #state_row, #status_row {
        height: 1;
    }
    #view_title {
        width: auto;
        padding-right: 1;
    }
    #header_text {
        width: 1fr;
    }
    #volume {
        width: auto;
    }
    #state_flags {
        width: 1fr;
        content-align: right middle;
    }
    #main {
        height: 1fr;
    }
    #progress {
        height: 1;
    }
    #mode {
        width: auto;
        padding-right: 1;
    }
    #song_text {
        width: 1fr;
    }
    #track_time {
        width: auto;
        padding-left: 1;
    }
    #command_prompt {
        width: 60;
        height: auto;
        border: round $accent;
        padding: 0 1;
    }
    CommandPrompt {
        align: center middle;
    }
    """

    # --- Lifecycle ---
    def __init__(
        self,
        *,
        model: Model,
        runtime: Runtime,
        server_info: Optional[ServerInfoSource] = None,
    ) -> None:
        super().__init__()
        self.model = model
        self.runtime = runtime
        self.server_info = server_info
        self._connected = True
        self._shown_view: Optional[ActiveView] = None
        self._ui_ready = False

    def compose(self) -> ComposeResult:
        with Horizontal(id="header_row"):
            yield Static("", id="view_title", markup=False)
            yield Marquee(
                id="header_text",
                scrolling=self.model.config.header_text_scrolling,
            )
            yield Static("", id="volume", markup=False)
        with Horizontal(id="state_row"):
            yield Static("", id="state_flags", markup=False)
        with Container(id="main"):
            yield PlaylistView(id="playlist")
            yield HelpView(id="help")
            yield ServerInfoView(id="server_info")
        yield ProgressBar(id="progress")
        with Horizontal(id="status_row"):
            yield Static("", id="mode", markup=False)
            yield Marquee(id="song_text")
            yield Static("", id="track_time", markup=False)

    def on_mount(self) -> None:
        self._apply_colors()
        self.query_one("#help", HelpView).set_bindings(
            help_bindings(self.runtime.dispatch),
            volume_step=self.model.config.volume_change_step,
        )
        self.model.command_prompt = self._prompt_command
        for problem in self.runtime.problems:
            self.model.update_message(problem)
        self._connected = self.model.refresh()
        self._ui_ready = True
        self._update_views()
        self.set_interval(self.TICK_INTERVAL, self._on_tick)
        logger.info("TUI mounted")

    def on_unmount(self) -> None:
        self.model.command_prompt = None
        logger.info("TUI shutdown")

    # --- Key dispatch ---
    def handle_key_code(self, code: Optional[int]) -> bool:
        """Run the actions bound to ``code``; return False when unmapped."""
        if code is None:
            return False
        actions = self.runtime.dispatch.lookup(code)
        if actions is None:
            self.model.update_message(describe_unmapped(code))
            self._update_views()
            return False
        for action in actions:
            logger.debug("Key %d -> %s", code, action.name)
            self.model.run_action(action)
        if self.model.exit_requested:
            self.exit()
            return True
        self._update_views()
        return True

    def on_key(self, event: events.Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        code = key_code(event.key, event.character)
        if code is None:
            return
        event.stop()
        event.prevent_default()
        self.handle_key_code(code)

    def _mouse(self, action: MouseAction, value: float = 0.0) -> None:
        self.model.pending_mouse = MouseEvent(action, value)
        self.handle_key_code(KEY_MOUSE)

    # --- Event handlers ---
    def on_resize(self, event: events.Resize) -> None:
        del event
        if self._ui_ready:
            self.handle_key_code(KEY_RESIZE)

    def on_playlist_view_row_clicked(self, event: PlaylistView.RowClicked) -> None:
        if event.row is None:
            self._mouse(MouseAction.WAKE_UP)
        elif event.button == RIGHT_BUTTON:
            self._mouse(MouseAction.PLAY, event.row)
        elif event.button == LEFT_BUTTON:
            self._mouse(MouseAction.SELECT, event.row)

    def on_progress_bar_seek(self, event: ProgressBar.Seek) -> None:
        self._mouse(MouseAction.SET_PROGRESS, event.ratio)

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        del event
        self._mouse(MouseAction.SCROLL_DOWN)

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        del event
        self._mouse(MouseAction.SCROLL_UP)

    # --- Command prompt ---
    def _prompt_command(self, callback: Callable[[str], None]) -> None:
        def done(result: Optional[str]) -> None:
            if result:
                callback(result)
            self._update_views()

        self.push_screen(CommandPrompt(), done)

    # --- Refresh ---
    def _on_tick(self) -> None:
        connected = self.model.refresh()
        if connected != self._connected:
            self._connected = connected
            if connected:
                logger.info("MPD connection restored")
            else:
                logger.warning("Lost contact with MPD")
                self.model.update_message("Error: status update failed")
        self._update_views()

    def _apply_colors(self) -> None:
        colors = self.model.config.colors
        regions = {
            "#header_row": colors.header_window,
            "#volume": colors.volume,
            "#state_row": colors.state_line,
            "#state_flags": colors.state_flags,
            "#main": colors.main_window,
            "#status_row": colors.statusbar,
        }
        for selector, color_id in regions.items():
            color = rich_color(color_id)
            if color is not None:
                self.query_one(selector).styles.color = color
        progress = self.query_one("#progress", ProgressBar)
        progress.elapsed_color = rich_color(colors.progressbar_elapsed)
        progress.rest_color = rich_color(colors.progressbar)

    def _update_views(self) -> None:
        model = self.model
        if model.layout_dirty:
            model.layout_dirty = False
            self.refresh(layout=True)
        self._update_header()
        self._update_main()
        self._update_status()

    def _update_header(self) -> None:
        model = self.model
        self.query_one("#view_title", Static).update(model.active_view.value)
        self.query_one("#header_text", Marquee).set_text(
            playlist_summary(model.queue)
        )
        volume = ""
        if model.config.display_volume_level:
            level = f"{model.volume}%" if model.volume >= 0 else "n/a"
            volume = f" Volume: {level}"
        self.query_one("#volume", Static).update(volume)
        flags = model.state_flags()
        self.query_one("#state_flags", Static).update(
            f"[{''.join(flags)}]" if flags else ""
        )

    def _update_main(self) -> None:
        model = self.model
        view = model.active_view
        playlist = self.query_one("#playlist", PlaylistView)
        help_view = self.query_one("#help", HelpView)
        info = self.query_one("#server_info", ServerInfoView)
        playlist.display = view is ActiveView.PLAYLIST
        help_view.display = view is ActiveView.HELP
        info.display = view is ActiveView.SERVER_INFO
        if view is ActiveView.PLAYLIST:
            playlist.show(
                self.runtime.columns,
                model.queue,
                current=model.current_position,
                selected=model.selected,
                highlighting=model.highlighting,
                highlight_color=model.config.colors.main_window_highlight,
            )
        elif view is ActiveView.HELP:
            model.help_offset = help_view.scroll_to_line(model.help_offset)
        elif view is ActiveView.SERVER_INFO and self._shown_view is not view:
            if self.server_info is not None:
                info.show(self.server_info)
        self._shown_view = view

    def _update_status(self) -> None:
        model = self.model
        song_text = self.query_one("#song_text", Marquee)
        message = model.message
        song = model.current_song
        if message is not None:
            song_text.set_text(message)
        elif song is not None and model.state != "stop":
            song_text.set_text(
                f"{song_field(song, SongProperty.ARTIST)} - "
                f"{song_field(song, SongProperty.TITLE)}"
            )
        else:
            song_text.set_text("")

        playing = song is not None and model.state != "stop"
        mode = f"{playback_mode(model.state)}:" if playing else ""
        self.query_one("#mode", Static).update(mode)
        track_time = ""
        if playing:
            track_time = format_track_time(
                model.elapsed,
                model.duration,
                bitrate=model.bitrate if model.display_bitrate else None,
                remaining=model.config.display_remaining_time,
            )
        self.query_one("#track_time", Static).update(track_time)
        ratio = model.elapsed / model.duration if model.duration > 0 else 0.0
        self.query_one("#progress", ProgressBar).set_ratio(ratio)


# Public entrypoints
def run_tui(
    model: Model,
    runtime: Runtime,
    *,
    server_info: Optional[ServerInfoSource] = None,
) -> int:
    """Run the TUI and return an exit code."""
    logger.info("TUI start")
    try:
        set_console_level(logging.WARNING)
    except Exception:
        logger.exception("Failed to set console log level for TUI")
    app = NcmpyApp(model=model, runtime=runtime, server_info=server_info)
    app.run()
    logger.info("TUI exit")
    return 0
