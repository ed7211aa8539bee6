"""Marquee widget for scrolling single-line text."""

from __future__ import annotations

from typing import Optional

from textual import events
from textual.timer import Timer
from textual.widgets import Static

from ncmpy.scroller import DEFAULT_INTERVAL, DEFAULT_SEPARATOR, Scroller


class Marquee(Static):
    """Single-line marquee display for long text."""

    def __init__(
        self,
        text: str = "",
        *,
        step_interval: float = DEFAULT_INTERVAL,
        separator: str = DEFAULT_SEPARATOR,
        scrolling: bool = True,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
        disabled: bool = False,
    ) -> None:
        super().__init__(
            "", markup=False, name=name, id=id, classes=classes, disabled=disabled
        )
        self._scroller = Scroller(separator=separator, interval=step_interval)
        self._step_interval = step_interval
        self._scrolling = scrolling
        self._width_override: Optional[int] = None
        self._timer: Optional[Timer] = None
        self._current_text = ""
        if text:
            self.set_text(text)

    def on_mount(self) -> None:
        # Tick faster than the scroller so each step shows up promptly.
        self._timer = self.set_interval(self._step_interval / 2, self._tick)
        self._render_frame()

    def on_unmount(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def on_resize(self, event: events.Resize) -> None:
        self._render_frame()

    def set_text(self, full_text: str) -> None:
        if full_text == self._scroller.text:
            return
        self._scroller.set_text(full_text)
        self._render_frame()

    @property
    def current_text(self) -> str:
        return self._current_text

    @property
    def full_text(self) -> str:
        return self._scroller.text

    @property
    def scroller(self) -> Scroller:
        return self._scroller

    def set_width_override(self, width: Optional[int]) -> None:
        self._width_override = width
        self._render_frame()

    def _available_width(self) -> int:
        if self._width_override is not None:
            return max(0, self._width_override)
        size = getattr(self, "content_size", None) or getattr(self, "size", None)
        return max(0, getattr(size, "width", 0))

    def _render_frame(self) -> None:
        width = self._available_width()
        self._scroller.resize(width)
        if width <= 0 or not self._scroller.text:
            text = ""
        elif self._scrolling:
            text = self._scroller.display()
        else:
            text = self._scroller.text[:width]
        if text != self._current_text:
            self._current_text = text
            self.update(text)

    def _tick(self) -> None:
        self._render_frame()
