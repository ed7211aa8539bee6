"""Horizontal marquee for text wider than its display region."""

from __future__ import annotations

import time
from typing import Callable

DEFAULT_SEPARATOR = " ** "
DEFAULT_INTERVAL = 0.5


class Scroller:
    """Time-driven scrolling window over a single line of text.

    Text that fits is returned verbatim. Longer text scrolls one cell per
    ``interval`` seconds and wraps through ``separator`` back to its start.
    Instances are not thread-safe.
    """

    def __init__(
        self,
        width: int = 0,
        *,
        separator: str = DEFAULT_SEPARATOR,
        interval: float = DEFAULT_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._width = max(0, width)
        self._separator = separator
        self._interval = interval
        self._clock = clock
        self._text = ""
        self._offset = 0
        self._last_advance = clock()

    @property
    def text(self) -> str:
        return self._text

    @property
    def width(self) -> int:
        return self._width

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def loop_length(self) -> int:
        return len(self._text) + len(self._separator)

    def set_text(self, text: str) -> None:
        if text != self._text:
            self._text = text
            self.reset()

    def resize(self, width: int) -> None:
        self._width = max(0, width)

    def reset(self) -> None:
        self._offset = 0
        self._last_advance = self._clock()

    def seek(self, offset: int) -> None:
        """Move the window to ``offset`` (taken modulo the loop length)."""
        self._offset = offset % self.loop_length if self.loop_length else 0

    def _advance(self) -> None:
        now = self._clock()
        if now <= self._last_advance + self._interval:
            return
        if self._offset + 1 < self.loop_length:
            self._offset += 1
        else:
            self._offset = 0
        self._last_advance = now

    def display(self) -> str:
        """Return the visible part of the text for the current time."""
        self._advance()
        text = self._text
        width = self._width
        if width >= len(text):
            return text
        start = self._offset
        if start + width <= len(text):
            return text[start : start + width]

        # The window straddles the wrap point: tail, separator, head.
        visible = text[start:]
        sep_start = max(0, start - len(text))
        free = width - len(visible)
        visible += self._separator[sep_start : sep_start + free]
        free = width - len(visible)
        visible += text[:free]
        return visible
