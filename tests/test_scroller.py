"""Tests for the marquee scroller."""

from __future__ import annotations

from ncmpy.scroller import Scroller


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _scroller(text: str, width: int, clock: FakeClock | None = None) -> Scroller:
    scroller = Scroller(width, clock=clock or FakeClock())
    scroller.set_text(text)
    return scroller


def test_fitting_text_is_returned_verbatim() -> None:
    clock = FakeClock()
    scroller = _scroller("short", 10, clock)
    for _ in range(5):
        clock.now += 1.0
        assert scroller.display() == "short"


def test_window_inside_text() -> None:
    scroller = _scroller("abcdefghij", 4)
    assert scroller.display() == "abcd"
    scroller.seek(3)
    assert scroller.display() == "defg"


def test_window_wraps_through_separator() -> None:
    scroller = _scroller("abcdefghij", 6)
    scroller.seek(7)
    assert scroller.display() == "hij **"
    scroller.seek(9)
    assert scroller.display() == "j ** a"
    scroller.seek(11)
    assert scroller.display() == "** abc"
    scroller.seek(13)
    assert scroller.display() == " abcde"


def test_every_offset_fills_the_width() -> None:
    for text, width in [("abcdefghij", 6), ("abcdefghij", 9), ("abcde", 1)]:
        scroller = _scroller(text, width)
        for offset in range(scroller.loop_length):
            scroller.seek(offset)
            assert len(scroller.display()) == width, (text, width, offset)


def test_short_separator_region() -> None:
    scroller = Scroller(3, separator="|", clock=FakeClock())
    scroller.set_text("abcdef")
    scroller.seek(5)
    assert scroller.display() == "f|a"
    scroller.seek(6)
    assert scroller.display() == "|ab"


def test_offset_advances_after_interval() -> None:
    clock = FakeClock()
    scroller = _scroller("abcdefghij", 4, clock)
    assert scroller.display() == "abcd"
    clock.now += 0.5
    assert scroller.display() == "abcd"
    clock.now += 0.01
    assert scroller.display() == "bcde"
    assert scroller.offset == 1


def test_offset_wraps_to_zero() -> None:
    clock = FakeClock()
    scroller = _scroller("abcdef", 3, clock)
    scroller.seek(scroller.loop_length - 1)
    clock.now += 1.0
    scroller.display()
    assert scroller.offset == 0


def test_new_text_resets_offset() -> None:
    scroller = _scroller("abcdefghij", 4)
    scroller.seek(5)
    scroller.set_text("abcdefghij")
    assert scroller.offset == 5
    scroller.set_text("klmnopqrstu")
    assert scroller.offset == 0


def test_resize_clamps_negative_width() -> None:
    scroller = _scroller("abc", 2)
    scroller.resize(-4)
    assert scroller.width == 0
    assert scroller.display() == ""


def test_seek_on_empty_text() -> None:
    scroller = Scroller(5, separator="", clock=FakeClock())
    scroller.seek(3)
    assert scroller.offset == 0
    assert scroller.display() == ""
