"""Shared terminals for the binding-file and column-format grammars.

Recognizers take a :class:`Scanner`, consume input on success and leave the
position untouched when they do not match, so callers can backtrack freely.
Only the parsers built on top of them raise.
"""

from __future__ import annotations

from typing import Callable, Optional

from ncmpy.errors import ConfigParseError

LINE_ENDINGS = "\r\n"
HORIZONTAL_SPACE = " \t"


class Scanner:
    """Cursor over an in-memory text buffer."""

    def __init__(self, text: str, *, source: Optional[str] = None) -> None:
        self.text = text
        self.source = source
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Return the next character, or an empty string at the end."""
        return self.text[self.pos : self.pos + 1]

    def take(self, literal: str) -> bool:
        """Consume ``literal`` if the input continues with it."""
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.pos
        end = len(self.text)
        while self.pos < end and predicate(self.text[self.pos]):
            self.pos += 1
        return self.text[start : self.pos]

    def take_until(self, stop: str) -> Optional[str]:
        """Consume up to (not including) ``stop``; None if it never occurs."""
        index = self.text.find(stop, self.pos)
        if index < 0:
            return None
        value = self.text[self.pos : index]
        self.pos = index
        return value

    def location(self, offset: Optional[int] = None) -> tuple[int, int]:
        """Return the 1-based (line, column) of ``offset``."""
        if offset is None:
            offset = self.pos
        line = self.text.count("\n", 0, offset) + 1
        column = offset - self.text.rfind("\n", 0, offset)
        return line, column

    def error(self, message: str, offset: Optional[int] = None) -> ConfigParseError:
        line, column = self.location(offset)
        return ConfigParseError(message, line=line, column=column, source=self.source)


def spaces(scanner: Scanner) -> int:
    """Consume horizontal whitespace and return how much was consumed."""
    return len(scanner.take_while(lambda ch: ch in HORIZONTAL_SPACE))


def comment(scanner: Scanner) -> bool:
    """Recognize ``#`` up to the end of the line (line ending excluded)."""
    if scanner.peek() != "#":
        return False
    scanner.take_while(lambda ch: ch not in LINE_ENDINGS)
    return True


def newlines(scanner: Scanner) -> bool:
    return bool(scanner.take_while(lambda ch: ch in LINE_ENDINGS))


def line_end(scanner: Scanner) -> bool:
    """Recognize a line terminator, optionally preceded by spaces and a comment."""
    start = scanner.pos
    spaces(scanner)
    comment(scanner)
    if newlines(scanner):
        return True
    scanner.pos = start
    return False


def ignored_line(scanner: Scanner) -> bool:
    """Recognize a blank, whitespace-only or comment-only line.

    A final line without a terminator also counts when it is not empty.
    """
    start = scanner.pos
    spaces(scanner)
    comment(scanner)
    if newlines(scanner):
        return True
    if scanner.at_end() and scanner.pos > start:
        return True
    scanner.pos = start
    return False


def skip_ignored(scanner: Scanner) -> None:
    while ignored_line(scanner):
        pass
