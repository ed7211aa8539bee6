"""Parser for key-binding files.

Example::

    # comment
    def_key "k"
      scroll_up
      scroll_down

    def_key "ctrl_q"
      quit

Each ``def_key`` block names one key and one or more actions, each on its own
indented line. Blocks are returned in file order; resolving duplicates is left
to the dispatch builder.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Optional

from ncmpy.errors import ConfigIOError
from ncmpy.grammar import Scanner, line_end, skip_ignored, spaces
from ncmpy.keys import KeyToken

logger = logging.getLogger(__name__)

DEF_KEY = "def_key"


@dataclass(frozen=True)
class BindingEntry:
    """One ``def_key`` block."""

    key: KeyToken
    actions: tuple[str, ...]
    line: int = 0


def _is_action_char(ch: str) -> bool:
    return (ch.isascii() and ch.isalpha()) or ch == "_"


def _action(scanner: Scanner) -> Optional[str]:
    start = scanner.pos
    if not spaces(scanner):
        return None
    name = scanner.take_while(_is_action_char)
    if not name:
        scanner.pos = start
        return None
    if not line_end(scanner):
        spaces(scanner)
        if not scanner.at_end():
            raise scanner.error(f"unexpected character {scanner.peek()!r} after action")
    return name


def _key_block(scanner: Scanner) -> BindingEntry:
    line, _ = scanner.location()
    if not scanner.take(DEF_KEY):
        raise scanner.error(f"expected '{DEF_KEY}'")
    if not spaces(scanner):
        raise scanner.error(f"expected whitespace after '{DEF_KEY}'")
    if not scanner.take('"'):
        raise scanner.error("expected '\"' before key name")
    key_start = scanner.pos
    key = scanner.take_until('"')
    if key is None or "\n" in key or "\r" in key:
        scanner.pos = key_start
        raise scanner.error("unterminated key name")
    scanner.take('"')
    if not line_end(scanner):
        raise scanner.error("expected end of line after key name")

    actions: list[str] = []
    while True:
        skip_ignored(scanner)
        name = _action(scanner)
        if name is None:
            break
        actions.append(name)
    if not actions:
        raise scanner.error(f"expected at least one action for key {key!r}")
    return BindingEntry(key=KeyToken(key), actions=tuple(actions), line=line)


def parse_bindings(text: str, *, source: Optional[str] = None) -> list[BindingEntry]:
    """Parse the content of a binding file.

    Raises:
        ConfigParseError: the text does not follow the binding grammar.
    """
    scanner = Scanner(text, source=source)
    entries: list[BindingEntry] = []
    skip_ignored(scanner)
    while not scanner.at_end():
        entries.append(_key_block(scanner))
        skip_ignored(scanner)
    return entries


def load_bindings(path: Path) -> list[BindingEntry]:
    """Read and parse a binding file.

    Raises:
        ConfigIOError: the file cannot be read.
        ConfigParseError: the file is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigIOError(path, exc) from exc
    entries = parse_bindings(text, source=str(path))
    logger.debug("Loaded %d key blocks from %s", len(entries), path)
    return entries
