"""Conversion between symbolic key names and numeric key codes.

Codes follow the ncurses numbering so that binding files written for
ncmpcpp-style clients keep working. The vocabulary below is part of the
binding-file format and must stay stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ncmpy.errors import UnknownKeyError

KEY_TAB = 9
KEY_ENTER = 10
KEY_ESCAPE = 27
KEY_SPACE = 32
KEY_DOWN = 258
KEY_UP = 259
KEY_LEFT = 260
KEY_RIGHT = 261
KEY_HOME = 262
KEY_BACKSPACE = 263
KEY_F0 = 264
KEY_DC = 330
KEY_IC = 331
KEY_NPAGE = 338
KEY_PPAGE = 339
KEY_END = 360
KEY_MOUSE = 409
KEY_RESIZE = 410

FUNCTION_KEY_COUNT = 64
UNKNOWN_KEY = "unknown"

NAMED_KEYS: dict[str, int] = {
    "escape": KEY_ESCAPE,
    "up": KEY_UP,
    "down": KEY_DOWN,
    "left": KEY_LEFT,
    "right": KEY_RIGHT,
    "page_up": KEY_PPAGE,
    "page_down": KEY_NPAGE,
    "home": KEY_HOME,
    "end": KEY_END,
    "space": KEY_SPACE,
    "insert": KEY_IC,
    "delete": KEY_DC,
    "tab": KEY_TAB,
    "backspace": KEY_BACKSPACE,
    "enter": KEY_ENTER,
    "mouse": KEY_MOUSE,
    "resize": KEY_RESIZE,
}

# Control codes that do not come from a letter.
CONTROL_SYMBOLS: dict[str, int] = {
    "[": 27,
    "\\": 28,
    "]": 29,
    "^": 30,
    "_": 31,
}

_NAMES_BY_CODE = {code: name for name, code in NAMED_KEYS.items()}
_SYMBOLS_BY_CODE = {code: symbol for symbol, code in CONTROL_SYMBOLS.items()}
_CTRL_PREFIXES = ("ctrl_", "ctrl-")
_SHIFT_PREFIXES = ("shift_", "shift-")


@dataclass(frozen=True)
class KeyToken:
    """A key as written in a binding file, before it is turned into a code."""

    text: str

    @property
    def is_literal(self) -> bool:
        return len(self.text) == 1

    def encode(self) -> int:
        return encode(self.text)


def _control_code(qualifier: str) -> int:
    if "a" <= qualifier <= "z":
        return 1 + ord(qualifier) - ord("a")
    if qualifier in CONTROL_SYMBOLS:
        return CONTROL_SYMBOLS[qualifier]
    return ord(qualifier)


def _function_key_code(digits: str) -> int:
    try:
        number = int(digits)
    except ValueError:
        number = 0
    return KEY_F0 + number


def try_encode(name: str) -> Optional[int]:
    """Return the key code for ``name``, or None if it is not a key name."""
    if len(name) == 1:
        return ord(name)
    if len(name) == 6 and name.startswith(_CTRL_PREFIXES):
        return _control_code(name[5])
    # shift_* has no dedicated codes yet and always means "up".
    if name.startswith(_SHIFT_PREFIXES):
        return KEY_UP
    if name.startswith("f") and name[1:2].isdigit():
        return _function_key_code(name[1:])
    return NAMED_KEYS.get(name)


def encode(name: str) -> int:
    """Return the key code for ``name``.

    Raises:
        UnknownKeyError: ``name`` is not part of the key vocabulary.
    """
    code = try_encode(name)
    if code is None:
        raise UnknownKeyError(name)
    return code


def decode(code: int) -> str:
    """Return the display name of a key code."""
    name = _NAMES_BY_CODE.get(code)
    if name is not None:
        return name
    if KEY_F0 <= code < KEY_F0 + FUNCTION_KEY_COUNT:
        return f"f{code - KEY_F0}"
    if 1 <= code <= 26:
        return f"ctrl_{chr(ord('a') + code - 1)}"
    if code in _SYMBOLS_BY_CODE:
        return f"ctrl_{_SYMBOLS_BY_CODE[code]}"
    try:
        char = chr(code)
    except (ValueError, OverflowError):
        return UNKNOWN_KEY
    if char.isprintable():
        return char
    return UNKNOWN_KEY
