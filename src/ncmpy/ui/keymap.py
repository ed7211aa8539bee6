"""Translate Textual key events into ncmpy key codes."""

from __future__ import annotations

from typing import Optional

from ncmpy.keys import NAMED_KEYS, try_encode

_TEXTUAL_NAMES: dict[str, str] = {
    "pageup": "page_up",
    "pagedown": "page_down",
}

_CTRL_SYMBOL_NAMES: dict[str, str] = {
    "left_square_bracket": "[",
    "backslash": "\\",
    "right_square_bracket": "]",
    "circumflex_accent": "^",
    "underscore": "_",
}


def key_token(key: str, character: Optional[str] = None) -> Optional[str]:
    """Return the binding-file key name for a Textual key, if it has one."""
    if key in _TEXTUAL_NAMES:
        return _TEXTUAL_NAMES[key]
    modifier, _, rest = key.partition("+")
    if rest and modifier == "ctrl":
        rest = _CTRL_SYMBOL_NAMES.get(rest, rest)
        return f"ctrl_{rest}" if len(rest) == 1 else None
    if rest and modifier == "shift":
        return f"shift_{_TEXTUAL_NAMES.get(rest, rest)}"
    if character and len(character) == 1 and character.isprintable():
        return "space" if character == " " else character
    if key in NAMED_KEYS or (key.startswith("f") and key[1:].isdigit()):
        return key
    return None


def key_code(key: str, character: Optional[str] = None) -> Optional[int]:
    """Return the key code for a Textual key event, or None if unsupported."""
    token = key_token(key, character)
    if token is None:
        return None
    return try_encode(token)
