"""Key code to action dispatch."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from ncmpy.actions import DEFAULT_BINDINGS, ActionCatalog, ActionDescriptor
from ncmpy.bindings import BindingEntry
from ncmpy.keys import decode, try_encode

logger = logging.getLogger(__name__)


class DispatchTable(Mapping[int, tuple[ActionDescriptor, ...]]):
    """Read-only map from key code to the actions it runs, in order."""

    def __init__(self, entries: Mapping[int, tuple[ActionDescriptor, ...]]) -> None:
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, code: int) -> tuple[ActionDescriptor, ...]:
        return self._entries[code]

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, code: int) -> Optional[tuple[ActionDescriptor, ...]]:
        """Return the actions bound to ``code``, or None when it is unmapped."""
        return self._entries.get(code)

    def keys_for(self, action_name: str) -> list[int]:
        """Return the codes whose bound actions include ``action_name``."""
        return [
            code
            for code, actions in self._entries.items()
            if any(action.name == action_name for action in actions)
        ]


def describe_unmapped(code: int) -> str:
    return f"Pressed unmapped '{decode(code)}' (keycode = {code})"


def _resolve_custom(
    entry: BindingEntry, catalog: ActionCatalog
) -> tuple[ActionDescriptor, ...]:
    resolved: list[ActionDescriptor] = []
    for name in entry.actions:
        action = catalog.find(name)
        if action is None:
            logger.debug("Dropping unknown action %r for key %r", name, entry.key.text)
            continue
        resolved.append(action)
    if not resolved:
        logger.warning(
            "Binding for %r on line %d names no known action; the key is unbound",
            entry.key.text,
            entry.line,
        )
    return tuple(resolved)


def build_dispatch_table(
    catalog: ActionCatalog,
    custom: Iterable[BindingEntry] = (),
    *,
    defaults: Iterable[tuple[str, str]] = DEFAULT_BINDINGS,
) -> DispatchTable:
    """Merge default and custom bindings into a dispatch table.

    A custom binding replaces whatever was bound to the same code before it.
    Unknown action names are dropped; a binding left with no action still
    replaces the earlier one and leaves the key doing nothing.
    """
    entries: dict[int, tuple[ActionDescriptor, ...]] = {}
    for key_name, action_name in defaults:
        code = try_encode(key_name)
        action = catalog.find(action_name)
        if code is None or action is None:
            logger.warning("Skipping default binding %r -> %r", key_name, action_name)
            continue
        entries[code] = (action,)

    for entry in custom:
        code = try_encode(entry.key.text)
        if code is None:
            logger.warning(
                "Ignoring binding on line %d: unrecognized key name %r",
                entry.line,
                entry.key.text,
            )
            continue
        entries[code] = _resolve_custom(entry, catalog)
    return DispatchTable(entries)
