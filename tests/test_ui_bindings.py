from __future__ import annotations

from ncmpy.actions import build_catalog
from ncmpy.bindings import parse_bindings
from ncmpy.dispatch import build_dispatch_table
from ncmpy.ui.bindings import help_bindings


def test_help_bindings_decode_every_key() -> None:
    table = build_dispatch_table(build_catalog())
    bindings = help_bindings(table)
    pairs = {(binding.key, binding.action) for binding in bindings}
    assert ("q", "quit") in pairs
    assert ("f1", "show_help") in pairs
    assert ("up", "scroll_up") in pairs
    assert len(bindings) == len(table)
    quit_binding = next(b for b in bindings if b.action == "quit")
    assert quit_binding.description == "Quit"


def test_multi_action_keys_yield_one_binding_per_action() -> None:
    custom = parse_bindings('def_key "ctrl_x"\n  playlist_stop\n  quit\n')
    bindings = help_bindings(build_dispatch_table(build_catalog(), custom, defaults=()))
    assert [(b.key, b.action) for b in bindings] == [
        ("ctrl_x", "playlist_stop"),
        ("ctrl_x", "quit"),
    ]


def test_keys_sharing_an_action_are_listed_together() -> None:
    custom = parse_bindings('def_key "ctrl_q"\n  quit\ndef_key "f2"\n  show_help\n')
    bindings = help_bindings(build_dispatch_table(build_catalog(), custom))
    quit_keys = [b.key for b in bindings if b.action == "quit"]
    assert quit_keys == ["ctrl_q", "q"]
    help_keys = [b.key for b in bindings if b.action == "show_help"]
    assert help_keys == ["f1", "f2"]
    actions = [b.action for b in bindings]
    first = actions.index("quit")
    assert actions[first : first + 2] == ["quit", "quit"]
