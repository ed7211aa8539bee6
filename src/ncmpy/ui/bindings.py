from __future__ import annotations

from textual.binding import Binding

from ncmpy.actions import ActionDescriptor
from ncmpy.dispatch import DispatchTable
from ncmpy.keys import decode


def help_bindings(dispatch: DispatchTable) -> list[Binding]:
    """Describe every bound action of ``dispatch`` as Textual Bindings.

    Actions appear in the order of their lowest key code, each followed by
    all the keys that run it.
    """
    actions: dict[str, ActionDescriptor] = {}
    for code in sorted(dispatch):
        for action in dispatch[code]:
            actions.setdefault(action.name, action)
    bindings: list[Binding] = []
    for name, action in actions.items():
        for code in sorted(dispatch.keys_for(name)):
            bindings.append(Binding(decode(code), name, action.description))
    return bindings
