"""Terminal condition system.

Sets ``state.win`` once the YOU carrier shares a cell with a WIN contact (see
:func:`kanji_universe.semantics.is_win_contact`). When no carrier is focused,
for example right after the carrier's rule vanished, any cell that holds both
a YOU entity and a distinct WIN contact clears the level instead.
"""

from dataclasses import replace
from typing import Optional

from kanji_universe.components import Position
from kanji_universe.events import EventType, add_event, make_event
from kanji_universe.semantics import has_property, is_win_contact
from kanji_universe.state import State
from kanji_universe.types import PropertyKey
from kanji_universe.utils.ecs import entities_at, occupied_cells

WIN_MESSAGE = "You Win!"


def _winning_cell(state: State) -> Optional[Position]:
    you = state.focus_you
    if you is not None and you in state.position:
        pos = state.position[you]
        if any(
            is_win_contact(state, other)
            for other in entities_at(state, pos)
            if other != you
        ):
            return pos
        return None

    for pos, occupants in occupied_cells(state).items():
        for eid in occupants:
            if not has_property(state, eid, PropertyKey.YOU):
                continue
            if any(is_win_contact(state, other) for other in occupants if other != eid):
                return pos
    return None


def win_system(state: State) -> State:
    """Set ``win`` and emit a ``win`` event if the level is cleared (idempotent)."""
    if state.win:
        return state
    pos = _winning_cell(state)
    if pos is None:
        return state
    state = replace(state, win=True)
    return add_event(state, make_event(EventType.WIN, WIN_MESSAGE, [pos.cell]))
