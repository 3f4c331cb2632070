"""Interaction systems: sink and melt.

Both run after the rule rebuild, cell by cell over in-board cells (ordered by
lowest occupant id). Each affected cell reports one ``blocked`` event naming
the property glyph that fired.
"""

from typing import List, Set

from kanji_universe.events import EventType, add_event, make_event
from kanji_universe.semantics import has_property
from kanji_universe.state import State
from kanji_universe.types import Cell, EntityID, PropertyKey
from kanji_universe.utils.ecs import occupied_cells, remove_entities


def _triggered(state: State, prop: PropertyKey) -> str:
    return f"{state.catalog.property_glyph(prop)} triggered"


def sink_system(state: State) -> State:
    """SINK occupants drown every non-FLOAT, non-SINK occupant of their cell, and themselves."""
    to_remove: Set[EntityID] = set()
    affected: List[Cell] = []
    for pos, occupants in occupied_cells(state).items():
        sinks = [eid for eid in occupants if has_property(state, eid, PropertyKey.SINK)]
        if not sinks:
            continue
        victims = [
            eid
            for eid in occupants
            if not has_property(state, eid, PropertyKey.FLOAT)
            and not has_property(state, eid, PropertyKey.SINK)
        ]
        if not victims:
            continue
        to_remove.update(sinks)
        to_remove.update(victims)
        affected.append(pos.cell)

    if not to_remove:
        return state
    state = remove_entities(state, sorted(to_remove))
    message = _triggered(state, PropertyKey.SINK)
    for cell in affected:
        state = add_event(state, make_event(EventType.BLOCKED, message, [cell]))
    return state


def melt_system(state: State) -> State:
    """MELT occupants sharing a cell with some other HOT occupant are removed."""
    to_remove: Set[EntityID] = set()
    affected: List[Cell] = []
    for pos, occupants in occupied_cells(state).items():
        hot = [eid for eid in occupants if has_property(state, eid, PropertyKey.HOT)]
        if not hot:
            continue
        melting = [
            eid
            for eid in occupants
            if has_property(state, eid, PropertyKey.MELT)
            and any(other != eid for other in hot)
        ]
        if not melting:
            continue
        to_remove.update(melting)
        affected.append(pos.cell)

    if not to_remove:
        return state
    state = remove_entities(state, sorted(to_remove))
    message = _triggered(state, PropertyKey.MELT)
    for cell in affected:
        state = add_event(state, make_event(EventType.BLOCKED, message, [cell]))
    return state
