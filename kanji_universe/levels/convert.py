from __future__ import annotations

import logging
from typing import Dict

from pyrsistent import pmap

from kanji_universe.catalog import Catalog
from kanji_universe.components import Position
from kanji_universe.levels.level import Level, Placement
from kanji_universe.state import State
from kanji_universe.types import EntityID

logger = logging.getLogger(__name__)


def to_state(level: Level, catalog: Catalog) -> State:
    """
    Convert an authoring-time Level into an immutable State.

    Semantics:
    - Entity ids are allocated from 1 in placement order.
    - Every def_id is checked against the catalog first; the first unknown one
      raises UnknownDefinitionError and nothing is built.
    - The returned State carries no rules or focus roles yet; see
      kanji_universe.step.initialize.
    """
    for placement in level.entities:
        catalog.get(placement.def_id)

    definition: Dict[EntityID, str] = {}
    position: Dict[EntityID, Position] = {}
    for eid, placement in enumerate(level.entities, start=1):
        definition[eid] = placement.def_id
        position[eid] = Position(placement.x, placement.y)

    logger.debug("Converted level %s with %d entities", level.id, len(definition))
    return State(
        width=level.width,
        height=level.height,
        catalog=catalog,
        level_id=level.id,
        level_name=level.name,
        hint=level.hint,
        definition=pmap(definition),
        position=pmap(position),
        next_entity_id=len(definition) + 1,
    )


def from_state(state: State) -> Level:
    """
    Convert a live State back into a Level.

    Behavior:
    - Entities are emitted in ascending eid order (deterministic), using their
      current (possibly transformed) definition.
    - Entities outside the board are dropped.
    """
    placements = []
    for eid in sorted(state.position.keys()):
        pos = state.position[eid]
        if not (0 <= pos.x < state.width and 0 <= pos.y < state.height):
            continue
        placements.append(Placement(state.definition[eid], pos.x, pos.y))
    return Level(
        id=state.level_id,
        name=state.level_name,
        width=state.width,
        height=state.height,
        entities=tuple(placements),
        hint=state.hint,
    )
