"""Core immutable ``State`` dataclass.

This module defines the frozen :class:`State` object that represents the whole
puzzle board at a single point of a level. All systems are pure functions that
take a previous ``State`` (plus inputs such as a direction) and return a *new*
``State``; nothing is mutated in place. This makes turns deterministic, makes
undo a matter of keeping old values around, and lets callers hold on to any
state without it changing under them.

Design notes:

* Entity stores are **persistent maps** (``pyrsistent.PMap``) keyed by
    ``EntityID``. An entity exists exactly while it has an entry in
    ``definition``; removal deletes it from every store.
* ``definition`` maps an entity to its catalog definition id. Transform rules
    rewrite this entry; fusion removes two entities and adds a new one.
* ``rules``, ``active_properties`` and ``active_transforms`` are derived data:
    they are rebuilt from the board after every position change and never
    patched incrementally.
* ``focus_you`` / ``focus_win`` are session data: which particular entity
    currently carries the YOU and WIN roles. They cannot be derived from the
    rules alone when several entities share a qualifying noun.
* ``events`` holds only the events produced by the most recent operation.

See :mod:`kanji_universe.step` for how the reducer orchestrates systems.
"""

from dataclasses import dataclass
from typing import Optional

from pyrsistent import pmap, pvector
from pyrsistent.typing import PMap, PSet, PVector

from kanji_universe.catalog import Catalog
from kanji_universe.components import Position
from kanji_universe.events import SimulationEvent
from kanji_universe.rules import ParsedRule
from kanji_universe.types import EntityID, NounKey, PropertyKey


@dataclass(frozen=True)
class State:
    """Immutable board state.

    Attributes:
        width (int): Board width in cells.
        height (int): Board height in cells.
        catalog (Catalog): Read-only definitions and fusion recipes.
        level_id (str): Id of the loaded level.
        level_name (str): Display name of the loaded level.
        hint (str | None): Optional level hint.
        definition (PMap[EntityID, str]): Entity -> catalog definition id.
        position (PMap[EntityID, Position]): Entity -> grid position.
        prev_position (PMap[EntityID, Position]): Positions at the start of the current turn.
        next_entity_id (int): Next id to allocate; ids are never reused within a timeline.
        rules (PVector[ParsedRule]): Deduplicated rules spelled on the board.
        active_properties (PMap[NounKey, PSet[PropertyKey]]): Noun -> properties granted by rules.
        active_transforms (PMap[NounKey, NounKey]): Noun -> transform target (first rule wins).
        focus_you (EntityID | None): Entity currently carrying the YOU role.
        focus_win (EntityID | None): Entity currently carrying the WIN role.
        move_count (int): Successful moves since level load.
        win (bool): True once the level is cleared; further moves are refused.
        events (PVector[SimulationEvent]): Events produced by the latest operation.
    """

    # Level
    width: int
    height: int
    catalog: Catalog
    level_id: str = ""
    level_name: str = ""
    hint: Optional[str] = None

    # Entities
    definition: PMap[EntityID, str] = pmap()
    position: PMap[EntityID, Position] = pmap()
    prev_position: PMap[EntityID, Position] = pmap()
    next_entity_id: int = 1

    # Derived semantics
    rules: PVector[ParsedRule] = pvector()
    active_properties: PMap[NounKey, PSet[PropertyKey]] = pmap()
    active_transforms: PMap[NounKey, NounKey] = pmap()

    # Roles
    focus_you: Optional[EntityID] = None
    focus_win: Optional[EntityID] = None

    # Status
    move_count: int = 0
    win: bool = False
    events: PVector[SimulationEvent] = pvector()
