"""Entity/cell convenience queries.

Helper functions for querying where entities are without putting iteration
logic into systems. All functions are pure and operate on the immutable
:class:`kanji_universe.state.State` snapshot.

Every query returns ids in ascending order: ids are the engine's stable
tie-break key, so callers can rely on deterministic iteration.

Performance: ``entities_at`` uses a cached reverse index of the immutable
``State.position`` PMap to provide O(1) lookups per state snapshot.
"""

from dataclasses import replace
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Tuple

from kanji_universe.components import Position
from kanji_universe.state import State
from kanji_universe.types import EntityID
from kanji_universe.utils.grid import is_in_bounds


@lru_cache(maxsize=4096)
def _position_index(
    position_store: Mapping[EntityID, Position],
) -> Mapping[Position, Tuple[EntityID, ...]]:
    """Build a reverse index from position to sorted entity IDs.

    The argument is a persistent/immutable PMap, which is hashable and thus
    safe to use with ``lru_cache``. Any new ``State`` (or updated position
    store) produces a distinct key, ensuring correctness across turns.
    """
    index: Dict[Position, List[EntityID]] = {}
    for eid, pos in position_store.items():
        index.setdefault(pos, []).append(eid)
    return {pos: tuple(sorted(eids)) for pos, eids in index.items()}


def entities_at(state: State, pos: Position) -> List[EntityID]:
    """Return entity IDs whose position equals ``pos`` (ascending)."""
    idx = _position_index(state.position)
    return list(idx.get(pos, ()))


def sorted_entity_ids(state: State) -> List[EntityID]:
    """All live entity ids in ascending order."""
    return sorted(state.definition.keys())


def occupied_cells(state: State) -> Dict[Position, List[EntityID]]:
    """In-board cells that hold at least one entity.

    Cells are ordered by their lowest occupant id and occupants ascend, so
    systems that walk every cell emit their events in a stable order.
    """
    cells: Dict[Position, List[EntityID]] = {}
    for eid in sorted_entity_ids(state):
        pos = state.position[eid]
        if is_in_bounds(state, pos):
            cells.setdefault(pos, []).append(eid)
    return cells


def moved_this_turn(state: State, eid: EntityID) -> bool:
    """True if ``eid`` is not where it stood when the turn started.

    Entities without a recorded start position (spawned by fusion during the
    turn) count as moved.
    """
    before = state.prev_position.get(eid)
    return before is None or before != state.position.get(eid)


def remove_entities(state: State, eids: Iterable[EntityID]) -> State:
    """Delete entities from every store."""
    definition = state.definition
    position = state.position
    for eid in eids:
        definition = definition.discard(eid)
        position = position.discard(eid)
    return replace(state, definition=definition, position=position)
