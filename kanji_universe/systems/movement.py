"""Movement system.

Resolves one push/pull chain started by the YOU carrier. Resolution is
depth-first and recursive over a scratch copy of the position store:

* Moving entity ``E`` into cell ``T`` fails if ``T`` is off the board.
* Every other occupant ``O`` of ``T`` (ascending id) is examined:

  - the YOU carrier overlaps WIN contacts so victory can be observed;
  - pushable occupants are moved first, recursively, in the same direction;
  - blocking occupants fail the whole chain;
  - anything else is permeable.

* Once ``E`` is committed, entities with PULL standing directly behind the
  cell ``E`` vacated are dragged into it.

A ``visiting`` set guards against cycles (a chain that would push an entity
already on the current recursion path fails). Failure anywhere returns
``None`` and the scratch table is discarded, so no partial push survives.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Set

from pyrsistent import pmap

from kanji_universe.actions import Action
from kanji_universe.components import Position
from kanji_universe.semantics import (
    has_property,
    is_blocking,
    is_pushable,
    is_win_contact,
)
from kanji_universe.state import State
from kanji_universe.types import EntityID, PropertyKey
from kanji_universe.utils.grid import direction_vector, is_in_bounds


def _occupants(
    positions: Dict[EntityID, Position], pos: Position, exclude: EntityID
) -> List[EntityID]:
    return sorted(eid for eid, p in positions.items() if p == pos and eid != exclude)


def _move_recursive(
    state: State,
    positions: Dict[EntityID, Position],
    eid: EntityID,
    dx: int,
    dy: int,
    visiting: Set[EntityID],
    moved: Set[EntityID],
) -> bool:
    if eid in visiting:
        return False
    visiting.add(eid)

    origin = positions[eid]
    target = origin.offset(dx, dy)
    if not is_in_bounds(state, target):
        return False

    for occupant in _occupants(positions, target, eid):
        if eid == state.focus_you and is_win_contact(state, occupant):
            continue
        if is_pushable(state, occupant):
            if not _move_recursive(state, positions, occupant, dx, dy, visiting, moved):
                return False
            continue
        if is_blocking(state, occupant):
            return False

    positions[eid] = target
    moved.add(eid)
    visiting.discard(eid)

    behind = origin.offset(-dx, -dy)
    if not is_in_bounds(state, behind):
        return True
    for puller in _occupants(positions, behind, eid):
        if puller in moved or puller in visiting:
            continue
        if not has_property(state, puller, PropertyKey.PULL):
            continue
        if not _move_recursive(state, positions, puller, dx, dy, visiting, moved):
            return False
    return True


def movement_system(state: State, eid: EntityID, action: Action) -> Optional[State]:
    """Move ``eid`` one cell in the direction of ``action``.

    Args:
        state (State): Current state.
        eid (EntityID): Entity initiating the move (the YOU carrier).
        action (Action): One of the movement actions.

    Returns:
        State | None: State with the committed positions, or ``None`` if the
            chain is blocked (out of bounds, blocked occupant, cycle, or a
            pull that cannot follow).
    """
    if eid not in state.position:
        return None
    dx, dy = direction_vector(action)
    positions: Dict[EntityID, Position] = dict(state.position)
    moved: Set[EntityID] = set()
    if not _move_recursive(state, positions, eid, dx, dy, set(), moved):
        return None
    if eid not in moved:
        return None
    return replace(state, position=pmap(positions))
