"""Fusion system.

Adjacent world objects whose nouns match a recipe combine into the recipe's
output object. Each candidate only looks right (+x) and down (+y), so a pair
is examined once. All pairs are chosen against the board as it stood when the
system started: an entity is consumed at most once and freshly fused objects
do not fuse again in the same turn.
"""

from dataclasses import replace
from typing import List, Optional, Set, Tuple

from kanji_universe.catalog import EntityDef
from kanji_universe.components import Position
from kanji_universe.events import EventType, add_event, make_event
from kanji_universe.semantics import definition_of
from kanji_universe.state import State
from kanji_universe.types import EntityID
from kanji_universe.utils.ecs import entities_at, remove_entities, sorted_entity_ids
from kanji_universe.utils.grid import is_in_bounds

FUSION_NEIGHBORS: Tuple[Tuple[int, int], ...] = ((1, 0), (0, 1))


def _fusable(state: State, eid: EntityID) -> Optional[EntityDef]:
    definition = definition_of(state, eid)
    if definition.is_object and definition.noun_key is not None:
        return definition
    return None


def fusion_system(state: State) -> State:
    consumed: Set[EntityID] = set()
    spawns: List[Tuple[str, Position, str]] = []

    for eid in sorted_entity_ids(state):
        if eid in consumed:
            continue
        first = _fusable(state, eid)
        if first is None:
            continue
        pos = state.position[eid]
        for dx, dy in FUSION_NEIGHBORS:
            neighbor_pos = pos.offset(dx, dy)
            if not is_in_bounds(state, neighbor_pos):
                continue
            neighbor = next(
                (
                    other
                    for other in entities_at(state, neighbor_pos)
                    if other != eid
                    and other not in consumed
                    and _fusable(state, other) is not None
                ),
                None,
            )
            if neighbor is None:
                continue
            second = definition_of(state, neighbor)
            recipe = state.catalog.find_recipe(first.noun_key, second.noun_key)
            if recipe is None:
                continue
            output = state.catalog.get(recipe.output_def_id)
            consumed.update((eid, neighbor))
            spawns.append(
                (
                    output.id,
                    neighbor_pos,
                    f"{first.glyph} + {second.glyph} → {output.glyph}",
                )
            )
            break

    if not consumed:
        return state

    state = remove_entities(state, sorted(consumed))
    for def_id, pos, message in spawns:
        eid = state.next_entity_id
        state = replace(
            state,
            definition=state.definition.set(eid, def_id),
            position=state.position.set(eid, pos),
            next_entity_id=eid + 1,
        )
        state = add_event(state, make_event(EventType.FUSION, message, [pos.cell]))
    return state
