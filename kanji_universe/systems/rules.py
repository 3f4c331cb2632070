"""Rule rebuild and transform systems.

Rules are never patched incrementally: after any position change the board
is tokenized and parsed from scratch, the semantics maps are re-accumulated,
and every world object whose noun has an active transform is rewritten to the
target noun's object definition.
"""

from dataclasses import replace
from typing import Dict, List, Tuple

from pyrsistent import pvector

from kanji_universe.accumulator import accumulate_rules
from kanji_universe.events import EventType, add_event, make_event
from kanji_universe.parser.parser import parse_rules_from_state
from kanji_universe.semantics import definition_of
from kanji_universe.state import State
from kanji_universe.types import Cell, NounKey
from kanji_universe.utils.ecs import sorted_entity_ids


def transform_system(state: State, emit_events: bool = True) -> State:
    """Rewrite world objects according to ``state.active_transforms``.

    One ``transform`` event is emitted per (source noun, target noun) pair,
    with an ``xN`` suffix when more than one object transformed.
    """
    if not state.active_transforms:
        return state

    definition = state.definition
    summary: Dict[Tuple[NounKey, NounKey], Tuple[str, List[Cell]]] = {}
    for eid in sorted_entity_ids(state):
        source = definition_of(state, eid)
        if not source.is_object or source.noun_key is None:
            continue
        target_noun = state.active_transforms.get(source.noun_key)
        if target_noun is None or target_noun == source.noun_key:
            continue
        target = state.catalog.object_def_for(target_noun)
        if target is None:
            continue
        definition = definition.set(eid, target.id)
        key = (source.noun_key, target_noun)
        if key not in summary:
            summary[key] = (f"{source.glyph} → {target.glyph}", [])
        summary[key][1].append(state.position[eid].cell)

    state = replace(state, definition=definition)
    if not emit_events:
        return state
    for message, cells in summary.values():
        suffix = f" x{len(cells)}" if len(cells) > 1 else ""
        state = add_event(
            state, make_event(EventType.TRANSFORM, f"{message}{suffix}", cells)
        )
    return state


def rule_system(state: State, emit_events: bool = True) -> State:
    """Re-derive rules from the board and apply transforms.

    Args:
        state (State): State whose positions changed since rules were last built.
        emit_events (bool): Emit ``transform`` events (off during level load).

    Returns:
        State: State with fresh ``rules``, ``active_properties`` and
            ``active_transforms``, and transformed definitions.
    """
    rules = parse_rules_from_state(state)
    active_properties, active_transforms = accumulate_rules(rules)
    state = replace(
        state,
        rules=pvector(rules),
        active_properties=active_properties,
        active_transforms=active_transforms,
    )
    return transform_system(state, emit_events)
