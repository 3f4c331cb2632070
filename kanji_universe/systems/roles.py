"""Focus role systems.

The YOU and WIN roles are bound to specific entity ids (``State.focus_you`` /
``State.focus_win``) instead of "whatever has the property", because several
entities can share a qualifying noun and control must stay on the same one
from turn to turn. Three systems maintain the binding:

* :func:`refresh_focus_roles` drops roles whose rule or entity vanished and
  picks a carrier when a rule exists but nothing is focused.
* :func:`new_rule_role_system` hands a role to the entity that just completed
  a YOU/WIN sentence, preferring the one that walked into it.
* :func:`noun_slot_role_system` re-triggers an already active rule when a
  matching entity steps onto its noun cell.

Role carriers are noun-bearing world objects and noun text tiles
(:attr:`EntityDef.is_role_carrier`). Whenever a reassignment path changes a
focus id it emits a ``role-shift`` event.
"""

from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Sequence, Set

from kanji_universe.components import Position
from kanji_universe.events import EventType, add_event, make_event
from kanji_universe.rules import ParsedRule, PropertyRule, RuleKind, rule_key
from kanji_universe.semantics import definition_of, has_rule_property, is_role_carrier
from kanji_universe.state import State
from kanji_universe.types import Cell, EntityID, PropertyKey
from kanji_universe.utils.ecs import entities_at, moved_this_turn, sorted_entity_ids
from kanji_universe.utils.grid import manhattan

ROLE_PROPERTIES = (PropertyKey.YOU, PropertyKey.WIN)


def _role_rules(state: State, prop: PropertyKey) -> List[PropertyRule]:
    return [
        rule
        for rule in state.rules
        if rule.kind == RuleKind.PROPERTY and rule.property == prop
    ]


def has_role_rule(state: State, prop: PropertyKey) -> bool:
    return len(_role_rules(state, prop)) > 0


def _focus(state: State, prop: PropertyKey) -> Optional[EntityID]:
    return state.focus_you if prop == PropertyKey.YOU else state.focus_win


def _set_focus(state: State, prop: PropertyKey, eid: Optional[EntityID]) -> State:
    if prop == PropertyKey.YOU:
        return replace(state, focus_you=eid)
    return replace(state, focus_win=eid)


def _carriers_of(state: State, noun: str) -> List[EntityID]:
    return [
        eid
        for eid in sorted_entity_ids(state)
        if is_role_carrier(state, eid) and definition_of(state, eid).noun_key == noun
    ]


def _cell_of(state: State, eid: EntityID) -> Cell:
    return state.position[eid].cell


def pick_first_rule_carrier(state: State, prop: PropertyKey) -> Optional[EntityID]:
    """Choose a carrier for ``prop`` when no entity holds the role.

    Candidates are role carriers whose noun is granted ``prop`` by a rule.
    World objects beat text tiles; among those, entities standing off the
    cells of ``prop``'s own rules beat those on them, then entities off any
    rule cell; remaining ties go to the lowest id. This keeps the engine from
    choosing the very text tile that spells ``人 は 遊`` as the player.
    """
    relevant_cells: Set[Cell] = set()
    any_rule_cells: Set[Cell] = set()
    for rule in state.rules:
        any_rule_cells.update(rule.cells)
        if rule.kind == RuleKind.PROPERTY and rule.property == prop:
            relevant_cells.update(rule.cells)

    def score(eid: EntityID) -> int:
        cell = _cell_of(state, eid)
        value = 0
        if not definition_of(state, eid).is_object:
            value += 100
        if cell in relevant_cells:
            value += 20
        if cell in any_rule_cells:
            value += 5
        return value

    candidates = [
        eid
        for eid in sorted_entity_ids(state)
        if is_role_carrier(state, eid) and has_rule_property(state, eid, prop)
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda eid: (score(eid), eid))


def refresh_focus_roles(state: State) -> State:
    """Drop stale focus ids and fill empty ones."""
    for prop in ROLE_PROPERTIES:
        focus = _focus(state, prop)
        if not has_role_rule(state, prop):
            focus = None
        elif focus is not None and focus not in state.definition:
            focus = None
        if focus is None and has_role_rule(state, prop):
            focus = pick_first_rule_carrier(state, prop)
        if focus != _focus(state, prop):
            state = _set_focus(state, prop, focus)
    return state


def _role_shift_event(
    state: State, eid: EntityID, message: str, rule_cells: Iterable[Cell]
) -> State:
    cells = [_cell_of(state, eid), *rule_cells]
    return add_event(state, make_event(EventType.ROLE_SHIFT, message, cells))


def _role_name(prop: PropertyKey) -> str:
    return "Player" if prop == PropertyKey.YOU else "Goal"


# New-rule capture


def pick_focus_carrier_for_rule(
    state: State, rule: PropertyRule, exclude: Optional[EntityID] = None
) -> Optional[EntityID]:
    """Carrier for a freshly spelled YOU/WIN rule.

    Preference, first match wins:

    1. on the term cell and moved this turn
    2. on the term cell
    3. on the noun cell and moved
    4. on the noun cell
    5. on the connector cell and moved
    6. on any provenance cell and moved
    7. moved anywhere
    8. lowest id
    """
    candidates = [eid for eid in _carriers_of(state, rule.noun) if eid != exclude]
    if not candidates:
        return None

    noun_cell, connector_cell, term_cell = rule.cells[0], rule.cells[1], rule.cells[-1]
    rule_cells = set(rule.cells)

    def on(cell: Cell) -> Callable[[EntityID], bool]:
        return lambda eid: _cell_of(state, eid) == cell

    def moved(eid: EntityID) -> bool:
        return moved_this_turn(state, eid)

    ladder: Sequence[Callable[[EntityID], bool]] = (
        lambda eid: on(term_cell)(eid) and moved(eid),
        on(term_cell),
        lambda eid: on(noun_cell)(eid) and moved(eid),
        on(noun_cell),
        lambda eid: on(connector_cell)(eid) and moved(eid),
        lambda eid: _cell_of(state, eid) in rule_cells and moved(eid),
        moved,
    )
    for predicate in ladder:
        for eid in candidates:
            if predicate(eid):
                return eid
    return candidates[0]


def new_rule_role_system(state: State, before_rules: Iterable[ParsedRule]) -> State:
    """Capture YOU/WIN for rules that were not on the board before the turn.

    A rule counts as new unless the same signature was spelled on the same
    cells before the turn.
    """
    before_keys = {
        rule_key(rule) for rule in before_rules if rule.kind == RuleKind.PROPERTY
    }
    new_rules = [
        rule
        for rule in state.rules
        if rule.kind == RuleKind.PROPERTY and rule_key(rule) not in before_keys
    ]
    for rule in new_rules:
        if rule.property == PropertyKey.YOU:
            picked = pick_focus_carrier_for_rule(state, rule, exclude=state.focus_win)
            glyph_tag = state.catalog.property_glyph(PropertyKey.YOU)
        elif rule.property == PropertyKey.WIN:
            picked = pick_focus_carrier_for_rule(state, rule, exclude=state.focus_you)
            glyph_tag = state.catalog.property_glyph(PropertyKey.WIN)
        else:
            continue
        if picked is None or picked == _focus(state, rule.property):
            continue
        state = _set_focus(state, rule.property, picked)
        glyph = definition_of(state, picked).glyph
        state = _role_shift_event(
            state,
            picked,
            f"{_role_name(rule.property)} captured by {glyph} ({glyph_tag})",
            rule.cells,
        )
    return state


# Noun-slot trigger


@dataclass(frozen=True)
class _SlotChoice:
    rule: PropertyRule
    replacement: EntityID
    fallback: bool
    distance: int


def _noun_slot_choice(
    state: State, prop: PropertyKey, exclude_player: bool
) -> Optional[_SlotChoice]:
    rules = _role_rules(state, prop)
    if not rules:
        return None

    anchor_id = state.focus_you if state.focus_you in state.position else None
    if anchor_id is None:
        current = _focus(state, prop)
        anchor_id = current if current in state.position else None
    anchor: Optional[Position] = (
        state.position[anchor_id] if anchor_id is not None else None
    )

    def distance(eid: EntityID) -> int:
        return manhattan(state.position[eid], anchor) if anchor is not None else 0

    choices: List[_SlotChoice] = []
    for rule in rules:
        noun_x, noun_y = rule.cells[0]
        movers = [
            eid
            for eid in entities_at(state, Position(noun_x, noun_y))
            if is_role_carrier(state, eid)
            and definition_of(state, eid).noun_key == rule.noun
            and moved_this_turn(state, eid)
        ]
        for mover in movers:
            others = [
                eid
                for eid in _carriers_of(state, rule.noun)
                if eid != mover and not (exclude_player and eid == state.focus_you)
            ]
            if others:
                replacement = min(others, key=lambda eid: (distance(eid), eid))
                fallback = False
            else:
                if exclude_player and mover == state.focus_you:
                    continue
                replacement = mover
                fallback = True
            choices.append(
                _SlotChoice(rule, replacement, fallback, distance(replacement))
            )

    if not choices:
        return None
    return min(choices, key=lambda c: (c.fallback, c.distance, c.replacement))


def noun_slot_role_system(state: State) -> State:
    """Reassign YOU, then WIN, when a carrier walked onto an active rule's noun cell.

    The role moves to the other carrier of that noun nearest the YOU anchor;
    the mover itself takes the role only when it is the sole carrier. WIN never
    moves onto the current YOU carrier.
    """
    for prop, exclude_player in ((PropertyKey.YOU, False), (PropertyKey.WIN, True)):
        choice = _noun_slot_choice(state, prop, exclude_player)
        if choice is None or choice.replacement == _focus(state, prop):
            continue
        state = _set_focus(state, prop, choice.replacement)
        glyph = definition_of(state, choice.replacement).glyph
        state = _role_shift_event(
            state,
            choice.replacement,
            f"{_role_name(prop)} shifts to {glyph} (noun slot trigger)",
            choice.rule.cells,
        )
    return state
