"""Read-only snapshot of a simulation for rendering and UI.

A :class:`SimulationSnapshot` holds tuples and frozen values only, so callers
can keep it, compare it, or serialize it with :func:`to_dict` without any way
to reach back into the engine.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from kanji_universe.catalog import Catalog
from kanji_universe.events import SimulationEvent
from kanji_universe.rules import ParsedRule, PropertyRule, RuleKind
from kanji_universe.state import State
from kanji_universe.types import EntityID


@dataclass(frozen=True)
class EntityView:
    id: EntityID
    def_id: str
    x: int
    y: int


@dataclass(frozen=True)
class SimulationSnapshot:
    """Value copy of everything a front end needs.

    Attributes:
        level_id: Id of the loaded level.
        level_name: Display name of the loaded level.
        width: Board width.
        height: Board height.
        hint: Optional level hint.
        move_count: Successful moves since load.
        won: Level cleared.
        entities: Live entities in ascending id order.
        active_rules: Rules in scan order.
        player_entity_id: Id holding the YOU role, if any.
        win_entity_id: Id holding the WIN role, if any.
        last_events: Events produced by the most recent operation.
    """

    level_id: str
    level_name: str
    width: int
    height: int
    hint: Optional[str]
    move_count: int
    won: bool
    entities: Tuple[EntityView, ...]
    active_rules: Tuple[ParsedRule, ...]
    player_entity_id: Optional[EntityID]
    win_entity_id: Optional[EntityID]
    last_events: Tuple[SimulationEvent, ...]


def make_snapshot(state: State) -> SimulationSnapshot:
    entities = tuple(
        EntityView(
            id=eid,
            def_id=state.definition[eid],
            x=state.position[eid].x,
            y=state.position[eid].y,
        )
        for eid in sorted(state.definition.keys())
    )
    return SimulationSnapshot(
        level_id=state.level_id,
        level_name=state.level_name,
        width=state.width,
        height=state.height,
        hint=state.hint,
        move_count=state.move_count,
        won=state.win,
        entities=entities,
        active_rules=tuple(state.rules),
        player_entity_id=state.focus_you,
        win_entity_id=state.focus_win,
        last_events=tuple(state.events),
    )


def format_rule(rule: ParsedRule, catalog: Catalog) -> str:
    """Render ``rule`` as ``NOUN は RHS`` using catalog glyphs."""
    noun = catalog.noun_glyph(rule.noun)
    if isinstance(rule, PropertyRule):
        rhs = catalog.property_glyph(rule.property)
    else:
        rhs = catalog.noun_glyph(rule.target_noun)
    return f"{noun} は {rhs}"


def _rule_to_dict(rule: ParsedRule) -> Dict[str, Any]:
    data: Dict[str, Any] = {"kind": rule.kind.value, "noun": rule.noun}
    if rule.kind == RuleKind.PROPERTY:
        data["property"] = rule.property.value
    else:
        data["targetNoun"] = rule.target_noun
    data["cells"] = [list(cell) for cell in rule.cells]
    data["axis"] = rule.axis.value
    return data


def _event_to_dict(event: SimulationEvent) -> Dict[str, Any]:
    data: Dict[str, Any] = {"type": event.type.value, "message": event.message}
    if event.x is not None:
        data["x"] = event.x
        data["y"] = event.y
    if event.cells:
        data["cells"] = [list(cell) for cell in event.cells]
    return data


def to_dict(snapshot: SimulationSnapshot) -> Dict[str, Any]:
    """JSON-friendly mapping with the same key names the level format uses."""
    return {
        "levelId": snapshot.level_id,
        "levelName": snapshot.level_name,
        "width": snapshot.width,
        "height": snapshot.height,
        "hint": snapshot.hint,
        "moveCount": snapshot.move_count,
        "won": snapshot.won,
        "entities": [
            {"id": e.id, "defId": e.def_id, "x": e.x, "y": e.y}
            for e in snapshot.entities
        ],
        "activeRules": [_rule_to_dict(rule) for rule in snapshot.active_rules],
        "focusRoles": {
            "playerEntityId": snapshot.player_entity_id,
            "winEntityId": snapshot.win_entity_id,
        },
        "lastEvents": [_event_to_dict(event) for event in snapshot.last_events],
    }
