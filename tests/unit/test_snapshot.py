from kanji_universe.actions import Action
from kanji_universe.content.default import DEFAULT_CATALOG
from kanji_universe.examples.tutorial_levels import LEVEL_REGISTRY
from kanji_universe.rules import PropertyRule, TransformRule
from kanji_universe.simulation import Simulation
from kanji_universe.snapshot import EntityView, format_rule, make_snapshot, to_dict
from kanji_universe.types import Axis, PropertyKey
from tests.test_utils import make_state

CELLS = ((0, 0), (1, 0), (2, 0))


def test_format_property_rule() -> None:
    rule = PropertyRule("human", PropertyKey.YOU, Axis.HORIZONTAL, CELLS)
    assert format_rule(rule, DEFAULT_CATALOG) == "人 は 遊"


def test_format_transform_rule() -> None:
    rule = TransformRule("fire", "volcano", Axis.VERTICAL, CELLS)
    assert format_rule(rule, DEFAULT_CATALOG) == "火 は 火山"


def test_snapshot_contents() -> None:
    state = make_state(
        [
            ("txt-human", 1, 1),
            ("txt-topic", 2, 1),
            ("txt-you", 3, 1),
            ("obj-human", 4, 4),
        ]
    )
    snapshot = make_snapshot(state)
    assert snapshot.entities[-1] == EntityView(id=4, def_id="obj-human", x=4, y=4)
    assert [e.id for e in snapshot.entities] == [1, 2, 3, 4]
    assert snapshot.player_entity_id == 4
    assert snapshot.win_entity_id is None
    assert snapshot.move_count == 0 and not snapshot.won
    assert [r.signature for r in snapshot.active_rules] == ["p:human:you"]


def test_snapshot_is_unaffected_by_later_turns() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    before = simulation.get_snapshot()
    simulation.move(Action.RIGHT)
    after = simulation.get_snapshot()
    assert before.move_count == 0
    assert after.move_count == 1
    assert before.entities != after.entities


def test_to_dict_uses_wire_names() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    data = to_dict(simulation.get_snapshot())
    assert data["levelId"] == "tutorial-01"
    assert data["entities"][0] == {"id": 1, "defId": "txt-human", "x": 1, "y": 1}
    assert data["activeRules"][0] == {
        "kind": "property",
        "noun": "human",
        "property": "you",
        "cells": [[1, 1], [2, 1], [3, 1]],
        "axis": "horizontal",
    }
    assert data["focusRoles"] == {"playerEntityId": 7, "winEntityId": 8}
    assert data["lastEvents"] == [
        {"type": "level-load", "message": "Loaded 1. First Rule"}
    ]
