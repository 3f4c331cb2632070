from dataclasses import replace

import pytest
from pyrsistent import pvector

from kanji_universe.actions import Action
from kanji_universe.catalog import UnknownDefinitionError
from kanji_universe.events import EventType
from kanji_universe.examples.tutorial_levels import LEVEL_REGISTRY
from kanji_universe.levels.level import Level
from kanji_universe.simulation import Simulation
from kanji_universe.step import ALREADY_CLEARED_MESSAGE, NO_CONTROLLABLE_MESSAGE
from kanji_universe.state import State
from tests.test_utils import event_messages, event_types, make_level


def without_events(state: State) -> State:
    return replace(state, events=pvector())


def play(simulation: Simulation, *moves: Action) -> None:
    for move in moves:
        simulation.move(move)


def test_load_reports_level() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    assert event_types(simulation.state) == [EventType.LEVEL_LOAD]
    assert event_messages(simulation.state) == ["Loaded 1. First Rule"]
    assert simulation.state.move_count == 0
    assert simulation.history == []


def test_first_level_is_won_by_walking_right() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    play(simulation, *[Action.RIGHT] * 6)
    assert not simulation.state.win
    simulation.move(Action.RIGHT)
    assert simulation.state.win
    assert simulation.state.move_count == 7
    assert event_types(simulation.state) == [EventType.MOVE, EventType.WIN]
    assert event_messages(simulation.state)[-1] == "You Win!"


def test_cleared_level_refuses_moves() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    play(simulation, *[Action.RIGHT] * 7)
    won = simulation.state
    simulation.move(Action.LEFT)
    assert event_messages(simulation.state) == [ALREADY_CLEARED_MESSAGE]
    assert without_events(simulation.state) == without_events(won)
    assert len(simulation.history) == 7


def test_undo_restores_previous_states() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    start = simulation.state
    simulation.move(Action.RIGHT)
    after_one = simulation.state
    simulation.move(Action.DOWN)

    simulation.undo()
    assert without_events(simulation.state) == without_events(after_one)
    assert event_messages(simulation.state) == ["Undo"]
    simulation.undo()
    assert without_events(simulation.state) == without_events(start)

    simulation.undo()
    assert event_types(simulation.state) == [EventType.UNDO]
    assert event_messages(simulation.state) == ["Nothing to undo"]
    assert without_events(simulation.state) == without_events(start)


def test_undo_after_win_reopens_level() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    play(simulation, *[Action.RIGHT] * 7)
    simulation.undo()
    assert not simulation.state.win
    simulation.move(Action.RIGHT)
    assert simulation.state.win


def test_blocked_move_is_not_recorded() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-03"])
    play(simulation, Action.RIGHT, Action.RIGHT, Action.RIGHT, Action.UP)
    before = simulation.state
    simulation.move(Action.RIGHT)
    assert event_messages(simulation.state) == ["Blocked"]
    assert simulation.state.move_count == 4
    assert len(simulation.history) == 4
    assert without_events(simulation.state) == without_events(before)


def test_no_controllable_object_is_reported() -> None:
    simulation = Simulation(make_level([("obj-human", 3, 3)]))
    simulation.move(Action.UP)
    assert event_messages(simulation.state) == [NO_CONTROLLABLE_MESSAGE]
    assert simulation.history == []


def test_restart_reloads_level() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    start = simulation.state
    play(simulation, Action.RIGHT, Action.UP)
    simulation.restart()
    assert event_types(simulation.state) == [EventType.RESTART]
    assert event_messages(simulation.state) == ["Restarted 1. First Rule"]
    assert without_events(simulation.state) == without_events(start)
    assert simulation.history == []


def test_load_level_switches_board() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    simulation.move(Action.RIGHT)
    simulation.load_level(LEVEL_REGISTRY["tutorial-02"])
    assert simulation.state.level_id == "tutorial-02"
    assert event_messages(simulation.state) == ["Loaded 2. Push"]
    assert simulation.history == []
    simulation.restart()
    assert simulation.state.level_id == "tutorial-02"


def test_apply_dispatches_every_action() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    simulation.apply(Action.RIGHT)
    assert simulation.state.move_count == 1
    simulation.apply(Action.UNDO)
    assert simulation.state.move_count == 0
    simulation.apply(Action.RIGHT)
    simulation.apply(Action.RESTART)
    assert event_types(simulation.state) == [EventType.RESTART]


def test_move_rejects_non_move_action() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    with pytest.raises(ValueError):
        simulation.move(Action.UNDO)


def test_replays_are_deterministic() -> None:
    moves = [Action.RIGHT, Action.RIGHT, Action.UP, Action.LEFT, Action.DOWN]
    first = Simulation(LEVEL_REGISTRY["tutorial-05"])
    second = Simulation(LEVEL_REGISTRY["tutorial-05"])
    play(first, *moves)
    play(second, *moves)
    assert first.state == second.state


def test_unknown_definition_fails_load() -> None:
    level = Level("broken", "Broken", 4, 4).place("obj-dragon", 1, 1)
    with pytest.raises(UnknownDefinitionError):
        Simulation(level)


def test_format_rule_uses_glyphs() -> None:
    simulation = Simulation(LEVEL_REGISTRY["tutorial-01"])
    formatted = [simulation.format_rule(rule) for rule in simulation.state.rules]
    assert formatted == ["人 は 遊", "門 は 勝"]
