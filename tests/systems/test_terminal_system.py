from dataclasses import replace

from kanji_universe.events import EventType
from kanji_universe.systems.terminal import WIN_MESSAGE, win_system
from tests.test_utils import event_types, make_state, sentence

YOU_AND_WIN = sentence(1, 1, "txt-human", "txt-topic", "txt-you") + sentence(
    6, 1, "txt-gate", "txt-topic", "txt-win"
)


def test_win_when_player_reaches_goal() -> None:
    state = make_state(YOU_AND_WIN + [("obj-human", 4, 4), ("obj-gate", 4, 4)])
    assert not state.win
    state = win_system(state)
    assert state.win
    assert event_types(state) == [EventType.WIN]
    assert state.events[0].message == WIN_MESSAGE
    assert state.events[0].cells == ((4, 4),)


def test_win_on_noun_text_named_by_win_rule() -> None:
    state = make_state(YOU_AND_WIN + [("obj-human", 4, 4), ("txt-gate", 4, 4)])
    assert win_system(state).win


def test_no_win_apart() -> None:
    state = make_state(YOU_AND_WIN + [("obj-human", 4, 4), ("obj-gate", 6, 4)])
    after = win_system(state)
    assert not after.win
    assert after.events == state.events


def test_win_is_idempotent() -> None:
    state = make_state(YOU_AND_WIN + [("obj-human", 4, 4), ("obj-gate", 4, 4)])
    once = win_system(state)
    twice = win_system(once)
    assert twice is once
    assert len(twice.events) == 1


def test_only_focused_player_counts() -> None:
    placements = YOU_AND_WIN + [
        ("obj-human", 1, 5),
        ("obj-human", 4, 4),
        ("obj-gate", 4, 4),
    ]
    state = make_state(placements)
    assert state.focus_you == 7
    assert not win_system(state).win


def test_any_you_entity_wins_without_focus() -> None:
    state = make_state(YOU_AND_WIN + [("obj-human", 4, 4), ("obj-gate", 4, 4)])
    state = replace(state, focus_you=None)
    assert win_system(state).win


def test_no_win_without_win_rule() -> None:
    placements = sentence(1, 1, "txt-human", "txt-topic", "txt-you") + [
        ("obj-human", 4, 4),
        ("obj-gate", 4, 4),
    ]
    assert not win_system(make_state(placements)).win
