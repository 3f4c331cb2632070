"""State reducer and turn orchestration.

This module wires the systems together to implement one *turn* for a movement
``Action``. :func:`step` is pure: it returns a new
:class:`kanji_universe.state.State` and leaves its input untouched, which is
what makes undo a matter of keeping the previous value.

Turn order:

1. A cleared level refuses moves with a ``blocked`` event.
2. Rules from before the turn are kept for change detection and role capture,
   focus roles are refreshed and ``position_system`` snapshots positions so
   later phases can tell which entities moved.
3. Without a YOU carrier the turn aborts.
4. ``movement_system`` resolves the push/pull chain; a blocked chain aborts
   the turn and the input board is returned unchanged.
5. The move is committed (``move_count`` + 1, ``move`` event).
6. ``fusion_system`` combines adjacent objects.
7. ``rule_system`` rebuilds rules from the new board and applies transforms.
8. New-rule capture, then noun-slot triggers, reassign focus roles.
9. Focus roles are refreshed (fused entities drop out).
10. A ``rule-change`` event is emitted if the rule signature changed.
11. ``sink_system``, ``melt_system``, a final refresh and ``win_system``.

An aborted turn never increments ``move_count``; callers keeping history use
that to decide whether to record the previous state.
"""

from dataclasses import replace

from pyrsistent import pvector

from kanji_universe.actions import Action, MOVE_ACTIONS
from kanji_universe.events import EventType, add_event, make_event
from kanji_universe.rules import rules_signature
from kanji_universe.state import State
from kanji_universe.systems.fusion import fusion_system
from kanji_universe.systems.interaction import melt_system, sink_system
from kanji_universe.systems.movement import movement_system
from kanji_universe.systems.position import position_system
from kanji_universe.systems.roles import (
    new_rule_role_system,
    noun_slot_role_system,
    refresh_focus_roles,
)
from kanji_universe.systems.rules import rule_system
from kanji_universe.systems.terminal import win_system

ALREADY_CLEARED_MESSAGE = "Level already cleared. Press N for next level."
NO_CONTROLLABLE_MESSAGE = "No controllable object (need 人 は 遊)"
BLOCKED_MESSAGE = "Blocked"


def initialize(state: State) -> State:
    """Derive rules, transforms and focus roles for a freshly built board.

    Used after level load; no events are produced.
    """
    state = rule_system(state, emit_events=False)
    state = refresh_focus_roles(state)
    return position_system(state)


def step(state: State, action: Action) -> State:
    """Advance the simulation by one movement action.

    Args:
        state (State): Previous immutable state.
        action (Action): One of ``MOVE_ACTIONS``.

    Returns:
        State: Next state. ``events`` holds only the events of this turn. If
            the turn was refused or blocked, every other field equals the
            input's.

    Raises:
        ValueError: If ``action`` is not a movement action.
    """
    if action not in MOVE_ACTIONS:
        raise ValueError("Action is not valid")

    original = replace(state, events=pvector())
    if original.win:
        return _refuse(original, ALREADY_CLEARED_MESSAGE)

    before_rules = original.rules
    before_signature = rules_signature(before_rules)

    state = refresh_focus_roles(original)
    state = position_system(state)
    if state.focus_you is None:
        return _refuse(original, NO_CONTROLLABLE_MESSAGE)

    moved = movement_system(state, state.focus_you, action)
    if moved is None:
        return _refuse(original, BLOCKED_MESSAGE)

    state = replace(moved, move_count=moved.move_count + 1)
    carrier = state.position[state.focus_you]
    state = add_event(
        state, make_event(EventType.MOVE, f"Moved {action}", [carrier.cell])
    )

    state = fusion_system(state)
    state = rule_system(state)
    state = new_rule_role_system(state, before_rules)
    state = noun_slot_role_system(state)
    state = refresh_focus_roles(state)

    if rules_signature(state.rules) != before_signature:
        state = add_event(
            state,
            make_event(EventType.RULE_CHANGE, f"Rules changed ({len(state.rules)})"),
        )

    state = sink_system(state)
    state = melt_system(state)
    state = refresh_focus_roles(state)
    state = win_system(state)

    if not state.events:
        state = add_event(state, make_event(EventType.MOVE, f"Moved {action}"))
    return state


def _refuse(state: State, message: str) -> State:
    return add_event(state, make_event(EventType.BLOCKED, message))
