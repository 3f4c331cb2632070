"""Position snapshot system.

Maintains ``prev_position`` as an immutable snapshot of all entity positions
at the start of a turn. Role reassignment relies on it to tell which entities
moved this turn (see :func:`kanji_universe.utils.ecs.moved_this_turn`).
"""

from dataclasses import replace

from kanji_universe.state import State


def position_system(state: State) -> State:
    """Snapshot current entity positions.

    Args:
        state (State): Current immutable state.

    Returns:
        State: New state whose ``prev_position`` equals the current ``position``.
    """
    return replace(state, prev_position=state.position)
