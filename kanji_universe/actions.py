"""Action enumerations.

Defines the human readable :class:`Action` (string enum) used by the
simulation facade and a stable integer :class:`GymAction` mapping for
Gymnasium compatibility.

``MOVE_ACTIONS`` is the canonical ordered list of movement actions; only those
are accepted by the turn reducer (:func:`kanji_universe.step.step`). ``UNDO``
and ``RESTART`` act on the history kept by
:class:`kanji_universe.simulation.Simulation`.
"""

from enum import IntEnum, StrEnum, auto
from typing import Dict, Tuple


class Action(StrEnum):
    """String enum of player commands.

    Members:
        UP, DOWN, LEFT, RIGHT: Movement directions (one turn each).
        UNDO: Pop the most recent turn from history.
        RESTART: Reload the current level from its definition.
    """

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    UNDO = auto()
    RESTART = auto()


MOVE_ACTIONS = [Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT]

DIRECTION_VECTORS: Dict[Action, Tuple[int, int]] = {
    Action.UP: (0, -1),
    Action.DOWN: (0, 1),
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
}


class GymAction(IntEnum):
    """Stable integer mapping for integration with Gymnasium ``Discrete`` spaces."""

    UP = 0  # start at 0 for explicitness
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    UNDO = auto()
    RESTART = auto()
