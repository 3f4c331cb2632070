"""Grid math helpers.

Utility predicates used by movement and role systems. Functions here are pure
and intentionally lightweight to keep inner loops fast.
"""

from typing import TYPE_CHECKING, Tuple

from kanji_universe.actions import Action, DIRECTION_VECTORS
from kanji_universe.components import Position

if TYPE_CHECKING:
    from kanji_universe.state import State


def is_in_bounds(state: "State", pos: Position) -> bool:
    """Return True if ``pos`` lies within the board rectangle."""
    return 0 <= pos.x < state.width and 0 <= pos.y < state.height


def direction_vector(action: Action) -> Tuple[int, int]:
    """``(dx, dy)`` for a movement action; raises ``KeyError`` otherwise."""
    return DIRECTION_VECTORS[action]


def manhattan(a: Position, b: Position) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)
