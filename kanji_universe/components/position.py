"""Position component.

Immutable integer grid coordinates. Stored in ``State.position`` keyed by
entity id. The ``prev_position`` store records each entity's position at the
start of the current turn so later phases can tell which entities moved.
"""

from dataclasses import dataclass

from kanji_universe.types import Cell


@dataclass(frozen=True)
class Position:
    """Grid coordinate.

    Attributes:
        x: Column index (0 at left).
        y: Row index (0 at top).
    """

    x: int
    y: int

    @property
    def cell(self) -> Cell:
        """Plain ``(x, y)`` tuple used in rule provenance and events."""
        return (self.x, self.y)

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)
