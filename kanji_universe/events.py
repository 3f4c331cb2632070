"""Simulation events.

Every public operation replaces ``State.events`` with the events it produced;
downstream observers (rendering, audio, HUD) read them from the snapshot and
never feed them back.
"""

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Optional, Sequence, Tuple, TYPE_CHECKING

from kanji_universe.types import Cell

if TYPE_CHECKING:
    from kanji_universe.state import State


class EventType(StrEnum):
    MOVE = "move"
    BLOCKED = "blocked"
    FUSION = "fusion"
    TRANSFORM = "transform"
    ROLE_SHIFT = "role-shift"
    RULE_CHANGE = "rule-change"
    WIN = "win"
    UNDO = "undo"
    RESTART = "restart"
    LEVEL_LOAD = "level-load"


@dataclass(frozen=True)
class SimulationEvent:
    """A single tagged event.

    Attributes:
        type: Event category.
        message: Human readable description.
        x: Optional focus column for highlighting.
        y: Optional focus row for highlighting.
        cells: Cells to highlight (may be empty).
    """

    type: EventType
    message: str
    x: Optional[int] = None
    y: Optional[int] = None
    cells: Tuple[Cell, ...] = ()


def make_event(
    event_type: EventType,
    message: str,
    cells: Sequence[Cell] = (),
) -> SimulationEvent:
    """Build an event whose ``x``/``y`` point at the first highlighted cell."""
    cells = tuple(cells)
    if cells:
        x, y = cells[0]
        return SimulationEvent(type=event_type, message=message, x=x, y=y, cells=cells)
    return SimulationEvent(type=event_type, message=message)


def add_event(state: "State", event: SimulationEvent) -> "State":
    """Return ``state`` with ``event`` appended to the current event list."""
    return replace(state, events=state.events.append(event))
