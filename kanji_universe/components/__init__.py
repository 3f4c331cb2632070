"""kanji_universe.components
=================================

Aggregate import surface for the value components stored on
:class:`kanji_universe.state.State`.

Entities are deliberately thin: an entity is an ``EntityID`` with a
definition id (what it is) and a :class:`Position` (where it is). Everything
else an entity "does" is derived each turn from its catalog definition and the
rules currently spelled on the board, see :mod:`kanji_universe.semantics`.
"""

from .position import Position

__all__ = [
    "Position",
]
