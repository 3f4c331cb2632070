"""Tutorial level set.

Nine short levels, each introducing one mechanic: the first rule, pushing,
STOP, rewriting a rule, fusion, ``と`` chains, transforms, PULL and MELT.
Builders return authoring-time :class:`Level` values; load them with
:class:`kanji_universe.simulation.Simulation` or convert them with
:func:`kanji_universe.levels.convert.to_state`.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from kanji_universe.levels.level import Level
from kanji_universe.types import Cell

# -------------------------
# Helpers
# -------------------------


def _sentence(level: Level, x: int, y: int, *def_ids: str) -> Level:
    """Place consecutive text tiles left to right starting at (x, y)."""
    for offset, def_id in enumerate(def_ids):
        level = level.place(def_id, x + offset, y)
    return level


def _many(level: Level, def_id: str, cells: Sequence[Cell]) -> Level:
    for x, y in cells:
        level = level.place(def_id, x, y)
    return level


def _you_and_win(level: Level, win_noun: str, win_x: int) -> Level:
    """The two sentences every tutorial opens with on row 1."""
    level = _sentence(level, 1, 1, "txt-human", "txt-topic", "txt-you")
    return _sentence(level, win_x, 1, win_noun, "txt-topic", "txt-win")


# -------------------------
# Levels
# -------------------------


def build_level_first_rule() -> Level:
    level = Level(
        "tutorial-01",
        "1. First Rule",
        12,
        8,
        hint="Move to the gate. Read the text rules on top.",
    )
    level = _you_and_win(level, "txt-gate", 6)
    level = level.place("obj-human", 2, 5)
    return level.place("obj-gate", 9, 5)


def build_level_push() -> Level:
    level = Level("tutorial-02", "2. Push", 12, 8, hint="Push the tree out of the way.")
    level = _you_and_win(level, "txt-gate", 6)
    level = _sentence(level, 1, 2, "txt-tree", "txt-topic", "txt-push")
    level = level.place("obj-human", 2, 5)
    level = level.place("obj-tree", 5, 5)
    return level.place("obj-gate", 9, 5)


def build_level_stop() -> Level:
    level = Level(
        "tutorial-03", "3. Stop", 14, 9, hint="Stones block your path. Use the gap."
    )
    level = _you_and_win(level, "txt-gate", 6)
    level = _sentence(level, 10, 1, "txt-rock", "txt-topic", "txt-stop")
    level = level.place("obj-human", 2, 6)
    level = level.place("obj-gate", 11, 6)
    return _many(
        level,
        "obj-rock",
        [(6, 4), (6, 5), (6, 7), (7, 4), (7, 7), (8, 4), (8, 5), (8, 7)],
    )


def build_level_rewrite_push() -> Level:
    level = Level(
        "tutorial-04", "4. Rewrite Push", 14, 9, hint="Make 木 は 押 to move the tree."
    )
    level = _you_and_win(level, "txt-gate", 10)
    # Scattered words the player has to line up.
    level = level.place("txt-tree", 3, 3)
    level = level.place("txt-topic", 5, 3)
    level = level.place("txt-push", 7, 3)
    level = level.place("obj-human", 2, 6)
    level = level.place("obj-tree", 6, 6)
    level = level.place("obj-gate", 11, 6)
    return _many(level, "obj-rock", [(9, 5), (9, 6), (9, 7)])


def build_level_first_fusion() -> Level:
    level = Level(
        "tutorial-05",
        "5. First Fusion",
        16,
        10,
        hint="Push 火 into 山 to create 火山, then touch it to win.",
    )
    level = _you_and_win(level, "txt-volcano", 7)
    level = _sentence(level, 1, 2, "txt-fire", "txt-topic", "txt-push")
    level = _sentence(level, 5, 2, "txt-mountain", "txt-topic", "txt-stop")
    level = level.place("obj-human", 2, 7)
    level = level.place("obj-fire", 5, 7)
    level = level.place("obj-mountain", 8, 7)
    return _many(level, "obj-rock", [(11, 6), (11, 7), (11, 8)])


def build_level_chain_rules() -> Level:
    level = Level(
        "tutorial-06",
        "6. Chain Rules (と)",
        16,
        10,
        hint="Gate is both WIN and STOP. Use the gap and touch it.",
    )
    level = _you_and_win(level, "txt-gate", 6)
    level = _sentence(level, 9, 1, "txt-and", "txt-stop")
    level = _sentence(level, 1, 2, "txt-tree", "txt-topic", "txt-push")
    level = level.place("obj-human", 2, 7)
    level = level.place("obj-tree", 7, 7)
    level = level.place("obj-gate", 12, 7)
    return _many(level, "obj-rock", [(11, 6), (11, 8)])


def build_level_transform() -> Level:
    level = Level(
        "tutorial-07",
        "7. Transform (NOUN は NOUN)",
        16,
        10,
        hint="Build 火 は 山 to turn fire into a mountain. Then 火山 still works in later levels.",
    )
    level = _you_and_win(level, "txt-mountain", 6)
    level = level.place("txt-fire", 1, 3)
    level = level.place("txt-topic", 4, 3)
    level = level.place("txt-mountain", 6, 3)
    level = level.place("obj-human", 2, 7)
    level = level.place("obj-fire", 5, 7)
    return _many(level, "obj-rock", [(10, 6), (10, 7), (10, 8)])


def build_level_pull() -> Level:
    level = Level(
        "tutorial-08",
        "8. Pull (引)",
        16,
        10,
        hint="Tree is PULL + STOP. Move away from it to drag it and open the gate path.",
    )
    level = _you_and_win(level, "txt-gate", 6)
    level = _sentence(
        level, 10, 1, "txt-tree", "txt-topic", "txt-pull", "txt-and", "txt-stop"
    )
    level = level.place("obj-human", 9, 7)
    level = level.place("obj-tree", 10, 7)
    level = level.place("obj-gate", 12, 7)
    return _many(
        level,
        "obj-rock",
        [(11, 6), (12, 6), (13, 6), (13, 7), (11, 8), (12, 8), (13, 8)],
    )


def build_level_melt() -> Level:
    level = Level(
        "tutorial-09",
        "9. Melt (溶)",
        18,
        11,
        hint="Push the melting tree into hot fire to clear the path.",
    )
    level = _you_and_win(level, "txt-gate", 6)
    level = _sentence(level, 1, 2, "txt-fire", "txt-topic", "txt-hot")
    level = _sentence(
        level, 6, 2, "txt-tree", "txt-topic", "txt-push", "txt-and", "txt-melt"
    )
    level = level.place("obj-human", 2, 8)
    level = level.place("obj-fire", 9, 8)
    level = level.place("obj-tree", 6, 8)
    level = level.place("obj-gate", 14, 8)
    return _many(level, "obj-rock", [(11, 7), (11, 8), (11, 9)])


# -------------------------
# Registry
# -------------------------

LEVEL_BUILDERS: List[Callable[[], Level]] = [
    build_level_first_rule,
    build_level_push,
    build_level_stop,
    build_level_rewrite_push,
    build_level_first_fusion,
    build_level_chain_rules,
    build_level_transform,
    build_level_pull,
    build_level_melt,
]

TUTORIAL_LEVELS: List[Level] = [build() for build in LEVEL_BUILDERS]

LEVEL_REGISTRY: Dict[str, Level] = {level.id: level for level in TUTORIAL_LEVELS}
"""Level id -> level, in play order."""


def next_level_id(level_id: str) -> Optional[str]:
    """Id of the level after ``level_id``; ``None`` after the last one or for unknown ids."""
    ids = list(LEVEL_REGISTRY)
    if level_id not in LEVEL_REGISTRY:
        return None
    index = ids.index(level_id)
    return ids[index + 1] if index + 1 < len(ids) else None
