"""Stateful simulation facade.

:class:`Simulation` is the single-caller command surface for a front end:
``load_level``, ``restart``, ``undo``, ``move`` and ``get_snapshot``. It owns
the current immutable :class:`~kanji_universe.state.State`, the level it was
loaded from, and the undo history. Because states are immutable, history is a
plain list of previous ``State`` values and undo is a pop.

Gameplay conditions (cleared level, no controllable object, blocked chain,
empty history) are reported through ``State.events`` and never raised.
"""

import logging
from dataclasses import replace
from typing import List

from pyrsistent import pvector

from kanji_universe.actions import Action, MOVE_ACTIONS
from kanji_universe.catalog import Catalog
from kanji_universe.content.default import DEFAULT_CATALOG
from kanji_universe.events import EventType, SimulationEvent, make_event
from kanji_universe.levels.convert import to_state
from kanji_universe.levels.level import Level
from kanji_universe.rules import ParsedRule
from kanji_universe.snapshot import SimulationSnapshot, format_rule, make_snapshot
from kanji_universe.state import State
from kanji_universe.step import initialize, step

logger = logging.getLogger(__name__)


class Simulation:
    """Turn-based engine for one level at a time.

    Args:
        level (Level): Level to load immediately.
        catalog (Catalog): Definitions and recipes; every placement must exist in it.

    Raises:
        UnknownDefinitionError: If the level references an unknown definition.
    """

    def __init__(self, level: Level, catalog: Catalog = DEFAULT_CATALOG) -> None:
        self.catalog = catalog
        self.level = level
        self.history: List[State] = []
        self.load_level(level)

    @property
    def state(self) -> State:
        return self._state

    def _load(self, level: Level) -> State:
        state = initialize(to_state(level, self.catalog))
        self.level = level
        self.history = []
        logger.info(
            "Loaded level %s (%dx%d, %d entities, %d rules)",
            level.id,
            level.width,
            level.height,
            len(state.definition),
            len(state.rules),
        )
        return state

    @staticmethod
    def _with_events(state: State, *events: SimulationEvent) -> State:
        return replace(state, events=pvector(events))

    def load_level(self, level: Level) -> None:
        """Replace the board with ``level`` and clear history."""
        state = self._load(level)
        self._state = self._with_events(
            state, make_event(EventType.LEVEL_LOAD, f"Loaded {level.name}")
        )

    def restart(self) -> None:
        """Reload the most recently loaded level verbatim."""
        state = self._load(self.level)
        self._state = self._with_events(
            state, make_event(EventType.RESTART, f"Restarted {self.level.name}")
        )

    def undo(self) -> None:
        """Return to the state before the most recent successful move."""
        if not self.history:
            logger.debug("Nothing to undo")
            self._state = self._with_events(
                self._state, make_event(EventType.UNDO, "Nothing to undo")
            )
            return
        previous = self.history.pop()
        self._state = self._with_events(previous, make_event(EventType.UNDO, "Undo"))
        logger.debug("Undo to move %d", previous.move_count)

    def move(self, direction: Action) -> None:
        """Play one turn in ``direction`` (one of ``MOVE_ACTIONS``).

        Raises:
            ValueError: If ``direction`` is not a movement action.
        """
        before = self._state
        after = step(before, direction)
        if after.move_count > before.move_count:
            self.history.append(before)
        else:
            logger.debug(
                "Move %s refused: %s",
                direction,
                "; ".join(event.message for event in after.events),
            )
        if after.win and not before.win:
            logger.info("Level %s cleared in %d moves", after.level_id, after.move_count)
        self._state = after

    def apply(self, action: Action) -> None:
        """Dispatch any :class:`Action`, including ``UNDO`` and ``RESTART``."""
        if action in MOVE_ACTIONS:
            self.move(action)
        elif action == Action.UNDO:
            self.undo()
        elif action == Action.RESTART:
            self.restart()
        else:
            raise ValueError("Action is not valid")

    def get_snapshot(self) -> SimulationSnapshot:
        return make_snapshot(self._state)

    def format_rule(self, rule: ParsedRule) -> str:
        return format_rule(rule, self.catalog)
