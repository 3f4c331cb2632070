"""Gymnasium environment wrapper for Kanji Universe.

Wraps a :class:`~kanji_universe.simulation.Simulation` for one level and
exposes it through the standard ``reset`` / ``step`` API. Reward is ``1.0`` on
the step that clears the level and ``0.0`` otherwise; ``terminated`` is the
won flag. Episodes are never truncated by the environment itself.

Observation schema:

``{"board": np.ndarray(H, W, D), "status": {"move_count": int, "won": int}}``

where ``D`` is the number of catalog definitions and ``board[y, x, k]``
counts entities of the ``k``-th definition (catalog order) in cell ``(x, y)``.

Usage:

``env = KanjiUniverseEnv(level=LEVEL_REGISTRY["tutorial-01"])``
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np

from kanji_universe.actions import Action, GymAction
from kanji_universe.catalog import Catalog
from kanji_universe.content.default import DEFAULT_CATALOG
from kanji_universe.examples.tutorial_levels import TUTORIAL_LEVELS
from kanji_universe.levels.level import Level
from kanji_universe.simulation import Simulation
from kanji_universe.state import State

logger = logging.getLogger(__name__)

ObsType = Dict[str, Any]

GYM_TO_ACTION: Dict[GymAction, Action] = {
    GymAction.UP: Action.UP,
    GymAction.DOWN: Action.DOWN,
    GymAction.LEFT: Action.LEFT,
    GymAction.RIGHT: Action.RIGHT,
    GymAction.UNDO: Action.UNDO,
    GymAction.RESTART: Action.RESTART,
}


def board_observation(state: State) -> np.ndarray:
    """Per-cell definition counts as a ``(height, width, len(catalog))`` uint8 array."""
    def_index = {definition.id: k for k, definition in enumerate(state.catalog)}
    board = np.zeros((state.height, state.width, len(state.catalog)), dtype=np.uint8)
    for eid, pos in state.position.items():
        if not (0 <= pos.x < state.width and 0 <= pos.y < state.height):
            continue
        board[pos.y, pos.x, def_index[state.definition[eid]]] += 1
    return board


def render_ansi(state: State) -> str:
    """One glyph per cell (lowest entity id wins), ``.`` for empty cells."""
    rows: List[List[str]] = [["."] * state.width for _ in range(state.height)]
    for eid in sorted(state.position.keys(), reverse=True):
        pos = state.position[eid]
        if 0 <= pos.x < state.width and 0 <= pos.y < state.height:
            rows[pos.y][pos.x] = state.catalog.get(state.definition[eid]).glyph
    return "\n".join("".join(row) for row in rows)


class KanjiUniverseEnv(gym.Env[ObsType, np.integer]):
    """Gymnasium ``Env`` over a single level.

    The action space is ``Discrete(len(GymAction))``; see
    :mod:`kanji_universe.actions`.
    """

    metadata = {"render_modes": ["ansi"]}

    def __init__(
        self,
        level: Optional[Level] = None,
        catalog: Catalog = DEFAULT_CATALOG,
        render_mode: str = "ansi",
    ):
        """Create a new environment instance.

        Arguments:
            level: Level to play; defaults to the first tutorial level.
            catalog: Definitions and recipes used by the simulation.
            render_mode: Only ``"ansi"`` is supported.
        """
        from gymnasium import spaces

        self.level = level if level is not None else TUTORIAL_LEVELS[0]
        self.catalog = catalog
        self.render_mode = render_mode
        self.simulation: Optional[Simulation] = None

        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(
                    low=0,
                    high=255,
                    shape=(self.level.height, self.level.width, len(catalog)),
                    dtype=np.uint8,
                ),
                "status": spaces.Dict(
                    {
                        "move_count": spaces.Box(
                            low=0, high=1_000_000_000, shape=(), dtype=np.int64
                        ),
                        "won": spaces.Discrete(2),
                    }
                ),
            }
        )
        self.action_space = spaces.Discrete(len(GymAction))

        self.reset()

    @property
    def state(self) -> State:
        assert self.simulation is not None
        return self.simulation.state

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, object]] = None
    ) -> Tuple[ObsType, Dict[str, object]]:
        """Start a new episode on the configured level.

        Arguments:
            seed: Passed to ``gym.Env.reset``; the simulation itself is deterministic.
            options: Gymnasium options (unused).
        """
        super().reset(seed=seed)
        self.simulation = Simulation(self.level, self.catalog)
        return self._get_obs(), self._get_info()

    def step(
        self, action: np.integer
    ) -> Tuple[ObsType, float, bool, bool, Dict[str, object]]:
        """Apply one environment step.

        Arguments:
            action: Integer index into ``GymAction``.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        assert self.simulation is not None
        if not 0 <= int(action) < len(GymAction):
            raise ValueError(f"Invalid action: {action}")

        was_won = self.state.win
        self.simulation.apply(GYM_TO_ACTION[GymAction(int(action))])
        reward = 1.0 if self.state.win and not was_won else 0.0
        if reward:
            logger.debug("Episode won after %d moves", self.state.move_count)
        return self._get_obs(), reward, self.state.win, False, self._get_info()

    def render(self) -> Optional[str]:  # type: ignore[override]
        if self.render_mode != "ansi":
            raise NotImplementedError(f"Render mode '{self.render_mode}' not supported.")
        return render_ansi(self.state)

    def _get_obs(self) -> ObsType:
        return {
            "board": board_observation(self.state),
            "status": {
                "move_count": np.int64(self.state.move_count),
                "won": int(self.state.win),
            },
        }

    def _get_info(self) -> Dict[str, object]:
        assert self.simulation is not None
        return {
            "rules": [self.simulation.format_rule(rule) for rule in self.state.rules],
            "player_entity_id": self.state.focus_you,
            "win_entity_id": self.state.focus_win,
            "events": [event.message for event in self.state.events],
        }

    def close(self) -> None:
        pass
