"""
Gymnasium environment wrapper for the minefield engine.

Lets programmatic players drive a game through the same tap/flag
actions a front end would send.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import STANDARD, Board, BoardConfig
from .engine import ActionOutcome, GameState, new_game


# ============================================================================
# Rendering
# ============================================================================

def render_board(board: Board) -> str:
    """
    Render board as ASCII text, one space between columns.

    ``.`` covered, ``F`` flagged, ``*`` uncovered mine, blank for an
    uncovered zero, otherwise the adjacent count.
    """
    lines = []
    obs = board.get_observation()

    for row in range(board.height):
        symbols = []
        for col in range(board.width):
            val = obs[row, col]
            if val == -1:
                symbols.append(".")
            elif val == -2:
                symbols.append("F")
            elif val == 9:
                symbols.append("*")
            elif val == 0:
                symbols.append(" ")
            else:
                symbols.append(str(val))
        lines.append(" ".join(symbols))

    return "\n".join(lines)


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment for the minefield puzzle.

    Observation:
        2D array where:
        - -1 = covered cell
        - -2 = flagged cell
        - 0-8 = uncovered cell with adjacent mine count
        - 9 = uncovered mine

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < cells taps cell i with flag mode off.
        Action i >= cells taps cell i - cells with flag mode on.

    Rewards:
        - +1 for uncovering safe cells
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for toggling a flag
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 10x10 with 15 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or STANDARD
        self.render_mode = render_mode
        self.state: GameState = new_game(self.config)

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self.config.cell_count)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(2**32)))
        self.state = new_game(self.config, rng)
        self._steps = 0

        return self.state.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action.

        Args:
            action: Encoded cell index and flag mode (see class docs).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        index, flag_mode = self._decode_action(action)
        self._steps += 1

        result = self.state.apply_action(index, flag_mode)
        reward = self._calculate_reward(result.outcome)

        observation = self.state.board.get_observation()
        terminated = not self.state.is_playing

        return observation, reward, terminated, False, self._get_info()

    def _decode_action(self, action: int) -> Tuple[int, bool]:
        """
        Split a flat action into (cell index, flag mode).

        Raises:
            IndexError: If the action is outside the action space.
        """
        if not self.action_space.contains(action):
            raise IndexError(
                f"Action {action} out of range for {self.action_space.n} actions"
            )
        flag_mode, index = divmod(int(action), self.config.cell_count)
        return index, bool(flag_mode)

    def _calculate_reward(self, outcome: ActionOutcome) -> float:
        if outcome == ActionOutcome.EXPLODED:
            return -10.0
        if outcome == ActionOutcome.IGNORED:
            return -0.1
        if outcome in (ActionOutcome.FLAGGED, ActionOutcome.UNFLAGGED):
            return 0.0
        if self.state.is_won:
            return 10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "remaining": self.state.remaining,
            "total_safe": self.config.safe_cells,
            "game_state": self.state.status.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.state.board)
        if self.render_mode == "human":
            print(render_board(self.state.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the board.

        Returns:
            Boolean array where True = valid action. Reveal actions are
            valid on covered cells, flag actions on cells that are not
            uncovered.
        """
        cells = self.config.cell_count
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.state.is_playing:
            return mask
        for cell in self.state.board.cells:
            if cell.is_covered:
                mask[cell.index] = True
            if not cell.is_uncovered:
                mask[cells + cell.index] = True
        return mask
