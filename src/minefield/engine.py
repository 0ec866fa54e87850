"""
Game engine for the minefield puzzle.

Owns the rules: starting a game, dispatching taps to flag/reveal
actions, and deriving win/loss from the remaining safe-cell counter.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .board import STANDARD, Board, BoardConfig, generate, reveal
from .cell import Covering


logger = logging.getLogger(__name__)

LOST_SENTINEL = -1


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


class ActionOutcome(Enum):
    """What a single tap did to the board."""

    IGNORED = auto()
    FLAGGED = auto()
    UNFLAGGED = auto()
    REVEALED = auto()
    EXPLODED = auto()


@dataclass(frozen=True)
class ActionResult:
    """
    Result of applying one action.

    Attributes:
        outcome: Kind of change the action made.
        uncovered: Number of cells newly uncovered.
        remaining: Safe cells left after the action (-1 after a loss).
        status: Game status after the action.
    """

    outcome: ActionOutcome
    uncovered: int
    remaining: int
    status: GameStatus


# ============================================================================
# Game State
# ============================================================================

@dataclass
class GameState:
    """
    A single play session.

    Attributes:
        board: The minefield, owned by this state.
        remaining: Non-mine cells not yet uncovered. -1 means lost,
            0 means won.
        flag_mode: Whether taps toggle flags instead of revealing.
    """

    board: Board
    remaining: int
    flag_mode: bool = False

    @property
    def status(self) -> GameStatus:
        """Derive the game status from the remaining counter."""
        if self.remaining == LOST_SENTINEL:
            return GameStatus.LOST
        if self.remaining == 0:
            return GameStatus.WON
        return GameStatus.IN_PROGRESS

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self.remaining > 0

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self.status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self.status == GameStatus.LOST

    def status_message(self) -> str:
        """Text a front end shows next to the board."""
        if self.is_lost:
            return "Boom... you lose!"
        if self.is_won:
            return "None... you win!"
        return str(self.remaining)

    # ========================================================================
    # Actions
    # ========================================================================

    def apply_action(
        self, index: int, flag_mode: Optional[bool] = None
    ) -> ActionResult:
        """
        Apply a tap on a cell.

        In flag mode a tap on a cell that is not uncovered toggles its
        flag. Otherwise flagged cells are protected, a mine ends the game,
        and any other cell is revealed with flood fill.

        Args:
            index: Row-major cell index.
            flag_mode: Flag mode for this tap. Stored on the state when
                given; the stored value is used when omitted.

        Returns:
            What the action did and the resulting counters.

        Raises:
            IndexError: If ``index`` is outside the board.
        """
        if not self.board.is_valid_index(index):
            raise IndexError(
                f"Cell index {index} out of range for {len(self.board)} cells"
            )
        if flag_mode is not None:
            self.flag_mode = flag_mode

        if not self.is_playing:
            return self._result(ActionOutcome.IGNORED)

        cell = self.board[index]

        if self.flag_mode and cell.covering != Covering.UNCOVERED:
            cell.toggle_flag()
            outcome = (
                ActionOutcome.FLAGGED if cell.is_flagged else ActionOutcome.UNFLAGGED
            )
            return self._result(outcome)

        if cell.is_flagged:
            return self._result(ActionOutcome.IGNORED)

        if cell.is_mine:
            cell.covering = Covering.UNCOVERED
            self.remaining = LOST_SENTINEL
            logger.info("Mine hit at cell %d", index)
            return self._result(ActionOutcome.EXPLODED)

        cleared = reveal(self.board, index)
        if cleared == 0:
            return self._result(ActionOutcome.IGNORED)

        self.remaining -= cleared
        logger.debug("Cell %d uncovered %d cells", index, cleared)
        if self.is_won:
            logger.info("All safe cells uncovered")
        return self._result(ActionOutcome.REVEALED, cleared)

    def _result(self, outcome: ActionOutcome, uncovered: int = 0) -> ActionResult:
        return ActionResult(outcome, uncovered, self.remaining, self.status)


# ============================================================================
# Entry Points
# ============================================================================

def new_game(
    config: BoardConfig = STANDARD, rng: Optional[random.Random] = None
) -> GameState:
    """
    Start a fresh game on a newly generated board.

    Raises:
        InvalidConfiguration: If the configuration cannot hold its mines.
    """
    board = generate(config, rng)
    return GameState(board, config.safe_cells)


def apply_action(
    state: GameState, index: int, flag_mode: Optional[bool] = None
) -> GameState:
    """Apply a tap to ``state`` in place and return it."""
    state.apply_action(index, flag_mode)
    return state
