"""
Cell module for the minefield engine.

Represents a single grid position with its content (mine/number)
and its covering (covered/flagged/uncovered).
"""
from enum import Enum
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class Covering(Enum):
    """Visibility states of a cell."""

    COVERED = "covered"
    FLAGGED = "flagged"
    UNCOVERED = "uncovered"


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the minefield.

    Attributes:
        index: Row-major position on the board.
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        covering: Current visibility state.
    """

    index: int = 0
    is_mine: bool = False
    adjacent_mines: int = 0
    covering: Covering = Covering.COVERED

    def uncover(self) -> bool:
        """
        Uncover this cell.

        Returns:
            True if the cell was covered and is now uncovered, False if
            it was already uncovered or is flagged.
        """
        if self.covering != Covering.COVERED:
            return False
        self.covering = Covering.UNCOVERED
        return True

    def toggle_flag(self) -> bool:
        """
        Swap a covered cell to flagged, or a flagged one back to covered.

        Returns:
            False if the cell is already uncovered, which makes it
            unflaggable.
        """
        if self.covering == Covering.UNCOVERED:
            return False
        self.covering = (
            Covering.COVERED if self.covering == Covering.FLAGGED else Covering.FLAGGED
        )
        return True

    @property
    def is_covered(self) -> bool:
        return self.covering == Covering.COVERED

    @property
    def is_flagged(self) -> bool:
        """Flagged cells are skipped by reveals outside flag mode."""
        return self.covering == Covering.FLAGGED

    @property
    def is_uncovered(self) -> bool:
        return self.covering == Covering.UNCOVERED

    def to_observation(self) -> int:
        """
        Encode what a player may know about this cell.

        A mine flag or count is only exposed once the cell is uncovered.

        Returns:
            -1 while covered, -2 while flagged, 9 for an uncovered mine,
            otherwise the adjacent mine count.
        """
        if self.is_covered:
            return -1
        if self.is_flagged:
            return -2
        return 9 if self.is_mine else self.adjacent_mines
