"""
Board module for the minefield engine.

Implements the fixed-size grid, edge-clipped adjacency, randomized mine
placement and the flood-fill reveal.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional

import numpy as np

from .cell import Cell, Covering
from .errors import InvalidConfiguration


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a minefield board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 10
    height: int = 10
    num_mines: int = 15

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def cell_count(self) -> int:
        """Total number of cells on the board."""
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        """Number of cells that do not hold a mine."""
        return self.cell_count - self.num_mines


STANDARD = BoardConfig(10, 10, 15)


# ============================================================================
# Neighbor Utilities
# ============================================================================

def neighbors(index: int, width: int, height: int) -> Iterator[int]:
    """
    Yield the indices of the up to 8 cells around ``index``.

    Cells beyond an edge are skipped, there is no wraparound. Order is
    row-major within the 3x3 neighborhood.

    Args:
        index: Row-major index of the center cell.
        width: Number of columns.
        height: Number of rows.
    """
    on_left_edge = index % width == 0
    on_right_edge = index % width == width - 1

    if index >= width:
        if not on_left_edge:
            yield index - width - 1
        yield index - width
        if not on_right_edge:
            yield index - width + 1

    if not on_left_edge:
        yield index - 1
    if not on_right_edge:
        yield index + 1

    if index < width * (height - 1):
        if not on_left_edge:
            yield index + width - 1
        yield index + width
        if not on_right_edge:
            yield index + width + 1


def for_each_neighbor(
    index: int, width: int, height: int, visit: Callable[[int], None]
) -> None:
    """Apply ``visit`` to every neighbor index of ``index``."""
    for neighbor in neighbors(index, width, height):
        visit(neighbor)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minefield grid.

    Holds ``width * height`` cells in row-major order. All game rules
    live in the engine; the board only knows its layout.
    """

    config: BoardConfig = STANDARD
    cells: List[Cell] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Fill in an empty grid when no cells were given."""
        if not self.cells:
            self.cells = [Cell(index) for index in range(self.config.cell_count)]

    @classmethod
    def empty(cls, config: BoardConfig = STANDARD) -> "Board":
        """Create a board with no mines and every cell covered."""
        return cls(config)

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def neighbors(self, index: int) -> Iterator[int]:
        """Neighbor indices of ``index`` on this board."""
        return neighbors(index, self.width, self.height)

    def is_valid_index(self, index: int) -> bool:
        """Check if index is within board bounds."""
        return 0 <= index < len(self.cells)

    def place_mine(self, index: int) -> None:
        """
        Turn a cell into a mine and bump its non-mine neighbors' counts.

        Args:
            index: Cell to mine. Must not already be a mine.
        """
        self.cells[index].is_mine = True
        for neighbor in self.neighbors(index):
            cell = self.cells[neighbor]
            if not cell.is_mine:
                cell.adjacent_mines += 1

    @property
    def mine_count(self) -> int:
        return sum(1 for cell in self.cells if cell.is_mine)

    @property
    def safe_cells(self) -> int:
        """Number of non-mine cells on this board."""
        return len(self.cells) - self.mine_count

    def covered_safe_cells(self) -> int:
        """Count non-mine cells that are not uncovered yet."""
        return sum(
            1 for cell in self.cells if not cell.is_mine and not cell.is_uncovered
        )

    def get_observation(self) -> np.ndarray:
        """
        Get the visible board as a numpy array.

        Returns:
            2D numpy array where:
                -1 = covered
                -2 = flagged
                0-8 = uncovered with adjacent count
                9 = uncovered mine
        """
        obs = np.array(
            [cell.to_observation() for cell in self.cells], dtype=np.int8
        )
        return obs.reshape(self.height, self.width)


# ============================================================================
# Generation
# ============================================================================

def generate(
    config: BoardConfig = STANDARD, rng: Optional[random.Random] = None
) -> Board:
    """
    Build a board with ``config.num_mines`` randomly placed mines.

    Each mine is drawn uniformly over the whole grid, redrawing while the
    drawn cell is already a mine.

    Args:
        config: Board dimensions and mine count.
        rng: Random source exposing ``randrange``. A fresh
            ``random.Random`` is used when omitted.

    Returns:
        A fully covered board with adjacency counts filled in.
    """
    rng = rng or random.Random()
    board = Board.empty(config)
    for _ in range(config.num_mines):
        index = rng.randrange(config.cell_count)
        while board.cells[index].is_mine:
            index = rng.randrange(config.cell_count)
        board.place_mine(index)
    logger.debug(
        "Generated %dx%d board with %d mines",
        config.width,
        config.height,
        config.num_mines,
    )
    return board


# ============================================================================
# Reveal
# ============================================================================

def reveal(board: Board, index: int) -> int:
    """
    Uncover a cell, flooding outward from cells with no adjacent mines.

    Propagation stops at numbered cells and never touches flagged cells.
    The caller must not reveal a mine through this function.

    Args:
        board: Board to mutate.
        index: Cell to uncover.

    Returns:
        Number of cells newly uncovered (0 if the cell was not covered).
    """
    if board.cells[index].covering != Covering.COVERED:
        return 0

    cleared = 0
    pending = [index]
    while pending:
        cell = board.cells[pending.pop()]
        if not cell.uncover():
            continue
        cleared += 1
        if cell.adjacent_mines == 0:
            pending.extend(
                neighbor
                for neighbor in board.neighbors(cell.index)
                if board.cells[neighbor].is_covered
            )
    return cleared
