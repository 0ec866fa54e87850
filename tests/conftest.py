"""
Pytest configuration and shared fixtures.
"""
import random
import pytest
import sys
from pathlib import Path

# Add src and the project root (for main.py) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, GameState, new_game


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible boards."""
    return random.Random(1234)


@pytest.fixture
def standard_game(rng: random.Random) -> GameState:
    """Create a standard 10x10 game with 15 mines."""
    return new_game(rng=rng)


@pytest.fixture
def single_mine_board() -> Board:
    """4x4 board with a single mine at index 5."""
    board = Board.empty(BoardConfig(4, 4, 1))
    board.place_mine(5)
    return board


@pytest.fixture
def single_mine_game(single_mine_board: Board) -> GameState:
    """Game on the 4x4 single-mine board."""
    return GameState(single_mine_board, single_mine_board.safe_cells)


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for flood testing."""
    return Board.empty(BoardConfig(5, 5, 0))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def covered_cell() -> Cell:
    """Create a covered cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)
