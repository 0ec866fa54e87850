"""
Snapshot module for persisting and restoring games.

A snapshot is a fixed-schema record of every cell plus the session
counters. It converts to a plain dict for JSON storage and back, and
every conversion checks its fields explicitly.
"""
import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .board import STANDARD, Board, BoardConfig
from .cell import Cell, Covering
from .engine import LOST_SENTINEL, GameState, new_game
from .errors import CorruptSnapshot


logger = logging.getLogger(__name__)

CELL_FIELDS = ("index", "is_mine", "adjacent_mines", "covering")


# ============================================================================
# Records
# ============================================================================

@dataclass(frozen=True)
class CellRecord:
    """Persisted form of one cell."""

    index: int
    is_mine: bool
    adjacent_mines: int
    covering: Covering

    @classmethod
    def from_cell(cls, cell: Cell) -> "CellRecord":
        return cls(cell.index, cell.is_mine, cell.adjacent_mines, cell.covering)

    def to_cell(self) -> Cell:
        return Cell(self.index, self.is_mine, self.adjacent_mines, self.covering)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "is_mine": self.is_mine,
            "adjacent_mines": self.adjacent_mines,
            "covering": self.covering.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CellRecord":
        """
        Build a record from its dict form.

        Raises:
            CorruptSnapshot: If a field is missing, mistyped, or the
                covering name is unknown.
        """
        if not isinstance(data, Mapping):
            raise CorruptSnapshot("Cell entry is not a mapping")
        missing = [name for name in CELL_FIELDS if name not in data]
        if missing:
            raise CorruptSnapshot(f"Cell entry missing fields: {', '.join(missing)}")
        try:
            covering = Covering(data["covering"])
        except ValueError:
            raise CorruptSnapshot(f"Unknown covering {data['covering']!r}") from None
        return cls(
            _require_int(data["index"], "index"),
            _require_bool(data["is_mine"], "is_mine"),
            _require_int(data["adjacent_mines"], "adjacent_mines"),
            covering,
        )


@dataclass(frozen=True)
class Snapshot:
    """
    Persisted form of a game.

    Attributes:
        cells: One record per cell, in row-major order.
        remaining: Safe cells left (-1 after a loss).
        flag_mode: Whether flag mode was on.
    """

    cells: Tuple[CellRecord, ...]
    remaining: int
    flag_mode: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            "cells": [record.to_dict() for record in self.cells],
            "remaining": self.remaining,
            "flag_mode": self.flag_mode,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Snapshot":
        """
        Build a snapshot from its dict form.

        ``cells`` and ``remaining`` are required. ``flag_mode`` is
        optional and defaults to off.

        Raises:
            CorruptSnapshot: If required fields are absent or malformed.
        """
        if not isinstance(data, Mapping):
            raise CorruptSnapshot("Snapshot is not a mapping")
        if "cells" not in data:
            raise CorruptSnapshot("Snapshot has no cells")
        if "remaining" not in data:
            raise CorruptSnapshot("Snapshot has no remaining count")
        if not isinstance(data["cells"], list):
            raise CorruptSnapshot("Snapshot cells is not a list")
        return cls(
            tuple(CellRecord.from_dict(entry) for entry in data["cells"]),
            _require_int(data["remaining"], "remaining"),
            _require_bool(data.get("flag_mode", False), "flag_mode"),
        )


def _require_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CorruptSnapshot(f"Field {name} must be an integer")
    return value


def _require_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise CorruptSnapshot(f"Field {name} must be a boolean")
    return value


# ============================================================================
# Conversion
# ============================================================================

def serialize(state: GameState) -> Snapshot:
    """Capture a game state as a snapshot."""
    return Snapshot(
        tuple(CellRecord.from_cell(cell) for cell in state.board.cells),
        state.remaining,
        state.flag_mode,
    )


def deserialize(snapshot: Snapshot, config: BoardConfig = STANDARD) -> GameState:
    """
    Rebuild a game state from a snapshot.

    Args:
        snapshot: Snapshot to restore.
        config: Board configuration the snapshot was taken with.

    Raises:
        CorruptSnapshot: If the snapshot does not describe a board of
            this configuration.
    """
    if len(snapshot.cells) != config.cell_count:
        raise CorruptSnapshot(
            f"Expected {config.cell_count} cells, got {len(snapshot.cells)}"
        )
    for position, record in enumerate(snapshot.cells):
        if record.index != position:
            raise CorruptSnapshot(
                f"Cell at position {position} claims index {record.index}"
            )
        if not 0 <= record.adjacent_mines <= 8:
            raise CorruptSnapshot(
                f"Cell {position} has {record.adjacent_mines} adjacent mines"
            )

    board = Board(config, [record.to_cell() for record in snapshot.cells])
    if not LOST_SENTINEL <= snapshot.remaining <= board.safe_cells:
        raise CorruptSnapshot(f"Remaining count {snapshot.remaining} out of range")
    return GameState(board, snapshot.remaining, snapshot.flag_mode)


def restore(
    data: Optional[Mapping[str, Any]],
    config: BoardConfig = STANDARD,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Restore a game from persisted data, or start a new one.

    Missing or corrupt data is discarded and a fresh game is generated.

    Args:
        data: Snapshot in dict form, or None if nothing was saved.
        config: Board configuration.
        rng: Random source for the fallback game.
    """
    if data is None:
        return new_game(config, rng)
    try:
        return deserialize(Snapshot.from_dict(data), config)
    except CorruptSnapshot as exc:
        logger.warning("Discarding saved game: %s", exc)
        return new_game(config, rng)


# ============================================================================
# Files
# ============================================================================

def save_snapshot(path: Union[str, Path], snapshot: Snapshot) -> None:
    """Write a snapshot to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot.to_dict(), f)


def load_snapshot(path: Union[str, Path]) -> Optional[Dict[str, Any]]:
    """
    Read snapshot data from a JSON file.

    Returns:
        The stored dict, or None if the file does not exist.

    Raises:
        CorruptSnapshot: If the file cannot be read or is not valid JSON.
    """
    path = Path(path)
    if not path.exists():
        return None
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise CorruptSnapshot(f"Unreadable snapshot file {path}") from exc
