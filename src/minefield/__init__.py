"""
Minefield puzzle engine.

Provides board generation, flood-fill reveal, the game rules and
snapshot persistence.
"""
from .cell import Cell, Covering
from .board import (
    Board,
    BoardConfig,
    STANDARD,
    for_each_neighbor,
    generate,
    neighbors,
    reveal,
)
from .engine import (
    ActionOutcome,
    ActionResult,
    GameState,
    GameStatus,
    apply_action,
    new_game,
)
from .errors import CorruptSnapshot, InvalidConfiguration, MinefieldError
from .snapshot import (
    CellRecord,
    Snapshot,
    deserialize,
    load_snapshot,
    restore,
    save_snapshot,
    serialize,
)
from .environment import MinefieldEnv, render_board

__all__ = [
    "Cell",
    "Covering",
    "Board",
    "BoardConfig",
    "STANDARD",
    "for_each_neighbor",
    "generate",
    "neighbors",
    "reveal",
    "ActionOutcome",
    "ActionResult",
    "GameState",
    "GameStatus",
    "apply_action",
    "new_game",
    "CorruptSnapshot",
    "InvalidConfiguration",
    "MinefieldError",
    "CellRecord",
    "Snapshot",
    "deserialize",
    "load_snapshot",
    "restore",
    "save_snapshot",
    "serialize",
    "MinefieldEnv",
    "render_board",
]
