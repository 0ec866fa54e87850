#!/usr/bin/env python3
"""
Minefield - play the puzzle in a terminal.

Usage:
    python main.py play              # Resume or start a game
    python main.py new               # Discard the saved game
    python main.py show              # Print the saved board
"""
import argparse
import logging
from pathlib import Path
from typing import Optional

from minefield import (
    STANDARD,
    CorruptSnapshot,
    GameState,
    load_snapshot,
    new_game,
    render_board,
    restore,
    save_snapshot,
    serialize,
)


logger = logging.getLogger("minefield.cli")

DEFAULT_STATE_FILE = "minefield_state.json"

HELP_TEXT = """Commands:
  <index>        tap a cell by index (0-{last})
  <row> <col>    tap a cell by position
  f              toggle flag mode
  n              start a new game
  q              save and quit"""


# ============================================================================
# Persistence
# ============================================================================

def load_state(path: Path) -> GameState:
    """Restore the saved game, falling back to a new one."""
    try:
        data = load_snapshot(path)
    except CorruptSnapshot as exc:
        logger.warning("%s", exc)
        data = None
    return restore(data, STANDARD)


def save_state(path: Path, state: GameState) -> bool:
    """Save the game. Returns False (and logs) if the file can't be written."""
    try:
        save_snapshot(path, serialize(state))
    except OSError as exc:
        logger.error("Could not save game to %s: %s", path, exc)
        return False
    return True


def show(state: GameState) -> None:
    """Print the board with its status line."""
    print(render_board(state.board))
    mode = "flag" if state.flag_mode else "reveal"
    print(f"\nSquares to clear: {state.status_message()}   [mode: {mode}]")


# ============================================================================
# Input
# ============================================================================

def parse_cell(text: str, width: int) -> Optional[int]:
    """
    Parse a cell reference.

    Args:
        text: Either a flat index or "row col".
        width: Board width used to flatten (row, col).

    Returns:
        Flat index, or None if the text is not a cell reference.
    """
    parts = text.replace(",", " ").split()
    if not parts or not all(part.isdecimal() for part in parts):
        return None
    if len(parts) == 1:
        return int(parts[0])
    if len(parts) == 2:
        row, col = (int(part) for part in parts)
        if col >= width:
            return None
        return row * width + col
    return None


# ============================================================================
# Commands
# ============================================================================

def play(args: argparse.Namespace) -> None:
    """Interactive game loop."""
    path = Path(args.state_file)
    state = load_state(path)
    last = STANDARD.cell_count - 1
    print(HELP_TEXT.format(last=last))

    while True:
        print()
        show(state)
        try:
            command = input("> ").strip().lower()
        except EOFError:
            command = "q"

        if command == "q":
            save_state(path, state)
            break
        if command == "f":
            state.flag_mode = not state.flag_mode
        elif command == "n":
            state = new_game(STANDARD)
        else:
            index = parse_cell(command, STANDARD.width)
            if index is None or index > last:
                print(HELP_TEXT.format(last=last))
                continue
            result = state.apply_action(index)
            logger.debug("Cell %d: %s", index, result.outcome.name)

        save_state(path, state)


def new(args: argparse.Namespace) -> None:
    """Replace the saved game with a fresh one."""
    path = Path(args.state_file)
    state = new_game(STANDARD)
    save_state(path, state)
    show(state)


def show_saved(args: argparse.Namespace) -> None:
    """Print the saved game without changing it."""
    show(load_state(Path(args.state_file)))


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - a grid mine-detection puzzle"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for name, help_text in (
        ("play", "Resume the saved game or start a new one"),
        ("new", "Discard the saved game and start a new one"),
        ("show", "Print the saved game"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--state-file",
            default=DEFAULT_STATE_FILE,
            help="Where the game is saved",
        )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "new":
        new(args)
    elif args.command == "show":
        show_saved(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
