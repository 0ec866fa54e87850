"""
Unit tests for the terminal front end helpers.
"""
import random
from pathlib import Path

import pytest
from main import load_state, parse_cell, save_state
from minefield import STANDARD, new_game


# ============================================================================
# Input Parsing Tests
# ============================================================================

class TestParseCell:
    """Test cell reference parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("0", 0),
            ("42", 42),
            ("3 7", 37),
            ("3,7", 37),
            ("9 9", 99),
        ],
    )
    def test_valid_references(self, text: str, expected: int) -> None:
        assert parse_cell(text, 10) == expected

    @pytest.mark.parametrize(
        "text", ["", "x", "-1", "1 2 3", "2 10", "²", "1 ²"]
    )
    def test_invalid_references(self, text: str) -> None:
        assert parse_cell(text, 10) is None


# ============================================================================
# Persistence Tests
# ============================================================================

class TestStateFile:
    """Test saving and resuming through the state file."""

    def test_resume_saved_game(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        state = new_game(STANDARD, random.Random(9))
        state.apply_action(0, flag_mode=True)
        save_state(path, state)
        assert load_state(path) == state

    def test_missing_file_starts_new_game(self, tmp_path: Path) -> None:
        state = load_state(tmp_path / "missing.json")
        assert state.remaining == STANDARD.safe_cells

    def test_garbage_file_starts_new_game(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text("garbage")
        state = load_state(path)
        assert state.is_playing
        assert all(cell.is_covered for cell in state.board.cells)

    def test_invalid_utf8_file_starts_new_game(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        state = load_state(path)
        assert state.remaining == STANDARD.safe_cells

    def test_directory_path_starts_new_game(self, tmp_path: Path) -> None:
        state = load_state(tmp_path)
        assert state.remaining == STANDARD.safe_cells

    def test_save_to_directory_reports_failure(self, tmp_path: Path) -> None:
        state = new_game(STANDARD, random.Random(9))
        assert save_state(tmp_path, state) is False
        assert save_state(tmp_path / "state.json", state) is True
