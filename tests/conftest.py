"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessrules.core.board import Board
from chessrules.core.notation import STARTING_FEN, board_from_fen


@pytest.fixture
def start_board() -> Board:
    """Standard starting position parsed from FEN."""
    return board_from_fen(STARTING_FEN)


@pytest.fixture
def castling_board() -> Board:
    """Kings and rooks on their home squares, all rights intact."""
    return board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
