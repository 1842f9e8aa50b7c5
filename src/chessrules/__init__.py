"""chessrules - a chess rules engine.

Legal move generation, move execution and outcome detection over a
FEN-compatible board model.
"""

from chessrules.core import (
    STARTING_FEN,
    Board,
    CastlingRights,
    ChessError,
    Color,
    GameStatus,
    InvariantViolation,
    Move,
    MoveGenerator,
    NotationError,
    Piece,
    PieceType,
    Rules,
    RulesSettings,
    board_from_fen,
    board_to_fen,
    is_in_check,
    legal_moves,
    parse_square,
    square_name,
)
from chessrules.game import Game, MoveRecord, new_game

__version__ = "0.1.0"

__all__ = [
    "STARTING_FEN",
    "Board",
    "CastlingRights",
    "ChessError",
    "Color",
    "Game",
    "GameStatus",
    "InvariantViolation",
    "Move",
    "MoveGenerator",
    "MoveRecord",
    "NotationError",
    "Piece",
    "PieceType",
    "Rules",
    "RulesSettings",
    "board_from_fen",
    "board_to_fen",
    "is_in_check",
    "legal_moves",
    "new_game",
    "parse_square",
    "square_name",
]
