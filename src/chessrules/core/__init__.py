"""Core domain layer - pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import MoveGenerator, board_from_fen, STARTING_FEN

    board = board_from_fen(STARTING_FEN)
    gen = MoveGenerator(board)
    for source, targets in gen.legal_moves().items():
        print(source, targets)
"""

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, GameStatus, PieceType
from chessrules.core.errors import ChessError, InvariantViolation, NotationError
from chessrules.core.move import Move
from chessrules.core.move_generator import (
    LegalMoves,
    MoveGenerator,
    is_in_check,
    legal_moves,
    pseudo_legal_targets,
)
from chessrules.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chessrules.core.piece import Piece
from chessrules.core.rules import Rules
from chessrules.core.settings import RulesSettings
from chessrules.core.types import (
    Coordinate,
    is_on_board,
    parse_square,
    square_name,
    to_coordinate,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameStatus",
    "PieceType",
    # Errors
    "ChessError",
    "InvariantViolation",
    "NotationError",
    # Types / helpers
    "Coordinate",
    "is_on_board",
    "parse_square",
    "square_name",
    "to_coordinate",
    # Domain objects
    "Board",
    "LegalMoves",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    "RulesSettings",
    "is_in_check",
    "legal_moves",
    "pseudo_legal_targets",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
