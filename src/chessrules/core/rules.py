"""High-level chess rules: checkmate, stalemate, fifty-move draw."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, GameStatus
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.settings import RulesSettings

if TYPE_CHECKING:
    from chessrules.core.board import Board


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # Policy:
    # - The fifty-move draw is automatic and outranks mate or stalemate.
    # - Threefold repetition and insufficient material are not detected.

    @staticmethod
    def is_in_check(board: Board) -> bool:
        gen = MoveGenerator(board)
        return gen.is_in_check(board.active_color)

    @staticmethod
    def is_checkmate(board: Board, settings: RulesSettings | None = None) -> bool:
        if not Rules.is_in_check(board):
            return False
        gen = MoveGenerator(board, settings)
        return not gen.legal_moves(board.active_color)

    @staticmethod
    def is_stalemate(board: Board, settings: RulesSettings | None = None) -> bool:
        if Rules.is_in_check(board):
            return False
        gen = MoveGenerator(board, settings)
        return not gen.legal_moves(board.active_color)

    @staticmethod
    def is_fifty_move_rule(board: Board, settings: RulesSettings | None = None) -> bool:
        limit = (settings or RulesSettings()).fifty_move_limit
        return board.halfmove_clock >= limit  # 100 half-moves = 50 full moves

    @staticmethod
    def game_status(board: Board, settings: RulesSettings | None = None) -> GameStatus:
        """Classify the position.

        Both colors are examined, White first, whoever is to move.
        """
        if Rules.is_fifty_move_rule(board, settings):
            return GameStatus.DRAW_FIFTY_MOVE

        gen = MoveGenerator(board, settings)
        if not gen.legal_moves(Color.WHITE):
            if gen.is_in_check(Color.WHITE):
                return GameStatus.CHECKMATE_BLACK_WINS
            return GameStatus.STALEMATE

        if not gen.legal_moves(Color.BLACK):
            if gen.is_in_check(Color.BLACK):
                return GameStatus.CHECKMATE_WHITE_WINS
            return GameStatus.STALEMATE

        return GameStatus.IN_PROGRESS
