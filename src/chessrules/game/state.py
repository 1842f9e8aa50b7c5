"""Game state machine: validates, executes and classifies every turn."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chessrules.core.board import Board
from chessrules.core.enums import PROMOTION_TYPES, Color, GameStatus, PieceType
from chessrules.core.move import Move
from chessrules.core.move_generator import LegalMoves, MoveGenerator
from chessrules.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chessrules.core.rules import Rules
from chessrules.core.settings import RulesSettings
from chessrules.core.types import Coordinate, to_coordinate

_LOGGER = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    fen_after: str
    was_capture: bool = False
    was_check: bool = False


class Game:
    """A chess game: one board, both check flags and the outcome.

    The board is only ever changed through :meth:`make_move`.  A rejected
    move leaves the game exactly as it was.

    Args:
        board: Starting position; copied.  Standard start when omitted.
        settings: Rule settings; defaults reproduce the standard behavior.
    """

    __slots__ = (
        "_board",
        "_settings",
        "white_in_check",
        "black_in_check",
        "status",
        "history",
    )

    def __init__(
        self, board: Board | None = None, settings: RulesSettings | None = None
    ) -> None:
        self._settings = settings if settings is not None else RulesSettings()
        self._settings.validate()
        self._board = board.copy() if board is not None else Board.initial()
        self._board.promotion_choice = self._settings.promotion_choice
        self.white_in_check = False
        self.black_in_check = False
        self.status = GameStatus.IN_PROGRESS
        self.history: list[MoveRecord] = []
        # A position loaded from FEN may already be decided
        self._refresh()

    @classmethod
    def from_fen(cls, fen: str, settings: RulesSettings | None = None) -> Game:
        return cls(board_from_fen(fen), settings)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        """A copy of the current board."""
        return self._board.copy()

    @property
    def fen(self) -> str:
        return board_to_fen(self._board)

    @property
    def active_color(self) -> Color:
        return self._board.active_color

    @property
    def promotion_choice(self) -> PieceType:
        return self._board.promotion_choice

    @property
    def is_game_over(self) -> bool:
        return self.status.is_over

    def is_in_check(self, color: Color) -> bool:
        return self.white_in_check if color == Color.WHITE else self.black_in_check

    def legal_moves(self, color: Color | None = None) -> LegalMoves:
        """Legal moves for *color*, the side to move by default."""
        return MoveGenerator(self._board, self._settings).legal_moves(color)

    # ── Configuration ────────────────────────────────────────────────────

    def set_promotion_choice(self, choice: PieceType | str) -> bool:
        """Select the default promotion piece; ``False`` if *choice* is invalid."""
        accepted = self._board.set_promotion_choice(choice)
        if not accepted:
            _LOGGER.info("Rejected promotion choice %r", choice)
        return accepted

    # ── Move application ─────────────────────────────────────────────────

    def make_move(
        self,
        source: str | Coordinate,
        target: str | Coordinate,
        promotion: PieceType | None = None,
    ) -> bool:
        """Play *source* → *target* for the side to move.

        Squares are algebraic names (``"e2"``) or coordinates.  Malformed
        square text raises :class:`NotationError`; an illegal move returns
        ``False`` and changes nothing.
        """
        src = to_coordinate(source)
        dst = to_coordinate(target)
        move = Move(src, dst, promotion)

        if promotion is not None and promotion not in PROMOTION_TYPES:
            _LOGGER.info("Rejected %s: invalid promotion piece %r", move, promotion)
            return False

        legal = self.legal_moves(self._board.active_color)
        if dst not in legal.get(src, ()):
            _LOGGER.info("Rejected illegal move %s for %s", move, self.active_color)
            return False

        mover = self._board[src]
        assert mover is not None
        was_capture = self._board[dst] is not None or (
            mover.piece_type == PieceType.PAWN
            and dst == self._board.en_passant
            and src[1] != dst[1]
        )
        # Nothing is committed until the new position has been evaluated
        next_board = self._board.copy()
        next_board.make_move(move)
        white_in_check, black_in_check, status = self._evaluate(next_board)

        self._board = next_board
        self._commit(white_in_check, black_in_check, status)

        record = MoveRecord(
            move=move,
            fen_after=self.fen,
            was_capture=was_capture,
            was_check=self.is_in_check(next_board.active_color),
        )
        self.history.append(record)
        _LOGGER.debug("Played %s, now %s", move, record.fen_after)
        return True

    # ── Internal ─────────────────────────────────────────────────────────

    def _refresh(self) -> None:
        self._commit(*self._evaluate(self._board))

    def _evaluate(self, board: Board) -> tuple[bool, bool, GameStatus]:
        gen = MoveGenerator(board, self._settings)
        return (
            gen.is_in_check(Color.WHITE),
            gen.is_in_check(Color.BLACK),
            Rules.game_status(board, self._settings),
        )

    def _commit(
        self, white_in_check: bool, black_in_check: bool, status: GameStatus
    ) -> None:
        self.white_in_check = white_in_check
        self.black_in_check = black_in_check
        if status != self.status:
            _LOGGER.debug("Game status %s -> %s", self.status.name, status.name)
        self.status = status

    def __repr__(self) -> str:
        return (
            f"Game(status={self.status.name}, fen={self.fen!r})\n"
            f"{self._board!r}"
        )


def new_game(fen: str | None = None, settings: RulesSettings | None = None) -> Game:
    """Start a game from *fen*, or from the standard position."""
    return Game.from_fen(fen or STARTING_FEN, settings)
