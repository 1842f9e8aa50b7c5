"""Board - piece placement plus side to move, rights and clocks."""

from __future__ import annotations

import logging

from chessrules.core.enums import PROMOTION_TYPES, CastlingRights, Color, PieceType
from chessrules.core.errors import InvariantViolation
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import Coordinate, square_name

_LOGGER = logging.getLogger(__name__)

# Row holding each color's king and rooks at the start.
HOME_RANK: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}
# Row a pawn of each color promotes on.
PROMOTION_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}

_ROOK_CORNERS: dict[Coordinate, CastlingRights] = {
    (7, 0): CastlingRights.WHITE_QUEENSIDE,
    (7, 7): CastlingRights.WHITE_KINGSIDE,
    (0, 0): CastlingRights.BLACK_QUEENSIDE,
    (0, 7): CastlingRights.BLACK_KINGSIDE,
}

_PROMOTION_NAMES: dict[str, PieceType] = {
    "n": PieceType.KNIGHT,
    "knight": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "bishop": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "rook": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "queen": PieceType.QUEEN,
}

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid together with the rest of the position state.

    Squares hold a :class:`Piece` or ``None`` for empty.  :meth:`copy`
    returns an independent clone, which is how the legality filter probes
    candidate moves without touching the real board.
    """

    __slots__ = (
        "_grid",
        "_king_squares",
        "active_color",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "promotion_choice",
    )

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        # [color] -> king coordinate cache (None if king missing).
        self._king_squares: list[Coordinate | None] = [None, None]
        self.active_color = Color.WHITE
        self.castling = CastlingRights.NONE
        self.en_passant: Coordinate | None = None
        self.halfmove_clock = 0
        self.fullmove_number = 1
        self.promotion_choice = PieceType.QUEEN

    # -- Element access -----------------------------------------------------

    def __getitem__(self, coord: Coordinate) -> Piece | None:
        rank, file = coord
        return self._grid[rank][file]

    def __setitem__(self, coord: Coordinate, piece: Piece | None) -> None:
        rank, file = coord
        old_piece = self._grid[rank][file]
        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[int(old_piece.color)] == coord
        ):
            self._king_squares[int(old_piece.color)] = None

        self._grid[rank][file] = piece
        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[int(piece.color)] = coord

    def is_empty(self, coord: Coordinate) -> bool:
        return self[coord] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[tuple[Coordinate, Piece]]:
        """All ``(coordinate, piece)`` pairs of *color*, top row first."""
        return [
            ((rank, file), piece)
            for rank, row in enumerate(self._grid)
            for file, piece in enumerate(row)
            if piece is not None and piece.color == color
        ]

    def king_square(self, color: Color) -> Coordinate:
        """Return the single king square for *color*."""
        coord = self._king_squares[int(color)]
        if coord is None:
            raise InvariantViolation(f"No {color.name} king on board")
        return coord

    def set_promotion_choice(self, choice: PieceType | str) -> bool:
        """Select the piece pawns promote to.

        Accepts a :class:`PieceType` or a name/letter such as ``"rook"`` or
        ``"N"``.  Anything other than bishop, knight, rook or queen is
        rejected and the previous choice is kept.
        """
        if isinstance(choice, str):
            piece_type = _PROMOTION_NAMES.get(choice.strip().lower())
        else:
            piece_type = choice
        if piece_type not in PROMOTION_TYPES:
            return False
        self.promotion_choice = PieceType(piece_type)
        return True

    # -- Move execution -----------------------------------------------------

    def make_move(self, move: Move) -> None:
        """Apply *move* in place.

        Trusts the caller: the move must come from the legality filter for
        the color of the moving piece.  Special cases are derived from the
        moving piece and the geometry of the move.
        """
        source, target = move.source, move.target
        piece = self[source]
        if piece is None:
            raise InvariantViolation(f"No piece on {square_name(source)}")

        captured = self[target]
        if captured is not None and captured.piece_type == PieceType.KING:
            raise InvariantViolation(
                f"Move {move} would capture the {captured.color} king"
            )
        is_capture = captured is not None

        self._update_castling(source, target, piece)

        placed_piece = piece
        next_en_passant: Coordinate | None = None
        if piece.piece_type == PieceType.PAWN:
            if abs(move.rank_delta) == 2:
                next_en_passant = ((source[0] + target[0]) // 2, source[1])
            elif move.file_delta and captured is None and target == self.en_passant:
                # The captured pawn sits beside the mover, not on the target
                self[(source[0], target[1])] = None
                is_capture = True
            if target[0] == PROMOTION_RANK[piece.color]:
                promotion = move.promotion or self.promotion_choice
                placed_piece = Piece(piece.color, promotion)
        self.en_passant = next_en_passant

        if is_capture or piece.piece_type == PieceType.PAWN:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        self[source] = None
        self[target] = placed_piece

        if piece.piece_type == PieceType.KING and abs(move.file_delta) == 2:
            self._slide_castling_rook(source, target)

        if piece.color == Color.BLACK:
            self.fullmove_number += 1
        self.active_color = piece.color.opposite

    def _slide_castling_rook(self, king_from: Coordinate, king_to: Coordinate) -> None:
        rank = king_from[0]
        if king_to[1] > king_from[1]:
            rook_from, rook_to = (rank, 7), (rank, king_to[1] - 1)
        else:
            rook_from, rook_to = (rank, 0), (rank, king_to[1] + 1)
        rook = self[rook_from]
        if rook is None or rook.piece_type != PieceType.ROOK:
            raise InvariantViolation(
                f"Castling rook missing on {square_name(rook_from)}"
            )
        self[rook_to] = rook
        self[rook_from] = None

    def _update_castling(
        self, source: Coordinate, target: Coordinate, piece: Piece
    ) -> None:
        next_castling = self.castling
        if piece.piece_type == PieceType.KING:
            next_castling &= ~CastlingRights.both(piece.color)

        # Rook leaving its corner, or anything landing on a corner
        for coord in (source, target):
            if coord in _ROOK_CORNERS:
                next_castling &= ~_ROOK_CORNERS[coord]

        if next_castling != self.castling:
            _LOGGER.debug("Castling rights %r -> %r", self.castling, next_castling)
        self.castling = next_castling

    # -- Copying / factory --------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        b._king_squares = self._king_squares.copy()
        b.active_color = self.active_color
        b.castling = self.castling
        b.en_passant = self.en_passant
        b.halfmove_clock = self.halfmove_clock
        b.fullmove_number = self.fullmove_number
        b.promotion_choice = self.promotion_choice
        return b

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            b[(0, f)] = Piece(Color.BLACK, pt)
            b[(1, f)] = Piece(Color.BLACK, PieceType.PAWN)
            b[(6, f)] = Piece(Color.WHITE, PieceType.PAWN)
            b[(7, f)] = Piece(Color.WHITE, pt)
        b.castling = CastlingRights.ALL
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._grid == other._grid
            and self.active_color == other.active_color
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
            and self.promotion_choice == other.promotion_choice
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank, row in enumerate(self._grid):
            cells = [str(p) if p else "." for p in row]
            rows.append(f"{8 - rank} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
