"""Pseudo-legal and legal move generation + check detection.

Two entry points share one geometric core:

* :meth:`MoveGenerator.pseudo_legal_targets` - what a piece may move to,
  castling included, ignoring check.
* :meth:`MoveGenerator.attack_targets` - the raw squares a piece hits.
  Never includes castling and never consults the legality filter, so
  check detection built on it cannot recurse.

:meth:`MoveGenerator.legal_moves` is the only place that simulates moves,
each one on its own cloned :class:`Board`.
"""

from __future__ import annotations

from chessrules.core.board import HOME_RANK, Board
from chessrules.core.enums import CastlingRights, Color, PieceType
from chessrules.core.errors import InvariantViolation
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.settings import RulesSettings
from chessrules.core.types import Coordinate, is_on_board, square_name

LegalMoves = dict[Coordinate, set[Coordinate]]

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Pawns of each color advance this many rows per step.
_PAWN_STEP: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
_PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
# Row a capturing pawn lands on when taking en passant.
_EN_PASSANT_RANK: dict[Color, int] = {Color.WHITE: 2, Color.BLACK: 5}

_KINGSIDE: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_KINGSIDE,
    Color.BLACK: CastlingRights.BLACK_KINGSIDE,
}
_QUEENSIDE: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_QUEENSIDE,
    Color.BLACK: CastlingRights.BLACK_QUEENSIDE,
}
# (rook file, king destination file, files strictly between king and rook)
_KINGSIDE_PATH: tuple[int, int, tuple[int, ...]] = (7, 6, (5, 6))
_QUEENSIDE_PATH: tuple[int, int, tuple[int, ...]] = (0, 2, (1, 2, 3))
_KING_HOME_FILE = 4


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Coordinate, tuple[Coordinate, ...]]:
    targets: dict[Coordinate, tuple[Coordinate, ...]] = {}
    for rank in range(8):
        for file in range(8):
            targets[(rank, file)] = tuple(
                (rank + dr, file + df)
                for dr, df in offsets
                if is_on_board(rank + dr, file + df)
            )
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Coordinate, tuple[tuple[Coordinate, ...], ...]]:
    rays_per_square: dict[Coordinate, tuple[tuple[Coordinate, ...], ...]] = {}
    for rank in range(8):
        for file in range(8):
            square_rays: list[tuple[Coordinate, ...]] = []
            for dr, df in directions:
                r, f = rank + dr, file + df
                ray: list[Coordinate] = []
                while is_on_board(r, f):
                    ray.append((r, f))
                    r += dr
                    f += df
                square_rays.append(tuple(ray))
            rays_per_square[(rank, file)] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_SLIDER_RAYS: dict[PieceType, dict[Coordinate, tuple[tuple[Coordinate, ...], ...]]] = {
    PieceType.BISHOP: _build_rays(BISHOP_DIRS),
    PieceType.ROOK: _build_rays(ROOK_DIRS),
    PieceType.QUEEN: _build_rays(QUEEN_DIRS),
}


class MoveGenerator:
    """Move generation and check detection over a :class:`Board`.

    Never mutates the board it was given; legality probing works on
    clones.
    """

    __slots__ = ("_board", "_settings")

    def __init__(self, board: Board, settings: RulesSettings | None = None) -> None:
        self._board = board
        self._settings = settings if settings is not None else RulesSettings()

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, color: Color | None = None) -> LegalMoves:
        """Strictly legal moves for *color* (side to move by default).

        Maps each source coordinate to its non-empty set of destinations.
        """
        if color is None:
            color = self._board.active_color
        _require_color(color)

        board = self._board
        in_check = self.is_in_check(color)
        legal: LegalMoves = {}

        for source, targets in self.pseudo_legal_moves(color).items():
            piece = board[source]
            assert piece is not None
            kept: set[Coordinate] = set()
            for target in targets:
                if _is_castling(piece, source, target):
                    if in_check:
                        continue
                    if self._settings.strict_castling and self._transit_attacked(
                        source, target, color
                    ):
                        continue
                victim = board[target]
                if victim is not None and victim.piece_type == PieceType.KING:
                    # Only reachable while the opponent stands in check; the
                    # side still has a move, but it is never executed.
                    kept.add(target)
                    continue
                clone = board.copy()
                clone.make_move(Move(source, target))
                if not MoveGenerator(clone, self._settings).is_in_check(color):
                    kept.add(target)
            if kept:
                legal[source] = kept
        return legal

    def pseudo_legal_moves(self, color: Color) -> LegalMoves:
        """Pseudo-legal moves (may leave own king in check) for every piece."""
        _require_color(color)
        moves: LegalMoves = {}
        for coord, _piece in self._board.pieces(color):
            targets = self.pseudo_legal_targets(coord, color)
            if targets:
                moves[coord] = targets
        return moves

    def pseudo_legal_targets(self, coord: Coordinate, color: Color) -> set[Coordinate]:
        """Destinations of the piece on *coord* by its movement rule."""
        piece = self._piece_for(coord, color)
        targets: set[Coordinate] = set()
        if piece.piece_type == PieceType.PAWN:
            self._gen_pawn_pushes(coord, color, targets)
            self._gen_pawn_captures(coord, color, targets, raw=False)
        else:
            self._gen_piece(coord, piece, targets)
            if piece.piece_type == PieceType.KING:
                self._gen_castling(coord, color, targets)
        return targets

    def attack_targets(self, coord: Coordinate, color: Color) -> set[Coordinate]:
        """Raw squares hit by the piece on *coord*.

        Pawns hit both forward diagonals unless a friendly piece stands
        there; no pushes and no castling.  Does not consult the legality
        filter.
        """
        piece = self._piece_for(coord, color)
        targets: set[Coordinate] = set()
        if piece.piece_type == PieceType.PAWN:
            self._gen_pawn_captures(coord, color, targets, raw=True)
        else:
            self._gen_piece(coord, piece, targets)
        return targets

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        _require_color(color)
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, coord: Coordinate, by_color: Color) -> bool:
        """Is *coord* attacked by any piece of *by_color*?"""
        for source, _piece in self._board.pieces(by_color):
            if coord in self.attack_targets(source, by_color):
                return True
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _piece_for(self, coord: Coordinate, color: Color) -> Piece:
        piece = self._board[coord]
        if piece is None:
            raise InvariantViolation(
                f"Move generation requested for empty square {square_name(coord)}"
            )
        if piece.color != color:
            raise InvariantViolation(
                f"Piece on {square_name(coord)} is {piece.color}, not {color}"
            )
        return piece

    def _gen_pawn_pushes(
        self, coord: Coordinate, color: Color, targets: set[Coordinate]
    ) -> None:
        board = self._board
        rank, file = coord
        step = _PAWN_STEP[color]
        one = rank + step
        if not 0 <= one < 8 or not board.is_empty((one, file)):
            return
        targets.add((one, file))
        if rank == _PAWN_START_RANK[color]:
            two = (one + step, file)
            if board.is_empty(two):
                targets.add(two)

    def _gen_pawn_captures(
        self, coord: Coordinate, color: Color, targets: set[Coordinate], *, raw: bool
    ) -> None:
        board = self._board
        rank, file = coord
        one = rank + _PAWN_STEP[color]
        if not 0 <= one < 8:
            return
        for f in (file - 1, file + 1):
            if not 0 <= f < 8:
                continue
            cap_sq = (one, f)
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    targets.add(cap_sq)
            elif raw:
                targets.add(cap_sq)
            elif cap_sq == board.en_passant and one == _EN_PASSANT_RANK[color]:
                if board[(rank, f)] == Piece(color.opposite, PieceType.PAWN):
                    targets.add(cap_sq)

    def _gen_piece(
        self, coord: Coordinate, piece: Piece, targets: set[Coordinate]
    ) -> None:
        board = self._board
        color = piece.color
        if piece.piece_type in _SLIDER_RAYS:
            for ray in _SLIDER_RAYS[piece.piece_type][coord]:
                for to_sq in ray:
                    target = board[to_sq]
                    if target is None:
                        targets.add(to_sq)
                        continue
                    if target.color != color:
                        targets.add(to_sq)
                    break
            return

        table = _KNIGHT_TARGETS if piece.piece_type == PieceType.KNIGHT else _KING_TARGETS
        for to_sq in table[coord]:
            target = board[to_sq]
            if target is None or target.color != color:
                targets.add(to_sq)

    def _gen_castling(
        self, king_sq: Coordinate, color: Color, targets: set[Coordinate]
    ) -> None:
        board = self._board
        home = HOME_RANK[color]
        if king_sq != (home, _KING_HOME_FILE):
            return

        own_rook = Piece(color, PieceType.ROOK)
        for right, (rook_file, king_file, between) in (
            (_KINGSIDE[color], _KINGSIDE_PATH),
            (_QUEENSIDE[color], _QUEENSIDE_PATH),
        ):
            if not board.castling & right:
                continue
            if board[(home, rook_file)] != own_rook:
                continue
            if all(board.is_empty((home, f)) for f in between):
                targets.add((home, king_file))

    def _transit_attacked(
        self, king_sq: Coordinate, king_to: Coordinate, color: Color
    ) -> bool:
        step = 1 if king_to[1] > king_sq[1] else -1
        transit = (king_sq[0], king_sq[1] + step)
        return self.is_square_attacked(transit, color.opposite)


def _is_castling(piece: Piece, source: Coordinate, target: Coordinate) -> bool:
    return piece.piece_type == PieceType.KING and abs(target[1] - source[1]) == 2


def _require_color(color: object) -> None:
    if not isinstance(color, Color):
        raise InvariantViolation(f"Active color must be white or black, got {color!r}")


# -- Functional shortcuts ---------------------------------------------------


def legal_moves(
    board: Board, color: Color | None = None, settings: RulesSettings | None = None
) -> LegalMoves:
    """Legal moves for *color* on *board*; see :meth:`MoveGenerator.legal_moves`."""
    return MoveGenerator(board, settings).legal_moves(color)


def pseudo_legal_targets(
    board: Board, coord: Coordinate, color: Color
) -> set[Coordinate]:
    return MoveGenerator(board).pseudo_legal_targets(coord, color)


def is_in_check(board: Board, color: Color) -> bool:
    return MoveGenerator(board).is_in_check(color)
