"""FEN parsing and serialization."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color
from chessrules.core.errors import NotationError
from chessrules.core.piece import Piece
from chessrules.core.types import Coordinate, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Canonical order of the castling field.
_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def board_from_fen(fen: str) -> Board:
    """Parse a six-field FEN string into a :class:`Board`."""
    parts = fen.split()
    if len(parts) != 6:
        raise NotationError("FEN", f"need 6 fields, got {len(parts)}: {fen!r}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts
    board = Board()

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise NotationError("placement", f"must contain 8 ranks: {placement!r}")
    for rank, rank_text in enumerate(ranks):
        file = 0
        prev_digit = False
        for ch in rank_text:
            if ch.isdecimal():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise NotationError("placement", f"bad digit {ch!r} in {rank_text!r}")
                if prev_digit:
                    raise NotationError(
                        "placement", f"adjacent empty counts in {rank_text!r}"
                    )
                file += step
                prev_digit = True
            else:
                prev_digit = False
                if file >= 8:
                    raise NotationError("placement", f"rank too wide: {rank_text!r}")
                board[(rank, file)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise NotationError("placement", f"rank too wide: {rank_text!r}")
        if file != 8:
            raise NotationError("placement", f"rank too narrow: {rank_text!r}")

    # 2. Side to move
    if side_part == "w":
        board.active_color = Color.WHITE
    elif side_part == "b":
        board.active_color = Color.BLACK
    else:
        raise NotationError("active color", repr(side_part))

    # 3. Castling
    board.castling = _parse_castling(castling_part)

    # 4. En passant
    board.en_passant = _parse_en_passant(ep_part, board.active_color)

    # 5–6. Clocks
    board.halfmove_clock = _parse_counter("halfmove clock", half_part, minimum=0)
    board.fullmove_number = _parse_counter("fullmove number", full_part, minimum=1)

    return board


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(8):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[(rank, file)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if board.active_color == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if board.castling & right)
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(board.en_passant) if board.en_passant is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{board.halfmove_clock} {board.fullmove_number}"
    )


def _parse_castling(text: str) -> CastlingRights:
    if text == "-":
        return CastlingRights.NONE
    castling = CastlingRights.NONE
    position = 0
    for ch in text:
        for idx, (symbol, right) in enumerate(_CASTLING_CHARS):
            if ch == symbol and idx >= position:
                castling |= right
                position = idx + 1
                break
        else:
            # Unknown letter, duplicate or out of KQkq order
            raise NotationError("castling", repr(text))
    return castling


def _parse_en_passant(text: str, side: Color) -> Coordinate | None:
    if text == "-":
        return None
    try:
        ep = parse_square(text)
    except NotationError:
        raise NotationError("en passant", repr(text)) from None
    expected_rank = 2 if side == Color.WHITE else 5  # rank 6 / rank 3
    if ep[0] != expected_rank:
        raise NotationError("en passant", f"{text!r} does not match side to move")
    return ep


def _parse_counter(field: str, text: str, *, minimum: int) -> int:
    if not text.isdecimal():
        raise NotationError(field, repr(text))
    value = int(text)
    if value < minimum:
        raise NotationError(field, f"{text!r} is below {minimum}")
    return value
