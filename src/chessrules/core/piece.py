"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, PieceType
from chessrules.core.errors import NotationError

# Lowercase FEN letter per piece type; white pieces are written uppercase.
_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """A colored piece standing on a square.

    Empty squares are ``None`` on the board, never a ``Piece``.
    """

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Parse one FEN letter: ``"N"`` is a white knight, ``"n"`` a black one."""
        piece_type = _TYPES_BY_LETTER.get(char.lower()) if len(char) == 1 else None
        if piece_type is None:
            raise NotationError("piece", f"unknown character {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, piece_type)
