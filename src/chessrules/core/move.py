"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import PieceType
from chessrules.core.types import Coordinate, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """A (source, target) pair.

    Captures, en passant, castling and promotion are not tagged here; the
    executor derives them from the moving piece and the geometry.
    ``promotion`` optionally overrides the board's promotion choice.
    """

    source: Coordinate
    target: Coordinate
    promotion: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.source)}{square_name(self.target)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def rank_delta(self) -> int:
        return self.target[0] - self.source[0]

    @property
    def file_delta(self) -> int:
        return self.target[1] - self.source[1]
