"""User-configurable rule settings."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import PROMOTION_TYPES, PieceType


@dataclass
class RulesSettings:
    """All user-configurable settings.

    Defaults reproduce the reference rules: queen promotion, castling
    stripped only while the king is currently in check, draw after
    100 halfmoves without capture or pawn move.
    """

    # Promotion
    promotion_choice: PieceType = PieceType.QUEEN

    # Castling: also refuse castling through an attacked transit square
    strict_castling: bool = False

    # Draws
    fifty_move_limit: int = 100  # halfmoves

    def validate(self) -> None:
        if self.promotion_choice not in PROMOTION_TYPES:
            raise ValueError(
                f"Invalid promotion choice: {self.promotion_choice!r}"
            )
        if self.fifty_move_limit < 1:
            raise ValueError(
                f"Invalid fifty-move limit: {self.fifty_move_limit!r}"
            )
