"""Exception hierarchy for the rules engine.

Illegal move requests are *not* errors: :meth:`Game.make_move` reports them
by returning ``False``.  Exceptions are reserved for malformed boundary
input and for corrupted internal state.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by :mod:`chessrules`."""


class NotationError(ChessError, ValueError):
    """Malformed FEN or square text.

    Args:
        field: Name of the offending field, e.g. ``"castling"``.
        message: Human-readable description.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"Invalid {field}: {message}")
        self.field = field


class InvariantViolation(ChessError, RuntimeError):
    """Internal state is inconsistent (missing king, empty source square...).

    Raised instead of returning an empty result; continuing after one of
    these would silently produce wrong legal-move sets.
    """
