"""Coordinate type alias and square-name helpers.

Board layout (rank-major, top row first)::

    (0, 0)=a8  (0, 1)=b8  ...  (0, 7)=h8
    (1, 0)=a7  ...
    ...
    (7, 0)=a1  (7, 1)=b1  ...  (7, 7)=h1

Coordinates are the canonical key everywhere inside the engine;
algebraic names only appear at the boundary.
"""

from __future__ import annotations

from typing import TypeAlias

from chessrules.core.errors import NotationError

Coordinate: TypeAlias = tuple[int, int]  # (rank, file), each 0–7

_FILES = "abcdefgh"
_RANKS = "87654321"


def is_on_board(rank: int, file: int) -> bool:
    """Check whether a (rank, file) pair lies inside the 8x8 grid."""
    return 0 <= rank < 8 and 0 <= file < 8


def square_name(coord: Coordinate) -> str:
    """Human-readable name, e.g. (0, 0) → 'a8', (7, 4) → 'e1'."""
    rank, file = coord
    if not is_on_board(rank, file):
        raise NotationError("square", f"coordinate out of range: {coord!r}")
    return _FILES[file] + _RANKS[rank]


def parse_square(name: str) -> Coordinate:
    """Parse square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise NotationError("square", repr(name))
    return (_RANKS.index(name[1]), _FILES.index(name[0]))


def to_coordinate(square: str | Coordinate) -> Coordinate:
    """Accept either an algebraic name or a coordinate pair."""
    if isinstance(square, str):
        return parse_square(square)
    rank, file = square
    if not is_on_board(rank, file):
        raise NotationError("square", f"coordinate out of range: {square!r}")
    return (rank, file)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ((0, f) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = ((1, f) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = ((2, f) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = ((3, f) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = ((4, f) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = ((5, f) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = ((6, f) for f in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = ((7, f) for f in range(8))
