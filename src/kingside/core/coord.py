"""Board coordinates.

Stored orientation (row 0 is rank 8, col 0 is file a)::

    . 0 1 2 3 4 5 6 7 .
    0 r n b q k b n r 0
    1 p p p p p p p p 1
    2 . . . . . . . . 2
    3 . . . . . . . . 3
    4 . . . . . . . . 4
    5 . . . . . . . . 5
    6 P P P P P P P P 6
    7 R N B Q K B N R 7
    . 0 1 2 3 4 5 6 7 .
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

UNDEFINED_POSITION: Final = -1

_FILES: Final = "abcdefgh"
_RANKS: Final = "87654321"


@dataclass(frozen=True, slots=True, order=True)
class Coord:
    """A (row, col) pair; may be the undefined sentinel."""

    row: int
    col: int

    @classmethod
    def undefined(cls) -> Coord:
        """Sentinel for "nothing selected"; never valid."""
        return cls(UNDEFINED_POSITION, UNDEFINED_POSITION)

    @classmethod
    def opt_new(cls, row: int, col: int) -> Coord | None:
        """Coordinate for (row, col) or ``None`` if off the board."""
        coord = cls(row, col)
        return coord if coord.is_valid() else None

    @classmethod
    def from_algebraic(cls, name: str) -> Coord:
        """Parse square name, e.g. 'e4' -> Coord(4, 4)."""
        if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
            raise ValueError(f"Invalid square name: {name!r}")
        return cls(_RANKS.index(name[1]), _FILES.index(name[0]))

    def is_valid(self) -> bool:
        return 0 <= self.row < 8 and 0 <= self.col < 8

    def is_undefined(self) -> bool:
        return self.row == UNDEFINED_POSITION and self.col == UNDEFINED_POSITION

    def offset(self, d_row: int, d_col: int) -> Coord:
        return Coord(self.row + d_row, self.col + d_col)

    def flipped(self) -> Coord:
        """Same square seen from the other side of the board."""
        if not self.is_valid():
            return self
        return Coord(7 - self.row, 7 - self.col)

    def to_algebraic(self) -> str:
        if not self.is_valid():
            raise ValueError(f"Coordinate off the board: {self!r}")
        return _FILES[self.col] + _RANKS[self.row]

    def __str__(self) -> str:
        return self.to_algebraic() if self.is_valid() else "-"
