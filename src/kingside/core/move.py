"""Move record value object."""

from __future__ import annotations

from dataclasses import dataclass

from kingside.core.coord import Coord
from kingside.core.enums import Color, PieceType

PROMOTION_LETTERS: dict[PieceType, str] = {
    PieceType.QUEEN: "q",
    PieceType.ROOK: "r",
    PieceType.BISHOP: "b",
    PieceType.KNIGHT: "n",
}
PROMOTION_FROM_LETTER: dict[str, PieceType] = {
    v: k for k, v in PROMOTION_LETTERS.items()
}
# Order offered to the player when a pawn reaches its last rank.
PROMOTION_CHOICES: tuple[PieceType, ...] = tuple(PROMOTION_LETTERS)


@dataclass(frozen=True, slots=True)
class PieceMove:
    """Immutable history entry for one executed move.

    Castling is recorded as the king's move onto its landing square.
    ``promotion`` stays ``None`` until a promotion choice is resolved.
    """

    piece_type: PieceType
    color: Color
    from_coord: Coord
    to_coord: Coord
    promotion: PieceType | None = None

    @property
    def uci(self) -> str:
        """Long algebraic form, e.g. ``e7e8q``."""
        text = self.from_coord.to_algebraic() + self.to_coord.to_algebraic()
        if self.promotion is not None:
            text += PROMOTION_LETTERS[self.promotion]
        return text

    @property
    def is_double_pawn_step(self) -> bool:
        return (
            self.piece_type == PieceType.PAWN
            and abs(self.to_coord.row - self.from_coord.row) == 2
        )

    def __str__(self) -> str:
        return self.uci
