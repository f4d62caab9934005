"""Long algebraic (UCI) move tokens as exchanged with engines."""

from __future__ import annotations

from kingside.core.coord import Coord
from kingside.core.enums import PieceType
from kingside.core.move import PROMOTION_FROM_LETTER, PROMOTION_LETTERS, PieceMove


def parse_uci_move(token: str) -> tuple[Coord, Coord, PieceType | None]:
    """Split ``e7e8q`` into ``(from, to, promotion)``."""
    text = token.strip()
    if len(text) not in (4, 5):
        raise ValueError(f"Invalid UCI move: {token!r}")
    from_coord = Coord.from_algebraic(text[0:2])
    to_coord = Coord.from_algebraic(text[2:4])
    promotion: PieceType | None = None
    if len(text) == 5:
        promotion = PROMOTION_FROM_LETTER.get(text[4].lower())
        if promotion is None:
            raise ValueError(f"Invalid UCI promotion piece: {token!r}")
    return from_coord, to_coord, promotion


def format_uci_move(
    from_coord: Coord, to_coord: Coord, promotion: PieceType | None = None
) -> str:
    text = from_coord.to_algebraic() + to_coord.to_algebraic()
    if promotion is not None:
        text += PROMOTION_LETTERS[promotion]
    return text


def move_to_uci(move: PieceMove) -> str:
    return format_uci_move(move.from_coord, move.to_coord, move.promotion)
