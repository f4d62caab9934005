"""Move tokens exchanged with a remote peer.

A token is the four board indices ``from.row from.col to.row to.col`` in the
stored orientation, optionally followed by a promotion letter: ``6444`` is
e2-e4 and ``1404q`` is e7-e8 promoting to a queen. The literal ``ended``
closes the game.
"""

from __future__ import annotations

from kingside.core.coord import Coord
from kingside.core.enums import PieceType
from kingside.core.errors import RemoteGameEnded
from kingside.core.move import PROMOTION_FROM_LETTER, PROMOTION_LETTERS
from kingside.core.notation.models import NetworkMove

END_TOKEN = "ended"


def encode_network_move(
    from_coord: Coord, to_coord: Coord, promotion: PieceType | None = None
) -> str:
    if not from_coord.is_valid() or not to_coord.is_valid():
        raise ValueError(f"Cannot encode off-board move {from_coord} -> {to_coord}")
    token = f"{from_coord.row}{from_coord.col}{to_coord.row}{to_coord.col}"
    if promotion is not None:
        token += PROMOTION_LETTERS[promotion]
    return token


def decode_network_move(token: str) -> NetworkMove:
    """Parse a peer token; raises :class:`RemoteGameEnded` on termination."""
    text = token.strip()
    if not text or text == END_TOKEN:
        raise RemoteGameEnded(text or "connection closed")
    if len(text) not in (4, 5) or not text[:4].isdigit():
        raise ValueError(f"Invalid network move token: {token!r}")

    from_coord = Coord(int(text[0]), int(text[1]))
    to_coord = Coord(int(text[2]), int(text[3]))
    if not from_coord.is_valid() or not to_coord.is_valid():
        raise ValueError(f"Network move off the board: {token!r}")

    promotion: PieceType | None = None
    if len(text) == 5:
        promotion = PROMOTION_FROM_LETTER.get(text[4].lower())
        if promotion is None:
            raise ValueError(f"Invalid network promotion piece: {token!r}")
    return NetworkMove(from_coord, to_coord, promotion)
