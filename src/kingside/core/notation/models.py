"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass

from kingside.core.coord import Coord
from kingside.core.enums import PieceType


@dataclass(slots=True)
class PgnMove:
    """A single mainline move extracted from PGN movetext."""

    san: str
    comment: str = ""


@dataclass(slots=True)
class ParsedPgn:
    """Headers, mainline moves and result token of one PGN game."""

    headers: dict[str, str]
    moves: list[PgnMove]
    result_token: str

    @property
    def sans(self) -> list[str]:
        return [move.san for move in self.moves]


@dataclass(frozen=True, slots=True)
class NetworkMove:
    """A move decoded from a peer token."""

    from_coord: Coord
    to_coord: Coord
    promotion: PieceType | None = None
