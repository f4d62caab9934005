"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from kingside.core.enums import Color, PieceType

# White letters in PieceType order; black pieces use the lowercase letter
_LETTERS = "PNBRQK"
# U+2654 is the white king, U+265A the black one; kinds run king..pawn
_WHITE_KING_CODEPOINT = 0x2654
_BLACK_KING_CODEPOINT = 0x265A


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable (kind, color) pair occupying a board cell."""

    piece_type: PieceType
    color: Color

    @property
    def letter(self) -> str:
        """FEN letter, uppercase for white."""
        letter = _LETTERS[self.piece_type - 1]
        return letter if self.color == Color.WHITE else letter.lower()

    @property
    def symbol(self) -> str:
        base = _WHITE_KING_CODEPOINT if self.color == Color.WHITE else _BLACK_KING_CODEPOINT
        return chr(base + PieceType.KING - self.piece_type)

    def __str__(self) -> str:
        return self.letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """``'N'`` is a white knight, ``'n'`` a black one."""
        index = _LETTERS.find(char.upper()) if len(char) == 1 else -1
        if index < 0:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(PieceType(index + 1), color)
