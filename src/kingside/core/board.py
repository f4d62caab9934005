"""Board - piece placement on a fixed 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from kingside.core.coord import Coord
from kingside.core.enums import Color, PieceType
from kingside.core.piece import Piece

BoardKey = tuple[Piece | None, ...]

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-cell board indexed by :class:`Coord`.

    ``board[coord]`` expects an on-board coordinate and raises
    :class:`IndexError` otherwise; :meth:`get` is the checked accessor.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[Piece | None] = [None] * 64

    @staticmethod
    def _index(coord: Coord) -> int:
        if not coord.is_valid():
            raise IndexError(f"Coordinate off the board: {coord!r}")
        return coord.row * 8 + coord.col

    # -- Element access -----------------------------------------------------

    def __getitem__(self, coord: Coord) -> Piece | None:
        return self._cells[self._index(coord)]

    def __setitem__(self, coord: Coord, piece: Piece | None) -> None:
        self._cells[self._index(coord)] = piece

    def get(self, coord: Coord) -> Piece | None:
        """Piece at *coord*, or ``None`` when empty or off the board."""
        if not coord.is_valid():
            return None
        return self._cells[coord.row * 8 + coord.col]

    def is_empty(self, coord: Coord) -> bool:
        return self.get(coord) is None

    def piece_type_at(self, coord: Coord) -> PieceType | None:
        piece = self.get(coord)
        return piece.piece_type if piece is not None else None

    def color_at(self, coord: Coord) -> Color | None:
        piece = self.get(coord)
        return piece.color if piece is not None else None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Coord, Piece]]:
        """Occupied cells, optionally restricted to *color*, in row-major order."""
        for idx, piece in enumerate(self._cells):
            if piece is None:
                continue
            if color is not None and piece.color != color:
                continue
            yield Coord(idx // 8, idx % 8), piece

    def king_coord(self, color: Color) -> Coord | None:
        """Where *color*'s king stands, ``None`` on king-less boards."""
        king = Piece(PieceType.KING, color)
        for idx, piece in enumerate(self._cells):
            if piece == king:
                return Coord(idx // 8, idx % 8)
        return None

    def key(self) -> BoardKey:
        """Hashable snapshot of the placement (repetition bookkeeping)."""
        return tuple(self._cells)

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._cells = self._cells.copy()
        return b

    def flipped(self) -> Board:
        """Copy rotated by 180 degrees (a8 <-> h1)."""
        b = Board()
        b._cells = self._cells[::-1]
        return b

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, White on rows 6-7."""
        b = cls()
        for col, ptype in enumerate(_BACK_RANK):
            b[Coord(0, col)] = Piece(ptype, Color.BLACK)
            b[Coord(1, col)] = Piece(PieceType.PAWN, Color.BLACK)
            b[Coord(6, col)] = Piece(PieceType.PAWN, Color.WHITE)
            b[Coord(7, col)] = Piece(ptype, Color.WHITE)
        return b

    @classmethod
    def from_rows(cls, rows: list[str] | tuple[str, ...]) -> Board:
        """Build a board from 8 strings of 8 cells, row 0 first.

        Cells are FEN letters; ``.`` marks an empty cell.
        """
        if len(rows) != 8 or any(len(r) != 8 for r in rows):
            raise ValueError("Board rows must be 8 strings of 8 cells")
        b = cls()
        for row, text in enumerate(rows):
            for col, ch in enumerate(text):
                if ch != ".":
                    b[Coord(row, col)] = Piece.from_char(ch)
        return b

    # -- Display ------------------------------------------------------------

    def __repr__(self) -> str:
        lines: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                piece = self._cells[row * 8 + col]
                cells.append(str(piece) if piece is not None else ".")
            lines.append(f"{8 - row} {' '.join(cells)}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
