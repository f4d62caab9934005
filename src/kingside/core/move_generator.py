"""Per-piece movement rules, attack detection and legal-move filtering."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from kingside.core.board import Board
from kingside.core.coord import Coord
from kingside.core.enums import CastlingRights, Color, PieceType
from kingside.core.piece import Piece

if TYPE_CHECKING:
    from kingside.core.game_board import GameBoard


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

KING_HOME_COL = 4
_PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}

# kingside -> (rook home col, king landing col, rook landing col, cells that must be empty)
_CASTLING_LAYOUT: dict[bool, tuple[int, int, int, tuple[int, ...]]] = {
    True: (7, 6, 5, (5, 6)),
    False: (0, 2, 3, (1, 2, 3)),
}

PositionGenerator = Callable[[Board, Coord, Color, bool], list[Coord]]


# -- Per-kind generators ----------------------------------------------------
#
# Every generator returns pseudo-legal destinations. With ``allow_ally`` set
# the result is the "protected" variant: ally-occupied cells are kept because
# the piece still defends them.


def _sliding_positions(
    board: Board,
    coord: Coord,
    color: Color,
    allow_ally: bool,
    directions: tuple[tuple[int, int], ...],
) -> list[Coord]:
    positions: list[Coord] = []
    for d_row, d_col in directions:
        to = coord.offset(d_row, d_col)
        while to.is_valid():
            target = board[to]
            if target is None:
                positions.append(to)
            else:
                if target.color != color or allow_ally:
                    positions.append(to)
                break
            to = to.offset(d_row, d_col)
    return positions


def _step_positions(
    board: Board,
    coord: Coord,
    color: Color,
    allow_ally: bool,
    offsets: tuple[tuple[int, int], ...],
) -> list[Coord]:
    positions: list[Coord] = []
    for d_row, d_col in offsets:
        to = coord.offset(d_row, d_col)
        if not to.is_valid():
            continue
        target = board[to]
        if target is not None and target.color == color and not allow_ally:
            continue
        positions.append(to)
    return positions


def _pawn_positions(
    board: Board, coord: Coord, color: Color, allow_ally: bool
) -> list[Coord]:
    forward = color.forward
    positions: list[Coord] = []

    # Pawns never attack straight ahead.
    if not allow_ally:
        one_step = coord.offset(forward, 0)
        if one_step.is_valid() and board[one_step] is None:
            positions.append(one_step)
            two_step = coord.offset(2 * forward, 0)
            if coord.row == _PAWN_START_ROW[color] and board[two_step] is None:
                positions.append(two_step)

    for d_col in (-1, 1):
        diag = coord.offset(forward, d_col)
        if not diag.is_valid():
            continue
        if allow_ally:
            positions.append(diag)
            continue
        target = board[diag]
        if target is not None and target.color != color:
            positions.append(diag)
    return positions


def _knight_positions(
    board: Board, coord: Coord, color: Color, allow_ally: bool
) -> list[Coord]:
    return _step_positions(board, coord, color, allow_ally, KNIGHT_OFFSETS)


def _bishop_positions(
    board: Board, coord: Coord, color: Color, allow_ally: bool
) -> list[Coord]:
    return _sliding_positions(board, coord, color, allow_ally, BISHOP_DIRS)


def _rook_positions(
    board: Board, coord: Coord, color: Color, allow_ally: bool
) -> list[Coord]:
    return _sliding_positions(board, coord, color, allow_ally, ROOK_DIRS)


def _queen_positions(
    board: Board, coord: Coord, color: Color, allow_ally: bool
) -> list[Coord]:
    return _sliding_positions(board, coord, color, allow_ally, QUEEN_DIRS)


def _king_positions(
    board: Board, coord: Coord, color: Color, allow_ally: bool
) -> list[Coord]:
    return _step_positions(board, coord, color, allow_ally, KING_OFFSETS)


_GENERATORS: dict[PieceType, PositionGenerator] = {
    PieceType.PAWN: _pawn_positions,
    PieceType.KNIGHT: _knight_positions,
    PieceType.BISHOP: _bishop_positions,
    PieceType.ROOK: _rook_positions,
    PieceType.QUEEN: _queen_positions,
    PieceType.KING: _king_positions,
}


# -- Board-level helpers (no history needed) --------------------------------


def piece_positions(
    board: Board, coord: Coord, *, allow_move_on_ally_positions: bool = False
) -> list[Coord]:
    """Pseudo-legal destinations of the piece on *coord* (no special moves)."""
    piece = board.get(coord)
    if piece is None:
        return []
    generate = _GENERATORS[piece.piece_type]
    return generate(board, coord, piece.color, allow_move_on_ally_positions)


def protected_positions(board: Board, coord: Coord) -> list[Coord]:
    """Cells attacked or defended by the piece on *coord*."""
    return piece_positions(board, coord, allow_move_on_ally_positions=True)


def attacked_cells(board: Board, color: Color) -> set[Coord]:
    """Union of the cells the opponent of *color* attacks or defends."""
    cells: set[Coord] = set()
    for coord, _piece in board.pieces(color.opposite):
        cells.update(protected_positions(board, coord))
    return cells


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king on a threatened cell? King-less boards are never in check."""
    king = board.king_coord(color)
    if king is None:
        return False
    return king in attacked_cells(board, color)


def castling_geometry(
    board: Board, from_coord: Coord, to_coord: Coord
) -> tuple[Coord, Coord, Coord] | None:
    """``(king_to, rook_from, rook_to)`` when the move has the castling shape.

    The shape is a king leaving its home square by two files or more along
    its back rank. Both encodings used by move feeds (king landing square or
    rook corner) resolve to the same triple.
    """
    piece = board.get(from_coord)
    if piece is None or piece.piece_type != PieceType.KING:
        return None
    row = piece.color.back_rank
    if from_coord != Coord(row, KING_HOME_COL) or to_coord.row != row:
        return None
    if abs(to_coord.col - from_coord.col) < 2:
        return None
    rook_col, king_col, rook_to_col, _ = _CASTLING_LAYOUT[to_coord.col > from_coord.col]
    return Coord(row, king_col), Coord(row, rook_col), Coord(row, rook_to_col)


def simulate_move(board: Board, from_coord: Coord, to_coord: Coord) -> Board:
    """Scratch copy of *board* with the move applied (placement only)."""
    scratch = board.copy()
    piece = scratch.get(from_coord)
    if piece is None or not to_coord.is_valid():
        return scratch

    castle = castling_geometry(scratch, from_coord, to_coord)
    if castle is not None:
        king_to, rook_from, rook_to = castle
        rook = scratch[rook_from]
        scratch[rook_from] = None
        scratch[from_coord] = None
        scratch[rook_to] = rook
        scratch[king_to] = piece
        return scratch

    if (
        piece.piece_type == PieceType.PAWN
        and from_coord.col != to_coord.col
        and scratch[to_coord] is None
    ):
        scratch[Coord(from_coord.row, to_coord.col)] = None

    scratch[to_coord] = piece
    scratch[from_coord] = None
    return scratch


# -- History-aware generator ------------------------------------------------


class MoveGenerator:
    """Legal move generation for a :class:`GameBoard`.

    Castling and en passant depend on move history, everything else only on
    the current placement. Legality is decided by simulating each candidate
    on a scratch board and re-running check detection for the mover, which
    also covers pins and king moves into check.
    """

    __slots__ = ("_game_board", "_board")

    def __init__(self, game_board: GameBoard) -> None:
        self._game_board = game_board
        self._board = game_board.board

    # -- Public API ---------------------------------------------------------

    def protected_positions(self, coord: Coord) -> list[Coord]:
        return protected_positions(self._board, coord)

    def pseudo_legal_positions(self, coord: Coord) -> list[Coord]:
        """Destinations ignoring own-king safety, special moves included."""
        piece = self._board.get(coord)
        if piece is None:
            return []
        positions = piece_positions(self._board, coord)
        if piece.piece_type == PieceType.PAWN:
            positions.extend(self._en_passant_positions(coord, piece.color))
        elif piece.piece_type == PieceType.KING:
            positions.extend(self._castling_positions(coord, piece.color))
        return positions

    def authorized_positions(
        self, coord: Coord, player_turn: Color | None = None
    ) -> list[Coord]:
        """Legal destinations of the piece on *coord*, sorted.

        Empty for invalid or empty cells and for pieces not owned by
        *player_turn* (when given).
        """
        piece = self._board.get(coord)
        if piece is None:
            return []
        if player_turn is not None and piece.color != player_turn:
            return []
        legal = [
            to
            for to in self.pseudo_legal_positions(coord)
            if not self.would_be_in_check(coord, to)
        ]
        return sorted(set(legal))

    def attacked_cells(self, color: Color) -> set[Coord]:
        return attacked_cells(self._board, color)

    def is_in_check(self, color: Color) -> bool:
        return is_in_check(self._board, color)

    def would_be_in_check(self, from_coord: Coord, to_coord: Coord) -> bool:
        """Would the mover's king be attacked after playing the move?"""
        piece = self._board.get(from_coord)
        if piece is None:
            return False
        scratch = simulate_move(self._board, from_coord, to_coord)
        return is_in_check(scratch, piece.color)

    def legal_move_count(self, color: Color) -> int:
        """Total number of legal destinations over all of *color*'s pieces."""
        return sum(
            len(self.authorized_positions(coord))
            for coord, _piece in list(self._board.pieces(color))
        )

    def has_legal_move(self, color: Color) -> bool:
        return any(
            self.authorized_positions(coord)
            for coord, _piece in list(self._board.pieces(color))
        )

    def did_piece_already_move(
        self, piece_type: PieceType, color: Color, home: Coord
    ) -> bool:
        """Has the piece that started on *home* ever left it?"""
        return any(
            move.piece_type == piece_type
            and move.color == color
            and move.from_coord == home
            for move in self._game_board.move_history
        )

    # -- Special moves (private) --------------------------------------------

    def _en_passant_positions(self, coord: Coord, color: Color) -> list[Coord]:
        double_step = self._game_board.last_double_step()
        if double_step is None:
            return []
        landing, passed = double_step
        pawn = self._board.get(landing)
        if pawn is None or pawn.piece_type != PieceType.PAWN or pawn.color == color:
            return []
        if landing.row != coord.row or abs(landing.col - coord.col) != 1:
            return []
        if passed.row != coord.row + color.forward or not self._board.is_empty(passed):
            return []
        return [passed]

    def _castling_positions(self, king: Coord, color: Color) -> list[Coord]:
        row = color.back_rank
        home = Coord(row, KING_HOME_COL)
        if king != home:
            return []
        if self.did_piece_already_move(PieceType.KING, color, home):
            return []

        board = self._board
        attacked = attacked_cells(board, color)
        if home in attacked:
            return []

        positions: list[Coord] = []
        rook = Piece(PieceType.ROOK, color)
        for kingside in (True, False):
            if not self._game_board.initial_castling & CastlingRights.for_side(
                color, kingside
            ):
                continue
            rook_col, king_col, rook_to_col, between = _CASTLING_LAYOUT[kingside]
            rook_home = Coord(row, rook_col)
            if board.get(rook_home) != rook:
                continue
            if self.did_piece_already_move(PieceType.ROOK, color, rook_home):
                continue
            if any(not board.is_empty(Coord(row, col)) for col in between):
                continue
            path = (Coord(row, rook_to_col), Coord(row, king_col))
            if any(cell in attacked for cell in path):
                continue
            positions.append(Coord(row, king_col))
        return positions
