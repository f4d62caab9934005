"""GameBoard - move execution, captured pieces and the position log."""

from __future__ import annotations

import logging
from dataclasses import replace

from kingside.core.board import Board
from kingside.core.coord import Coord
from kingside.core.enums import CastlingRights, Color, PieceType
from kingside.core.move import PROMOTION_CHOICES, PieceMove
from kingside.core.move_generator import castling_geometry
from kingside.core.piece import Piece

_LOGGER = logging.getLogger(__name__)


class GameBoard:
    """Live board plus the append-only logs every rule depends on.

    ``position_history[0]`` is the starting placement and every executed move
    appends exactly one snapshot, so the histories always satisfy
    ``len(position_history) == len(move_history) + 1``.

    Starting fields (``initial_castling``, ``initial_en_passant``, the
    starting clock, ``start_fullmove`` and ``start_turn``) describe a
    position loaded from FEN and are never changed by play.
    """

    __slots__ = (
        "board",
        "move_history",
        "position_history",
        "consecutive_non_pawn_or_capture",
        "white_taken_pieces",
        "black_taken_pieces",
        "viewing_index",
        "initial_castling",
        "initial_en_passant",
        "start_fullmove",
        "start_turn",
        "_start_clock",
    )

    def __init__(
        self,
        board: Board | None = None,
        *,
        consecutive_non_pawn_or_capture: int = 0,
        initial_castling: CastlingRights = CastlingRights.ALL,
        initial_en_passant: Coord | None = None,
        start_fullmove: int = 1,
        start_turn: Color = Color.WHITE,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.move_history: list[PieceMove] = []
        self.position_history: list[Board] = [self.board.copy()]
        self.consecutive_non_pawn_or_capture = consecutive_non_pawn_or_capture
        self.white_taken_pieces: list[PieceType] = []
        self.black_taken_pieces: list[PieceType] = []
        self.viewing_index: int | None = None

        self.initial_castling = initial_castling
        self.initial_en_passant = initial_en_passant
        self.start_fullmove = start_fullmove
        self.start_turn = start_turn
        self._start_clock = consecutive_non_pawn_or_capture

    # -- Queries ------------------------------------------------------------

    def taken_pieces(self, color: Color) -> list[PieceType]:
        """Kinds captured *by* *color*, weakest first."""
        return self.white_taken_pieces if color == Color.WHITE else self.black_taken_pieces

    def material_difference(self, color: Color) -> int:
        """Rank sum captured by *color* minus the sum captured from it."""
        own = sum(p.rank for p in self.taken_pieces(color))
        other = sum(p.rank for p in self.taken_pieces(color.opposite))
        return own - other

    @property
    def last_move(self) -> PieceMove | None:
        return self.move_history[-1] if self.move_history else None

    def side_to_move(self) -> Color:
        """Side whose turn it is, counted from ``start_turn``."""
        if len(self.move_history) % 2 == 0:
            return self.start_turn
        return self.start_turn.opposite

    @property
    def fullmove_number(self) -> int:
        plies = len(self.move_history) + (1 if self.start_turn == Color.BLACK else 0)
        return self.start_fullmove + plies // 2

    def last_double_step(self) -> tuple[Coord, Coord] | None:
        """``(landing, passed)`` squares of a pawn double step just played.

        Falls back to the starting en-passant square while no move has been
        executed yet.
        """
        if self.move_history:
            last = self.move_history[-1]
            if not last.is_double_pawn_step:
                return None
            passed = Coord((last.from_coord.row + last.to_coord.row) // 2, last.to_coord.col)
            return last.to_coord, passed
        target = self.initial_en_passant
        if target is None or target.row not in (2, 5):
            return None
        # Rank 3 target -> white pawn on rank 4; rank 6 target -> black pawn on rank 5.
        landing_row = 4 if target.row == 5 else 3
        return Coord(landing_row, target.col), target

    def is_latest_move_promotion(self) -> bool:
        """Is there a pawn waiting on its last rank after the latest move?"""
        last = self.last_move
        if last is None:
            return False
        piece = self.board.get(last.to_coord)
        return (
            piece is not None
            and piece.piece_type == PieceType.PAWN
            and last.to_coord.row == piece.color.promotion_row
        )

    # -- Mutation -----------------------------------------------------------

    def execute_move(
        self,
        from_coord: Coord,
        to_coord: Coord,
        promotion: PieceType | None = None,
    ) -> PieceMove | None:
        """Apply a move without legality checks.

        Side effects happen in a fixed order: clock, capture, en passant
        removal, rook relocation, piece placement, history append. Returns
        ``None`` (and changes nothing) when there is no piece to move.
        """
        if not from_coord.is_valid() or not to_coord.is_valid():
            return None
        board = self.board
        piece = board[from_coord]
        if piece is None:
            return None

        castle = castling_geometry(board, from_coord, to_coord)
        target = board[to_coord]
        is_capture = castle is None and target is not None and target.color != piece.color
        is_pawn = piece.piece_type == PieceType.PAWN

        if is_pawn or is_capture:
            self.consecutive_non_pawn_or_capture = 0
        else:
            self.consecutive_non_pawn_or_capture += 1

        if is_capture:
            self._record_capture(piece.color, target.piece_type)

        if is_pawn and from_coord.col != to_coord.col and target is None:
            victim_coord = Coord(to_coord.row - piece.color.forward, to_coord.col)
            victim = board[victim_coord]
            if victim is not None and victim.color != piece.color:
                self._record_capture(piece.color, victim.piece_type)
                board[victim_coord] = None

        if castle is not None:
            king_to, rook_from, rook_to = castle
            rook = board[rook_from]
            board[rook_from] = None
            board[from_coord] = None
            board[rook_to] = rook
            board[king_to] = piece
            to_coord = king_to
        else:
            promoted = None
            if is_pawn and to_coord.row == piece.color.promotion_row:
                promoted = promotion if promotion in PROMOTION_CHOICES else None
            board[to_coord] = Piece(promoted, piece.color) if promoted else piece
            board[from_coord] = None
            promotion = promoted

        record = PieceMove(
            piece.piece_type,
            piece.color,
            from_coord,
            to_coord,
            promotion if castle is None else None,
        )
        self.move_history.append(record)
        self.position_history.append(board.copy())
        self.viewing_index = None
        return record

    def promote(self, piece_type: PieceType) -> PieceMove | None:
        """Resolve a pending promotion on the latest move's destination."""
        if piece_type not in PROMOTION_CHOICES or not self.is_latest_move_promotion():
            return None
        last = self.move_history[-1]
        self.board[last.to_coord] = Piece(piece_type, last.color)
        record = replace(last, promotion=piece_type)
        self.move_history[-1] = record
        self.position_history[-1] = self.board.copy()
        return record

    def _record_capture(self, by: Color, piece_type: PieceType) -> None:
        taken = self.taken_pieces(by)
        taken.append(piece_type)
        taken.sort(key=lambda p: p.rank)

    # -- History ------------------------------------------------------------

    def truncate_history(self, index: int) -> None:
        """Keep the first *index* moves and rebuild everything else from them."""
        index = max(0, min(index, len(self.move_history)))
        if index == len(self.move_history):
            self.viewing_index = None
            return

        replay = GameBoard(
            self.position_history[0].copy(),
            consecutive_non_pawn_or_capture=self._start_clock,
            initial_castling=self.initial_castling,
            initial_en_passant=self.initial_en_passant,
            start_fullmove=self.start_fullmove,
            start_turn=self.start_turn,
        )
        for move in self.move_history[:index]:
            replay.execute_move(move.from_coord, move.to_coord, move.promotion)

        _LOGGER.debug("History truncated to %d of %d moves", index, len(self.move_history))
        self.board = replay.board
        self.move_history = replay.move_history
        self.position_history = replay.position_history
        self.consecutive_non_pawn_or_capture = replay.consecutive_non_pawn_or_capture
        self.white_taken_pieces = replay.white_taken_pieces
        self.black_taken_pieces = replay.black_taken_pieces
        self.viewing_index = None

    def viewed_board(self) -> Board:
        """Board at the navigation pointer, the live board when not navigating."""
        if self.viewing_index is None:
            return self.board
        return self.position_history[self.viewing_index]

    @property
    def is_navigating(self) -> bool:
        return self.viewing_index is not None

    def navigate_back(self) -> bool:
        """Step the view one position back; ``False`` when already at the start."""
        current = len(self.position_history) - 1 if self.viewing_index is None else self.viewing_index
        if current <= 0:
            return False
        self.viewing_index = current - 1
        return True

    def navigate_forward(self) -> bool:
        """Step the view one position forward, returning to live at the end."""
        if self.viewing_index is None:
            return False
        nxt = self.viewing_index + 1
        self.viewing_index = None if nxt >= len(self.position_history) - 1 else nxt
        return True

    def go_live(self) -> None:
        self.viewing_index = None

    # -- Copy / construction ------------------------------------------------

    def copy(self) -> GameBoard:
        gb = GameBoard(
            self.board.copy(),
            consecutive_non_pawn_or_capture=self._start_clock,
            initial_castling=self.initial_castling,
            initial_en_passant=self.initial_en_passant,
            start_fullmove=self.start_fullmove,
            start_turn=self.start_turn,
        )
        gb.move_history = list(self.move_history)
        gb.position_history = [b.copy() for b in self.position_history]
        gb.consecutive_non_pawn_or_capture = self.consecutive_non_pawn_or_capture
        gb.white_taken_pieces = list(self.white_taken_pieces)
        gb.black_taken_pieces = list(self.black_taken_pieces)
        gb.viewing_index = self.viewing_index
        return gb

    @classmethod
    def replay(
        cls,
        moves: list[tuple[Coord, Coord]] | list[tuple[Coord, Coord, PieceType | None]],
        board: Board | None = None,
    ) -> GameBoard:
        """Game board after executing *moves* from *board* (standard start by default)."""
        gb = cls(board)
        for move in moves:
            gb.execute_move(*move)
        return gb
