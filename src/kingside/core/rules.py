"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Final

from kingside.core.enums import Color, GameEndReason, GameResult
from kingside.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from kingside.core.game_board import GameBoard

# Counted in half-moves; the conventional rule would need 100.
FIFTY_MOVE_THRESHOLD: Final = 50
REPETITION_THRESHOLD: Final = 3


class Rules:
    """Static rule-checker that operates on a :class:`GameBoard`."""

    # Product policy:
    # - Draws are automatic: stalemate, fifty-move counter, threefold repetition.
    # - Repetition compares piece placement only.

    @staticmethod
    def legal_move_count(game_board: GameBoard, color: Color) -> int:
        return MoveGenerator(game_board).legal_move_count(color)

    @staticmethod
    def is_in_check(game_board: GameBoard, color: Color) -> bool:
        return MoveGenerator(game_board).is_in_check(color)

    @staticmethod
    def is_checkmate(game_board: GameBoard, color: Color) -> bool:
        gen = MoveGenerator(game_board)
        return gen.is_in_check(color) and not gen.has_legal_move(color)

    @staticmethod
    def is_stalemate(game_board: GameBoard, color: Color) -> bool:
        gen = MoveGenerator(game_board)
        return not gen.is_in_check(color) and not gen.has_legal_move(color)

    @staticmethod
    def is_fifty_move_rule(game_board: GameBoard) -> bool:
        return game_board.consecutive_non_pawn_or_capture >= FIFTY_MOVE_THRESHOLD

    @staticmethod
    def repetition_count(game_board: GameBoard) -> int:
        """Highest number of times any placement occurs in the position log."""
        counts = Counter(board.key() for board in game_board.position_history)
        return max(counts.values(), default=0)

    @staticmethod
    def is_threefold_repetition(game_board: GameBoard) -> bool:
        return Rules.repetition_count(game_board) >= REPETITION_THRESHOLD

    @staticmethod
    def draw_reason(game_board: GameBoard, color: Color) -> GameEndReason:
        """Why the position is drawn for *color* to move, ``NONE`` if it is not."""
        if Rules.is_stalemate(game_board, color):
            return GameEndReason.STALEMATE
        if Rules.is_fifty_move_rule(game_board):
            return GameEndReason.FIFTY_MOVES
        if Rules.is_threefold_repetition(game_board):
            return GameEndReason.REPETITION
        return GameEndReason.NONE

    @staticmethod
    def is_draw(game_board: GameBoard, color: Color) -> bool:
        return Rules.draw_reason(game_board, color) != GameEndReason.NONE

    @staticmethod
    def end_reason(game_board: GameBoard, side_to_move: Color) -> GameEndReason:
        """Checkmate takes precedence over every draw condition."""
        if Rules.is_checkmate(game_board, side_to_move):
            return GameEndReason.CHECKMATE
        return Rules.draw_reason(game_board, side_to_move)

    @staticmethod
    def game_result(game_board: GameBoard, side_to_move: Color) -> GameResult:
        """Determine the current game result."""
        reason = Rules.end_reason(game_board, side_to_move)
        if reason == GameEndReason.CHECKMATE:
            return GameResult.win_for(side_to_move.opposite)
        if reason != GameEndReason.NONE:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
