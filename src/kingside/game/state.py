"""GameState: per-game state machine on top of the rules engine.

Pure logic: no threads, no I/O, no UI. The controller owns one instance and
is the only writer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from kingside.core.board import Board
from kingside.core.coord import Coord
from kingside.core.enums import Color, GameEndReason, GameResult, PieceType
from kingside.core.game_board import GameBoard
from kingside.core.move import PROMOTION_CHOICES, PieceMove
from kingside.core.move_generator import MoveGenerator, castling_geometry
from kingside.core.notation.fen import board_to_fen
from kingside.core.rules import Rules
from kingside.game.interfaces import GameMode, GamePhase

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class GameState:
    """Turn, phase, result and board perspective of one game.

    ``is_flipped`` only affects :meth:`display_board`; the game board is
    always stored with White on rows 6-7.
    """

    mode: GameMode = GameMode.SOLO
    bot_starts: bool = False
    local_color: Color = Color.WHITE
    game_board: GameBoard = field(default_factory=GameBoard)
    player_turn: Color = Color.WHITE
    phase: GamePhase = GamePhase.PLAYING
    is_flipped: bool = False
    result: GameResult = GameResult.IN_PROGRESS
    end_reason: GameEndReason = GameEndReason.NONE

    # ── Setup ────────────────────────────────────────────────────────────

    def setup(self, game_board: GameBoard | None = None, player_turn: Color = Color.WHITE) -> None:
        """Start from *game_board* (standard start by default) with *player_turn* to move."""
        self.game_board = game_board if game_board is not None else GameBoard()
        self.player_turn = player_turn
        self.phase = GamePhase.PLAYING
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.is_flipped = self._initial_flip()
        # A loaded position may already be decided.
        self._evaluate()

    def reset(self) -> None:
        self.setup()

    def _initial_flip(self) -> bool:
        if self.mode == GameMode.SOLO:
            return self.player_turn == Color.BLACK
        return self.human_color == Color.BLACK

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def human_color(self) -> Color:
        """Side shown at the bottom in bot and multiplayer games."""
        if self.mode == GameMode.BOT:
            return Color.BLACK if self.bot_starts else Color.WHITE
        if self.mode == GameMode.MULTIPLAYER:
            return self.local_color
        return self.player_turn

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    @property
    def move_history(self) -> list[PieceMove]:
        return self.game_board.move_history

    def legal_destinations(self, coord: Coord) -> list[Coord]:
        """Where the piece on *coord* may go; empty unless a move is expected."""
        if self.is_game_over or self.phase != GamePhase.PLAYING:
            return []
        if self.game_board.is_navigating:
            return []
        return MoveGenerator(self.game_board).authorized_positions(coord, self.player_turn)

    def is_in_check(self) -> bool:
        return Rules.is_in_check(self.game_board, self.player_turn)

    def fen(self) -> str:
        return board_to_fen(self.game_board, self.player_turn)

    def display_board(self) -> Board:
        """Viewed board as the current perspective shows it."""
        board = self.game_board.viewed_board()
        return board.flipped() if self.is_flipped else board

    def to_logical(self, display_coord: Coord) -> Coord:
        """Translate a coordinate picked on :meth:`display_board`."""
        return display_coord.flipped() if self.is_flipped else display_coord

    # ── Transitions ──────────────────────────────────────────────────────

    def play_move(
        self,
        from_coord: Coord,
        to_coord: Coord,
        promotion: PieceType | None = None,
    ) -> PieceMove | None:
        """Execute a legal move for ``player_turn``; ``None`` when rejected.

        A pawn left on its last rank moves the machine to PROMOTION without
        switching turns. Rook-corner castling input is accepted and recorded
        as the king's landing square.
        """
        castle = castling_geometry(self.game_board.board, from_coord, to_coord)
        if castle is not None:
            to_coord = castle[0]
        if to_coord not in self.legal_destinations(from_coord):
            return None

        record = self.game_board.execute_move(from_coord, to_coord, promotion)
        if record is None:
            return None
        if self.game_board.is_latest_move_promotion():
            self.phase = GamePhase.PROMOTION
            return record

        self._complete_turn()
        if self.mode == GameMode.SOLO:
            self.is_flipped = not self.is_flipped
        return record

    def promote(self, piece_type: PieceType) -> PieceMove | None:
        """Resolve PROMOTION with *piece_type*, then finish the turn."""
        if self.phase != GamePhase.PROMOTION:
            return None
        record = self.game_board.promote(piece_type)
        if record is None:
            return None
        self._complete_turn()
        if self.mode == GameMode.SOLO and not self.is_game_over:
            self.is_flipped = not self.is_flipped
        return record

    def promote_by_index(self, index: int) -> PieceMove | None:
        """Promote using a cursor position into :data:`PROMOTION_CHOICES`."""
        if not 0 <= index < len(PROMOTION_CHOICES):
            return None
        return self.promote(PROMOTION_CHOICES[index])

    def resign(self, color: Color) -> None:
        self._finish(GameResult.win_for(color.opposite), GameEndReason.RESIGNATION)

    def remote_ended(self) -> None:
        """The peer left the game; the local side is credited with the win."""
        self._finish(GameResult.win_for(self.local_color), GameEndReason.REMOTE_ENDED)

    def undo_last_move(self) -> bool:
        """Drop the latest move (a pending promotion included)."""
        history = self.game_board.move_history
        if not history:
            return False
        self.game_board.truncate_history(len(history) - 1)
        self.player_turn = self.game_board.side_to_move()
        self.phase = GamePhase.PLAYING
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        if self.mode == GameMode.SOLO:
            self.is_flipped = self.player_turn == Color.BLACK
        self._evaluate()
        return True

    # ── Internal ─────────────────────────────────────────────────────────

    def _complete_turn(self) -> None:
        self.player_turn = self.player_turn.opposite
        self._evaluate()

    def _evaluate(self) -> None:
        reason = Rules.end_reason(self.game_board, self.player_turn)
        if reason == GameEndReason.CHECKMATE:
            self.phase = GamePhase.CHECKMATE
            self._finish(GameResult.win_for(self.player_turn.opposite), reason)
        elif reason != GameEndReason.NONE:
            self.phase = GamePhase.DRAW
            self._finish(GameResult.DRAW, reason)
        else:
            self.phase = GamePhase.PLAYING

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        if self.is_game_over:
            return
        self.result = result
        self.end_reason = reason
        _LOGGER.info("Game over: %s (%s)", result.name, reason.name)
