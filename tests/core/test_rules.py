"""Tests for Rules: checkmate, stalemate, draw detection."""

from kingside.core.coord import Coord
from kingside.core.enums import Color, GameEndReason, GameResult
from kingside.core.game_board import GameBoard
from kingside.core.notation.fen import game_board_from_fen
from kingside.core.rules import FIFTY_MOVE_THRESHOLD, Rules

sq = Coord.from_algebraic

_KNIGHT_SHUFFLE = ("g1f3", "g8f6", "f3g1", "f6g8")


def _play(gb: GameBoard, *moves: str) -> GameBoard:
    for move in moves:
        gb.execute_move(sq(move[:2]), sq(move[2:4]))
    return gb


def _fools_mate() -> GameBoard:
    return _play(GameBoard(), "f2f3", "e7e5", "g2g4", "d8h4")


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(GameBoard(), Color.WHITE)

    def test_fools_mate_in_check(self) -> None:
        assert Rules.is_in_check(_fools_mate(), Color.WHITE)
        assert not Rules.is_in_check(_fools_mate(), Color.BLACK)


class TestCheckmate:
    def test_fools_mate(self) -> None:
        gb = _fools_mate()
        assert Rules.is_checkmate(gb, Color.WHITE)
        assert Rules.legal_move_count(gb, Color.WHITE) == 0
        assert Rules.game_result(gb, Color.WHITE) == GameResult.BLACK_WINS
        assert Rules.end_reason(gb, Color.WHITE) == GameEndReason.CHECKMATE

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        gb, side = game_board_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert Rules.is_checkmate(gb, side)
        assert Rules.game_result(gb, side) == GameResult.WHITE_WINS

    def test_not_checkmate_when_can_escape(self) -> None:
        gb, side = game_board_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert Rules.is_in_check(gb, side)
        assert not Rules.is_checkmate(gb, side)

    def test_checkmate_beats_fifty_move_counter(self) -> None:
        gb = _fools_mate()
        gb.consecutive_non_pawn_or_capture = FIFTY_MOVE_THRESHOLD + 10
        assert Rules.game_result(gb, Color.WHITE) == GameResult.BLACK_WINS


class TestStalemate:
    def test_king_trapped(self) -> None:
        # Black king on h8, white K on f6, white Q on g6
        gb, side = game_board_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert Rules.is_stalemate(gb, side)
        assert Rules.draw_reason(gb, side) == GameEndReason.STALEMATE
        assert Rules.game_result(gb, side) == GameResult.DRAW

    def test_not_stalemate_when_has_moves(self) -> None:
        gb, side = game_board_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        assert not Rules.is_stalemate(gb, side)
        assert Rules.game_result(gb, side) == GameResult.IN_PROGRESS


class TestFiftyMoveRule:
    def test_threshold_in_half_moves(self) -> None:
        gb = GameBoard(consecutive_non_pawn_or_capture=FIFTY_MOVE_THRESHOLD - 2)
        _play(gb, "g1f3")
        assert not Rules.is_fifty_move_rule(gb)
        _play(gb, "g8f6")
        assert gb.consecutive_non_pawn_or_capture == FIFTY_MOVE_THRESHOLD
        assert Rules.is_fifty_move_rule(gb)
        assert Rules.draw_reason(gb, Color.WHITE) == GameEndReason.FIFTY_MOVES
        assert Rules.game_result(gb, Color.WHITE) == GameResult.DRAW

    def test_pawn_move_clears_it(self) -> None:
        gb = GameBoard(consecutive_non_pawn_or_capture=FIFTY_MOVE_THRESHOLD)
        _play(gb, "e2e4")
        assert not Rules.is_fifty_move_rule(gb)


class TestRepetition:
    def test_twice_is_not_enough(self) -> None:
        gb = _play(GameBoard(), *_KNIGHT_SHUFFLE)
        assert Rules.repetition_count(gb) == 2
        assert not Rules.is_threefold_repetition(gb)
        assert Rules.game_result(gb, Color.WHITE) == GameResult.IN_PROGRESS

    def test_threefold(self) -> None:
        gb = _play(GameBoard(), *_KNIGHT_SHUFFLE, *_KNIGHT_SHUFFLE)
        assert Rules.repetition_count(gb) == 3
        assert Rules.is_threefold_repetition(gb)
        assert Rules.is_draw(gb, Color.WHITE)
        assert Rules.draw_reason(gb, Color.WHITE) == GameEndReason.REPETITION

    def test_kings_only_shuffle(self) -> None:
        gb, _ = game_board_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        _play(gb, "e1d1", "e8d8", "d1e1", "d8e8", "e1d1", "e8d8", "d1e1", "d8e8")
        assert Rules.is_threefold_repetition(gb)
