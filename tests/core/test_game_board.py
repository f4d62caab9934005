"""Tests for the move executor, captured pieces and history navigation."""

from kingside.core.board import Board
from kingside.core.coord import Coord
from kingside.core.enums import Color, PieceType
from kingside.core.game_board import GameBoard
from kingside.core.piece import Piece

sq = Coord.from_algebraic


def _play(gb: GameBoard, *moves: str) -> GameBoard:
    for move in moves:
        gb.execute_move(sq(move[:2]), sq(move[2:4]))
    return gb


def _assert_histories_aligned(gb: GameBoard) -> None:
    assert len(gb.position_history) == len(gb.move_history) + 1


def _castling_board() -> GameBoard:
    return GameBoard(Board.from_rows(["r...k..r"] + ["........"] * 6 + ["R...K..R"]))


class TestExecuteMove:
    def test_simple_pawn_move(self) -> None:
        gb = GameBoard()
        record = gb.execute_move(sq("e2"), sq("e4"))
        assert record is not None
        assert record.piece_type == PieceType.PAWN
        assert record.color == Color.WHITE
        assert record.uci == "e2e4"
        assert gb.board[sq("e4")] == Piece(PieceType.PAWN, Color.WHITE)
        assert gb.board[sq("e2")] is None
        assert gb.position_history[-1] == gb.board
        _assert_histories_aligned(gb)

    def test_empty_origin_is_ignored(self) -> None:
        gb = GameBoard()
        assert gb.execute_move(sq("e4"), sq("e5")) is None
        assert gb.execute_move(Coord(9, 0), sq("e5")) is None
        assert gb.move_history == []
        _assert_histories_aligned(gb)

    def test_snapshot_is_a_copy(self) -> None:
        gb = _play(GameBoard(), "e2e4")
        gb.board[sq("a2")] = None
        assert gb.position_history[-1][sq("a2")] is not None


class TestHalfMoveCounter:
    def test_quiet_piece_moves_increment(self) -> None:
        gb = _play(GameBoard(), "g1f3", "g8f6")
        assert gb.consecutive_non_pawn_or_capture == 2

    def test_pawn_move_resets(self) -> None:
        gb = _play(GameBoard(), "g1f3", "g8f6", "e2e4")
        assert gb.consecutive_non_pawn_or_capture == 0

    def test_capture_resets(self) -> None:
        gb = _play(GameBoard(), "e2e4", "d7d5", "g1f3", "b8c6", "e4d5")
        assert gb.consecutive_non_pawn_or_capture == 0
        gb = _play(GameBoard(), "g1f3", "e7e5", "b1c3", "g8f6", "f3e5")
        assert gb.consecutive_non_pawn_or_capture == 0

    def test_castling_is_not_a_capture(self) -> None:
        gb = _castling_board()
        gb.execute_move(sq("e1"), sq("h1"))
        assert gb.consecutive_non_pawn_or_capture == 1
        assert gb.white_taken_pieces == []


class TestCaptures:
    def test_taken_pieces_sorted_by_rank(self) -> None:
        gb = GameBoard(
            Board.from_rows(
                [
                    "qp.....k",
                    "........",
                    "........",
                    "........",
                    "........",
                    "........",
                    "........",
                    "R...K...",
                ]
            )
        )
        _play(gb, "a1a8", "h8h7", "a8b8")
        assert gb.white_taken_pieces == [PieceType.PAWN, PieceType.QUEEN]
        assert gb.taken_pieces(Color.WHITE) is gb.white_taken_pieces
        assert gb.black_taken_pieces == []
        assert gb.material_difference(Color.WHITE) == 5
        assert gb.material_difference(Color.BLACK) == -5

    def test_en_passant_removes_passed_pawn(self) -> None:
        gb = _play(GameBoard(), "e2e4", "a7a6", "e4e5", "d7d5")
        record = gb.execute_move(sq("e5"), sq("d6"))
        assert record is not None
        assert gb.board[sq("d5")] is None
        assert gb.board[sq("d6")] == Piece(PieceType.PAWN, Color.WHITE)
        assert gb.white_taken_pieces == [PieceType.PAWN]
        assert gb.consecutive_non_pawn_or_capture == 0


class TestCastlingNormalisation:
    def _after(self, to: str) -> GameBoard:
        gb = _castling_board()
        gb.execute_move(sq("e1"), sq(to))
        return gb

    def test_kingside_landing_square(self) -> None:
        gb = self._after("g1")
        assert gb.board[sq("g1")] == Piece(PieceType.KING, Color.WHITE)
        assert gb.board[sq("f1")] == Piece(PieceType.ROOK, Color.WHITE)
        assert gb.board[sq("h1")] is None
        assert gb.board[sq("e1")] is None
        assert gb.move_history[-1].to_coord == sq("g1")

    def test_kingside_encodings_agree(self) -> None:
        assert self._after("h1").board == self._after("g1").board
        assert self._after("h1").move_history[-1].to_coord == sq("g1")

    def test_queenside_encodings_agree(self) -> None:
        reference = self._after("c1").board
        assert reference[sq("c1")] == Piece(PieceType.KING, Color.WHITE)
        assert reference[sq("d1")] == Piece(PieceType.ROOK, Color.WHITE)
        assert reference[sq("a1")] is None
        assert self._after("a1").board == reference
        assert self._after("b1").board == reference

    def test_black_kingside(self) -> None:
        gb = _castling_board()
        gb.execute_move(sq("e8"), sq("g8"))
        assert gb.board[sq("g8")] == Piece(PieceType.KING, Color.BLACK)
        assert gb.board[sq("f8")] == Piece(PieceType.ROOK, Color.BLACK)


class TestPromotion:
    def _pawn_on_seventh(self) -> GameBoard:
        return GameBoard(
            Board.from_rows(
                [
                    ".......k",
                    "P.......",
                    "........",
                    "........",
                    "........",
                    "........",
                    "p.......",
                    "....K...",
                ]
            )
        )

    def test_pending_until_resolved(self) -> None:
        gb = self._pawn_on_seventh()
        record = gb.execute_move(sq("a7"), sq("a8"))
        assert record is not None and record.promotion is None
        assert gb.is_latest_move_promotion()

        promoted = gb.promote(PieceType.QUEEN)
        assert promoted is not None
        assert promoted.promotion == PieceType.QUEEN
        assert gb.board[sq("a8")] == Piece(PieceType.QUEEN, Color.WHITE)
        assert gb.move_history[-1].uci == "a7a8q"
        assert gb.position_history[-1] == gb.board
        assert not gb.is_latest_move_promotion()
        _assert_histories_aligned(gb)

    def test_immediate_substitution(self) -> None:
        gb = self._pawn_on_seventh()
        record = gb.execute_move(sq("a7"), sq("a8"), PieceType.KNIGHT)
        assert record is not None and record.promotion == PieceType.KNIGHT
        assert gb.board[sq("a8")] == Piece(PieceType.KNIGHT, Color.WHITE)
        assert not gb.is_latest_move_promotion()

    def test_black_promotes_on_first_rank(self) -> None:
        gb = self._pawn_on_seventh()
        gb.execute_move(sq("a2"), sq("a1"))
        assert gb.is_latest_move_promotion()
        gb.promote(PieceType.ROOK)
        assert gb.board[sq("a1")] == Piece(PieceType.ROOK, Color.BLACK)

    def test_promote_without_pending_pawn(self) -> None:
        gb = _play(GameBoard(), "e2e4")
        assert gb.promote(PieceType.QUEEN) is None
        assert gb.board[sq("e4")] == Piece(PieceType.PAWN, Color.WHITE)

    def test_king_is_not_a_promotion_choice(self) -> None:
        gb = self._pawn_on_seventh()
        gb.execute_move(sq("a7"), sq("a8"))
        assert gb.promote(PieceType.KING) is None
        assert gb.is_latest_move_promotion()

    def test_promotion_letter_ignored_off_last_rank(self) -> None:
        gb = GameBoard()
        record = gb.execute_move(sq("e2"), sq("e4"), PieceType.QUEEN)
        assert record is not None and record.promotion is None
        assert gb.board[sq("e4")] == Piece(PieceType.PAWN, Color.WHITE)


class TestNavigation:
    def test_back_and_forward(self) -> None:
        gb = _play(GameBoard(), "e2e4", "e7e5", "g1f3")
        assert gb.viewing_index is None

        assert gb.navigate_back()
        assert gb.viewing_index == 2
        assert gb.viewed_board() == gb.position_history[2]

        assert gb.navigate_back()
        assert gb.navigate_forward()
        assert gb.viewing_index == 2
        assert gb.navigate_forward()
        assert gb.viewing_index is None
        assert gb.viewed_board() is gb.board

    def test_bounds(self) -> None:
        gb = _play(GameBoard(), "e2e4")
        assert not gb.navigate_forward()
        assert gb.navigate_back()
        assert gb.viewing_index == 0
        assert not gb.navigate_back()
        gb.go_live()
        assert not gb.is_navigating

    def test_new_move_returns_to_live(self) -> None:
        gb = _play(GameBoard(), "e2e4", "e7e5")
        gb.navigate_back()
        gb.execute_move(sq("g1"), sq("f3"))
        assert gb.viewing_index is None


class TestTruncateHistory:
    def test_restores_board_and_counter(self) -> None:
        gb = _play(GameBoard(), "g1f3", "g8f6", "b1c3")
        gb.truncate_history(1)
        assert len(gb.move_history) == 1
        _assert_histories_aligned(gb)
        assert gb.board == gb.position_history[1]
        assert gb.board[sq("f3")] == Piece(PieceType.KNIGHT, Color.WHITE)
        assert gb.board[sq("f6")] is None
        assert gb.consecutive_non_pawn_or_capture == 1

    def test_restores_taken_pieces(self) -> None:
        gb = _play(GameBoard(), "e2e4", "d7d5", "e4d5")
        assert gb.white_taken_pieces == [PieceType.PAWN]
        gb.truncate_history(2)
        assert gb.white_taken_pieces == []
        assert gb.board[sq("d5")] == Piece(PieceType.PAWN, Color.BLACK)

    def test_to_start(self) -> None:
        gb = _play(GameBoard(), "e2e4", "e7e5")
        gb.truncate_history(0)
        assert gb.move_history == []
        assert gb.board == Board.initial()
        _assert_histories_aligned(gb)

    def test_keeps_resolved_promotions(self) -> None:
        gb = GameBoard(Board.from_rows([".......k", "P......."] + ["........"] * 5 + ["....K..."]))
        gb.execute_move(sq("a7"), sq("a8"))
        gb.promote(PieceType.KNIGHT)
        gb.execute_move(sq("h8"), sq("h7"))
        gb.truncate_history(1)
        assert gb.board[sq("a8")] == Piece(PieceType.KNIGHT, Color.WHITE)

    def test_resets_viewing_pointer(self) -> None:
        gb = _play(GameBoard(), "e2e4", "e7e5")
        gb.navigate_back()
        gb.truncate_history(1)
        assert gb.viewing_index is None


class TestBookkeeping:
    def test_side_to_move_and_fullmove(self) -> None:
        gb = GameBoard()
        assert gb.side_to_move() == Color.WHITE
        assert gb.fullmove_number == 1
        _play(gb, "e2e4")
        assert gb.side_to_move() == Color.BLACK
        assert gb.fullmove_number == 1
        _play(gb, "e7e5")
        assert gb.fullmove_number == 2

    def test_copy_is_independent(self) -> None:
        gb = _play(GameBoard(), "e2e4")
        clone = gb.copy()
        clone.execute_move(sq("e7"), sq("e5"))
        assert len(gb.move_history) == 1
        assert len(clone.move_history) == 2
        assert gb.board[sq("e5")] is None

    def test_replay(self) -> None:
        gb = GameBoard.replay([(sq("e2"), sq("e4")), (sq("e7"), sq("e5"))])
        assert [m.uci for m in gb.move_history] == ["e2e4", "e7e5"]
