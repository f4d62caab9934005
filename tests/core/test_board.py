"""Tests for Coord and Board."""

import pytest

from kingside.core.board import Board
from kingside.core.coord import Coord
from kingside.core.enums import Color, PieceType
from kingside.core.piece import Piece


class TestCoord:
    def test_algebraic_round_trip(self) -> None:
        assert Coord.from_algebraic("a8") == Coord(0, 0)
        assert Coord.from_algebraic("h1") == Coord(7, 7)
        assert Coord.from_algebraic("e4") == Coord(4, 4)
        assert Coord(6, 4).to_algebraic() == "e2"

    def test_invalid_square_name(self) -> None:
        with pytest.raises(ValueError):
            Coord.from_algebraic("i9")

    def test_undefined_is_not_valid(self) -> None:
        coord = Coord.undefined()
        assert coord.is_undefined()
        assert not coord.is_valid()
        assert str(coord) == "-"

    def test_opt_new(self) -> None:
        assert Coord.opt_new(3, 3) == Coord(3, 3)
        assert Coord.opt_new(8, 0) is None
        assert Coord.opt_new(0, -1) is None

    def test_flipped(self) -> None:
        assert Coord(0, 0).flipped() == Coord(7, 7)
        assert Coord(6, 4).flipped() == Coord(1, 3)
        assert Coord.undefined().flipped() == Coord.undefined()

    def test_ordering_is_row_major(self) -> None:
        assert sorted([Coord(1, 0), Coord(0, 5), Coord(0, 1)]) == [
            Coord(0, 1),
            Coord(0, 5),
            Coord(1, 0),
        ]


class TestPiece:
    def test_letters(self) -> None:
        assert str(Piece(PieceType.KNIGHT, Color.WHITE)) == "N"
        assert Piece(PieceType.QUEEN, Color.BLACK).letter == "q"

    def test_from_char(self) -> None:
        assert Piece.from_char("K") == Piece(PieceType.KING, Color.WHITE)
        assert Piece.from_char("p") == Piece(PieceType.PAWN, Color.BLACK)

    @pytest.mark.parametrize("char", ["x", "", "Nn", "1"])
    def test_from_char_rejects(self, char: str) -> None:
        with pytest.raises(ValueError):
            Piece.from_char(char)

    def test_symbols(self) -> None:
        assert Piece(PieceType.KING, Color.WHITE).symbol == "♔"
        assert Piece(PieceType.PAWN, Color.WHITE).symbol == "♙"
        assert Piece(PieceType.KNIGHT, Color.BLACK).symbol == "♞"
        assert Piece(PieceType.PAWN, Color.BLACK).symbol == "♟"


class TestBoard:
    def test_initial_layout(self) -> None:
        board = Board.initial()
        assert board[Coord(7, 4)] == Piece(PieceType.KING, Color.WHITE)
        assert board[Coord(0, 3)] == Piece(PieceType.QUEEN, Color.BLACK)
        assert board[Coord(6, 0)] == Piece(PieceType.PAWN, Color.WHITE)
        assert board[Coord(4, 4)] is None
        assert len(list(board.pieces())) == 32

    def test_safe_accessor_off_board(self) -> None:
        board = Board.initial()
        assert board.get(Coord(8, 0)) is None
        assert board.get(Coord.undefined()) is None
        assert board.piece_type_at(Coord(-1, 3)) is None
        assert board.color_at(Coord(3, 9)) is None

    def test_index_off_board_raises(self) -> None:
        board = Board.empty()
        with pytest.raises(IndexError):
            board[Coord(8, 8)]

    def test_king_coord(self) -> None:
        board = Board.initial()
        assert board.king_coord(Color.WHITE) == Coord(7, 4)
        assert board.king_coord(Color.BLACK) == Coord(0, 4)
        assert Board.empty().king_coord(Color.WHITE) is None

    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        clone[Coord(6, 4)] = None
        assert board[Coord(6, 4)] is not None
        assert board != clone

    def test_flipped_rotates(self) -> None:
        board = Board.initial()
        flipped = board.flipped()
        assert flipped[Coord(0, 3)] == Piece(PieceType.KING, Color.WHITE)
        assert flipped.flipped() == board

    def test_key_equality_tracks_placement(self) -> None:
        assert Board.initial().key() == Board.initial().key()
        assert Board.initial().key() != Board.empty().key()

    def test_from_rows(self) -> None:
        board = Board.from_rows(
            [
                "....k...",
                "........",
                "........",
                "........",
                "........",
                "........",
                "........",
                "R...K...",
            ]
        )
        assert board[Coord(0, 4)] == Piece(PieceType.KING, Color.BLACK)
        assert board[Coord(7, 0)] == Piece(PieceType.ROOK, Color.WHITE)
        assert len(list(board.pieces(Color.WHITE))) == 2

    def test_from_rows_rejects_bad_shape(self) -> None:
        with pytest.raises(ValueError):
            Board.from_rows(["........"] * 7)

    def test_repr_lists_ranks(self) -> None:
        text = repr(Board.initial())
        assert text.splitlines()[0] == "8 r n b q k b n r"
        assert text.splitlines()[-1] == "  a b c d e f g h"
