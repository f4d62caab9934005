"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from kingside.core import GameBoard, MoveGenerator, Coord, board_to_fen, Color

    gb = GameBoard()
    gen = MoveGenerator(gb)
    print(gen.authorized_positions(Coord.from_algebraic("e2")))
    gb.execute_move(Coord.from_algebraic("e2"), Coord.from_algebraic("e4"))
    print(board_to_fen(gb, Color.BLACK))
"""

from kingside.core.board import Board
from kingside.core.coord import Coord
from kingside.core.enums import (
    CastlingRights,
    Color,
    GameEndReason,
    GameResult,
    PieceType,
)
from kingside.core.errors import EngineError, PgnReplayError, RemoteGameEnded, SanError
from kingside.core.game_board import GameBoard
from kingside.core.move import PROMOTION_CHOICES, PieceMove
from kingside.core.move_generator import MoveGenerator
from kingside.core.notation import (
    STARTING_FEN,
    board_to_fen,
    game_board_from_fen,
    load_pgn,
    move_to_san,
    resolve_san,
)
from kingside.core.piece import Piece
from kingside.core.rules import FIFTY_MOVE_THRESHOLD, Rules

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameEndReason",
    "GameResult",
    "PieceType",
    # Errors
    "EngineError",
    "PgnReplayError",
    "RemoteGameEnded",
    "SanError",
    # Domain objects
    "Board",
    "Coord",
    "GameBoard",
    "MoveGenerator",
    "Piece",
    "PieceMove",
    "PROMOTION_CHOICES",
    "Rules",
    "FIFTY_MOVE_THRESHOLD",
    # Notation
    "STARTING_FEN",
    "board_to_fen",
    "game_board_from_fen",
    "load_pgn",
    "move_to_san",
    "resolve_san",
]
