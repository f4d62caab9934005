"""FEN parsing and serialization."""

from __future__ import annotations

from kingside.core.board import Board
from kingside.core.coord import Coord
from kingside.core.enums import CastlingRights, Color, PieceType
from kingside.core.game_board import GameBoard
from kingside.core.move_generator import KING_HOME_COL, MoveGenerator
from kingside.core.piece import Piece

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def game_board_from_fen(fen: str) -> tuple[GameBoard, Color]:
    """Parse a FEN string into a fresh :class:`GameBoard` and the side to move."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement, rank 8 first (row 0)
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[Coord(row, col)] = Piece.from_char(ch)
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_CHARS)
        seen: set[str] = set()
        for ch in castling_part:
            right = rights.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Coord | None = None
    if ep_part != "-":
        ep = Coord.from_algebraic(ep_part)
        expected_row = 2 if side == Color.WHITE else 5
        if ep.row not in (2, 5):
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}")
        if ep.row != expected_row:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5-6. Clocks (optional)
    try:
        halfmove = int(parts[4]) if len(parts) > 4 else 0
        fullmove = int(parts[5]) if len(parts) > 5 else 1
    except ValueError:
        raise ValueError(f"Invalid FEN clock fields: {fen!r}") from None
    if halfmove < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
    if fullmove < 1:
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    game_board = GameBoard(
        board,
        consecutive_non_pawn_or_capture=halfmove,
        initial_castling=castling,
        initial_en_passant=ep,
        start_fullmove=fullmove,
        start_turn=side,
    )
    return game_board, side


def castling_rights(game_board: GameBoard) -> CastlingRights:
    """Rights still available: starting flag set, king and rook untouched at home."""
    board = game_board.board
    gen = MoveGenerator(game_board)
    rights = CastlingRights.NONE
    for color in (Color.WHITE, Color.BLACK):
        row = color.back_rank
        king_home = Coord(row, KING_HOME_COL)
        if board.get(king_home) != Piece(PieceType.KING, color):
            continue
        if gen.did_piece_already_move(PieceType.KING, color, king_home):
            continue
        for kingside, rook_col in ((True, 7), (False, 0)):
            right = CastlingRights.for_side(color, kingside)
            if not game_board.initial_castling & right:
                continue
            rook_home = Coord(row, rook_col)
            if board.get(rook_home) != Piece(PieceType.ROOK, color):
                continue
            if gen.did_piece_already_move(PieceType.ROOK, color, rook_home):
                continue
            rights |= right
    return rights


def board_to_fen(game_board: GameBoard, side_to_move: Color) -> str:
    """Serialise the live position of *game_board* to FEN."""
    # 1. Board
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = game_board.board[Coord(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if side_to_move == Color.WHITE else "b"

    # 3. Castling
    rights = castling_rights(game_board)
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if rights & right) or "-"

    # 4. En passant
    double_step = game_board.last_double_step()
    ep_str = double_step[1].to_algebraic() if double_step is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{game_board.consecutive_non_pawn_or_capture} {game_board.fullmove_number}"
    )
