"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

import re

from kingside.core.coord import Coord
from kingside.core.enums import Color, PieceType
from kingside.core.errors import SanError
from kingside.core.game_board import GameBoard
from kingside.core.move_generator import MoveGenerator, castling_geometry
from kingside.core.rules import Rules

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}

_SAN_RE = re.compile(
    r"^(?P<piece>[NBRQK])?"
    r"(?P<file>[a-h])?(?P<rank>[1-8])?"
    r"(?P<capture>x)?"
    r"(?P<dest>[a-h][1-8])"
    r"(?:=?(?P<promo>[NBRQ]))?$"
)
_KINGSIDE_TOKENS = frozenset({"O-O", "0-0"})
_QUEENSIDE_TOKENS = frozenset({"O-O-O", "0-0-0"})

SanMove = tuple[Coord, Coord, PieceType | None]


def legal_moves(game_board: GameBoard, side: Color) -> list[tuple[Coord, Coord]]:
    """Every legal ``(from, to)`` pair for *side*, castling as the king's landing square."""
    gen = MoveGenerator(game_board)
    moves: list[tuple[Coord, Coord]] = []
    for coord, _piece in list(game_board.board.pieces(side)):
        moves.extend((coord, to) for to in gen.authorized_positions(coord))
    return moves


def _is_promotion_square(side: Color, piece_type: PieceType, to: Coord) -> bool:
    return piece_type == PieceType.PAWN and to.row == side.promotion_row


def resolve_san(game_board: GameBoard, side: Color, token: str) -> SanMove:
    """Match a SAN *token* against the legal moves of *side*.

    Returns ``(from, to, promotion)``. Raises :class:`SanError` when the
    token is malformed, matches no legal move or matches several.
    """
    clean = token.strip().rstrip("+#!?")
    board = game_board.board
    legal = legal_moves(game_board, side)

    # Castling
    if clean in _KINGSIDE_TOKENS or clean in _QUEENSIDE_TOKENS:
        landing_col = 6 if clean in _KINGSIDE_TOKENS else 2
        for from_coord, to in legal:
            if (
                board.piece_type_at(from_coord) == PieceType.KING
                and castling_geometry(board, from_coord, to) is not None
                and to.col == landing_col
            ):
                return from_coord, to, None
        raise SanError(token, "castling is not legal here")

    match = _SAN_RE.match(clean)
    if match is None:
        raise SanError(token, "unrecognised SAN syntax")

    piece_type = _SAN_PIECE_REV.get(match["piece"] or "", PieceType.PAWN)
    to_coord = Coord.from_algebraic(match["dest"])
    from_col = ord(match["file"]) - ord("a") if match["file"] else None
    from_row = 8 - int(match["rank"]) if match["rank"] else None
    promotion = _SAN_PIECE_REV[match["promo"]] if match["promo"] else None

    if promotion is not None and not _is_promotion_square(side, piece_type, to_coord):
        raise SanError(token, "promotion suffix on a non-promoting move")
    if promotion is None and _is_promotion_square(side, piece_type, to_coord):
        raise SanError(token, "missing promotion piece")

    # Find matching legal move
    candidates: list[tuple[Coord, Coord]] = []
    for from_coord, to in legal:
        if to != to_coord or board.piece_type_at(from_coord) != piece_type:
            continue
        if from_col is not None and from_coord.col != from_col:
            continue
        if from_row is not None and from_coord.row != from_row:
            continue
        candidates.append((from_coord, to))

    if not candidates:
        raise SanError(token, "no legal move matches")
    if len(candidates) > 1:
        origins = ", ".join(str(c[0]) for c in candidates)
        raise SanError(token, f"ambiguous between {origins}")
    from_coord, to = candidates[0]
    return from_coord, to, promotion


def move_to_san(
    game_board: GameBoard,
    side: Color,
    from_coord: Coord,
    to_coord: Coord,
    promotion: PieceType | None = None,
) -> str:
    """Convert a legal move to SAN given the position before the move."""
    board = game_board.board
    piece = board.get(from_coord)
    if piece is None:
        raise ValueError(f"No piece on {from_coord}")

    castle = castling_geometry(board, from_coord, to_coord)
    if castle is not None:
        san = "O-O" if castle[0].col == 6 else "O-O-O"
    else:
        san = ""
        is_capture = board.get(to_coord) is not None or (
            piece.piece_type == PieceType.PAWN and from_coord.col != to_coord.col
        )

        if piece.piece_type == PieceType.PAWN:
            if is_capture:
                san += from_coord.to_algebraic()[0]
        else:
            san += _SAN_PIECE[piece.piece_type]

            # Disambiguation
            ambiguous = [
                origin
                for origin, to in legal_moves(game_board, side)
                if to == to_coord
                and origin != from_coord
                and board.piece_type_at(origin) == piece.piece_type
            ]
            if ambiguous:
                same_file = any(o.col == from_coord.col for o in ambiguous)
                same_rank = any(o.row == from_coord.row for o in ambiguous)
                if not same_file:
                    san += from_coord.to_algebraic()[0]
                elif not same_rank:
                    san += from_coord.to_algebraic()[1]
                else:
                    san += from_coord.to_algebraic()

        if is_capture:
            san += "x"

        san += to_coord.to_algebraic()

        if promotion is not None:
            san += "=" + _SAN_PIECE[promotion]

    # Check / checkmate suffix, decided on a scratch copy
    after = game_board.copy()
    after.execute_move(from_coord, to_coord, promotion)
    opponent = side.opposite
    if Rules.is_in_check(after, opponent):
        san += "#" if Rules.is_checkmate(after, opponent) else "+"

    return san
