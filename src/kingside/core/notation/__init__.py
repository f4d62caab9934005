"""Notation package: FEN / SAN / PGN plus engine and peer move tokens."""

from kingside.core.notation.fen import (
    STARTING_FEN,
    board_to_fen,
    castling_rights,
    game_board_from_fen,
)
from kingside.core.notation.models import NetworkMove, ParsedPgn, PgnMove
from kingside.core.notation.network import (
    END_TOKEN,
    decode_network_move,
    encode_network_move,
)
from kingside.core.notation.pgn import (
    build_pgn,
    export_pgn,
    game_result_from_pgn,
    history_to_sans,
    load_pgn,
    load_pgn_file,
    parse_pgn_game,
    pgn_result_token,
    replay_pgn,
)
from kingside.core.notation.san import legal_moves, move_to_san, resolve_san
from kingside.core.notation.uci import format_uci_move, move_to_uci, parse_uci_move

__all__ = [
    "STARTING_FEN",
    "END_TOKEN",
    "NetworkMove",
    "PgnMove",
    "ParsedPgn",
    "board_to_fen",
    "castling_rights",
    "game_board_from_fen",
    "legal_moves",
    "move_to_san",
    "resolve_san",
    "pgn_result_token",
    "game_result_from_pgn",
    "history_to_sans",
    "build_pgn",
    "export_pgn",
    "parse_pgn_game",
    "replay_pgn",
    "load_pgn",
    "load_pgn_file",
    "parse_uci_move",
    "format_uci_move",
    "move_to_uci",
    "encode_network_move",
    "decode_network_move",
]
