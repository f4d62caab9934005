"""PGN parsing, replay and serialization helpers."""

from __future__ import annotations

import logging
import re
from os import PathLike
from pathlib import Path

from kingside.core.enums import Color, GameResult
from kingside.core.errors import PgnReplayError, SanError
from kingside.core.game_board import GameBoard
from kingside.core.notation.fen import game_board_from_fen
from kingside.core.notation.models import ParsedPgn, PgnMove
from kingside.core.notation.san import move_to_san, resolve_san

_LOGGER = logging.getLogger(__name__)

_RESULTS: dict[str, GameResult] = {
    "1-0": GameResult.WHITE_WINS,
    "0-1": GameResult.BLACK_WINS,
    "1/2-1/2": GameResult.DRAW,
    "*": GameResult.IN_PROGRESS,
}
_RESULT_TOKENS: dict[GameResult, str] = {v: k for k, v in _RESULTS.items()}

_TAG_PAIR_RE = re.compile(r'\[\s*(?P<key>\w+)\s+"(?P<value>(?:[^"\\]|\\.)*)"\s*\]')
_MOVETEXT_RE = re.compile(
    r"""
      \{(?P<brace>[^}]*)\}?     # an unterminated comment runs to the end
    | ;(?P<rest>[^\n]*)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<word>[^\s{};()]+)
    """,
    re.VERBOSE,
)
# NAGs such as "$1" and the "e.p." suffix some writers put after en passant
_ANNOTATION_RE = re.compile(r"^(?:\$\d+|e\.p\.)$")
# "12.", "12...", "..." and the "12." glued to "12.e4"
_MOVE_NUMBER_RE = re.compile(r"^(?:\d+\.+|\.+)")


def pgn_result_token(result: GameResult) -> str:
    return _RESULT_TOKENS[result]


def game_result_from_pgn(token: str) -> GameResult:
    """Unknown tokens read as an unfinished game."""
    return _RESULTS.get(token.strip(), GameResult.IN_PROGRESS)


# ── Writing ──────────────────────────────────────────────────────────────────


def pgn_movetext_from_moves(
    moves: list[PgnMove], result_token: str, *, start_fullmove: int = 1, black_first: bool = False
) -> str:
    """Lay out *moves* with move numbers; ``black_first`` opens with ``N...``."""
    first_ply = 1 if black_first else 0
    parts: list[str] = []
    for ply, move in enumerate(moves, start=first_ply):
        number = start_fullmove + ply // 2
        if ply % 2 == 0:
            parts.append(f"{number}.")
        elif ply == first_ply:
            parts.append(f"{number}...")
        parts.append(move.san)
        if move.comment:
            parts.append("{" + move.comment.replace("}", "]") + "}")
    parts.append(result_token)
    return " ".join(parts)


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _document(headers: dict[str, str], movetext: str) -> str:
    tag_pairs = [f"[{key} {_quote(value)}]" for key, value in headers.items()]
    return "\n".join([*tag_pairs, "", movetext, ""])


def build_pgn(
    headers: dict[str, str],
    sans: list[str],
    result_token: str,
    comments: list[str | None] | None = None,
) -> str:
    """Assemble a one-game PGN document from SAN moves and optional comments."""
    if comments is None:
        comments = [None] * len(sans)
    elif len(comments) != len(sans):
        raise ValueError(f"Got {len(comments)} PGN comments for {len(sans)} moves")
    moves = [PgnMove(san=san, comment=comment or "") for san, comment in zip(sans, comments)]
    return _document(headers, pgn_movetext_from_moves(moves, result_token))


def history_to_sans(game_board: GameBoard) -> list[str]:
    """SAN rendering of every move in *game_board*'s history."""
    replay = GameBoard(
        game_board.position_history[0].copy(),
        initial_castling=game_board.initial_castling,
        initial_en_passant=game_board.initial_en_passant,
        start_fullmove=game_board.start_fullmove,
        start_turn=game_board.start_turn,
    )
    sans: list[str] = []
    for move in game_board.move_history:
        sans.append(
            move_to_san(replay, move.color, move.from_coord, move.to_coord, move.promotion)
        )
        replay.execute_move(move.from_coord, move.to_coord, move.promotion)
    return sans


def export_pgn(
    game_board: GameBoard,
    result: GameResult = GameResult.IN_PROGRESS,
    headers: dict[str, str] | None = None,
) -> str:
    """Serialise *game_board*'s history as a PGN document."""
    token = pgn_result_token(result)
    tags = dict(headers or {})
    tags.setdefault("Result", token)
    moves = [PgnMove(san=san) for san in history_to_sans(game_board)]
    movetext = pgn_movetext_from_moves(
        moves,
        token,
        start_fullmove=game_board.start_fullmove,
        black_first=game_board.start_turn == Color.BLACK,
    )
    return _document(tags, movetext)


# ── Reading ──────────────────────────────────────────────────────────────────


def _attach_comment(move: PgnMove, text: str) -> None:
    clean = " ".join(text.split())
    if clean:
        move.comment = f"{move.comment} {clean}" if move.comment else clean


def _tokenize_mainline(movetext: str) -> tuple[list[PgnMove], str]:
    """Mainline moves with their comments, plus the result token.

    Variations are skipped at any depth, together with NAGs and move numbers.
    """
    moves: list[PgnMove] = []
    result_token = "*"
    depth = 0
    for match in _MOVETEXT_RE.finditer(movetext):
        kind = match.lastgroup
        if kind == "open":
            depth += 1
        elif kind == "close":
            depth = max(0, depth - 1)
        elif depth:
            continue
        elif kind in ("brace", "rest"):
            if moves:
                _attach_comment(moves[-1], match[kind])
        else:
            word = match["word"]
            if word in _RESULTS:
                result_token = word
            elif not _ANNOTATION_RE.match(word):
                san = _MOVE_NUMBER_RE.sub("", word, count=1)
                if san:
                    moves.append(PgnMove(san=san))
    return moves, result_token


def parse_pgn_game(pgn_text: str) -> ParsedPgn:
    """Split one PGN game into tag pairs, mainline moves and result token."""
    lines = pgn_text.splitlines()
    headers: dict[str, str] = {}
    body_start = len(lines)
    for index, raw in enumerate(lines):
        line = raw.strip()
        if not line:
            continue
        if not line.startswith("["):
            body_start = index
            break
        match = _TAG_PAIR_RE.fullmatch(line)
        if match is None:
            raise ValueError(f"Invalid PGN header line: {line}")
        headers[match["key"]] = re.sub(r"\\(.)", r"\1", match["value"])

    # "%" opens an escape line that readers must ignore
    movetext = "\n".join(
        line for line in lines[body_start:] if not line.lstrip().startswith("%")
    )
    moves, result_token = _tokenize_mainline(movetext)
    header_result = headers.get("Result", "*")
    if result_token == "*" and header_result in _RESULTS:
        result_token = header_result
    return ParsedPgn(headers=headers, moves=moves, result_token=result_token)


def replay_pgn(parsed: ParsedPgn) -> tuple[GameBoard, Color]:
    """Execute the mainline of *parsed* and return the board plus side to move.

    Stops at the first token that cannot be played and raises
    :class:`PgnReplayError`; nothing after that token is applied.
    """
    if parsed.headers.get("SetUp") == "1" and "FEN" in parsed.headers:
        game_board, side = game_board_from_fen(parsed.headers["FEN"])
    else:
        game_board, side = GameBoard(), Color.WHITE

    for ply, move in enumerate(parsed.moves, start=1):
        try:
            from_coord, to_coord, promotion = resolve_san(game_board, side, move.san)
        except SanError as exc:
            _LOGGER.warning("PGN replay halted at ply %d (%s): %s", ply, move.san, exc.reason)
            raise PgnReplayError(move.san, exc.reason, ply) from exc
        game_board.execute_move(from_coord, to_coord, promotion)
        side = side.opposite

    return game_board, side


def load_pgn(pgn_text: str) -> tuple[GameBoard, Color]:
    """Parse PGN text and replay its mainline."""
    parsed = parse_pgn_game(pgn_text)
    if not parsed.moves:
        raise ValueError("No moves found in PGN")
    return replay_pgn(parsed)


def load_pgn_file(path: str | PathLike[str]) -> tuple[GameBoard, Color]:
    """Read a UTF-8 PGN file and replay its first game."""
    text = Path(path).read_text(encoding="utf-8")
    return load_pgn(text)
