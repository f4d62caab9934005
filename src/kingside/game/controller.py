"""GameController — the central orchestrator of a chess game.

Coordinates: Players, GameState, move feeds from engines and peers.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from kingside.core.coord import Coord
from kingside.core.enums import Color, GameResult, PieceType
from kingside.core.errors import RemoteGameEnded
from kingside.core.game_board import GameBoard
from kingside.core.move import PieceMove
from kingside.core.notation.fen import game_board_from_fen
from kingside.core.notation.network import decode_network_move
from kingside.core.notation.uci import parse_uci_move
from kingside.game.config import GameConfig
from kingside.game.interfaces import GameMode, GamePhase, IGameController, IPlayer
from kingside.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[PieceMove, "GameState"], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]
PromotionCallback = Callable[[Color], None]  # color that must choose


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full chess game: validates moves, switches turns,
    relays moves to the other side, notifies listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread). Engine and peer answers arrive via
    ``submit_uci_move`` / ``submit_network_move``, which the Qt workers
    reach through queued signal/slot connections.
    """

    __slots__ = ("_state", "_players", "_config", "events")

    def __init__(self, config: GameConfig | None = None) -> None:
        self._config = config if config is not None else GameConfig()
        self._state = self._fresh_state()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    def _fresh_state(self) -> GameState:
        return GameState(
            mode=self._config.mode,
            bot_starts=self._config.bot_starts,
            local_color=self._config.local_color,
        )

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.player_turn)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        fen: str | None = None,
        game_board: GameBoard | None = None,
        player_turn: Color = Color.WHITE,
    ) -> None:
        """Start a game from the standard position, a FEN or a replayed board."""
        self._players = {Color.WHITE: white, Color.BLACK: black}

        if fen is not None:
            game_board, player_turn = game_board_from_fen(fen)

        self._state = self._fresh_state()
        self._state.setup(game_board, player_turn)

        self._emit_phase(self._state.phase)
        if self._state.is_game_over:
            self._emit_game_over(self._state.result)
            return
        self._prompt_current_player()

    def submit_move(
        self,
        from_coord: Coord,
        to_coord: Coord,
        promotion: PieceType | None = None,
    ) -> bool:
        if self._state.is_game_over:
            return False

        record = self._state.play_move(from_coord, to_coord, promotion)
        if record is None:
            return False

        if self._state.phase == GamePhase.PROMOTION:
            self._emit_phase(GamePhase.PROMOTION)
            for cb in self.events.on_promotion_required:
                cb(record.color)
            mover = self._players.get(record.color)
            if mover is not None and not mover.is_human:
                # Feeds that omit the promotion letter get a queen.
                return self.promote(PieceType.QUEEN)
            return True

        self._after_move(record)
        return True

    def submit_uci_move(self, uci: str) -> bool:
        """Apply an engine ``bestmove`` token such as ``e7e8q``."""
        try:
            from_coord, to_coord, promotion = parse_uci_move(uci)
        except ValueError as exc:
            _LOGGER.warning("Rejected engine move %r: %s", uci, exc)
            return False
        return self.submit_move(from_coord, to_coord, promotion)

    def submit_network_move(self, token: str) -> bool:
        """Apply a peer token; ``ended`` or an empty line ends the game."""
        try:
            move = decode_network_move(token)
        except RemoteGameEnded:
            self.remote_ended()
            return False
        except ValueError as exc:
            _LOGGER.warning("Rejected peer move %r: %s", token, exc)
            return False
        return self.submit_move(move.from_coord, move.to_coord, move.promotion)

    def promote(self, piece_type: PieceType) -> bool:
        record = self._state.promote(piece_type)
        if record is None:
            return False
        self._after_move(record)
        return True

    def resign(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        self._cancel_pending()
        self._state.resign(color)
        self._emit_game_over(self._state.result)

    def remote_ended(self) -> None:
        if self._state.is_game_over:
            return
        _LOGGER.info("Remote peer ended the game")
        self._state.remote_ended()
        self._emit_game_over(self._state.result)

    def undo_move(self) -> bool:
        """Take back the last move; in bot games back to the human's turn."""
        if self._state.mode == GameMode.MULTIPLAYER:
            return False
        if self._state.is_game_over or not self._state.move_history:
            return False

        self._cancel_pending()
        self._state.undo_last_move()
        if self._state.mode == GameMode.BOT:
            cp = self.current_player
            if cp is not None and not cp.is_human and self._state.move_history:
                self._state.undo_last_move()

        self._emit_phase(self._state.phase)
        self._prompt_current_player()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_move(self, record: PieceMove) -> None:
        self._emit_move(record)

        other = self._players.get(record.color.opposite)
        if other is not None:
            other.opponent_moved(record)

        if self._state.is_game_over:
            self._emit_game_over(self._state.result)
            return

        self._emit_phase(self._state.phase)
        self._prompt_current_player()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None or cp.is_human:
            return
        cp.request_move(self._state.fen())

    def _cancel_pending(self) -> None:
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

    def _emit_move(self, record: PieceMove) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self, result: GameResult) -> None:
        self._emit_phase(self._state.phase)
        for cb in self.events.on_game_over:
            cb(result)
        for p in self._players.values():
            p.game_over(result, self._state.end_reason)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
