"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs and protocols, not on concrete players or transports.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Protocol

from kingside.core.enums import Color, GameEndReason, GameResult

if TYPE_CHECKING:
    from kingside.core.coord import Coord
    from kingside.core.enums import PieceType
    from kingside.core.move import PieceMove


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    PLAYING = auto()
    PROMOTION = auto()  # pawn waiting on its last rank, turn not switched
    CHECKMATE = auto()
    DRAW = auto()


class GameMode(IntEnum):
    """Who sits on the other side of the board."""

    SOLO = auto()  # two humans sharing one screen
    BOT = auto()
    MULTIPLAYER = auto()


# ── Transport ────────────────────────────────────────────────────────────────


class MoveChannel(Protocol):
    """Blocking line-oriented link to a remote peer."""

    def receive(self) -> str:
        """Block until the peer sends a token; empty string on close."""
        ...

    def send(self, token: str) -> None: ...


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human, engine or remote peer)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, fen: str) -> None:
        """Begin the move-selection process for the position *fen*.

        For humans this is a no-op (they interact via UI). Engines and
        remote peers kick off their blocking work on an adapter thread.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move request (no-op for humans)."""

    def opponent_moved(self, move: PieceMove) -> None:
        """Called after the other side completed *move*."""

    def game_over(self, result: GameResult, reason: GameEndReason) -> None:
        """Called once when the game reaches a terminal result."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, white: IPlayer, black: IPlayer, fen: str | None = None) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(
        self, from_coord: Coord, to_coord: Coord, promotion: PieceType | None = None
    ) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def promote(self, piece_type: PieceType) -> bool:
        """Resolve a pending promotion."""

    @abstractmethod
    def resign(self, color: Color) -> None:
        """Player of *color* resigns."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Undo the last move. Returns True on success."""
