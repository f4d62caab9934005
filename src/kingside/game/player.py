"""Concrete player implementations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from kingside.core.enums import Color, GameEndReason, GameResult
from kingside.core.notation.network import END_TOKEN, encode_network_move
from kingside.game.interfaces import IPlayer, MoveChannel

if TYPE_CHECKING:
    from kingside.core.move import PieceMove

_LOGGER = logging.getLogger(__name__)


class HumanPlayer(IPlayer):
    """A human participant — moves come from the UI.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, fen: str) -> None:
        pass  # Human moves arrive via controller.submit_move()

    def cancel(self) -> None:
        pass


class BotPlayer(IPlayer):
    """An external engine participant that delegates to a callback.

    ``BotPlayer`` only stores a reference to a *bridge* callable invoked on
    ``request_move`` with the current FEN. In production this callable
    dispatches work to an ``EngineWorker`` running in a ``QThread``, whose
    answer comes back through ``controller.submit_uci_move``.

    Args:
        color: Side the engine plays.
        name: Display name.
        on_request_move: ``(fen) -> None``, called when the game controller
            asks the engine to start thinking.
        on_cancel: ``() -> None``, called to drop a pending request.
    """

    __slots__ = ("_color", "_name", "_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        name: str = "Engine",
        on_request_move: Callable[[str], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, fen: str) -> None:
        if self._on_request_move is not None:
            self._on_request_move(fen)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()


class RemotePlayer(IPlayer):
    """The peer on the far end of a :class:`MoveChannel`.

    Local moves are pushed to the peer as network tokens; the peer's moves
    are read by a ``PeerWorker`` started through ``on_request_move`` and fed
    back via ``controller.submit_network_move``.
    """

    __slots__ = ("_color", "_name", "_channel", "_on_request_move")

    def __init__(
        self,
        color: Color,
        channel: MoveChannel,
        name: str = "Opponent",
        on_request_move: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._channel = channel
        self._on_request_move = on_request_move

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def channel(self) -> MoveChannel:
        return self._channel

    def request_move(self, fen: str) -> None:
        if self._on_request_move is not None:
            self._on_request_move()

    def cancel(self) -> None:
        pass  # a blocking read cannot be interrupted from here

    def opponent_moved(self, move: PieceMove) -> None:
        token = encode_network_move(move.from_coord, move.to_coord, move.promotion)
        _LOGGER.debug("Sending move %s to peer", token)
        self._channel.send(token)

    def game_over(self, result: GameResult, reason: GameEndReason) -> None:
        # Board outcomes are detected by both sides; only a local resignation
        # has to be announced.
        if reason != GameEndReason.RESIGNATION:
            return
        _LOGGER.info("Notifying peer of resignation")
        self._channel.send(END_TOKEN)
