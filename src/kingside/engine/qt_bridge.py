"""Qt bridges running blocking engine and peer calls in worker threads."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from kingside.core.errors import EngineError, RemoteGameEnded
from kingside.core.notation.network import decode_network_move
from kingside.engine.uci import UciEngine
from kingside.game.interfaces import MoveChannel

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that asks the external engine for moves.

    Move the worker to a ``QThread`` and connect a queued signal to
    :meth:`request_move`; answers come back through ``best_move_ready``
    tagged with the request id so stale answers can be dropped.
    """

    best_move_ready = pyqtSignal(int, str)
    request_cancelled = pyqtSignal(int)
    engine_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine")

    def __init__(self, engine: UciEngine) -> None:
        super().__init__()
        self._engine = engine
        self._cancel_event = threading.Event()

    @pyqtSlot(str, int)
    def request_move(self, fen: str, request_id: int) -> None:
        """Compute the engine's move for *fen* and emit the result."""
        self._cancel_event.clear()
        try:
            uci = self._engine.best_move(fen)
        except EngineError as exc:
            _LOGGER.warning("Engine request %d failed: %s", request_id, exc)
            self.engine_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.request_cancelled.emit(request_id)
            return

        self.best_move_ready.emit(request_id, uci)

    def cancel(self) -> None:
        """Drop the answer of the request currently running.

        Call this directly from the GUI thread, not through a queued
        connection: a queued call would only run after :meth:`request_move`
        returned. The underlying :class:`threading.Event` is thread-safe.
        """
        self._cancel_event.set()

    @pyqtSlot()
    def shutdown(self) -> None:
        self._engine.stop()


class PeerWorker(QObject):
    """Thread-affine worker that blocks on a :class:`MoveChannel` read.

    Each :meth:`read_move` call waits for one token from the peer and emits
    ``move_received`` with it, ``remote_ended`` when the peer left, or
    ``channel_error`` when the transport failed.
    """

    move_received = pyqtSignal(str)
    remote_ended = pyqtSignal()
    channel_error = pyqtSignal(str)

    __slots__ = ("_channel",)

    def __init__(self, channel: MoveChannel) -> None:
        super().__init__()
        self._channel = channel

    @pyqtSlot()
    def read_move(self) -> None:
        try:
            token = self._channel.receive()
        except OSError as exc:
            _LOGGER.warning("Peer channel failed: %s", exc)
            self.channel_error.emit(str(exc))
            return

        try:
            decode_network_move(token)
        except RemoteGameEnded:
            _LOGGER.info("Peer ended the game")
            self.remote_ended.emit()
            return
        except ValueError as exc:
            self.channel_error.emit(str(exc))
            return

        self.move_received.emit(token.strip())
