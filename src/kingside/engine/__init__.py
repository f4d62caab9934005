"""Boundary adapters: external UCI engine process and Qt worker bridges."""

from kingside.engine.qt_bridge import EngineWorker, PeerWorker
from kingside.engine.uci import UciEngine

__all__ = [
    "EngineWorker",
    "PeerWorker",
    "UciEngine",
]
