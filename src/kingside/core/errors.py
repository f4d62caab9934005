"""Exceptions raised by notation parsers and external adapters."""

from __future__ import annotations


class SanError(ValueError):
    """A SAN token could not be resolved against the current position."""

    def __init__(self, token: str, reason: str) -> None:
        super().__init__(f"Cannot resolve SAN {token!r}: {reason}")
        self.token = token
        self.reason = reason


class PgnReplayError(ValueError):
    """Replaying a PGN mainline stopped on an unplayable token."""

    def __init__(self, token: str, reason: str, ply: int) -> None:
        super().__init__(f"PGN replay halted at ply {ply} on {token!r}: {reason}")
        self.token = token
        self.reason = reason
        self.ply = ply


class EngineError(RuntimeError):
    """The external UCI engine failed to start, answer or stay alive."""


class RemoteGameEnded(Exception):
    """The remote peer closed the game (``ended`` token or empty line)."""
