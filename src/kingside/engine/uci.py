"""Blocking adapter around an external UCI engine process."""

from __future__ import annotations

import logging
import queue
import shlex
import subprocess
import threading
import time

from kingside.core.errors import EngineError
from kingside.game.config import EngineLimits, GameConfig, limits_for

_LOGGER = logging.getLogger(__name__)

_EOF = None  # reader sentinel: engine stdout closed


class UciEngine:
    """Wraps a UCI-compatible engine subprocess.

    The command line is split on whitespace, so ``"stockfish --threads 2"``
    passes arguments to the binary. Every failure (spawn error, handshake
    timeout, process death, unusable answer) raises :class:`EngineError`.

    Usage::

        with UciEngine("stockfish", EngineLimits(depth=8)) as engine:
            uci = engine.best_move(fen)
    """

    __slots__ = ("_command", "_limits", "_timeout_s", "_process", "_lines")

    def __init__(
        self,
        command: str,
        limits: EngineLimits | None = None,
        *,
        timeout_s: float = 10.0,
    ) -> None:
        self._command = shlex.split(command)
        self._limits = limits if limits is not None else EngineLimits()
        self._timeout_s = timeout_s
        self._process: subprocess.Popen[str] | None = None
        self._lines: queue.Queue[str | None] = queue.Queue()

    @classmethod
    def from_config(cls, config: GameConfig) -> UciEngine:
        if not config.engine_command:
            raise EngineError("No engine command configured")
        return cls(
            config.engine_command,
            limits_for(config),
            timeout_s=config.engine_timeout_s,
        )

    @property
    def limits(self) -> EngineLimits:
        return self._limits

    @limits.setter
    def limits(self, limits: EngineLimits) -> None:
        """New limits apply from the next handshake (strength) or request (depth)."""
        self._limits = limits

    @property
    def alive(self) -> bool:
        return self._process is not None and self._process.poll() is None

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> None:
        """Spawn the engine and perform the ``uci`` / ``isready`` handshake."""
        if self.alive:
            return
        if not self._command:
            raise EngineError("Empty engine command")

        self._lines = queue.Queue()
        try:
            self._process = subprocess.Popen(
                self._command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                bufsize=1,
            )
        except OSError as exc:
            raise EngineError(f"Failed to spawn engine {self._command[0]!r}: {exc}") from exc

        threading.Thread(target=self._reader, daemon=True).start()
        _LOGGER.debug("Engine process started: %s", " ".join(self._command))

        self._send("uci")
        self._wait_for("uciok", self._timeout_s)

        if self._limits.elo is not None:
            self._send("setoption name UCI_LimitStrength value true")
            self._send(f"setoption name UCI_Elo value {self._limits.elo}")

        self._send("isready")
        self._wait_for("readyok", self._timeout_s)
        _LOGGER.info("Engine ready: %s", self._command[0])

    def stop(self) -> None:
        """Send ``quit`` and reap the process."""
        process = self._process
        if process is None:
            return
        self._process = None
        if process.poll() is None:
            try:
                process.stdin.write("quit\n")  # type: ignore[union-attr]
                process.stdin.flush()  # type: ignore[union-attr]
            except OSError as exc:
                _LOGGER.debug("Engine pipe already closed on quit: %s", exc)
            try:
                process.wait(timeout=3)
            except subprocess.TimeoutExpired:
                _LOGGER.warning("Engine did not quit, killing it")
                process.kill()
                process.wait()

    def __enter__(self) -> UciEngine:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    # ── Requests ─────────────────────────────────────────────────────────

    def best_move(self, fen: str) -> str:
        """Block until the engine answers with its move for *fen*."""
        self.start()
        self._drain()

        self._send(f"position fen {fen}")
        go = f"go depth {self._limits.depth}"
        if self._limits.movetime_ms is not None:
            go += f" movetime {self._limits.movetime_ms}"
        self._send(go)

        budget = self._timeout_s + (self._limits.movetime_ms or 0) / 1000.0
        line = self._wait_for("bestmove", budget)
        parts = line.split()
        if len(parts) < 2 or parts[1] in ("(none)", "0000"):
            raise EngineError(f"Engine returned no move: {line!r}")
        _LOGGER.debug("Engine best move for %s: %s", fen, parts[1])
        return parts[1]

    # ── Internal I/O ─────────────────────────────────────────────────────

    def _reader(self) -> None:
        """Background thread: push every stdout line onto the queue."""
        process = self._process
        if process is None or process.stdout is None:
            self._lines.put(_EOF)
            return
        lines = self._lines
        for line in process.stdout:
            lines.put(line.rstrip("\n"))
        lines.put(_EOF)

    def _send(self, command: str) -> None:
        process = self._process
        if process is None or process.poll() is not None or process.stdin is None:
            raise EngineError(f"Engine is not running (while sending {command!r})")
        try:
            process.stdin.write(command + "\n")
            process.stdin.flush()
        except OSError as exc:
            raise EngineError(f"Engine pipe closed: {exc}") from exc

    def _drain(self) -> None:
        """Discard pending output lines (info chatter from a previous search)."""
        while True:
            try:
                line = self._lines.get_nowait()
            except queue.Empty:
                return
            if line is _EOF:
                raise EngineError("Engine process exited")

    def _wait_for(self, keyword: str, timeout_s: float) -> str:
        """Return the first line starting with *keyword*."""
        deadline = time.monotonic() + timeout_s
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise EngineError(f"Timed out waiting for {keyword!r} from engine")
            try:
                line = self._lines.get(timeout=min(remaining, 0.2))
            except queue.Empty:
                continue
            if line is _EOF:
                raise EngineError(f"Engine exited while waiting for {keyword!r}")
            if line.strip().startswith(keyword):
                return line.strip()
