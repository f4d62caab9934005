"""Session configuration and engine strength presets."""

from __future__ import annotations

from dataclasses import dataclass

from kingside.core.enums import Color
from kingside.game.interfaces import GameMode

DEFAULT_ENGINE_DEPTH = 10


@dataclass(frozen=True, slots=True)
class EngineLimits:
    """Constraints passed to the external engine for one move request.

    ``movetime_ms`` and ``elo`` stay ``None`` at full strength.
    """

    depth: int = DEFAULT_ENGINE_DEPTH
    movetime_ms: int | None = None
    elo: int | None = None

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"Engine depth must be positive, got {self.depth}")
        if self.movetime_ms is not None and self.movetime_ms <= 0:
            raise ValueError(f"Engine movetime must be positive, got {self.movetime_ms}")


# Easy, Medium, Hard, Magnus
DIFFICULTY_NAMES: tuple[str, ...] = ("Easy", "Medium", "Hard", "Magnus")
DIFFICULTY_PRESETS: tuple[EngineLimits, ...] = (
    EngineLimits(depth=1, movetime_ms=100, elo=800),
    EngineLimits(depth=4, movetime_ms=300, elo=1400),
    EngineLimits(depth=8, movetime_ms=800, elo=2000),
    EngineLimits(depth=15, movetime_ms=2000, elo=2800),
)


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Everything a session needs to know before the first move.

    Passed explicitly to the controller and adapters; nothing reads
    configuration from global state.
    """

    mode: GameMode = GameMode.SOLO
    bot_starts: bool = False
    local_color: Color = Color.WHITE
    engine_command: str | None = None
    engine_depth: int = DEFAULT_ENGINE_DEPTH
    engine_difficulty: int | None = None
    engine_timeout_s: float = 10.0

    def __post_init__(self) -> None:
        if self.engine_depth < 1:
            raise ValueError(f"Engine depth must be positive, got {self.engine_depth}")
        if self.engine_difficulty is not None and not (
            0 <= self.engine_difficulty < len(DIFFICULTY_PRESETS)
        ):
            raise ValueError(f"Unknown difficulty preset: {self.engine_difficulty}")
        if self.engine_timeout_s <= 0:
            raise ValueError(f"Engine timeout must be positive, got {self.engine_timeout_s}")
        if self.mode == GameMode.BOT and not self.engine_command:
            raise ValueError("Bot mode requires an engine command")

    @property
    def human_color(self) -> Color:
        """Side the local human plays in bot and multiplayer games."""
        if self.mode == GameMode.BOT:
            return Color.BLACK if self.bot_starts else Color.WHITE
        return self.local_color


def limits_for(config: GameConfig) -> EngineLimits:
    """Preset limits when a difficulty is chosen, else full strength at the base depth."""
    if config.engine_difficulty is None:
        return EngineLimits(depth=config.engine_depth)
    return DIFFICULTY_PRESETS[config.engine_difficulty]
