"""Game management layer — controller, players, state machine, config.

Quick start::

    from kingside.core import Color, Coord
    from kingside.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=HumanPlayer(Color.BLACK, "Bob"),
    )
    ctrl.submit_move(Coord.from_algebraic("e2"), Coord.from_algebraic("e4"))
"""

from kingside.game.config import (
    DIFFICULTY_NAMES,
    DIFFICULTY_PRESETS,
    EngineLimits,
    GameConfig,
    limits_for,
)
from kingside.game.controller import GameController, GameEvents
from kingside.game.interfaces import (
    GameMode,
    GamePhase,
    IGameController,
    IPlayer,
    MoveChannel,
)
from kingside.game.player import BotPlayer, HumanPlayer, RemotePlayer
from kingside.game.state import GameState

__all__ = [
    # Interfaces
    "GameMode",
    "GamePhase",
    "IGameController",
    "IPlayer",
    "MoveChannel",
    # Configuration
    "DIFFICULTY_NAMES",
    "DIFFICULTY_PRESETS",
    "EngineLimits",
    "GameConfig",
    "limits_for",
    # Concrete
    "BotPlayer",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "RemotePlayer",
]
