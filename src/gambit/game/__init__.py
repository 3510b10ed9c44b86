"""Game management layer — controller, players, scheduling, state machine.

Quick start::

    from gambit.game import GameController, GameSettings, ManualScheduler

    scheduler = ManualScheduler()
    ctrl = GameController(scheduler)
    ctrl.start_game(GameSettings.vs_engine(Color.WHITE, Difficulty.EASY))
    ctrl.try_select(parse_square("e2"))
    ctrl.try_move(parse_square("e4"))
    scheduler.run_pending()  # engine replies
"""

from gambit.game.controller import GameController, GameEvents
from gambit.game.interfaces import (
    Difficulty,
    GameMode,
    GameState,
    IGameController,
    IPlayer,
    IScheduler,
    ScheduledCall,
)
from gambit.game.player import EnginePlayer, HumanPlayer
from gambit.game.record import AwaitingMove, AwaitingPromotion, GameRecord, TurnPhase
from gambit.game.scheduler import ManualScheduler
from gambit.game.settings import GameSettings

__all__ = [
    # Interfaces
    "Difficulty",
    "GameMode",
    "GameState",
    "IGameController",
    "IPlayer",
    "IScheduler",
    "ScheduledCall",
    # Concrete
    "AwaitingMove",
    "AwaitingPromotion",
    "EnginePlayer",
    "GameController",
    "GameEvents",
    "GameRecord",
    "GameSettings",
    "HumanPlayer",
    "ManualScheduler",
    "TurnPhase",
]
