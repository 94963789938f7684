"""Training layer — controller, players, settings, session state machine.

Quick start::

    from gambit.core import Color
    from gambit.game import TrainingController

    ctrl = TrainingController()
    ctrl.events.on_finished.append(print)
    ctrl.new_game(Color.BLACK)
"""

from gambit.game.controller import TrainingController, TrainingEvents, run_immediately
from gambit.game.interfaces import GamePhase, IPlayer, TrainingOutcome, TrainingResult
from gambit.game.player import BookPlayer, HumanPlayer
from gambit.game.settings import TrainerSettings

__all__ = [
    # Interfaces
    "GamePhase",
    "IPlayer",
    "TrainingOutcome",
    "TrainingResult",
    # Concrete
    "BookPlayer",
    "HumanPlayer",
    "TrainerSettings",
    "TrainingController",
    "TrainingEvents",
    "run_immediately",
]
