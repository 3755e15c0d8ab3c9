"""Monty Hall simulator - empirical comparison of the stay and switch strategies."""

__version__ = "0.1.0"

from .config import SimulationConfig
from .game import (
    Outcome,
    Strategy,
    change_door,
    create_game,
    determine_winner,
    open_goat_door,
    select_door,
)
from .metrics import proportions_table, summarize_strategies, tabulate
from .simulator import MonteCarloSimulator, play_n_games
from .trial import TrialResult, play_game

__all__ = [
    "MonteCarloSimulator",
    "Outcome",
    "SimulationConfig",
    "Strategy",
    "TrialResult",
    "change_door",
    "create_game",
    "determine_winner",
    "open_goat_door",
    "play_game",
    "play_n_games",
    "proportions_table",
    "select_door",
    "summarize_strategies",
    "tabulate",
]
