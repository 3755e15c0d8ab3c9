#!/usr/bin/env python3
"""Quickstart example for the Monty Hall simulator.

Plays one annotated game, then a reproducible batch, and compares the
observed win rates with the exact ones.
"""

import numpy as np

from monty_hall_sim import play_game, play_n_games, summarize_strategies
from monty_hall_sim.metrics import theoretical_win_rates


def main() -> None:
    """Run a basic Monty Hall simulation example."""
    print("Monty Hall Quickstart Example")
    print("=" * 40)

    trial = play_game(np.random.default_rng(42))
    print(f"Doors:          {list(trial.game)}")
    print(f"Contestant:     door {trial.pick}")
    print(f"Host opens:     door {trial.opened_door}")
    print(f"Stay   -> door {trial.stay_pick}: {trial.stay_outcome.value}")
    print(f"Switch -> door {trial.switch_pick}: {trial.switch_outcome.value}")
    print()

    n_games = 10_000
    print(f"Playing {n_games:,} games with seed 42")
    print("-" * 40)
    results = play_n_games(n_games, base_seed=42)
    print()

    summary = summarize_strategies(results)
    exact = theoretical_win_rates()
    for strategy, row in summary.iterrows():
        print(
            f"{strategy:7} | Win rate: {row['win_rate']:.4f} "
            f"[{row['ci_lower']:.4f}, {row['ci_upper']:.4f}] | Exact: {exact[strategy]:.4f}"
        )


if __name__ == "__main__":
    main()
