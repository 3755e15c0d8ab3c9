"""Batch Monty Hall simulator with deterministic per-trial seeding."""

import logging
import multiprocessing as mp
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import List, Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from .config import SimulationConfig
from .metrics import proportions_table, results_frame
from .trial import TrialResult, play_game

logger = logging.getLogger(__name__)


def _run_trial_batch(trial_seeds: List[np.random.SeedSequence]) -> List[TrialResult]:
    """Play one game per seed.

    Must stay at module level so worker processes can unpickle it.
    """
    return [play_game(np.random.Generator(np.random.PCG64(seed))) for seed in trial_seeds]


class MonteCarloSimulator:
    """Plays repeated Monty Hall games, sequentially or across worker processes.

    Every trial gets its own generator derived from the base seed, so the
    results depend only on ``base_seed`` and ``n_trials``, never on ``n_jobs``.
    """

    def __init__(self, config: SimulationConfig):
        """Initialize the simulator.

        Args:
            config: Configuration for the simulation
        """
        self.config = config

    def run(self) -> List[TrialResult]:
        """Play ``n_trials`` games.

        Returns:
            Trial results in trial order
        """
        logger.info(
            f"Playing {self.config.n_trials} games "
            f"(n_jobs={self.config.n_jobs}, seed={self.config.base_seed})"
        )
        trial_seeds = self._generate_trial_seeds()

        if self.config.n_jobs == 1:
            trials = self._run_sequential(trial_seeds)
        else:
            trials = self._run_parallel(trial_seeds)

        logger.debug(f"Finished {len(trials)} games")
        return trials

    def run_frame(self) -> pd.DataFrame:
        """Play ``n_trials`` games and return the 2 * n_trials strategy/outcome rows."""
        return results_frame(row for trial in self.run() for row in trial.rows())

    def _run_sequential(self, trial_seeds: List[np.random.SeedSequence]) -> List[TrialResult]:
        iterator = trial_seeds
        if self.config.show_progress:
            iterator = tqdm(trial_seeds, desc="Playing games")

        return [play_game(np.random.Generator(np.random.PCG64(seed))) for seed in iterator]

    def _run_parallel(self, trial_seeds: List[np.random.SeedSequence]) -> List[TrialResult]:
        """Split the seeds into contiguous batches and merge them back in order."""
        seed_batches = []
        start_idx = 0
        for batch_size in self._calculate_batch_sizes():
            if batch_size > 0:
                seed_batches.append(trial_seeds[start_idx:start_idx + batch_size])
                start_idx += batch_size

        # Use spawn method on all platforms for consistency
        ctx = mp.get_context("spawn")

        batch_results: List[Optional[List[TrialResult]]] = [None] * len(seed_batches)
        with ProcessPoolExecutor(max_workers=len(seed_batches), mp_context=ctx) as executor:
            future_to_batch = {
                executor.submit(_run_trial_batch, batch): i
                for i, batch in enumerate(seed_batches)
            }
            for future in as_completed(future_to_batch):
                batch_results[future_to_batch[future]] = future.result()

        results: List[TrialResult] = []
        for batch_result in batch_results:
            if batch_result:
                results.extend(batch_result)
        return results

    def _generate_trial_seeds(self) -> List[np.random.SeedSequence]:
        """Spawn one independent seed sequence per trial."""
        return np.random.SeedSequence(self.config.base_seed).spawn(self.config.n_trials)

    def _calculate_batch_sizes(self) -> List[int]:
        """Calculate batch sizes for workers to ensure near-equal distribution."""
        base_size = self.config.n_trials // self.config.n_jobs
        remainder = self.config.n_trials % self.config.n_jobs

        batch_sizes = [base_size] * self.config.n_jobs
        for i in range(remainder):
            batch_sizes[i] += 1

        return batch_sizes


def play_n_games(
    n: int = 100,
    base_seed: Optional[int] = None,
    n_jobs: Optional[int] = None,
    decimals: int = 2,
    print_table: bool = True,
    config: Optional[SimulationConfig] = None,
) -> pd.DataFrame:
    """Play ``n`` games and tabulate stay/switch outcomes.

    Prints the rounded strategy × outcome row proportions unless
    ``print_table`` is False.

    Args:
        n: Number of games (ignored when ``config`` is given)
        base_seed: Seed for reproducible runs
        n_jobs: Number of worker processes (None defers to MONTY_HALL_SIM_N_JOBS, else 1)
        decimals: Rounding precision of the printed table
        print_table: Print the proportions table to stdout
        config: Full configuration, overriding the other arguments

    Returns:
        Frame of 2n rows with ``strategy`` and ``outcome`` columns, in trial order

    Raises:
        ValueError: If the number of games is not a positive integer
    """
    if config is None:
        config = SimulationConfig(
            n_trials=n, base_seed=base_seed, n_jobs=n_jobs, decimals=decimals
        )

    results = MonteCarloSimulator(config).run_frame()

    if print_table:
        print(proportions_table(results, decimals=config.decimals))

    return results
