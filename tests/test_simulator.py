"""Tests for the batch simulator and play_n_games."""

import numpy as np
import pandas as pd
import pytest

from monty_hall_sim import MonteCarloSimulator, SimulationConfig, play_n_games
from monty_hall_sim.config import N_JOBS_ENV_VAR
from monty_hall_sim.metrics import summarize_strategies
from monty_hall_sim.trial import TrialResult


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test without the n_jobs override."""
    monkeypatch.delenv(N_JOBS_ENV_VAR, raising=False)


def test_simulator_run_returns_trials():
    """run() returns one TrialResult per game."""
    config = SimulationConfig(n_trials=25, base_seed=42)
    trials = MonteCarloSimulator(config).run()

    assert len(trials) == 25
    assert all(isinstance(t, TrialResult) for t in trials)


def test_play_n_games_row_counts():
    """N games give N stay rows and N switch rows, paired in trial order."""
    results = play_n_games(50, base_seed=1, print_table=False)

    assert isinstance(results, pd.DataFrame)
    assert list(results.columns) == ["strategy", "outcome"]
    assert len(results) == 100
    assert (results["strategy"] == "stay").sum() == 50
    assert (results["strategy"] == "switch").sum() == 50
    assert results["strategy"].tolist()[:4] == ["stay", "switch", "stay", "switch"]
    assert set(results["outcome"]) <= {"WIN", "LOSE"}


@pytest.mark.parametrize("n", [np.int32(10), np.int64(10)])
def test_play_n_games_numpy_count(n):
    """Numpy integer counts are accepted."""
    assert len(play_n_games(n, base_seed=1, print_table=False)) == 20


def test_play_n_games_default_count():
    """Default batch is 100 games."""
    assert len(play_n_games(print_table=False)) == 200


@pytest.mark.parametrize("n", [0, -3, 1.5, "100"])
def test_play_n_games_invalid_count(n):
    """Non-positive or non-integer counts fail fast."""
    with pytest.raises(ValueError, match="positive integer"):
        play_n_games(n, print_table=False)


def test_play_n_games_prints_table(capsys):
    """The proportions table is printed as a side effect."""
    play_n_games(20, base_seed=3)
    out = capsys.readouterr().out

    assert "stay" in out
    assert "switch" in out
    assert "WIN" in out
    assert "LOSE" in out


def test_play_n_games_quiet(capsys):
    """print_table=False prints nothing."""
    play_n_games(20, base_seed=3, print_table=False)
    assert capsys.readouterr().out == ""


def test_play_n_games_deterministic():
    """Same seed reproduces the same rows."""
    results1 = play_n_games(200, base_seed=42, print_table=False)
    results2 = play_n_games(200, base_seed=42, print_table=False)
    pd.testing.assert_frame_equal(results1, results2)


def test_play_n_games_different_seeds():
    """Different seeds give different rows."""
    results1 = play_n_games(200, base_seed=42, print_table=False)
    results2 = play_n_games(200, base_seed=123, print_table=False)
    assert not results1.equals(results2)


def test_play_n_games_with_config():
    """A config object overrides the keyword arguments."""
    config = SimulationConfig(n_trials=10, base_seed=5)
    assert len(play_n_games(999, config=config, print_table=False)) == 20


def test_parallel_matches_sequential():
    """Worker processes reproduce the sequential results exactly."""
    sequential = SimulationConfig(n_trials=101, base_seed=7, n_jobs=1)
    parallel = SimulationConfig(n_trials=101, base_seed=7, n_jobs=1)
    # bypass cpu clamping so the pool runs even on a single-core host
    parallel.n_jobs = 2

    pd.testing.assert_frame_equal(
        MonteCarloSimulator(sequential).run_frame(),
        MonteCarloSimulator(parallel).run_frame(),
    )


def test_batch_sizes_cover_all_trials():
    """Batches are near-equal and sum to n_trials."""
    simulator = MonteCarloSimulator(SimulationConfig(n_trials=10))
    simulator.config.n_jobs = 3

    assert simulator._calculate_batch_sizes() == [4, 3, 3]


def test_progress_bar(capsys):
    """Showing progress does not change the results."""
    quiet = MonteCarloSimulator(SimulationConfig(n_trials=30, base_seed=9)).run_frame()
    verbose = MonteCarloSimulator(
        SimulationConfig(n_trials=30, base_seed=9, show_progress=True)
    ).run_frame()

    pd.testing.assert_frame_equal(quiet, verbose)


def test_long_run_win_rates():
    """Switching wins about 2/3 of the time and staying about 1/3."""
    results = play_n_games(10_000, base_seed=2024, print_table=False)
    summary = summarize_strategies(results)

    assert summary.loc["switch", "win_rate"] == pytest.approx(2 / 3, abs=0.05)
    assert summary.loc["stay", "win_rate"] == pytest.approx(1 / 3, abs=0.05)


def test_parallel_runs_worker_pool(monkeypatch):
    """n_jobs > 1 goes through the process pool and keeps trial order."""
    config = SimulationConfig(n_trials=11, base_seed=3, n_jobs=1)
    config.n_jobs = 3
    simulator = MonteCarloSimulator(config)

    calls = []
    original = MonteCarloSimulator._run_parallel

    def spy(self, trial_seeds):
        calls.append(len(trial_seeds))
        return original(self, trial_seeds)

    monkeypatch.setattr(MonteCarloSimulator, "_run_parallel", spy)
    trials = simulator.run()

    assert calls == [11]
    assert trials == MonteCarloSimulator(SimulationConfig(n_trials=11, base_seed=3)).run()


def test_trial_seeds_are_independent_sequences():
    """Each trial gets its own spawned seed sequence."""
    simulator = MonteCarloSimulator(SimulationConfig(n_trials=500, base_seed=42))
    seeds = simulator._generate_trial_seeds()

    assert len(seeds) == 500
    assert all(isinstance(s, np.random.SeedSequence) for s in seeds)
    assert len({s.spawn_key for s in seeds}) == 500
    assert [s.spawn_key for s in seeds] == [
        s.spawn_key for s in simulator._generate_trial_seeds()
    ]
