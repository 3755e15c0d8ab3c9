"""Aggregation of trial outcomes into strategy tables."""

from collections.abc import Iterable, Mapping

import numpy as np
import pandas as pd

from .game import Outcome, Strategy

STRATEGIES = [s.value for s in Strategy]
OUTCOMES = [Outcome.LOSE.value, Outcome.WIN.value]
RESULT_COLUMNS = ["strategy", "outcome"]

# Two-sided 95% normal quantile
Z_95 = 1.959963984540054


def results_frame(rows: Iterable[Mapping[str, str]]) -> pd.DataFrame:
    """Build the strategy/outcome frame from trial rows, keeping their order."""
    return pd.DataFrame(list(rows), columns=RESULT_COLUMNS)


def _check_results(results: pd.DataFrame) -> None:
    missing = [col for col in RESULT_COLUMNS if col not in results.columns]
    if missing:
        raise ValueError(f"Results are missing columns: {missing}")
    if results.empty:
        raise ValueError("Cannot aggregate an empty set of results")


def tabulate(results: pd.DataFrame) -> pd.DataFrame:
    """Cross-tabulate strategy × outcome counts.

    Both strategies and both outcomes are always present; absent
    combinations count as zero.
    """
    _check_results(results)
    counts = pd.crosstab(results["strategy"], results["outcome"])
    counts = counts.reindex(index=STRATEGIES, columns=OUTCOMES, fill_value=0)
    return counts.rename_axis(index="strategy", columns="outcome").astype(int)


def proportions_table(results: pd.DataFrame, decimals: int = 2) -> pd.DataFrame:
    """Row-normalised outcome proportions per strategy, rounded for display.

    Args:
        results: Frame with ``strategy`` and ``outcome`` columns
        decimals: Number of decimal places to keep

    Returns:
        Frame indexed by strategy with LOSE/WIN columns; each non-empty row sums to 1
        before rounding. A strategy with no trials shows zeros.
    """
    counts = tabulate(results)
    totals = counts.sum(axis=1)
    proportions = counts.div(totals.where(totals > 0), axis=0).fillna(0.0)
    return proportions.round(decimals)


def summarize_strategies(results: pd.DataFrame) -> pd.DataFrame:
    """Compute win statistics for each strategy.

    Returns:
        Frame indexed by strategy with columns:
        - trials: games played with the strategy
        - wins: games won
        - win_rate: wins / trials
        - std_error: binomial standard error of the win rate
        - ci_lower, ci_upper: normal-approximation 95% interval, clipped to [0, 1]
    """
    counts = tabulate(results)
    trials = counts.sum(axis=1)
    wins = counts[Outcome.WIN.value]

    win_rate = (wins / trials.where(trials > 0)).fillna(0.0)
    std_error = np.sqrt(win_rate * (1 - win_rate) / trials.where(trials > 0)).fillna(0.0)

    return pd.DataFrame(
        {
            "trials": trials,
            "wins": wins,
            "win_rate": win_rate,
            "std_error": std_error,
            "ci_lower": (win_rate - Z_95 * std_error).clip(lower=0.0),
            "ci_upper": (win_rate + Z_95 * std_error).clip(upper=1.0),
        }
    )


def theoretical_win_rates() -> dict[str, float]:
    """Exact win probabilities of each strategy."""
    return {Strategy.STAY.value: 1 / 3, Strategy.SWITCH.value: 2 / 3}
