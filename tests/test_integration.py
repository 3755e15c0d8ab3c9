"""Tests for package imports and integration."""


def test_package_imports():
    """Test that main package components can be imported."""
    from monty_hall_sim import (
        change_door,
        create_game,
        determine_winner,
        open_goat_door,
        play_game,
        play_n_games,
        select_door,
    )

    assert all(
        callable(f)
        for f in (
            create_game,
            select_door,
            open_goat_door,
            change_door,
            determine_winner,
            play_game,
            play_n_games,
        )
    )


def test_integration_workflow():
    """Test complete workflow from config to simulation to summary."""
    from monty_hall_sim import (
        MonteCarloSimulator,
        SimulationConfig,
        proportions_table,
        summarize_strategies,
        tabulate,
    )

    config = SimulationConfig(n_trials=300, base_seed=42, n_jobs=1)
    results = MonteCarloSimulator(config).run_frame()

    counts = tabulate(results)
    assert counts.sum(axis=1).tolist() == [300, 300]

    # stay wins exactly when switch loses
    assert counts.loc["stay", "WIN"] == counts.loc["switch", "LOSE"]

    table = proportions_table(results, decimals=config.decimals)
    assert list(table.index) == ["stay", "switch"]

    summary = summarize_strategies(results)
    assert summary.loc["switch", "win_rate"] > summary.loc["stay", "win_rate"]
