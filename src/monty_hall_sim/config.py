"""Configuration handling for Monty Hall simulations."""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

try:
    import yaml
    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False

N_JOBS_ENV_VAR = "MONTY_HALL_SIM_N_JOBS"

CONFIG_KEYS = ("n_trials", "base_seed", "n_jobs", "decimals", "show_progress")


def check_n_trials(n_trials: Any) -> int:
    """Validate a trial count.

    Raises:
        ValueError: If n_trials is not a positive integer
    """
    if isinstance(n_trials, bool) or not isinstance(n_trials, (int, np.integer)):
        raise ValueError(f"Number of trials must be a positive integer, got {n_trials!r}")
    if n_trials < 1:
        raise ValueError(f"Number of trials must be a positive integer, got {n_trials}")
    return int(n_trials)


class SimulationConfig:
    """Configuration class for Monty Hall batch simulations."""

    def __init__(
        self,
        n_trials: int = 100,
        base_seed: Optional[int] = None,
        n_jobs: Optional[int] = None,
        decimals: int = 2,
        show_progress: bool = False,
    ):
        """Initialize simulation configuration.

        Args:
            n_trials: Number of games to play
            base_seed: Base random seed for reproducibility (None draws fresh entropy)
            n_jobs: Number of worker processes (respects MONTY_HALL_SIM_N_JOBS env var).
                Set to -1 to use all CPUs.
            decimals: Rounding precision of the proportions table
            show_progress: Show a tqdm progress bar (disabled when n_jobs > 1)
        """
        self.n_trials = check_n_trials(n_trials)
        self.base_seed = base_seed

        # Handle n_jobs with environment variable fallback
        if n_jobs is None:
            env_jobs = os.getenv(N_JOBS_ENV_VAR)
            if env_jobs:
                try:
                    n_jobs = int(env_jobs)
                except ValueError:
                    n_jobs = 1
            else:
                n_jobs = 1

        max_cpus = os.cpu_count() or 1
        if n_jobs == -1:
            n_jobs = max_cpus
        self.n_jobs = max(1, min(n_jobs, max_cpus))

        if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
            raise ValueError(f"decimals must be a non-negative integer, got {decimals!r}")
        self.decimals = decimals

        # Interleaved bars from several workers are unreadable
        self.show_progress = show_progress and self.n_jobs == 1

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "SimulationConfig":
        """Load configuration from a TOML or YAML file.

        Args:
            config_path: Path to configuration file

        Returns:
            SimulationConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If unsupported file format or invalid configuration
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        config_data = {}

        if config_path.suffix.lower() == ".toml":
            with open(config_path, "rb") as f:
                config_data = tomllib.load(f)
        elif config_path.suffix.lower() in [".yaml", ".yml"]:
            if not YAML_AVAILABLE:
                raise ValueError(
                    "YAML support not available. Install with: pip install monty-hall-sim[yaml]"
                )
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        else:
            raise ValueError(
                f"Unsupported configuration file format: {config_path.suffix}. "
                "Supported formats: .toml, .yaml, .yml"
            )

        if not isinstance(config_data, dict):
            raise ValueError(
                f"Configuration file must contain a mapping, got {type(config_data).__name__}"
            )

        # Flatten the optional [simulation] section
        simulation_config = config_data.pop("simulation", None) or {}
        if not isinstance(simulation_config, dict):
            raise ValueError("The 'simulation' section must be a mapping")
        config_data.update(simulation_config)

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "SimulationConfig":
        """Create configuration from dictionary.

        Raises:
            ValueError: If the dictionary holds keys that are not configuration options
        """
        unknown = sorted(set(config_dict) - set(CONFIG_KEYS))
        if unknown:
            raise ValueError(
                f"Unknown configuration options: {unknown}. Valid options: {list(CONFIG_KEYS)}"
            )
        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "n_trials": self.n_trials,
            "base_seed": self.base_seed,
            "n_jobs": self.n_jobs,
            "decimals": self.decimals,
            "show_progress": self.show_progress,
        }

    def __repr__(self) -> str:
        return (
            f"SimulationConfig(n_trials={self.n_trials}, base_seed={self.base_seed}, "
            f"n_jobs={self.n_jobs}, decimals={self.decimals})"
        )
