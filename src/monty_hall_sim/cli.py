"""Command Line Interface for the Monty Hall simulator."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import SimulationConfig
from .metrics import proportions_table, summarize_strategies, theoretical_win_rates
from .simulator import MonteCarloSimulator


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="monty-hall-sim",
        description="Monty Hall stay/switch simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play 100 games and print the proportions table
  monty-hall-sim

  # Reproducible run of 10,000 games on four processes
  monty-hall-sim --n-trials 10000 --seed 123 --n-jobs 4 --summary

  # Generate sample config
  monty-hall-sim --generate-config monty_hall.toml
        """
    )

    # Configuration
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file (TOML or YAML)"
    )

    # Simulation parameters
    parser.add_argument(
        "--n-trials", "-n",
        type=int,
        help="Number of games to play (default: 100)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducibility"
    )
    parser.add_argument(
        "--n-jobs",
        type=int,
        help="Number of worker processes (-1 for all CPUs)"
    )
    parser.add_argument(
        "--decimals",
        type=int,
        help="Decimal places of the proportions table (default: 2)"
    )

    # Output
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Also print win rates with 95%% intervals next to the exact values"
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar (single process only)"
    )

    # Utility commands
    parser.add_argument(
        "--generate-config",
        type=Path,
        help="Generate sample configuration file and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def generate_sample_config(config_path: Path) -> None:
    """Generate a sample configuration file.

    Args:
        config_path: Path to save the configuration file
    """
    config_content = """# Monty Hall simulation configuration

[simulation]
n_trials = 10000        # Number of games to play
base_seed = 42          # Random seed for reproducibility
n_jobs = 1              # Worker processes (or set MONTY_HALL_SIM_N_JOBS env var)
decimals = 2            # Precision of the proportions table
show_progress = false   # Progress bar, single process only
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(config_content)

    print(f"Sample configuration generated: {config_path}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Arguments to parse instead of ``sys.argv[1:]``

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        if args.generate_config:
            generate_sample_config(args.generate_config)
            return 0

        if args.config:
            if not args.config.exists():
                parser.error(f"Config file does not exist: {args.config}")

            logger.info(f"Loading configuration from {args.config}")
            config_kwargs = SimulationConfig.from_file(args.config).to_dict()
        else:
            config_kwargs = {}

        # Command line arguments override the config file
        if args.n_trials is not None:
            config_kwargs["n_trials"] = args.n_trials
        if args.seed is not None:
            config_kwargs["base_seed"] = args.seed
        if args.n_jobs is not None:
            config_kwargs["n_jobs"] = args.n_jobs
        if args.decimals is not None:
            config_kwargs["decimals"] = args.decimals
        if args.progress:
            config_kwargs["show_progress"] = True

        config = SimulationConfig(**config_kwargs)
        logger.info(f"Simulation configuration: {config}")

        results = MonteCarloSimulator(config).run_frame()

        print("\nOutcome proportions by strategy:")
        print(proportions_table(results, decimals=config.decimals))

        if args.summary:
            summary = summarize_strategies(results)
            summary["theoretical"] = summary.index.map(theoretical_win_rates())
            print("\nWin rates:")
            print(summary.round(config.decimals + 2))

        return 0

    except KeyboardInterrupt:
        logger.info("Simulation interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Simulation failed: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
