#!/usr/bin/env python3
"""Simulation entry point for goblin-sim."""

from __future__ import annotations

import argparse

from goblin_sim.simulation.runner import run
from goblin_sim.utils.config import load_config
from goblin_sim.utils.logging import ExperimentLogger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Simulate a goblin population earning, being born and dying",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python scripts/simulate.py
  python scripts/simulate.py --scenario configs/scenarios/uniform.yaml
  python scripts/simulate.py --scenario configs/scenarios/rich_get_richer.yaml --set model.weight=bigint
  python scripts/simulate.py --set model.max_steps=10000 --set model.p_death=0.49
  python scripts/simulate.py --set mlflow.enabled=true
""",
    )
    parser.add_argument(
        "--config",
        default="configs/default.yaml",
        help="Path to base config (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--scenario",
        action="append",
        default=[],
        dest="scenarios",
        help="Scenario config merged over the base (repeatable, applied in order)",
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        dest="overrides",
        metavar="KEY=VALUE",
        help="Override config values (e.g. --set model.p_death=0.4)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Also print the gold of every goblin"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    config = load_config(
        default_path=args.config,
        scenario_paths=args.scenarios,
        overrides=args.overrides,
    )

    print(f"Steps: {config['model']['max_steps']}")
    print(f"Income: {config['model'].get('rnd_income', 'weighted')}")
    print(f"Death: {config['model'].get('rnd_death', 'uniform')}")

    logger = ExperimentLogger.from_config(config)
    if logger is not None:
        with logger:
            report = run(config, logger)
    else:
        report = run(config)

    print("---")
    report.print(verbose=args.verbose)


if __name__ == "__main__":
    main()
