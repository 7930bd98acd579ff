#!/usr/bin/env python3
"""
Franke Function Optimization Example

Creates a SigOpt experiment over the unit square and runs a
suggestion/observation loop against the Franke test function.

Usage:
    # Token from SIGOPT_API_TOKEN (or .env), 20 rounds
    python run_franke_example.py

    # Shorter run with a custom experiment name
    python run_franke_example.py --iterations 5 --name "Franke smoke test"

    # Settings from a YAML file
    python run_franke_example.py --config config/sigopt.yaml
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from sigopt_client import ClientConfig, SigOptClient, SigOptError, franke
from sigopt_client.config import reload_settings
from sigopt_client.observability import configure_logging, get_logger


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Optimize the Franke function with SigOpt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_franke_example.py --iterations 5
  python run_franke_example.py --config config/sigopt.yaml
        """
    )

    parser.add_argument(
        "--iterations", "-n",
        type=int,
        default=20,
        help="Number of suggestion/observation rounds (default: 20)"
    )

    parser.add_argument(
        "--name",
        type=str,
        default="Franke Optimization (Python)",
        help="Experiment name"
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to settings YAML file"
    )

    return parser.parse_args()


def run(client: SigOptClient, name: str, iterations: int) -> dict:
    """
    Run the optimization loop.

    Args:
        client: Connected SigOpt client.
        name: Experiment name.
        iterations: Number of rounds.

    Returns:
        Best observation as {"suggestion", "assignments", "value"}.
    """
    logger = get_logger("sigopt_client.example")

    experiment = client.create_experiment({
        "name": name,
        "parameters": [
            {"name": "x", "type": "double", "bounds": {"min": 0.0, "max": 1.0}},
            {"name": "y", "type": "double", "bounds": {"min": 0.0, "max": 1.0}},
        ],
    })
    experiment_id = experiment["id"]
    logger.info(f"Created experiment {experiment_id}", name=name)

    best = None
    for i in range(iterations):
        suggestion = client.create_suggestion(experiment_id)
        assignments = suggestion["assignments"]
        value = franke(assignments["x"], assignments["y"])

        client.create_observation(experiment_id, {
            "suggestion": suggestion["id"],
            "value": value,
        })
        logger.info(
            f"Round {i + 1}/{iterations}: value={value:.6f}",
            suggestion=suggestion["id"],
            x=assignments["x"],
            y=assignments["y"]
        )

        if best is None or value > best["value"]:
            best = {"suggestion": suggestion["id"], "assignments": assignments, "value": value}

    return best


def main():
    """Main entry point."""
    load_dotenv()
    args = parse_args()

    settings = reload_settings(args.config)
    configure_logging(level=settings.logging.level, format_type=settings.logging.format)

    try:
        with SigOptClient(ClientConfig.from_settings(settings)) as client:
            best = run(client, args.name, args.iterations)
    except SigOptError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    if best is None:
        print("\nNo observations made.")
        return 0

    print("\n=== Best Observation ===")
    print(f"Value: {best['value']:.6f}")
    for key, value in best["assignments"].items():
        print(f"  {key}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
