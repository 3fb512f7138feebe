"""
Time every state space on the same random start/goal pairs.

Run:
    python -m examples.run_benchmark --samples 1000 --operation path

One CSV per state space is written to examples/outputs/<kind>_stats.csv.
"""

import argparse
import logging
from pathlib import Path

import numpy as np
from tqdm import tqdm

from pathsteer import StateSpaceKind, SteeringParams, make_state_space
from pathsteer.benchmark import OPERATIONS, random_pairs, run_benchmark, summarize, write_stats


def parse_args():
    parser = argparse.ArgumentParser(description="Benchmark the steering functions on random queries.")
    parser.add_argument("--samples", type=int, default=1000, help="Number of random start/goal pairs.")
    parser.add_argument("--seed", type=int, default=0, help="Seed of the random generator.")
    parser.add_argument("--operation", choices=OPERATIONS, default="distance", help="Query to time.")
    parser.add_argument(
        "--kinds",
        nargs="+",
        choices=[k.value for k in StateSpaceKind],
        default=[k.value for k in StateSpaceKind],
        help="State spaces to benchmark.",
    )
    parser.add_argument("--kappa-max", type=float, default=1.0)
    parser.add_argument("--sigma-max", type=float, default=1.0)
    parser.add_argument("--discretization", type=float, default=0.1)
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path(__file__).resolve().parent / "outputs",
        help="Folder receiving the CSV files.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log the selected words.")
    return parser.parse_args()


def main():
    args = parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    params = SteeringParams(args.kappa_max, args.sigma_max, args.discretization)
    rng = np.random.default_rng(args.seed)
    starts, goals = random_pairs(rng, args.samples)

    for kind_name in args.kinds:
        state_space = make_state_space(StateSpaceKind(kind_name), params)
        stats = run_benchmark(
            state_space,
            starts,
            goals,
            args.operation,
            progress=lambda pairs: tqdm(pairs, total=len(starts), desc=kind_name, unit="query"),
        )
        mean, std = summarize(stats)
        csv_path = write_stats(args.out_dir / f"{kind_name}_stats.csv", stats)
        print(f"{kind_name:>20}: {args.operation} {mean * 1e6:9.1f} +/- {std * 1e6:8.1f} us  -> {csv_path}")


if __name__ == "__main__":
    main()
