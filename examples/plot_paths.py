"""
Plot the shortest path of every state space between two configurations.

Run:
    python -m examples.plot_paths --goal 4 3 1.57

If you don't have matplotlib installed, install it with:
    pip install matplotlib
"""

import argparse
from pathlib import Path

from pathsteer import NoAdmissiblePathError, State, StateSpaceKind, SteeringParams, make_state_space

try:
    import matplotlib.pyplot as plt
except ImportError:
    plt = None


def parse_args():
    parser = argparse.ArgumentParser(description="Plot steering paths between two configurations.")
    parser.add_argument("--start", type=float, nargs=3, default=[0.0, 0.0, 0.0], metavar=("X", "Y", "THETA"))
    parser.add_argument("--goal", type=float, nargs=3, default=[4.0, 3.0, 1.57], metavar=("X", "Y", "THETA"))
    parser.add_argument("--kappa-max", type=float, default=1.0)
    parser.add_argument("--sigma-max", type=float, default=1.0)
    parser.add_argument("--discretization", type=float, default=0.05)
    return parser.parse_args()


def main():
    args = parse_args()
    params = SteeringParams(args.kappa_max, args.sigma_max, args.discretization)
    start = State(*args.start)
    goal = State(*args.goal)

    paths = {}
    for kind in StateSpaceKind:
        state_space = make_state_space(kind, params)
        try:
            paths[kind.value] = state_space.path(start, goal)
        except NoAdmissiblePathError as exc:
            print(f"{kind.value}: {exc}")
            continue
        print(f"{kind.value:>20}: length {state_space.distance(start, goal):.3f}")

    if plt is None:
        print("matplotlib not installed; skipping plot.")
        return

    fig, (ax_xy, ax_kappa) = plt.subplots(1, 2, figsize=(13, 5))
    for name, path in paths.items():
        ax_xy.plot([s.x for s in path], [s.y for s in path], lw=1.2, label=name)
        ax_kappa.plot([s.kappa for s in path], lw=1.0, label=name)
    ax_xy.set_aspect("equal")
    ax_xy.set_title("paths")
    ax_kappa.set_title("curvature per sample")
    ax_xy.legend(loc="best", fontsize="small")
    out_dir = Path(__file__).resolve().parent / "outputs"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / "paths.png"
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    print(f"Saved: {out_path}")
    plt.show()


if __name__ == "__main__":
    main()
