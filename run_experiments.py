# run_experiments.py
import os, json, argparse
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from antsp import TSPInstance, ACOConfig, AntTspSolver
from antsp.experiments import run_repeated_trials, run_parameter_sweep

OUTDIR = os.path.dirname(os.path.abspath(__file__))


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def plot_scatter(details, save_path):
    plt.figure()
    lengths = [L for (L, t, tour) in details]
    x = np.random.normal(loc=1, scale=0.03, size=len(lengths))
    plt.plot(x, lengths, "o")
    plt.xticks([1], ["AS"])
    plt.ylabel("Best tour length")
    plt.title("Best lengths across runs")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_convergence(inst, cfg, save_path, rounds=1):
    solver = AntTspSolver(inst.distance_matrix(), cfg)
    lengths = []
    for _ in range(rounds):
        solver.solve()
        lengths.extend(solver.history_best_lengths)
    plt.figure()
    plt.plot(lengths)
    plt.xlabel("Iteration")
    plt.ylabel("Best-so-far tour length")
    plt.title(f"Convergence over {rounds} solve() call(s)")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--n", type=int, default=30)
    ap.add_argument("--square", type=float, default=100.0)
    ap.add_argument("--runs", type=int, default=5)
    ap.add_argument("--iters", type=int, default=300)
    ap.add_argument("--rounds", type=int, default=2, help="solve() calls in the convergence plot")
    ap.add_argument("--sweep", action="store_true", help="also run an alpha/beta/evaporation grid")
    args = ap.parse_args()

    inst = TSPInstance.random_euclidean(n=args.n, seed=123, square_size=args.square, name=f"demo{args.n}")
    D = inst.distance_matrix()
    cfg = ACOConfig(max_iterations=args.iters)

    stats, details = run_repeated_trials(D, cfg, n_runs=args.runs)
    print(json.dumps(stats, indent=2))

    df_summary = pd.DataFrame.from_records([{"instance": inst.name, **stats}])
    df_summary.to_csv(os.path.join(OUTDIR, "results_summary.csv"), index=False)
    plot_scatter(details, os.path.join(OUTDIR, "results_distribution.png"))
    plot_convergence(inst, ACOConfig(max_iterations=args.iters, seed=7),
                     os.path.join(OUTDIR, "convergence.png"), rounds=args.rounds)

    if args.sweep:
        grid = {"alpha": [0.5, 1.0, 1.5], "beta": [2.0, 5.0], "evaporation": [0.3, 0.5, 0.7]}
        rows = run_parameter_sweep(
            D, grid, base_cfg=cfg, n_runs=3, base_seed=500,
            csv_path=os.path.join(OUTDIR, "sweep.csv")
        )
        df = pd.DataFrame.from_records(rows).sort_values("mean_length")
        print(df.head(5).to_string(index=False))


if __name__ == "__main__":
    main()
