# run_experiments.py
import os, json, argparse, logging
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from designaco import SyntheticDesign, build_parameters, run_trial
from designaco.experiments import run_repeated_trials, run_parameter_sweep

OUTDIR = os.path.dirname(os.path.abspath(__file__))
VARIANTS = ["SIMPLE_ACO", "MMAS"]


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def build_config(name, n_iterations=150, elitism=False, antipheromone=False):
    if name == "SIMPLE_ACO":
        return build_parameters(name, number_of_iterations=n_iterations, evaporation_elitism=elitism,
                                simple_aco_subtractive_antipheromone=antipheromone,
                                antipheromone_phase_percentage=30 if antipheromone else 0)
    if name == "MMAS":
        return build_parameters(name, number_of_iterations=n_iterations, evaporation_elitism=elitism,
                                mmas_antipheromone=antipheromone,
                                antipheromone_phase_percentage=30 if antipheromone else 0,
                                pheromone_strength="TRIPLE", antipheromone_strength="DOUBLE")
    raise ValueError(name)


def plot_scatter(details_by_algo, save_path):
    plt.figure()
    algos = list(details_by_algo.keys())
    for i, algo in enumerate(algos, start=1):
        means = [m for (m, h, t) in details_by_algo[algo]]
        x = np.random.normal(loc=i, scale=0.03, size=len(means))
        plt.plot(x, means, "o")
    plt.xticks(range(1, len(algos) + 1), algos)
    plt.ylabel("Final mean pheromone")
    plt.title("Final mean pheromone across runs")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_convergence(design, algo_name, params, n_ants, save_path):
    res = run_trial(design, params, n_ants=n_ants, seed=7)
    df = pd.DataFrame.from_records(res.history)
    plt.figure()
    for col in ("lowest", "mean", "highest"):
        plt.plot(df["iteration"], df[col], label=col)
    plt.yscale("log")
    plt.xlabel("Iteration")
    plt.ylabel("Pheromone")
    plt.title(f"{algo_name} pheromone range")
    plt.legend()
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()
    return df


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--methods", type=int, default=12)
    ap.add_argument("--attributes", type=int, default=8)
    ap.add_argument("--classes", type=int, default=4)
    ap.add_argument("--runs", type=int, default=5)
    ap.add_argument("--iters", type=int, default=150)
    ap.add_argument("--ants", type=int, default=25)
    ap.add_argument("--elitism", action="store_true", help="use elitist evaporation")
    ap.add_argument("--antipheromone", action="store_true", help="lay antipheromone in the first 30%% of the run")
    ap.add_argument("--outdir", default=OUTDIR)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    design = SyntheticDesign(args.methods, args.attributes, args.classes, name="demo")
    configs = [(name, build_config(name, n_iterations=args.iters, elitism=args.elitism,
                                   antipheromone=args.antipheromone)) for name in VARIANTS]

    # repeated trials
    records = []
    details_by_algo = {}
    for name, params in configs:
        stats, details = run_repeated_trials(design, params, n_runs=args.runs, n_ants=args.ants)
        print(name, json.dumps(stats, indent=2))
        records.append({"algo": name, **stats})
        details_by_algo[name] = details

    # summary CSV + scatter plot
    df_summary = pd.DataFrame.from_records(records)
    summary_csv = os.path.join(args.outdir, "results_summary.csv")
    df_summary.to_csv(ensure(summary_csv), index=False)
    plot_scatter(details_by_algo, os.path.join(args.outdir, "results_distribution.png"))

    # convergence plots (per variant)
    for name, params in configs:
        conv_png = os.path.join(args.outdir, f"convergence_{name}.png")
        df = plot_convergence(design, name, params, args.ants, conv_png)
        df.to_csv(os.path.join(args.outdir, f"history_{name}.csv"), index=False)
        print("Saved:", conv_png)

    # parameter sweep (MMAS example)
    grid = {"rho": [0.05, 0.1, 0.3], "mu": [1.0, 3.0], "evaporation_elitism": [False, True]}
    rows = run_parameter_sweep(
        design, grid, base_params=configs[-1][1], n_runs=3, n_ants=args.ants, base_seed=500,
        csv_path=os.path.join(args.outdir, "mmas_grid.csv")
    )
    print("Grid search evaluated:", len(rows))


if __name__ == "__main__":
    main()
