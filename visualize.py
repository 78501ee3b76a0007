import os, argparse
import matplotlib.pyplot as plt
import imageio

from designaco import SyntheticDesign, build_parameters, run_trial


def build_config(algo, n_iterations=120, elitism=False):
    if algo in ("SIMPLE_ACO", "MMAS"):
        return build_parameters(algo, number_of_iterations=n_iterations, evaporation_elitism=elitism)
    raise ValueError("Unsupported algo")


def visualize(design, algo_name, params, outdir, n_ants=25, step=5, seed=321):
    os.makedirs(outdir, exist_ok=True)
    res = run_trial(design, params, n_ants=n_ants, seed=seed, snapshot_every=step)

    frames = []
    for it, table in res.snapshots:
        plt.figure(figsize=(5, 5))
        plt.imshow(table, cmap="viridis", interpolation="nearest")
        plt.colorbar(fraction=0.046, pad=0.04)
        plt.title(f"{algo_name} pheromone\niter={it+1}  max={table.max():.3g}")
        plt.tight_layout()
        frame_path = os.path.join(outdir, f"{algo_name}_frame_{it:03d}.png")
        plt.savefig(frame_path, dpi=120, bbox_inches="tight")
        plt.close()
        frames.append(frame_path)

    gif_path = os.path.join(outdir, f"{algo_name}_pheromone.gif")
    with imageio.get_writer(gif_path, mode="I", duration=0.6) as writer:
        for fp in frames:
            writer.append_data(imageio.v2.imread(fp))

    print("Saved:", gif_path)


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--algo", choices=["SIMPLE_ACO", "MMAS"], default="MMAS")
    p.add_argument("--methods", type=int, default=12)
    p.add_argument("--attributes", type=int, default=8)
    p.add_argument("--classes", type=int, default=4)
    p.add_argument("--iters", type=int, default=120)
    p.add_argument("--ants", type=int, default=25)
    p.add_argument("--elitism", action="store_true")
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--outdir", default="viz")
    p.add_argument("--step", type=int, default=5, help="frame every k iterations")
    args = p.parse_args()

    design = SyntheticDesign(args.methods, args.attributes, args.classes, name="viz")
    params = build_config(args.algo, n_iterations=args.iters, elitism=args.elitism)
    visualize(design, args.algo, params, args.outdir, n_ants=args.ants, step=args.step, seed=args.seed)


if __name__ == "__main__":
    main()
