import os, argparse
import matplotlib.pyplot as plt
import imageio

from antsp import TSPInstance, ACOConfig, AntTspSolver


def visualize(inst, cfg, outdir, step=5):
    os.makedirs(outdir, exist_ok=True)
    solver = AntTspSolver(inst.distance_matrix(), cfg)
    solver.solve()

    coords = inst.coords
    cx = [c[0] for c in coords]
    cy = [c[1] for c in coords]
    frames = []
    iters = list(range(0, len(solver.history_best_tours), step))
    for it in iters:
        tour = solver.history_best_tours[it]
        L = solver.history_best_lengths[it]
        xs = [coords[i][0] for i in tour] + [coords[tour[0]][0]]
        ys = [coords[i][1] for i in tour] + [coords[tour[0]][1]]

        plt.figure(figsize=(5, 5))
        plt.plot(cx, cy, "o")
        plt.plot(xs, ys, "-")
        plt.title(f"best-so-far\niter={it+1}  length={L:.2f}")
        plt.axis("equal")
        plt.tight_layout()
        frame_path = os.path.join(outdir, f"frame_{it:04d}.png")
        plt.savefig(frame_path, dpi=120, bbox_inches="tight")
        plt.close()
        frames.append(frame_path)

    gif_path = os.path.join(outdir, "convergence.gif")
    with imageio.get_writer(gif_path, mode="I", duration=0.6) as writer:
        for fp in frames:
            writer.append_data(imageio.v2.imread(fp))

    print("Saved:", gif_path)


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--n", type=int, default=30, help="number of towns")
    p.add_argument("--iters", type=int, default=200)
    p.add_argument("--square", type=float, default=100.0)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--outdir", default="viz")
    p.add_argument("--step", type=int, default=5, help="frame every k iterations")
    args = p.parse_args()

    inst = TSPInstance.random_euclidean(n=args.n, seed=args.seed, square_size=args.square, name=f"viz{args.n}")
    cfg = ACOConfig(max_iterations=args.iters, seed=args.seed)
    visualize(inst, cfg, args.outdir, step=args.step)


if __name__ == "__main__":
    main()
