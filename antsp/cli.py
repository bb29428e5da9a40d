from __future__ import annotations
import argparse
import itertools
import logging
from typing import List, Optional

from .errors import ConfigurationError
from .graph import load_matrix
from .log import get_logger
from .solver import ACOConfig, AntTspSolver, tour_to_string


def build_argparser() -> argparse.ArgumentParser:
    d = ACOConfig()
    ap = argparse.ArgumentParser(prog="antsp", description="Ant System TSP solver for a full adjacency matrix.")
    ap.add_argument("matrix", help="text file, one matrix row per line, columns separated by whitespace")
    ap.add_argument("--rounds", type=int, default=1, help="solve() calls to run; 0 repeats until interrupted")
    ap.add_argument("--iters", type=int, default=d.max_iterations, help="iterations per round")
    ap.add_argument("--c", type=float, default=d.c, help="initial trail value")
    ap.add_argument("--alpha", type=float, default=d.alpha, help="trail preference")
    ap.add_argument("--beta", type=float, default=d.beta, help="greedy preference")
    ap.add_argument("--evaporation", type=float, default=d.evaporation, help="fraction of trail kept per iteration")
    ap.add_argument("--Q", type=float, default=d.Q, help="deposit scale")
    ap.add_argument("--ant-factor", type=float, default=d.num_ant_factor, help="ants = floor(n * factor)")
    ap.add_argument("--pr", type=float, default=d.pr, help="probability of a random next town")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--fast-pow", action="store_true", help="use the approximate bit-trick power function")
    ap.add_argument("--workers", type=int, default=1, help="threads for tour construction")
    ap.add_argument("--log-file", default=None)
    ap.add_argument("--verbose", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    logger = get_logger("antsp", level=level, logfile=args.log_file)
    logger.setLevel(level)

    cfg = ACOConfig(c=args.c, alpha=args.alpha, beta=args.beta, evaporation=args.evaporation,
                    Q=args.Q, num_ant_factor=args.ant_factor, pr=args.pr,
                    max_iterations=args.iters, seed=args.seed,
                    fast_pow=args.fast_pow, n_workers=args.workers)
    try:
        solver = AntTspSolver(load_matrix(args.matrix), cfg)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Error reading graph: {e}")
        return 1

    rounds = itertools.count() if args.rounds == 0 else range(args.rounds)
    try:
        for _ in rounds:
            tour = solver.solve()
            logger.info(f"Best tour length: {solver.true_best_length}")
            logger.info(f"Best tour: {tour_to_string(tour)}")
    except KeyboardInterrupt:
        logger.warning("interrupted")
        if solver.best_tour is not None:
            logger.info(f"Best tour length: {solver.true_best_length}")
            logger.info(f"Best tour: {tour_to_string(solver.best_tour)}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
