from __future__ import annotations
import math
import random
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

from .ant import Ant, Colony
from .errors import ConfigurationError
from .fast_pow import power_function
from .graph import DistanceMatrix
from .log import get_logger
from .trails import TrailMatrix
from .transition import TransitionRule


@dataclass
class ACOConfig:
    c: float = 1.0                # initial trail on every edge
    alpha: float = 1.0            # trail preference
    beta: float = 5.0             # greedy (inverse distance) preference
    evaporation: float = 0.5      # fraction of trail retained each iteration
    Q: float = 500.0              # deposit scale, each ant adds Q / tour length
    num_ant_factor: float = 0.8   # ants = floor(n * factor)
    pr: float = 0.01              # probability of a purely random next town
    max_iterations: int = 2000    # iterations per solve() call
    seed: Optional[int] = None
    fast_pow: bool = False        # bit-trick pow instead of numpy.power
    # construction threads; the per-step numpy calls are small and hold the
    # GIL, so extra workers add overhead rather than speed
    n_workers: int = 1

    def validate(self) -> "ACOConfig":
        checks = [
            (self.c > 0, f"c must be > 0, got {self.c}"),
            (self.alpha >= 0, f"alpha must be >= 0, got {self.alpha}"),
            (self.beta >= 0, f"beta must be >= 0, got {self.beta}"),
            (0.0 <= self.evaporation <= 1.0, f"evaporation must be in [0, 1], got {self.evaporation}"),
            (self.Q >= 0, f"Q must be >= 0, got {self.Q}"),
            (self.num_ant_factor > 0, f"num_ant_factor must be > 0, got {self.num_ant_factor}"),
            (0.0 <= self.pr <= 1.0, f"pr must be in [0, 1], got {self.pr}"),
            (self.max_iterations >= 0, f"max_iterations must be >= 0, got {self.max_iterations}"),
            (self.n_workers >= 1, f"n_workers must be >= 1, got {self.n_workers}"),
        ]
        for ok, msg in checks:
            if not ok:
                raise ConfigurationError(msg)
        return self

    def n_ants(self, n_towns: int) -> int:
        return int(math.floor(n_towns * self.num_ant_factor))


@dataclass
class ACOResult:
    best_tour: List[int]
    best_length: float
    history_best_lengths: List[float]
    config: ACOConfig
    elapsed_sec: float
    iterations: int = 0


class AntTspSolver:
    """Ant System for the TSP.

    The best tour is solver state: it is set on the first iteration ever run
    and only replaced by a strictly shorter tour afterwards, across any number
    of ``solve()`` calls. Build a new solver to forget it. The trail matrix,
    by contrast, is reset to ``c`` at the start of every ``solve()``.
    """

    def __init__(self, dist_matrix, cfg: Optional[ACOConfig] = None, logger_name: str = "antsp"):
        self.cfg = (cfg or ACOConfig()).validate()
        self.graph = dist_matrix if isinstance(dist_matrix, DistanceMatrix) else DistanceMatrix(dist_matrix)
        self.n = self.graph.n
        self.m = self.cfg.n_ants(self.n)
        if self.m <= 0:
            raise ConfigurationError(
                f"num_ant_factor={self.cfg.num_ant_factor} gives no ants for {self.n} towns")

        self.rng = random.Random(self.cfg.seed)
        self.logger = get_logger(logger_name)

        self.trails = TrailMatrix(self.graph, power_function(self.cfg.fast_pow))
        self.rule = TransitionRule(self.trails, self.cfg.alpha, self.cfg.beta, self.cfg.pr)
        self.colony = Colony(self.m, self.n)

        self.best_tour: Optional[List[int]] = None
        self.best_tour_length: Optional[float] = None  # offset weights
        # per-solve() history, true lengths
        self.history_best_lengths: List[float] = []
        self.history_best_tours: List[List[int]] = []
        self.iterations_run = 0
        self._pool: Optional[ThreadPoolExecutor] = None

    @property
    def true_best_length(self) -> Optional[float]:
        if self.best_tour_length is None:
            return None
        return self.graph.true_length(self.best_tour_length)

    # -- one iteration ------------------------------------------------------

    def _setup_ants(self) -> None:
        self.colony.reset(self.rng, private_streams=self.cfg.n_workers > 1)

    def _move_ants(self) -> None:
        if self.cfg.n_workers > 1:
            self._move_ants_parallel()
            return
        # every ant takes step k before any ant takes step k + 1
        for step in range(self.n - 1):
            for ant in self.colony:
                ant.visit_town(step, self.rule.select_next_town(ant, step, self.rng))

    def _move_ants_parallel(self) -> None:
        # ants only read the trails, so each one builds its whole tour with its
        # own rule (scratch buffer) and stream; map() is the barrier
        def build(ant: Ant) -> None:
            rule = TransitionRule(self.trails, self.cfg.alpha, self.cfg.beta, self.cfg.pr)
            for step in range(self.n - 1):
                ant.visit_town(step, rule.select_next_town(ant, step, ant.rng))

        if self._pool is None:
            with ThreadPoolExecutor(self.cfg.n_workers) as pool:
                list(pool.map(build, self.colony))
        else:
            list(self._pool.map(build, self.colony))

    def _update_trails(self, lengths: List[float]) -> None:
        self.trails.evaporate(self.cfg.evaporation)
        for ant, L in zip(self.colony, lengths):
            self.trails.deposit(ant.tour, self.cfg.Q / L)

    def _update_best(self, lengths: List[float]) -> bool:
        improved = False
        for ant, L in zip(self.colony, lengths):
            if self.best_tour_length is None or L < self.best_tour_length:
                self.best_tour_length = L
                self.best_tour = ant.tour_list()
                improved = True
        return improved

    def iterate(self) -> None:
        self._setup_ants()
        self._move_ants()
        lengths = [ant.tour_length(self.graph) for ant in self.colony]
        self._update_trails(lengths)
        if self._update_best(lengths):
            self.logger.debug(f"iter {self.iterations_run}: new best {self.true_best_length:.4f}")
        self.iterations_run += 1

    # -- public API ---------------------------------------------------------

    def solve(self) -> List[int]:
        """Run ``max_iterations`` iterations and return a copy of the best tour."""
        t0 = time.time()
        self.trails.reset(self.cfg.c)
        self.history_best_lengths = []
        self.history_best_tours = []

        self._pool = ThreadPoolExecutor(self.cfg.n_workers) if self.cfg.n_workers > 1 else None
        try:
            for _ in range(self.cfg.max_iterations):
                self.iterate()
                self.history_best_lengths.append(self.true_best_length)
                self.history_best_tours.append(list(self.best_tour))
        finally:
            if self._pool is not None:
                self._pool.shutdown()
            self._pool = None

        self.logger.info(f"solve done | n={self.n} ants={self.m} iters={self.cfg.max_iterations} "
                         f"| best={self.true_best_length} | time={time.time() - t0:.3f}s")
        return list(self.best_tour) if self.best_tour is not None else []

    def run(self) -> ACOResult:
        start = time.time()
        tour = self.solve()
        elapsed = time.time() - start
        return ACOResult(best_tour=tour, best_length=self.true_best_length,
                         history_best_lengths=list(self.history_best_lengths),
                         config=self.cfg, elapsed_sec=elapsed,
                         iterations=self.cfg.max_iterations)


def tour_to_string(tour: List[int]) -> str:
    return " ".join(str(t) for t in tour)
