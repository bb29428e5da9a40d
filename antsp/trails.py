from __future__ import annotations
from typing import Callable, Sequence

import numpy as np

from .fast_pow import exact_pow
from .graph import DistanceMatrix


class TrailMatrix:
    """Pheromone intensity on every directed edge.

    Values start at a constant, are multiplied by the retention factor on
    ``evaporate`` and only ever receive non-negative deposits, so they
    never go below zero.
    """

    def __init__(self, graph: DistanceMatrix, pow_fn: Callable = exact_pow):
        self.graph = graph
        self.n = graph.n
        self.pow = pow_fn
        self.tau = np.zeros((self.n, self.n), dtype=float)

    def reset(self, c: float) -> None:
        self.tau.fill(c)

    def evaporate(self, rho: float) -> None:
        # rho is the retained fraction: trail *= rho
        if not 0.0 <= rho <= 1.0:
            raise ValueError(f"evaporation factor must be in [0, 1], got {rho}")
        self.tau *= rho

    def deposit(self, tour: Sequence[int], amount: float) -> None:
        if amount < 0:
            raise ValueError(f"deposit amount must be >= 0, got {amount}")
        t = np.asarray(tour, dtype=int)
        # np.add.at so repeated edges (n == 1) accumulate
        np.add.at(self.tau, (t, np.roll(t, -1)), amount)

    def desirability(self, i: int, j, alpha: float, beta: float):
        """trail^alpha * (1/weight)^beta for one town or an array of towns."""
        return self.pow(self.tau[i, j], alpha) * self.pow(self.graph.inv[i, j], beta)
