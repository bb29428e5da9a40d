from __future__ import annotations
import math
import random

import numpy as np

from .ant import Ant
from .errors import InternalConsistencyError
from .trails import TrailMatrix

# how far a draw may exceed the cumulative total before it counts as a bug
ROUNDING_SLACK = 1e-9


class TransitionRule:
    """Picks an ant's next town from trail strength and inverse distance.

    Holds a scratch probability buffer reused across steps, so one rule
    instance must not be shared between threads.
    """

    def __init__(self, trails: TrailMatrix, alpha: float, beta: float, pr: float):
        self.trails = trails
        self.alpha = alpha
        self.beta = beta
        self.pr = pr
        self.probs = np.zeros(trails.n, dtype=float)

    def probabilities(self, ant: Ant, step: int) -> np.ndarray:
        """Fill the buffer with P(j) for every town; visited towns get 0."""
        i = ant.current_town(step)
        candidates = ant.unvisited()
        self.probs.fill(0.0)
        if candidates.size == 0:
            return self.probs
        scores = self.trails.desirability(i, candidates, self.alpha, self.beta)
        denom = float(np.sum(scores))
        if not math.isfinite(denom):
            raise InternalConsistencyError(
                f"non-finite desirability sum {denom} from town {i}")
        if denom == 0.0:
            # every candidate trail underflowed to zero: no preference left
            self.probs[candidates] = 1.0 / candidates.size
        else:
            self.probs[candidates] = scores / denom
        return self.probs

    def select_next_town(self, ant: Ant, step: int, rng: random.Random) -> int:
        candidates = ant.unvisited()
        if candidates.size == 0:
            raise InternalConsistencyError("no unvisited town left to select")

        if rng.random() < self.pr:
            return int(candidates[rng.randrange(candidates.size)])

        probs = self.probabilities(ant, step)
        r = rng.random()
        cumulative = np.cumsum(probs[candidates])
        k = int(np.searchsorted(cumulative, r, side="left"))
        if k >= candidates.size and r - cumulative[-1] <= ROUNDING_SLACK:
            # normalized total fell a rounding error short of 1
            k = candidates.size - 1
        if k >= candidates.size:
            raise InternalConsistencyError(
                f"roulette draw r={r} found no town (total probability {cumulative[-1]})")
        return int(candidates[k])
