from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .graph import DistanceMatrix


@dataclass
class TSPInstance:
    """Towns placed in the plane; Euclidean distances feed the solver."""
    coords: List[Tuple[float, float]]
    name: str = "euclidean_tsp"

    @staticmethod
    def random_euclidean(n: int, seed: Optional[int] = None, square_size: float = 100.0,
                         name: str = "random_euclidean") -> "TSPInstance":
        rng = random.Random(seed)
        coords = [(rng.uniform(0, square_size), rng.uniform(0, square_size)) for _ in range(n)]
        return TSPInstance(coords=coords, name=name)

    def distances(self) -> np.ndarray:
        xy = np.asarray(self.coords, dtype=float)
        diff = xy[:, None, :] - xy[None, :, :]
        return np.sqrt(np.sum(diff ** 2, axis=2))

    def distance_matrix(self) -> DistanceMatrix:
        return DistanceMatrix(self.distances())

