from __future__ import annotations
import random
from enum import Enum
from typing import Iterator, List, Optional

import numpy as np

from .graph import DistanceMatrix


class AntState(Enum):
    EMPTY = "empty"
    BUILDING = "building"
    COMPLETE = "complete"


class Ant:
    """One tour under construction.

    ``step`` is the construction cursor owned by the solver: after step k the
    tour prefix ``tour[0..k+1]`` is filled. ``visited`` mirrors that prefix.
    """

    def __init__(self, n: int, rng: Optional[random.Random] = None):
        self.n = n
        self.tour = np.full(n, -1, dtype=int)
        self.visited = np.zeros(n, dtype=bool)
        self.filled = 0
        # private stream, only set when construction runs in worker threads
        self.rng = rng

    @property
    def state(self) -> AntState:
        if self.filled == 0:
            return AntState.EMPTY
        if self.filled < self.n:
            return AntState.BUILDING
        return AntState.COMPLETE

    def is_complete(self) -> bool:
        return self.filled == self.n

    def clear(self) -> None:
        self.tour.fill(-1)
        self.visited.fill(False)
        self.filled = 0

    def reset(self, start: int) -> None:
        self.clear()
        self.tour[0] = start
        self.visited[start] = True
        self.filled = 1

    def current_town(self, step: int) -> int:
        return int(self.tour[step])

    def visit_town(self, step: int, town: int) -> None:
        if step + 1 != self.filled:
            raise ValueError(f"ant is at position {self.filled - 1}, not {step}")
        if self.visited[town]:
            raise ValueError(f"town {town} already visited")
        self.tour[step + 1] = town
        self.visited[town] = True
        self.filled += 1

    def unvisited(self) -> np.ndarray:
        """Unvisited towns in index order."""
        return np.flatnonzero(~self.visited)

    def tour_length(self, graph: DistanceMatrix) -> float:
        if not self.is_complete():
            raise ValueError("tour is not complete")
        return graph.tour_length(self.tour)

    def tour_list(self) -> List[int]:
        return self.tour.tolist()


class Colony:
    """The fixed set of ants reused by every iteration of a solve."""

    def __init__(self, n_ants: int, n_towns: int):
        self.n_towns = n_towns
        self.ants = [Ant(n_towns) for _ in range(n_ants)]

    def __len__(self) -> int:
        return len(self.ants)

    def __iter__(self) -> Iterator[Ant]:
        return iter(self.ants)

    def reset(self, rng: random.Random, private_streams: bool = False) -> None:
        """Clear every ant and give it a uniformly random start town."""
        for ant in self.ants:
            ant.reset(rng.randrange(self.n_towns))
            ant.rng = random.Random(rng.getrandbits(64)) if private_streams else None

    def all_complete(self) -> bool:
        return all(a.is_complete() for a in self.ants)
