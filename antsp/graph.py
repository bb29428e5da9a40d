from __future__ import annotations
import math
import re
from typing import List, Optional, Sequence

import numpy as np

from .errors import ConfigurationError

# added to every weight on load so no edge has zero length
EDGE_OFFSET = 1.0


class DistanceMatrix:
    """Read-only n x n edge weights of a complete directed graph.

    Every weight is stored with ``EDGE_OFFSET`` added; the diagonal is kept
    but never used by a tour of two or more towns. ``true_length`` undoes the
    offset for a closed tour.
    """

    def __init__(self, weights):
        try:
            w = np.array(weights, dtype=float)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Distance matrix must be numeric: {e}") from e
        if w.ndim != 2 or w.shape[0] != w.shape[1]:
            raise ConfigurationError(f"Distance matrix must be square, got shape {w.shape}.")
        if w.shape[0] == 0:
            raise ConfigurationError("Distance matrix needs at least one town.")
        if not np.all(np.isfinite(w)):
            raise ConfigurationError("Distance matrix contains non-finite weights.")
        if np.any(w < 0):
            i, j = map(int, np.argwhere(w < 0)[0])
            raise ConfigurationError(f"Negative weight {w[i, j]} at ({i}, {j}).")

        self.n: int = w.shape[0]
        self.raw = w
        self.raw.flags.writeable = False
        self.W = w + EDGE_OFFSET
        self.W.flags.writeable = False
        # inverse distance, the greedy half of the desirability score
        self.inv = 1.0 / self.W
        self.inv.flags.writeable = False

    def weight(self, i: int, j: int) -> float:
        return float(self.W[i, j])

    def tour_length(self, tour: Sequence[int]) -> float:
        """Closed-tour length on offset weights, wrap-around edge included."""
        t = np.asarray(tour, dtype=int)
        return float(self.W[t, np.roll(t, -1)].sum())

    def true_length(self, offset_length: float) -> float:
        return offset_length - self.n * EDGE_OFFSET

    def to_list(self) -> List[List[float]]:
        return self.raw.tolist()


def load_matrix(path: str, comment: Optional[str] = "#") -> DistanceMatrix:
    """Read a full adjacency matrix: one row per line, columns split on whitespace.

    Blank lines (and ``comment`` lines) are skipped.
    """
    rows: List[List[float]] = []
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            s = line.strip()
            if not s or (comment and s.startswith(comment)):
                continue
            try:
                row = [float(tok) for tok in re.split(r"\s+", s)]
            except ValueError as e:
                raise ConfigurationError(f"{path}:{lineno}: {e}") from e
            if rows and len(row) != len(rows[0]):
                raise ConfigurationError(
                    f"{path}:{lineno}: expected {len(rows[0])} columns, got {len(row)}")
            if any(math.isnan(x) or x < 0 for x in row):
                raise ConfigurationError(f"{path}:{lineno}: weights must be >= 0")
            rows.append(row)
    if not rows:
        raise ConfigurationError(f"{path}: no matrix rows found")
    return DistanceMatrix(rows)
