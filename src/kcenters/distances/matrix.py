"""
Distance tables between point sets.

Assignment needs the full point-to-center table, seeding needs each point's
distance to its nearest chosen center, and the medoid algorithms need every
point-to-point distance. The point-to-point table is the largest object in a
PAM run, so it is computed once per point set and kept until invalidated.
"""

from typing import Optional, Tuple
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from .base import check_same_dimension


class DistanceMatrix:
    """Dense distance computations under a fixed metric.

    Args:
        metric: Metric used for every entry
        cache: Keep the point-to-point table between calls to ``pairwise``
    """

    def __init__(self, metric: DistanceMetric, cache: bool = True):
        self.metric = metric
        self.cache = cache
        self._source: Optional[Tensor] = None
        self._arena: Optional[Tensor] = None

    def compute(self, A: Tensor, B: Tensor) -> Tensor:
        """(m, c) distances from every row of A to every row of B."""
        check_same_dimension(A, B)
        return self.metric.compute(A, B)

    def nearest(self, A: Tensor, B: Tensor) -> Tuple[Tensor, Tensor]:
        """Distance to and index of the nearest row of B for each row of A.

        Ties go to the lowest index of B.
        """
        distances = self.compute(A, B)
        # argmin returns the first minimal index; min(dim=...) makes no such promise
        argmin = torch.argmin(distances, dim=1)
        min_distances = distances.gather(1, argmin.unsqueeze(1)).squeeze(1)
        return min_distances, argmin

    def min_to(self, A: Tensor, B: Tensor) -> Tensor:
        """Row-reduced table: each row of A's distance to its nearest row of B."""
        return self.compute(A, B).min(dim=1).values

    def pairwise(self, X: Tensor) -> Tensor:
        """Symmetric (n, n) distances among the rows of X."""
        if self.cache and self._arena is not None and self._source is X:
            return self._arena
        arena = self.compute(X, X)
        # Enforce exact symmetry and a zero diagonal whatever the metric's rounding
        arena = torch.minimum(arena, arena.t())
        arena.fill_diagonal_(0.0)
        if self.cache:
            self._source = X
            self._arena = arena
        return arena

    def invalidate(self) -> None:
        """Forget the cached point-to-point table."""
        self._source = None
        self._arena = None

    @property
    def is_cached(self) -> bool:
        return self._arena is not None

    def __repr__(self) -> str:
        return f"DistanceMatrix(metric={self.metric!r}, cached={self.is_cached})"
