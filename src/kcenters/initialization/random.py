"""
Random initialization strategy for clustering algorithms.

Selects random points from the dataset as initial cluster centers.
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..base.exceptions import InsufficientPoints
from ..representations.medoid import MedoidRepresentation


def check_enough_points(n_points: int, n_clusters: int) -> None:
    if n_clusters > n_points:
        raise InsufficientPoints(f"Cannot create {n_clusters} clusters from {n_points} points")


class RandomInit(InitializationStrategy):
    """Random initialization by selecting points from the dataset.

    Selects n_clusters distinct points uniformly, without replacement.
    """

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[MedoidRepresentation]:
        """Initialize clusters with random points.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: Random source

        Returns:
            List of k MedoidRepresentations in draw order
        """
        n_points = points.shape[0]
        check_enough_points(n_points, n_clusters)

        indices = torch.randperm(n_points, generator=generator)[:n_clusters]
        return [MedoidRepresentation(points, int(idx)) for idx in indices]
