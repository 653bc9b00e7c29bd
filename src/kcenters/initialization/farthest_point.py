"""
Farthest-point initialization.

A deterministic cousin of k-means++: after a random first center, always
take the point farthest from the centers chosen so far. Seeds end up well
spread, but any outlier is guaranteed to become a center, so KMeansPlusPlusInit
is the better default.
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..distances import DistanceMatrix, EuclideanDistance
from ..representations.medoid import MedoidRepresentation
from .random import check_enough_points


class FarthestPointInit(InitializationStrategy):
    """Greedy max-min seeding; ties go to the lowest index."""

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   distance_matrix: Optional[DistanceMatrix] = None,
                   **kwargs) -> List[MedoidRepresentation]:
        n_points = points.shape[0]
        check_enough_points(n_points, n_clusters)
        if distance_matrix is None:
            distance_matrix = DistanceMatrix(EuclideanDistance(), cache=False)

        first_idx = int(torch.randint(n_points, (1,), generator=generator).item())
        center_indices = [first_idx]
        nearest = distance_matrix.min_to(points, points[first_idx].unsqueeze(0))

        for _ in range(1, n_clusters):
            masked = nearest.clone()
            masked[center_indices] = -1.0
            best = int(torch.argmax(masked))
            center_indices.append(best)
            nearest = torch.minimum(
                nearest, distance_matrix.min_to(points, points[best].unsqueeze(0)))

        return [MedoidRepresentation(points, idx) for idx in center_indices]
