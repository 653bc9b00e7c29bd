"""
Hard assignment strategy for clustering algorithms.

Assigns each point to its nearest center under the configured metric.
"""

from typing import Tuple, Dict, Any
import torch
from torch import Tensor

from ..distances.matrix import DistanceMatrix


class HardAssignment:
    """Hard (discrete) assignment to nearest center.

    Each point gets exactly one cluster id. A point equidistant from several
    centers goes to the one with the lowest index.
    """

    def __init__(self, distance_matrix: DistanceMatrix):
        self.distance_matrix = distance_matrix

    def compute_assignments(self, points: Tensor, centers: Tensor) -> Tuple[Tensor, Dict[str, Any]]:
        """Assign points to their nearest center.

        Args:
            points: (n, d) data points
            centers: (k, d) centers fixed for the whole pass

        Returns:
            assignments: (n,) cluster indices
            info: {'min_distances': (n,) distance of each point to its center}
        """
        min_distances, assignments = self.distance_matrix.nearest(points, centers)
        return assignments, {'min_distances': min_distances}

    def compute_medoid_assignments(self, arena: Tensor,
                                   medoid_indices: Tensor) -> Tuple[Tensor, Dict[str, Any]]:
        """Same as ``compute_assignments`` but reading a point-to-point table.

        Args:
            arena: (n, n) pairwise distances among all points
            medoid_indices: (k,) rows acting as centers

        Returns:
            assignments: (n,) medoid slots
            info: {'min_distances': (n,) distance of each point to its medoid}
        """
        to_medoids = arena[:, medoid_indices]
        assignments = torch.argmin(to_medoids, dim=1)
        min_distances = to_medoids.gather(1, assignments.unsqueeze(1)).squeeze(1)
        return assignments, {'min_distances': min_distances}
