"""
PAM BUILD initialization.

Greedy medoid selection: start from the most central point, then keep adding
the point whose addition lowers the total assignment cost the most. Each
step scores every remaining point against the whole dataset, so BUILD costs
O(k * n^2) time on top of the O(n^2) distance matrix.
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..distances import DistanceMatrix, EuclideanDistance
from ..representations.medoid import MedoidRepresentation
from .random import check_enough_points


class PAMBuildInit(InitializationStrategy):
    """Deterministic BUILD phase of Partitioning Around Medoids.

    Ties are resolved in favour of the lowest point index at every step.
    """

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   distance_matrix: Optional[DistanceMatrix] = None,
                   **kwargs) -> List[MedoidRepresentation]:
        """Select k medoids greedily.

        Args:
            points: (n, d) data points
            n_clusters: Number of medoids
            generator: Unused; BUILD is deterministic
            distance_matrix: Distance provider; its cached point-to-point
                table is reused by the swap phase

        Returns:
            List of k MedoidRepresentations in selection order
        """
        n_points = points.shape[0]
        check_enough_points(n_points, n_clusters)
        if distance_matrix is None:
            distance_matrix = DistanceMatrix(EuclideanDistance())

        D = distance_matrix.pairwise(points)
        medoids = self.build(D, n_clusters)
        return [MedoidRepresentation(points, idx) for idx in medoids]

    @staticmethod
    def build(D: Tensor, n_clusters: int) -> List[int]:
        """Run BUILD on a precomputed (n, n) distance matrix."""
        n_points = D.shape[0]
        D = D.double()

        # Most central point: smallest sum of distances to everything else
        first = int(torch.argmin(D.sum(dim=1)))
        medoids = [first]
        is_medoid = torch.zeros(n_points, dtype=torch.bool, device=D.device)
        is_medoid[first] = True
        nearest = D[:, first].clone()

        while len(medoids) < n_clusters:
            candidates = torch.where(~is_medoid)[0]  # ascending, so argmin ties pick lowest index
            # Total cost of the dataset with each candidate added to the medoid set
            costs = torch.minimum(nearest.unsqueeze(1), D[:, candidates]).sum(dim=0)
            best = int(candidates[torch.argmin(costs)])

            medoids.append(best)
            is_medoid[best] = True
            nearest = torch.minimum(nearest, D[:, best])

        return medoids
