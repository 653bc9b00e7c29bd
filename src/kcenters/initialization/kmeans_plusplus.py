"""
K-means++ initialization strategy.

Selects initial cluster centers by distance-weighted sampling, which spreads
the seeds out without the outlier-chasing of a deterministic farthest-point
rule.
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..distances import DistanceMatrix, EuclideanDistance
from ..representations.medoid import MedoidRepresentation
from .random import check_enough_points


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ initialization for better starting positions.

    Algorithm:
    1. Choose first center uniformly at random
    2. For each remaining center:
       - Compute distance D(x) from each point to its nearest chosen center
       - Sample the next center with probability proportional to D(x)²

    If every remaining point coincides with a chosen center (all weights are
    zero) the next center is drawn uniformly from the points not yet chosen.
    """

    def __init__(self, n_local_trials: int = 1):
        """
        Args:
            n_local_trials: Candidates sampled per step. 1 is plain k-means++;
                more gives the greedy variant, which keeps the candidate that
                lowers the summed squared distance the most.
        """
        if n_local_trials < 1:
            raise ValueError(f"n_local_trials must be >= 1, got {n_local_trials}")
        self.n_local_trials = n_local_trials

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   distance_matrix: Optional[DistanceMatrix] = None,
                   **kwargs) -> List[MedoidRepresentation]:
        """Initialize cluster centers using K-means++.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: Random source for every draw
            distance_matrix: Distance provider; Euclidean if omitted

        Returns:
            List of k MedoidRepresentations in selection order
        """
        n_points = points.shape[0]
        check_enough_points(n_points, n_clusters)
        if distance_matrix is None:
            distance_matrix = DistanceMatrix(EuclideanDistance(), cache=False)

        chosen = torch.zeros(n_points, dtype=torch.bool)
        center_indices = []

        first_idx = int(torch.randint(n_points, (1,), generator=generator).item())
        center_indices.append(first_idx)
        chosen[first_idx] = True

        # Squared distance of every point to its nearest chosen center
        nearest = distance_matrix.min_to(points, points[first_idx].unsqueeze(0))
        weights = (nearest * nearest).double().cpu()

        for _ in range(1, n_clusters):
            weights[chosen] = 0.0
            total = weights.sum()

            if total <= 0:
                # Degenerate: all remaining points sit on chosen centers
                remaining = torch.where(~chosen)[0]
                pick = torch.randint(len(remaining), (1,), generator=generator).item()
                best = int(remaining[pick])
            else:
                probabilities = weights / total
                candidates = torch.multinomial(probabilities, self.n_local_trials,
                                               replacement=True, generator=generator)
                best = self._best_candidate(points, candidates, weights, distance_matrix)

            center_indices.append(best)
            chosen[best] = True

            new_distances = distance_matrix.min_to(points, points[best].unsqueeze(0))
            weights = torch.minimum(weights, (new_distances * new_distances).double().cpu())

        return [MedoidRepresentation(points, idx) for idx in center_indices]

    def _best_candidate(self, points: Tensor, candidates: Tensor, weights: Tensor,
                        distance_matrix: DistanceMatrix) -> int:
        if len(candidates) == 1:
            return int(candidates[0])

        # Greedy k-means++: keep the candidate with the lowest resulting potential
        candidate_rows = points[candidates.to(points.device)]
        d = distance_matrix.compute(points, candidate_rows).double().cpu()
        potentials = torch.minimum(weights.unsqueeze(1), d * d).sum(dim=0)
        return int(candidates[torch.argmin(potentials)])
