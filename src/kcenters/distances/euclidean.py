"""
Euclidean distance metric for clustering.

The default metric for k-means and k-medoids.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from .base import check_same_dimension


class EuclideanDistance(DistanceMetric):
    """L2 distance ||x - y||, optionally squared."""

    name = 'euclidean'

    def __init__(self, squared: bool = False):
        """
        Args:
            squared: If True, return squared distances.
                     If False (default), return actual Euclidean distances.
        """
        self.squared = squared

    def compute(self, X: Tensor, Y: Tensor) -> Tensor:
        check_same_dimension(X, Y)
        # Exact differences keep d(x, x) == 0; the matmul expansion does not
        distances = torch.cdist(X, Y, p=2.0, compute_mode='donot_use_mm_for_euclid_dist')
        if self.squared:
            return distances * distances
        return distances

    def __repr__(self) -> str:
        return f"EuclideanDistance(squared={self.squared})"
