"""
Manhattan (L1) distance, the natural metric for k-medians.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from .base import check_same_dimension


class ManhattanDistance(DistanceMetric):
    """Sum of absolute coordinate differences."""

    name = 'manhattan'

    def compute(self, X: Tensor, Y: Tensor) -> Tensor:
        check_same_dimension(X, Y)
        return torch.cdist(X, Y, p=1.0)
