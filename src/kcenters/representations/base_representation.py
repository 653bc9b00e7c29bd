"""
Base representation class with common functionality for all cluster centers.
"""

from typing import Dict
import torch
from torch import Tensor

from ..base.interfaces import ClusterRepresentation


class BaseRepresentation(ClusterRepresentation):
    """Base class providing common functionality for cluster centers."""

    def __init__(self, dimension: int, device: torch.device):
        """
        Args:
            dimension: Ambient dimension d of the data
            device: Torch device for tensor allocation
        """
        self._dimension = dimension
        self._device = torch.device(device)

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def device(self) -> torch.device:
        return self._device

    def distance_to_point(self, points: Tensor, metric) -> Tensor:
        """Distances from points to this center under ``metric``.

        Args:
            points: (n, d) tensor of data points
            metric: DistanceMetric instance

        Returns:
            (n,) tensor of distances
        """
        self._check_points_shape(points)
        return metric.compute(points, self.center.unsqueeze(0))[:, 0]

    def _check_points_shape(self, points: Tensor):
        """Validate shape of input points."""
        if points.dim() != 2:
            raise ValueError(f"Expected 2D tensor, got {points.dim()}D")
        if points.shape[1] != self._dimension:
            raise ValueError(f"Expected dimension {self._dimension}, got {points.shape[1]}")

    def get_parameters(self) -> Dict[str, Tensor]:
        return {'center': self.center.clone()}
