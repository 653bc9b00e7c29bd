"""
Centroid representation for k-means and k-medians.

A synthetic point in space that need not coincide with any input point.
"""

from typing import Dict
import torch
from torch import Tensor

from .base_representation import BaseRepresentation


class CentroidRepresentation(BaseRepresentation):
    """Cluster represented by a free coordinate vector."""

    def __init__(self, dimension: int, device: torch.device):
        super().__init__(dimension, device)
        self._center = torch.zeros(dimension, device=self._device)

    @property
    def center(self) -> Tensor:
        return self._center

    @center.setter
    def center(self, value: Tensor):
        assert value.shape == (self._dimension,)
        self._center = value.to(self._device)

    def update_from_points(self, points: Tensor, updater) -> None:
        """Move the center using a CenterUpdater on the cluster's members.

        Args:
            points: (m, d) members of this cluster, m >= 1
            updater: CenterUpdater computing the new center
        """
        self._check_points_shape(points)
        if len(points) == 0:
            raise ValueError("Cannot update a centroid from an empty cluster")
        self.center = updater.update(points)

    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        if 'center' in params:
            self.center = params['center']

    def __repr__(self) -> str:
        return f"CentroidRepresentation(dimension={self._dimension}, center={self._center.tolist()})"
