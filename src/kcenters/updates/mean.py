"""
Mean update strategy for k-means.
"""

from torch import Tensor

from ..base.interfaces import CenterUpdater


class MeanUpdater(CenterUpdater):
    """New center is the coordinate-wise mean of the cluster's members.

    The mean minimizes the sum of squared Euclidean distances, so the
    objective paired with this update is the WCSS.
    """

    @property
    def squared_cost(self) -> bool:
        return True

    def update(self, points: Tensor) -> Tensor:
        if len(points) == 0:
            raise ValueError("Mean of an empty cluster is undefined")
        return points.mean(dim=0)
