"""
Median update strategy for k-medians.
"""

from torch import Tensor

from ..base.interfaces import CenterUpdater


class MedianUpdater(CenterUpdater):
    """New center is the coordinate-wise median of the cluster's members.

    Each coordinate is treated on its own, so the result is a synthetic point
    that is usually not one of the members. With an even number of members
    the midpoint of the two middle values is used. Paired with the Manhattan
    metric this minimizes the summed L1 distance.
    """

    def update(self, points: Tensor) -> Tensor:
        n = len(points)
        if n == 0:
            raise ValueError("Median of an empty cluster is undefined")
        ordered = points.sort(dim=0).values
        mid = n // 2
        if n % 2 == 1:
            return ordered[mid].clone()
        return (ordered[mid - 1] + ordered[mid]) / 2
