"""
K-medians clustering algorithm.
"""

from typing import Optional, Union
import torch

from ..base.clustering_base import ClusterEngine
from ..initialization import get_initialization
from ..updates.median import MedianUpdater
from ..utils.convergence import ChangeInAssignments, MaxIterations


class KMedians(ClusterEngine):
    """K-medians: coordinate-wise median centers under the L1 metric.

    Less sensitive to outliers than k-means. The centers are synthetic points
    and generally do not coincide with any input point (see KMedoids for
    centers that must).

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str, InitializationStrategy or array-like, default='k-means++'
        'k-means++', 'random', 'farthest' or explicit initial centers
    distance : str or DistanceMetric, default='manhattan'
    max_iter : int, default=100
    tol : float, optional
        Early stop on the fraction of points changing cluster
    verbose : int, default=0
    random_state : int or torch.Generator, optional
    device : torch.device, optional
    """

    def __init__(self,
                 n_clusters: int,
                 init='k-means++',
                 distance='manhattan',
                 max_iter: int = 100,
                 tol: Optional[float] = None,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None):
        super().__init__(
            n_clusters=n_clusters,
            distance=distance,
            max_iter=max_iter,
            verbose=verbose,
            random_state=random_state,
            device=device
        )
        self.init = init
        self.tol = tol

    def _create_components(self) -> None:
        self.center_strategy = MedianUpdater()
        self.initialization = get_initialization(self.init)

        if self.tol is None:
            self.convergence_criterion = MaxIterations()
        else:
            self.convergence_criterion = ChangeInAssignments(min_change_fraction=self.tol)
