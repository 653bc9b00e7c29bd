"""
K-means clustering algorithm.

The classic k-means algorithm implemented on the shared engine.
"""

from typing import Optional, Union
import torch

from ..base.clustering_base import ClusterEngine
from ..initialization import get_initialization
from ..updates.mean import MeanUpdater
from ..utils.convergence import ChangeInAssignments, MaxIterations


class KMeans(ClusterEngine):
    """K-means clustering algorithm.

    Partitions data into K clusters by minimizing the within-cluster sum of
    squared distances (WCSS).

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str, InitializationStrategy or array-like, default='k-means++'
        Initialization method:
        - 'k-means++' : distance-weighted sampling
        - 'random' : K distinct points chosen uniformly
        - 'farthest' : deterministic farthest-point seeding
        - array of shape (n_clusters, n_features) : use as initial centers
    distance : str or DistanceMetric, default='euclidean'
        Metric used to assign points; the objective squares it
    max_iter : int, default=100
        Number of assign/update iterations
    tol : float, optional
        If given, stop early once fewer than this fraction of points change
        cluster between iterations
    verbose : int, default=0
        Verbosity level
    random_state : int or torch.Generator, optional
        Random seed for reproducibility
    device : torch.device, optional
        Device for computation (CPU/GPU)

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Cluster centroids
    labels_ : Tensor of shape (n_samples,)
        Cluster assignments for training data
    cost_ : float
        Sum of squared distances to the assigned centers
    n_iter_ : int
        Number of iterations run
    """

    def __init__(self,
                 n_clusters: int,
                 init='k-means++',
                 distance='euclidean',
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
        """Create K-means specific components."""
        self.center_strategy = MeanUpdater()
        self.initialization = get_initialization(self.init)

        if self.tol is None:
            self.convergence_criterion = MaxIterations()
        else:
            self.convergence_criterion = ChangeInAssignments(min_change_fraction=self.tol)
