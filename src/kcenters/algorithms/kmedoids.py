"""
K-medoids clustering: alternating (Lloyd-style) and PAM.

Both keep every center on an input point and stop when no swap lowers the
total distance. They differ in how swaps are searched:

- KMedoids tries the members of each cluster as its new medoid and may move
  every medoid in one round.
- PAM tries every non-medoid in place of every medoid across the whole
  dataset and commits only the best single swap per round. It is slower,
  O(k * n^2) per round, and usually finds lower costs.
"""

from typing import Optional, Union
import torch

from ..base.clustering_base import ClusterEngine
from ..initialization import get_initialization
from ..updates.medoid import LloydMedoidSwap, PAMSwap


class KMedoids(ClusterEngine):
    """Alternating k-medoids.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str, InitializationStrategy or sequence of indices, default='random'
        'random', 'pam-build', 'k-means++', 'farthest', or k distinct point
        indices to start from
    distance : str, DistanceMetric or callable, default='euclidean'
    max_swap_iter : int, default=1000
        Bound on swap rounds; reaching it emits NonConvergenceWarning
    verbose : int, default=0
    random_state : int or torch.Generator, optional
    device : torch.device, optional

    Attributes
    ----------
    medoid_indices_ : Tensor of shape (n_clusters,)
        Rows of the training data acting as centers
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Coordinates of the medoids
    labels_, cost_, n_iter_, converged_, history_
    """

    def __init__(self,
                 n_clusters: int,
                 init='random',
                 distance='euclidean',
                 max_swap_iter: int = 1000,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None):
        super().__init__(
            n_clusters=n_clusters,
            distance=distance,
            max_swap_iter=max_swap_iter,
            verbose=verbose,
            random_state=random_state,
            device=device
        )
        self.init = init

    def _create_components(self) -> None:
        super()._create_components()
        self.center_strategy = LloydMedoidSwap()
        self.initialization = get_initialization(self.init)


class PAM(ClusterEngine):
    """Partitioning Around Medoids (BUILD + SWAP).

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str, InitializationStrategy or sequence of indices, default='pam-build'
        Seeding; BUILD is deterministic, so the default needs no random_state
    distance : str, DistanceMetric or callable, default='euclidean'
    max_swap_iter : int, default=1000
        Bound on swap rounds (one swap per round)
    tol : float, default=0.0
        Minimum cost decrease for a swap to be committed
    verbose : int, default=0
    random_state : int or torch.Generator, optional
    device : torch.device, optional
    """

    def __init__(self,
                 n_clusters: int,
                 init='pam-build',
                 distance='euclidean',
                 max_swap_iter: int = 1000,
                 tol: float = 0.0,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None):
        super().__init__(
            n_clusters=n_clusters,
            distance=distance,
            max_swap_iter=max_swap_iter,
            verbose=verbose,
            random_state=random_state,
            device=device
        )
        self.init = init
        self.tol = tol

    def _create_components(self) -> None:
        super()._create_components()
        self.center_strategy = PAMSwap(tol=self.tol)
        self.initialization = get_initialization(self.init)
