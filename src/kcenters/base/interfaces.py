"""
Core interfaces for the center-based clustering algorithms.

This module defines the abstract base classes that every pluggable component
implements, so that one assign/update loop can drive k-means, k-medians,
k-medoids and PAM alike.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List, TYPE_CHECKING
import torch
from torch import Tensor

if TYPE_CHECKING:
    from .data_structures import SwapResult
    from ..distances.matrix import DistanceMatrix


class ClusterRepresentation(ABC):
    """Abstract base class for a cluster center.

    A center is either a synthetic coordinate vector (mean, median) or a
    reference to one of the input points (medoid).
    """

    @property
    @abstractmethod
    def center(self) -> Tensor:
        """(d,) coordinates of this center."""
        pass

    @abstractmethod
    def get_parameters(self) -> Dict[str, Tensor]:
        """Return all parameters defining this center."""
        pass

    @abstractmethod
    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        """Set center parameters from dictionary."""
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Ambient dimension of the data."""
        pass


class DistanceMetric(ABC):
    """Abstract base class for point-to-point dissimilarities."""

    name: str = 'custom'

    @abstractmethod
    def compute(self, X: Tensor, Y: Tensor) -> Tensor:
        """Compute all pairwise distances between two point sets.

        Args:
            X: (m, d) tensor of points
            Y: (c, d) tensor of points

        Returns:
            (m, c) tensor of non-negative distances
        """
        pass

    def __call__(self, p: Tensor, q: Tensor) -> float:
        """Distance between two single points."""
        p = torch.as_tensor(p, dtype=torch.float32)
        q = torch.as_tensor(q, dtype=torch.float32)
        return float(self.compute(p.reshape(1, -1), q.reshape(1, -1))[0, 0])

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class InitializationStrategy(ABC):
    """Abstract base class for seeding strategies."""

    #: Whether the seeds are indices of input points (usable as medoids).
    selects_points: bool = True

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   distance_matrix: Optional['DistanceMatrix'] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Choose the initial centers.

        Args:
            points: (n, d) data points
            n_clusters: Number of centers k
            generator: Random source for randomized strategies
            distance_matrix: Distance provider shared with the engine

        Returns:
            Ordered list of k distinct centers
        """
        pass


class CenterStrategy(ABC):
    """Abstract base class for the rule that moves centers between passes."""

    @property
    def is_medoid(self) -> bool:
        """Whether centers must stay on input points."""
        return False

    @property
    def squared_cost(self) -> bool:
        """Whether the objective sums squared distances (WCSS)."""
        return False

    def cost(self, distances: Tensor) -> Tensor:
        """Turn point-to-center distances into the per-point objective."""
        return distances * distances if self.squared_cost else distances


class CenterUpdater(CenterStrategy):
    """Closed-form update producing a synthetic center from cluster members."""

    @abstractmethod
    def update(self, points: Tensor) -> Tensor:
        """Compute the new center of one cluster.

        Args:
            points: (m, d) members of the cluster, m >= 1

        Returns:
            (d,) new center
        """
        pass


class MedoidSwapStrategy(CenterStrategy):
    """Search over medoid replacements instead of a closed-form update."""

    @property
    def is_medoid(self) -> bool:
        return True

    @abstractmethod
    def swap(self, distances: Tensor, medoid_indices: Tensor,
             labels: Tensor) -> 'SwapResult':
        """Run one round of swap evaluation.

        Args:
            distances: (n, n) pairwise distances among all points
            medoid_indices: (k,) indices of the current medoids
            labels: (n,) current assignment to medoid slots

        Returns:
            SwapResult with the committed medoids and number of swaps
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for early-stopping checks."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []
