"""
Core data structures for the clustering engine.

This module provides the containers passed between components: the current
centers, the point-to-cluster assignment, the outcome of a medoid swap round
and the per-iteration record kept in an algorithm's history.
"""

from typing import Optional, List, Dict, Any
import torch
from torch import Tensor
from dataclasses import dataclass, field


@dataclass
class ClusterState:
    """Centers of all clusters at a given iteration.

    For medoid algorithms ``medoid_indices`` holds the row of the point set
    each center refers to, and ``centers`` is the lookup of those rows.
    """

    centers: Tensor  # (K, d)
    n_clusters: int
    dimension: int
    medoid_indices: Optional[Tensor] = None  # (K,) long

    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        assert self.centers.shape == (self.n_clusters, self.dimension)
        if self.medoid_indices is not None:
            assert self.medoid_indices.shape == (self.n_clusters,)

    @property
    def device(self) -> torch.device:
        return self.centers.device

    @property
    def is_medoid(self) -> bool:
        return self.medoid_indices is not None

    def clone(self) -> 'ClusterState':
        return ClusterState(
            centers=self.centers.clone(),
            n_clusters=self.n_clusters,
            dimension=self.dimension,
            medoid_indices=None if self.medoid_indices is None else self.medoid_indices.clone(),
            metadata=self.metadata.copy()
        )

    def to(self, device: torch.device) -> 'ClusterState':
        """Move all tensors to specified device."""
        return ClusterState(
            centers=self.centers.to(device),
            n_clusters=self.n_clusters,
            dimension=self.dimension,
            medoid_indices=None if self.medoid_indices is None else self.medoid_indices.to(device),
            metadata=self.metadata.copy()
        )


class AssignmentMatrix:
    """Hard assignment of every point to exactly one cluster id in [0, K)."""

    def __init__(self, assignments: Tensor, n_clusters: int):
        """
        Args:
            assignments: (n,) cluster ids
            n_clusters: Number of clusters K
        """
        self.n_clusters = n_clusters
        if assignments.dim() != 1:
            raise ValueError(f"Expected 1D assignments, got {assignments.dim()}D")
        if len(assignments) > 0:
            if assignments.min() < 0 or assignments.max() >= n_clusters:
                raise ValueError(f"Cluster ids must lie in [0, {n_clusters})")
        self._labels = assignments.long()

    @property
    def n_points(self) -> int:
        return self._labels.shape[0]

    def get_hard(self) -> Tensor:
        return self._labels

    def get_cluster_indices(self, cluster_idx: int) -> Tensor:
        """Get indices of points assigned to a specific cluster."""
        return torch.where(self._labels == cluster_idx)[0]

    def count_per_cluster(self) -> Tensor:
        return torch.bincount(self._labels, minlength=self.n_clusters)

    def empty_clusters(self) -> List[int]:
        """Cluster ids with no members."""
        counts = self.count_per_cluster()
        return [k for k in range(self.n_clusters) if counts[k].item() == 0]

    def to_partition(self) -> Dict[int, List[int]]:
        """Map every cluster id to the sorted point indices it holds."""
        return {k: self.get_cluster_indices(k).tolist() for k in range(self.n_clusters)}

    def to(self, device: torch.device) -> 'AssignmentMatrix':
        return AssignmentMatrix(self._labels.to(device), self.n_clusters)

    def __len__(self) -> int:
        return self.n_points

    def __repr__(self) -> str:
        return f"AssignmentMatrix(n_points={self.n_points}, n_clusters={self.n_clusters})"


@dataclass
class SwapResult:
    """Outcome of one medoid swap round."""

    medoid_indices: Tensor  # (K,) medoids after the round
    n_swaps: int
    cost_before: float
    cost_after: float
    # (slot, old index, new index) for each committed swap
    swaps: List[tuple] = field(default_factory=list)
    # (slot, old index, new index) for each empty slot moved to a far point
    reseeds: List[tuple] = field(default_factory=list)

    @property
    def n_reseeded(self) -> int:
        return len(self.reseeds)

    @property
    def improved(self) -> bool:
        return self.n_swaps > 0 or self.n_reseeded > 0


@dataclass
class AlgorithmState:
    """State of a clustering run after one update step.

    ``objective_before`` is the cost of the assignment against the centers it
    was computed from; ``objective_value`` is the cost after the update.
    """
    iteration: int
    cluster_state: ClusterState
    assignments: AssignmentMatrix
    objective_value: float
    objective_before: float

    n_swaps: int = 0
    n_reseeded: int = 0
    converged: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)
