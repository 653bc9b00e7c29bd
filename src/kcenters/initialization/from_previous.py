"""
Initialization from a previous solution or custom centers.

Useful for warm starts or when good initial guesses are available.
"""

from typing import List, Optional, Sequence, Union
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation
from ..base.data_structures import ClusterState
from ..base.exceptions import InvalidConfiguration
from ..representations.centroid import CentroidRepresentation
from ..representations.medoid import MedoidRepresentation


class FromPreviousInit(InitializationStrategy):
    """Initialize from given centers or medoid indices.

    Accepts either:
    - a (k, d) tensor / array of center coordinates
    - a ClusterState from a previous run (its medoid indices are kept)
    - a list of ClusterRepresentation objects
    - a 1D sequence of k point indices, which seeds medoids
    """

    def __init__(self, initial_state: Union[Tensor, ClusterState,
                                            List[ClusterRepresentation], Sequence[int]]):
        self.initial_state = initial_state

    @property
    def selects_points(self) -> bool:
        state = self.initial_state
        if isinstance(state, ClusterState):
            return state.medoid_indices is not None
        if isinstance(state, list) and state and isinstance(state[0], ClusterRepresentation):
            return all(isinstance(rep, MedoidRepresentation) for rep in state)
        return torch.as_tensor(state).dim() == 1

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        dimension = points.shape[1]
        device = points.device
        state = self.initial_state

        if isinstance(state, ClusterState):
            if state.n_clusters != n_clusters:
                raise InvalidConfiguration(f"ClusterState has {state.n_clusters} clusters, "
                                           f"but n_clusters={n_clusters}")
            if state.medoid_indices is not None:
                return self._medoids(points, state.medoid_indices.tolist(), n_clusters)
            return self._centroids(state.centers, n_clusters, dimension, device)

        if isinstance(state, list) and state and isinstance(state[0], ClusterRepresentation):
            if len(state) != n_clusters:
                raise InvalidConfiguration(f"Provided {len(state)} centers, "
                                           f"but n_clusters={n_clusters}")
            if self.selects_points:
                return self._medoids(points, [rep.index for rep in state], n_clusters)
            return self._centroids(torch.stack([rep.center for rep in state]),
                                   n_clusters, dimension, device)

        centers = torch.as_tensor(state)
        if centers.dim() == 1:
            return self._medoids(points, [int(i) for i in centers.tolist()], n_clusters)
        return self._centroids(centers, n_clusters, dimension, device)

    @staticmethod
    def _centroids(centers: Tensor, n_clusters: int, dimension: int,
                   device: torch.device) -> List[CentroidRepresentation]:
        centers = centers.to(device=device, dtype=torch.float32)
        if centers.dim() != 2 or centers.shape[0] != n_clusters:
            raise InvalidConfiguration(f"Initial centers have shape {tuple(centers.shape)}, "
                                       f"expected ({n_clusters}, {dimension})")
        if centers.shape[1] != dimension:
            raise InvalidConfiguration(f"Initial centers have dimension {centers.shape[1]}, "
                                       f"but data has dimension {dimension}")

        representations = []
        for k in range(n_clusters):
            rep = CentroidRepresentation(dimension, device)
            rep.center = centers[k].clone()
            representations.append(rep)
        return representations

    @staticmethod
    def _medoids(points: Tensor, indices: List[int],
                 n_clusters: int) -> List[MedoidRepresentation]:
        if len(indices) != n_clusters:
            raise InvalidConfiguration(f"Provided {len(indices)} medoid indices, "
                                       f"but n_clusters={n_clusters}")
        if len(set(indices)) != len(indices):
            raise InvalidConfiguration(f"Medoid indices must be distinct, got {indices}")
        try:
            return [MedoidRepresentation(points, idx) for idx in indices]
        except IndexError as exc:
            raise InvalidConfiguration(str(exc)) from exc
