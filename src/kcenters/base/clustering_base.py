"""
The clustering engine shared by every algorithm in the package.

Provides the common skeleton of Lloyd-style local search:

    Seeding -> Assigning -> Updating -> (Converged | Assigning)

The initializer, the center strategy and the distance metric are pluggable.
Mean and median strategies update every center in closed form and run for a
fixed number of iterations. Medoid strategies search for improving swaps
and run until no swap lowers the cost.
"""

from typing import Optional, Dict, Any, List, Union, Callable
import torch
from torch import Tensor
import time
import warnings

from .interfaces import (
    ClusterRepresentation, InitializationStrategy, CenterStrategy,
    CenterUpdater, MedoidSwapStrategy, ConvergenceCriterion, DistanceMetric
)
from .data_structures import ClusterState, AssignmentMatrix, AlgorithmState
from .exceptions import (
    InvalidConfiguration, EmptyClusterWarning, NonConvergenceWarning
)
from ..assignments.hard import HardAssignment
from ..distances import DistanceMatrix, get_distance
from ..representations.centroid import CentroidRepresentation
from ..representations.medoid import MedoidRepresentation
from ..utils.convergence import MaxIterations
from ..utils.validation import (
    validate_data, check_n_clusters, check_positive_int, check_random_state
)


class ClusterEngine:
    """Iterate-assign-update loop parameterized by pluggable components.

    Subclasses may override ``_create_components`` to pick their own
    defaults; otherwise the components passed to the constructor are used.

    Args:
        n_clusters: Number of clusters K
        center_strategy: CenterUpdater (mean, median) or MedoidSwapStrategy
        initialization: Seeding strategy
        distance: Metric name, DistanceMetric or ``fn(p, q) -> float``
        max_iter: Iterations for the mean/median loop (ignored by medoid
            strategies)
        max_swap_iter: Bound on medoid swap rounds before giving up with a
            NonConvergenceWarning
        convergence_criterion: Optional early stop for the mean/median loop;
            defaults to running all max_iter iterations
        verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
        random_state: Seed or torch.Generator for randomized seeding
        device: Torch device (None for auto-detect)
    """

    def __init__(self,
                 n_clusters: int,
                 center_strategy: Optional[CenterStrategy] = None,
                 initialization: Optional[InitializationStrategy] = None,
                 distance: Union[str, DistanceMetric, Callable] = 'euclidean',
                 max_iter: int = 100,
                 max_swap_iter: int = 1000,
                 convergence_criterion: Optional[ConvergenceCriterion] = None,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None):
        self.n_clusters = n_clusters
        self.center_strategy = center_strategy
        self.initialization = initialization
        self.distance = distance
        self.max_iter = max_iter
        self.max_swap_iter = max_swap_iter
        self.convergence_criterion = convergence_criterion
        self.verbose = verbose
        self.random_state = random_state

        if device is None:
            self.device = torch.device('cuda' if torch.cuda.is_available() else 'cpu')
        else:
            self.device = torch.device(device)

        # Algorithm state
        self.fitted_ = False
        self.converged_ = False
        self.n_iter_ = 0
        self.history_: List[AlgorithmState] = []
        self.labels_: Optional[Tensor] = None
        self.cost_: Optional[float] = None
        self.representations_: Optional[List[ClusterRepresentation]] = None

    def _create_components(self) -> None:
        """Resolve the components used for this fit.

        The base engine only fills in the convergence criterion; subclasses
        set their center strategy and initializer here.
        """
        if self.convergence_criterion is None:
            self.convergence_criterion = MaxIterations()

    def fit(self, X, y=None) -> 'ClusterEngine':
        """Fit the clustering model.

        Args:
            X: (n, d) points (tensor, numpy array or nested sequence)
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        return self._fit(X)

    def fit_predict(self, X, y=None) -> Tensor:
        """Fit and return the final assignment."""
        self._fit(X)
        return self.labels_

    def predict(self, X) -> Tensor:
        """Assign new points to the nearest fitted center.

        Args:
            X: (n, d) data

        Returns:
            (n,) tensor of cluster assignments
        """
        self._check_fitted()
        X = self._validate_data(X)
        assignments, _ = self.assignment_strategy.compute_assignments(X, self.cluster_centers_)
        return assignments

    def score(self, X, y=None) -> float:
        """Negative cost of X against the fitted centers."""
        self._check_fitted()
        X = self._validate_data(X)
        _, info = self.assignment_strategy.compute_assignments(X, self.cluster_centers_)
        return -self.center_strategy.cost(info['min_distances']).sum().item()

    def _fit(self, X) -> 'ClusterEngine':
        """Internal fit method implementing the state machine."""
        X = self._validate_data(X)
        n_points, dimension = X.shape

        check_n_clusters(self.n_clusters, n_points)
        check_positive_int(self.max_iter, 'max_iter')
        check_positive_int(self.max_swap_iter, 'max_swap_iter')

        self._create_components()
        if not isinstance(self.center_strategy, CenterStrategy):
            raise InvalidConfiguration(f"Expected a CenterStrategy, got {type(self.center_strategy)}")
        if not isinstance(self.initialization, InitializationStrategy):
            raise InvalidConfiguration(
                f"Expected an InitializationStrategy, got {type(self.initialization)}")

        self.metric_ = get_distance(self.distance)
        self.distance_matrix_ = DistanceMatrix(self.metric_)
        self.assignment_strategy = HardAssignment(self.distance_matrix_)
        generator = check_random_state(self.random_state)

        self.n_iter_ = 0
        self.history_ = []
        self.converged_ = False
        self.convergence_criterion.reset()

        # Seeding
        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters...")

        start_time = time.time()
        seeds = self.initialization.initialize(
            X, self.n_clusters,
            generator=generator,
            distance_matrix=self.distance_matrix_
        )
        self.representations_ = self._create_representations(X, seeds)

        if self.center_strategy.is_medoid:
            self._run_swaps(X)
        else:
            self._run_lloyd(X)

        total_time = time.time() - start_time
        if self.verbose:
            print(f"Total fitting time: {total_time:.3f}s")

        self.fitted_ = True
        return self

    def _create_representations(self, X: Tensor,
                                seeds: List[ClusterRepresentation]) -> List[ClusterRepresentation]:
        """Turn the initializer's seeds into the centers this strategy moves."""
        if len(seeds) != self.n_clusters:
            raise InvalidConfiguration(f"Initializer returned {len(seeds)} centers, "
                                       f"expected {self.n_clusters}")

        if self.center_strategy.is_medoid:
            if not all(isinstance(seed, MedoidRepresentation) for seed in seeds):
                raise InvalidConfiguration("Medoid algorithms need seeds that are data points")
            indices = [seed.index for seed in seeds]
            if len(set(indices)) != len(indices):
                raise InvalidConfiguration(f"Seed medoids must be distinct, got {indices}")
            return [MedoidRepresentation(X, idx) for idx in indices]

        representations = []
        for seed in seeds:
            centroid = CentroidRepresentation(X.shape[1], X.device)
            centroid.center = seed.center.clone().to(X.dtype)
            representations.append(centroid)
        return representations

    def _run_lloyd(self, X: Tensor) -> None:
        """Assign/update loop for closed-form center strategies."""
        strategy: CenterUpdater = self.center_strategy
        centers = self._stack_centers()

        for iteration in range(self.max_iter):
            iter_start_time = time.time()

            # Assigning: every point against the centers of the previous update
            labels, info = self.assignment_strategy.compute_assignments(X, centers)
            labels, min_distances, n_reseeded = self._reseed_empty_clusters(
                X, labels, info['min_distances'])
            cost_before = strategy.cost(min_distances).sum().item()
            assignment = AssignmentMatrix(labels, self.n_clusters)

            # Updating
            for k, representation in enumerate(self.representations_):
                members = X[assignment.get_cluster_indices(k)]
                representation.update_from_points(members, strategy)
            centers = self._stack_centers()

            new_distances = self.metric_.compute(X, centers).gather(1, labels.unsqueeze(1)).squeeze(1)
            cost_after = strategy.cost(new_distances).sum().item()

            self.history_.append(AlgorithmState(
                iteration=iteration,
                cluster_state=self._extract_cluster_state(),
                assignments=assignment,
                objective_value=cost_after,
                objective_before=cost_before,
                n_reseeded=n_reseeded
            ))
            self.n_iter_ = iteration + 1

            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'objective': cost_after,
                'assignments': labels,
                'cluster_state': self.history_[-1].cluster_state
            })
            self._log_iteration(iteration, cost_after, time.time() - iter_start_time)

            if converged:
                self.history_[-1].converged = True
                self.converged_ = True
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

        # The fixed-count policy ends converged once every iteration has run
        if not self.converged_ and isinstance(self.convergence_criterion, MaxIterations):
            self.history_[-1].converged = True
            self.converged_ = True

        # Final assignment against the final centers
        labels, info = self.assignment_strategy.compute_assignments(X, centers)
        empty = AssignmentMatrix(labels, self.n_clusters).empty_clusters()
        if empty:
            warnings.warn(f"Cluster(s) {empty} have no members after the final "
                          f"assignment", EmptyClusterWarning)
        self.labels_ = labels
        self.cost_ = strategy.cost(info['min_distances']).sum().item()

    def _run_swaps(self, X: Tensor) -> None:
        """Swap search loop for medoid strategies."""
        strategy: MedoidSwapStrategy = self.center_strategy
        arena = self.distance_matrix_.pairwise(X)
        medoids = torch.tensor([rep.index for rep in self.representations_],
                               dtype=torch.long, device=X.device)
        labels, info = self.assignment_strategy.compute_medoid_assignments(arena, medoids)

        converged = False
        for iteration in range(self.max_swap_iter):
            iter_start_time = time.time()
            cost_before = info['min_distances'].sum().item()

            result = strategy.swap(arena, medoids, labels)
            if result.improved:
                medoids = result.medoid_indices.to(X.device)
                for rep, idx in zip(self.representations_, medoids.tolist()):
                    rep.index = idx

            labels, info = self.assignment_strategy.compute_medoid_assignments(arena, medoids)
            cost_after = info['min_distances'].sum().item()
            converged = not result.improved
            if result.n_reseeded:
                warnings.warn(f"{result.n_reseeded} empty medoid cluster(s) reseeded from "
                              f"the farthest points", EmptyClusterWarning)
            assignment = AssignmentMatrix(labels, self.n_clusters)

            self.history_.append(AlgorithmState(
                iteration=iteration,
                cluster_state=self._extract_cluster_state(),
                assignments=assignment,
                objective_value=cost_after,
                objective_before=cost_before,
                n_swaps=result.n_swaps,
                n_reseeded=result.n_reseeded,
                converged=converged,
                metadata={'swaps': result.swaps,
                          'reseeds': result.reseeds,
                          'empty_clusters': assignment.empty_clusters()}
            ))
            self.n_iter_ = iteration + 1
            self._log_iteration(iteration, cost_after, time.time() - iter_start_time)

            if converged:
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

        if not converged:
            warnings.warn(f"Medoid swap search did not reach a fixed point within "
                          f"{self.max_swap_iter} rounds; returning the best result found",
                          NonConvergenceWarning)

        # Left empty only when every point already sits on a medoid; the medoid
        # itself stays a valid center, so this is reported and not repaired.
        empty = AssignmentMatrix(labels, self.n_clusters).empty_clusters()
        if empty:
            warnings.warn(f"Medoid cluster(s) {empty} have no members: every point "
                          f"already sits on a medoid", EmptyClusterWarning)

        self.converged_ = converged
        self.labels_ = labels
        self.cost_ = info['min_distances'].sum().item()

    def _reseed_empty_clusters(self, X: Tensor, labels: Tensor, min_distances: Tensor):
        """Give every empty cluster the point farthest from its own center.

        Points are taken in order of decreasing distance (ties to the lowest
        index), each at most once, and only from clusters that keep at least
        one member. The moved point becomes the cluster's sole member, so its
        distance drops to zero and the update puts the center on it.
        """
        counts = torch.bincount(labels, minlength=self.n_clusters)
        empty = [k for k in range(self.n_clusters) if counts[k].item() == 0]
        if not empty:
            return labels, min_distances, 0

        labels = labels.clone()
        min_distances = min_distances.clone()
        order = torch.sort(min_distances, descending=True, stable=True).indices.tolist()
        cursor = 0
        for k in empty:
            while True:
                idx = order[cursor]
                cursor += 1
                donor = int(labels[idx])
                if counts[donor] > 1:
                    break
            counts[donor] -= 1
            counts[k] += 1
            labels[idx] = k
            min_distances[idx] = 0.0
            self.representations_[k].center = X[idx].clone()

        warnings.warn(f"{len(empty)} empty cluster(s) reseeded from the farthest points",
                      EmptyClusterWarning)
        return labels, min_distances, len(empty)

    def _log_iteration(self, iteration: int, objective: float, iter_time: float) -> None:
        if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
            print(f"Iteration {iteration:3d}: objective = {objective:.6f} "
                  f"↓ ({iter_time:.3f}s)")

    def _validate_data(self, X) -> Tensor:
        """Validate and prepare input data."""
        return validate_data(X, device=self.device)

    def _check_fitted(self) -> None:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")

    def _stack_centers(self) -> Tensor:
        return torch.stack([rep.center for rep in self.representations_])

    def _extract_cluster_state(self) -> ClusterState:
        """Snapshot the current centers into a ClusterState."""
        centers = self._stack_centers().clone()
        medoid_indices = None
        if self.center_strategy.is_medoid:
            medoid_indices = torch.tensor([rep.index for rep in self.representations_],
                                          dtype=torch.long, device=centers.device)
        return ClusterState(
            centers=centers,
            n_clusters=self.n_clusters,
            dimension=centers.shape[1],
            medoid_indices=medoid_indices
        )

    @property
    def cluster_centers_(self) -> Tensor:
        """(K, d) final centers."""
        self._check_fitted()
        return self._stack_centers()

    @property
    def medoid_indices_(self) -> Optional[Tensor]:
        """(K,) rows of the training data acting as centers, or None."""
        self._check_fitted()
        if not self.center_strategy.is_medoid:
            return None
        return torch.tensor([rep.index for rep in self.representations_], dtype=torch.long)

    @property
    def inertia_(self) -> float:
        """Final cost (same as ``cost_``)."""
        self._check_fitted()
        return self.cost_

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'center_strategy': self.center_strategy,
            'initialization': self.initialization,
            'distance': self.distance,
            'max_iter': self.max_iter,
            'max_swap_iter': self.max_swap_iter,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device
        }

    def set_params(self, **params) -> 'ClusterEngine':
        """Set parameters (sklearn compatibility)."""
        for key, value in params.items():
            setattr(self, key, value)
        return self
