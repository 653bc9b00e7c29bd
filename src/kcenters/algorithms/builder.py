"""
Configuration and builder for assembling a clustering engine.

``ClusteringConfig`` validates the enumerated options and ``create_engine``
maps them onto the algorithm classes. ``ClusteringBuilder`` offers the same
assembly as a fluent interface over individual components.
"""

from dataclasses import dataclass, asdict, field
from typing import Optional, Union, Any, Dict
import torch

from ..base.clustering_base import ClusterEngine
from ..base.interfaces import (
    CenterStrategy, InitializationStrategy, ConvergenceCriterion, DistanceMetric
)
from ..base.exceptions import InvalidConfiguration
from ..distances import get_distance
from ..initialization import (
    RandomInit, KMeansPlusPlusInit, FarthestPointInit, PAMBuildInit, INIT_NAMES, get_initialization
)
from ..updates import MeanUpdater, MedianUpdater, LloydMedoidSwap, PAMSwap
from ..utils.convergence import ChangeInAssignments, ChangeInObjective
from .kmeans import KMeans
from .kmedians import KMedians
from .kmedoids import KMedoids, PAM

CENTER_STRATEGIES = ('mean', 'median', 'medoid', 'pam')
INIT_STRATEGIES = tuple(INIT_NAMES)
DISTANCE_METRICS = ('euclidean', 'manhattan')

_ALGORITHMS = {
    'mean': KMeans,
    'median': KMedians,
    'medoid': KMedoids,
    'pam': PAM,
}

_DEFAULT_INIT = {
    'mean': 'k-means++',
    'median': 'k-means++',
    'medoid': 'random',
    'pam': 'pam-build',
}

_DEFAULT_DISTANCE = {
    'mean': 'euclidean',
    'median': 'manhattan',
    'medoid': 'euclidean',
    'pam': 'euclidean',
}


@dataclass
class ClusteringConfig:
    """Enumerated options selecting one algorithm variant.

    ``init_strategy`` and ``distance_metric`` default per center strategy:
    k-means++ with Euclidean for mean, k-means++ with Manhattan for median,
    random with Euclidean for Lloyd-style medoids, BUILD with Euclidean for
    PAM. ``distance_metric`` may also be a DistanceMetric or plain function.
    """
    n_clusters: int
    center_strategy: str = 'mean'
    init_strategy: Any = None
    distance_metric: Any = None
    max_iter: int = 100
    max_swap_iter: int = 1000
    tol: Optional[float] = None
    verbose: int = 0
    random_state: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.center_strategy not in CENTER_STRATEGIES:
            raise InvalidConfiguration(
                f"center_strategy must be one of {CENTER_STRATEGIES}, got {self.center_strategy!r}")
        if self.init_strategy is None:
            self.init_strategy = _DEFAULT_INIT[self.center_strategy]
        if isinstance(self.init_strategy, str) and self.init_strategy.lower() not in INIT_STRATEGIES:
            raise InvalidConfiguration(
                f"init_strategy must be one of {INIT_STRATEGIES}, got {self.init_strategy!r}")
        if self.distance_metric is None:
            self.distance_metric = _DEFAULT_DISTANCE[self.center_strategy]
        if isinstance(self.distance_metric, str) and self.distance_metric not in DISTANCE_METRICS:
            raise InvalidConfiguration(
                f"distance_metric must be one of {DISTANCE_METRICS} or a callable, "
                f"got {self.distance_metric!r}")
        if self.tol is not None and self.center_strategy == 'medoid':
            raise InvalidConfiguration(
                "tol has no effect on Lloyd-style medoids; the swap search stops "
                "when a round finds no improving swap")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def create_engine(config: Optional[ClusteringConfig] = None, **kwargs) -> ClusterEngine:
    """Build the algorithm described by a config (or by keyword options).

    Examples
    --------
    >>> engine = create_engine(n_clusters=3, center_strategy='pam',
    ...                        distance_metric='manhattan')
    >>> labels = engine.fit_predict(X)
    """
    if config is None:
        config = ClusteringConfig(**kwargs)
    elif kwargs:
        raise TypeError("Pass either a ClusteringConfig or keyword options, not both")

    algorithm = _ALGORITHMS[config.center_strategy]
    params = dict(
        n_clusters=config.n_clusters,
        init=config.init_strategy,
        distance=config.distance_metric,
        verbose=config.verbose,
        random_state=config.random_state,
    )
    if config.center_strategy in ('mean', 'median'):
        params.update(max_iter=config.max_iter, tol=config.tol)
    else:
        params.update(max_swap_iter=config.max_swap_iter)
        if config.center_strategy == 'pam' and config.tol is not None:
            params.update(tol=config.tol)
    params.update(config.extra)
    return algorithm(**params)


class ClusteringBuilder:
    """Fluent builder for creating clustering engines from components.

    Examples
    --------
    >>> # K-medians seeded with k-means++
    >>> algorithm = (ClusteringBuilder()
    ...     .with_median_update()
    ...     .with_kmeans_plusplus_init()
    ...     .with_distance('manhattan')
    ...     .build(n_clusters=5))

    >>> # PAM with BUILD seeding
    >>> algorithm = (ClusteringBuilder()
    ...     .with_pam_swap()
    ...     .with_pam_build_init()
    ...     .build(n_clusters=3))
    """

    def __init__(self):
        """Initialize builder with k-means defaults."""
        self._center_strategy: CenterStrategy = MeanUpdater()
        self._initialization: InitializationStrategy = KMeansPlusPlusInit()
        self._convergence_criterion: Optional[ConvergenceCriterion] = None
        self._distance: Union[str, DistanceMetric] = 'euclidean'

        # Algorithm parameters
        self._max_iter = 100
        self._max_swap_iter = 1000
        self._verbose = 0
        self._random_state = None
        self._device = None

    def with_center_strategy(self, strategy: CenterStrategy) -> 'ClusteringBuilder':
        """Set the center update rule."""
        self._center_strategy = strategy
        return self

    def with_mean_update(self) -> 'ClusteringBuilder':
        return self.with_center_strategy(MeanUpdater())

    def with_median_update(self) -> 'ClusteringBuilder':
        return self.with_center_strategy(MedianUpdater())

    def with_medoid_swap(self) -> 'ClusteringBuilder':
        """Use per-cluster (Lloyd-style) medoid swaps."""
        return self.with_center_strategy(LloydMedoidSwap())

    def with_pam_swap(self, tol: float = 0.0) -> 'ClusteringBuilder':
        """Use the PAM global swap search."""
        return self.with_center_strategy(PAMSwap(tol=tol))

    def with_initialization(self, strategy) -> 'ClusteringBuilder':
        """Set initialization strategy (instance, name, or starting centers)."""
        self._initialization = get_initialization(strategy)
        return self

    def with_random_init(self) -> 'ClusteringBuilder':
        return self.with_initialization(RandomInit())

    def with_kmeans_plusplus_init(self, n_local_trials: int = 1) -> 'ClusteringBuilder':
        return self.with_initialization(KMeansPlusPlusInit(n_local_trials))

    def with_farthest_point_init(self) -> 'ClusteringBuilder':
        return self.with_initialization(FarthestPointInit())

    def with_pam_build_init(self) -> 'ClusteringBuilder':
        return self.with_initialization(PAMBuildInit())

    def with_distance(self, metric) -> 'ClusteringBuilder':
        """Set the metric by name, instance, or plain function."""
        self._distance = get_distance(metric)
        return self

    def with_convergence_criterion(self, criterion: ConvergenceCriterion) -> 'ClusteringBuilder':
        self._convergence_criterion = criterion
        return self

    def with_assignment_convergence(self, tol: float = 1e-4) -> 'ClusteringBuilder':
        return self.with_convergence_criterion(ChangeInAssignments(min_change_fraction=tol))

    def with_objective_convergence(self, tol: float = 1e-4) -> 'ClusteringBuilder':
        return self.with_convergence_criterion(ChangeInObjective(rel_tol=tol))

    def with_max_iter(self, max_iter: int) -> 'ClusteringBuilder':
        self._max_iter = max_iter
        return self

    def with_max_swap_iter(self, max_swap_iter: int) -> 'ClusteringBuilder':
        self._max_swap_iter = max_swap_iter
        return self

    def with_random_state(self, random_state) -> 'ClusteringBuilder':
        self._random_state = random_state
        return self

    def with_verbose(self, verbose: int) -> 'ClusteringBuilder':
        self._verbose = verbose
        return self

    def with_device(self, device: torch.device) -> 'ClusteringBuilder':
        self._device = device
        return self

    def build(self, n_clusters: int) -> ClusterEngine:
        """Build the engine."""
        return ClusterEngine(
            n_clusters=n_clusters,
            center_strategy=self._center_strategy,
            initialization=self._initialization,
            distance=self._distance,
            max_iter=self._max_iter,
            max_swap_iter=self._max_swap_iter,
            convergence_criterion=self._convergence_criterion,
            verbose=self._verbose,
            random_state=self._random_state,
            device=self._device
        )
