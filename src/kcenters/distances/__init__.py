"""Distance metrics for clustering algorithms."""

from typing import Union, Callable

from ..base.interfaces import DistanceMetric
from ..base.exceptions import InvalidConfiguration
from .euclidean import EuclideanDistance
from .manhattan import ManhattanDistance
from .custom import CallableDistance
from .matrix import DistanceMatrix


def get_distance(metric: Union[str, DistanceMetric, Callable]) -> DistanceMetric:
    """Resolve a metric name, instance or plain function to a DistanceMetric."""
    if isinstance(metric, DistanceMetric):
        return metric
    if isinstance(metric, str):
        name = metric.lower()
        if name in ('euclidean', 'l2'):
            return EuclideanDistance()
        if name in ('manhattan', 'l1', 'cityblock'):
            return ManhattanDistance()
        raise InvalidConfiguration(f"Unknown distance metric: {metric}")
    if callable(metric):
        return CallableDistance(metric)
    raise InvalidConfiguration(f"Cannot use {type(metric)} as a distance metric")


__all__ = [
    'DistanceMetric',
    'EuclideanDistance',
    'ManhattanDistance',
    'CallableDistance',
    'DistanceMatrix',
    'get_distance'
]
