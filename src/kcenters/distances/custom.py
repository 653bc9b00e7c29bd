"""
User-supplied distance functions.
"""

from typing import Callable
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from .base import check_same_dimension


class CallableDistance(DistanceMetric):
    """Wrap a plain ``fn(p, q) -> float`` as a DistanceMetric.

    The function is evaluated once per pair, so this is much slower than the
    vectorized built-ins. It must return non-negative values.
    """

    name = 'custom'

    def __init__(self, fn: Callable[[Tensor, Tensor], float]):
        if not callable(fn):
            raise TypeError(f"Expected a callable, got {type(fn)}")
        self.fn = fn

    def compute(self, X: Tensor, Y: Tensor) -> Tensor:
        check_same_dimension(X, Y)
        out = torch.empty(X.shape[0], Y.shape[0], dtype=X.dtype, device=X.device)
        for i in range(X.shape[0]):
            for j in range(Y.shape[0]):
                out[i, j] = float(self.fn(X[i], Y[j]))
        if (out < 0).any():
            raise ValueError("Custom distance returned a negative value")
        return out

    def __repr__(self) -> str:
        name = getattr(self.fn, '__name__', repr(self.fn))
        return f"CallableDistance({name})"
