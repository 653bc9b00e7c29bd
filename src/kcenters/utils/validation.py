"""
Input validation utilities.

Everything here runs before the first iteration so that bad input fails fast
with InvalidConfiguration instead of surfacing halfway through a run.
"""

from typing import Optional, Union
import torch
from torch import Tensor
import numpy as np

from ..base.exceptions import InvalidConfiguration


def validate_data(X: Union[Tensor, np.ndarray, list, tuple],
                  dtype: torch.dtype = torch.float32,
                  device: Optional[torch.device] = None,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1) -> Tensor:
    """Validate and convert input points to a 2D tensor.

    Args:
        X: Input points (tensor, numpy array, or sequence of equal-length rows)
        dtype: Target data type
        device: Target device
        ensure_finite: Whether to reject inf/nan
        ensure_min_samples: Minimum number of points required

    Returns:
        (n, d) tensor

    Raises:
        InvalidConfiguration: If the points are ragged, not 2D, or non-finite
    """
    if isinstance(X, Tensor):
        X = X.to(dtype=dtype, device=device)
    elif isinstance(X, np.ndarray):
        if X.dtype == object:
            raise InvalidConfiguration("Points have mismatched dimensionality")
        X = torch.from_numpy(np.ascontiguousarray(X)).to(dtype=dtype, device=device)
    elif isinstance(X, (list, tuple)):
        widths = {len(row) if hasattr(row, '__len__') else 1 for row in X}
        if len(widths) > 1:
            raise InvalidConfiguration(
                f"Points have mismatched dimensionality: {sorted(widths)}")
        X = torch.tensor(X, dtype=dtype, device=device)
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if X.dim() == 1:
        X = X.unsqueeze(1)
    elif X.dim() != 2:
        raise InvalidConfiguration(f"Expected 2D array, got {X.dim()}D")

    n_samples, n_features = X.shape
    if n_samples < ensure_min_samples:
        raise InvalidConfiguration(f"Found {n_samples} samples, but need at least "
                                   f"{ensure_min_samples}")
    if n_features < 1:
        raise InvalidConfiguration("Points must have at least one coordinate")

    if ensure_finite:
        if torch.isnan(X).any():
            raise InvalidConfiguration("Input contains NaN values")
        if torch.isinf(X).any():
            raise InvalidConfiguration("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Raises:
        InvalidConfiguration: If k is not a positive integer no larger than n
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise InvalidConfiguration(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise InvalidConfiguration(f"n_clusters must be positive, got {n_clusters}")

    if n_clusters > n_samples:
        raise InvalidConfiguration(f"n_clusters ({n_clusters}) cannot be larger than "
                                   f"n_samples ({n_samples})")


def check_positive_int(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
        raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create a generator from a seed, or pass a generator through.

    ``None`` gives a freshly seeded generator, so randomized components never
    draw from torch's global state.
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")
