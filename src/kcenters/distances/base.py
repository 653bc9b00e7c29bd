"""Shared checks for distance computations."""

from torch import Tensor

from ..base.exceptions import InvalidConfiguration


def check_same_dimension(X: Tensor, Y: Tensor) -> None:
    """Raise InvalidConfiguration unless X and Y are 2D with equal width."""
    if X.dim() != 2 or Y.dim() != 2:
        raise InvalidConfiguration(
            f"Expected 2D point sets, got {X.dim()}D and {Y.dim()}D")
    if X.shape[1] != Y.shape[1]:
        raise InvalidConfiguration(
            f"Dimension mismatch: points have {X.shape[1]} coordinates, "
            f"centers have {Y.shape[1]}")
