"""Initialization strategies for clustering algorithms."""

from ..base.interfaces import InitializationStrategy
from ..base.exceptions import InvalidConfiguration
from .random import RandomInit
from .kmeans_plusplus import KMeansPlusPlusInit
from .farthest_point import FarthestPointInit
from .pam_build import PAMBuildInit
from .from_previous import FromPreviousInit

INIT_NAMES = {
    'random': RandomInit,
    'k-means++': KMeansPlusPlusInit,
    'kmeans++': KMeansPlusPlusInit,
    'farthest': FarthestPointInit,
    'farthest-point': FarthestPointInit,
    'pam-build': PAMBuildInit,
    'build': PAMBuildInit,
}


def get_initialization(init) -> InitializationStrategy:
    """Resolve an init name, strategy instance, or array of starting centers."""
    if isinstance(init, InitializationStrategy):
        return init
    if isinstance(init, str):
        try:
            return INIT_NAMES[init.lower()]()
        except KeyError:
            raise InvalidConfiguration(f"Unknown init method: {init}") from None
    # Custom initial centers or medoid indices provided
    return FromPreviousInit(init)


__all__ = [
    'RandomInit',
    'KMeansPlusPlusInit',
    'FarthestPointInit',
    'PAMBuildInit',
    'FromPreviousInit',
    'INIT_NAMES',
    'get_initialization'
]
