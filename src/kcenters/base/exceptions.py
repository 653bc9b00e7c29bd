"""
Errors and warnings raised by the clustering engine.

Configuration problems fail fast with exceptions before any iteration runs.
Conditions the engine can recover from are reported with ``warnings.warn``.
"""


class InvalidConfiguration(ValueError):
    """Bad number of clusters, option name, or input shape."""


class InsufficientPoints(InvalidConfiguration):
    """More centers were requested than there are points to seed from."""


class EmptyClusterWarning(UserWarning):
    """A cluster lost all of its members and its center was reseeded."""


class NonConvergenceWarning(UserWarning):
    """The medoid swap search hit its iteration bound before a fixed point."""
