# tests/utils.py
"""
Helpers shared by the kcenters integration tests.

Functions:
- time_block(label, meta=None): context manager that prints wall-clock time.
- print_timing(label, seconds, **meta): one-line timing printer.
- partition(labels): labels as a set of frozensets, independent of cluster ids.
"""

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from typing import Any, Dict, FrozenSet, Set

import numpy as np
import torch


def partition(labels) -> Set[FrozenSet[int]]:
    """Group point indices by label; equal partitions compare equal."""
    if isinstance(labels, torch.Tensor):
        labels = labels.detach().cpu().numpy()
    labels = np.asarray(labels)
    return {frozenset(np.flatnonzero(labels == k).tolist()) for k in np.unique(labels)}


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("pam", {"n": 400, "k": 3}):
    ...     model.fit(X)

    Output
    ------
    [timing] pam {"n":400,"k":3} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        print_timing(label, time.perf_counter() - t0, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    meta_str = " " + json.dumps(meta, separators=(",", ":")) if meta else ""
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
