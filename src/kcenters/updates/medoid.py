"""
Medoid swap strategies.

Medoids have no closed-form update. Both strategies here try replacing
medoids with other points and keep a replacement only if it strictly lowers
the cost, which makes the cost non-increasing round over round.

- LloydMedoidSwap looks inside each cluster and may swap every medoid in
  the same round (up to k swaps).
- PAMSwap scores every (medoid, non-medoid) pair against the whole dataset
  and commits only the single best one (at most 1 swap).
"""

import torch
from torch import Tensor

from ..base.interfaces import MedoidSwapStrategy
from ..base.data_structures import SwapResult


def assignment_cost(D: Tensor, medoid_indices: Tensor) -> float:
    """Total distance from every point to its nearest medoid."""
    return D[:, medoid_indices].min(dim=1).values.sum().item()


class LloydMedoidSwap(MedoidSwapStrategy):
    """Alternating k-medoids: per-cluster medoid replacement.

    For each cluster the candidates are its non-medoid members, scored by the
    summed distance from the cluster's members to the candidate.

    A slot with no members has no candidates, so before searching it is
    moved to the point farthest from its own medoid (ties to the lowest
    index, each point at most once, never emptying the donor cluster).
    Points already sitting on a medoid are never taken, so a slot stays
    empty only when every point coincides with a medoid.
    """

    def swap(self, distances: Tensor, medoid_indices: Tensor,
             labels: Tensor) -> SwapResult:
        D = distances.double()
        medoids = medoid_indices.clone()
        cost_before = assignment_cost(D, medoids)

        reseeds = self._reseed_empty_slots(D, medoids, labels)
        if reseeds:
            labels = torch.argmin(D[:, medoids], dim=1)

        swaps = []
        for slot in range(len(medoids)):
            members = torch.where(labels == slot)[0]
            current = int(medoids[slot])
            candidates = members[~torch.isin(members, medoids)]
            if len(candidates) == 0:
                continue

            within = D[members]
            current_cost = within[:, current].sum()
            candidate_costs = within[:, candidates].sum(dim=0)
            best = int(torch.argmin(candidate_costs))

            if candidate_costs[best] < current_cost:
                medoids[slot] = candidates[best]
                swaps.append((slot, current, int(candidates[best])))

        return SwapResult(
            medoid_indices=medoids,
            n_swaps=len(swaps),
            cost_before=cost_before,
            cost_after=assignment_cost(D, medoids),
            swaps=swaps,
            reseeds=reseeds
        )

    @staticmethod
    def _reseed_empty_slots(D: Tensor, medoids: Tensor, labels: Tensor) -> list:
        """Move every empty slot onto a far point, in place. Returns the moves."""
        k = len(medoids)
        counts = torch.bincount(labels, minlength=k)
        empty = [slot for slot in range(k) if counts[slot].item() == 0]
        if not empty:
            return []

        nearest = D.gather(1, medoids[labels].unsqueeze(1)).squeeze(1)
        order = torch.sort(nearest, descending=True, stable=True).indices.tolist()
        reseeds = []
        cursor = 0
        for slot in empty:
            idx = None
            while cursor < len(order):
                candidate = order[cursor]
                cursor += 1
                if nearest[candidate] <= 0:
                    cursor = len(order)
                    break
                if counts[int(labels[candidate])] > 1:
                    idx = candidate
                    break
            if idx is None:
                break

            counts[int(labels[idx])] -= 1
            counts[slot] += 1
            reseeds.append((slot, int(medoids[slot]), idx))
            medoids[slot] = idx
        return reseeds


class PAMSwap(MedoidSwapStrategy):
    """SWAP phase of Partitioning Around Medoids.

    Every round evaluates all k * (n - k) swaps against one snapshot of the
    medoids, so a round costs O(k * n^2). Ties go to the lowest medoid slot,
    then the lowest candidate index.
    """

    def __init__(self, tol: float = 0.0):
        """
        Args:
            tol: A swap must lower the cost by more than this to be committed
        """
        self.tol = tol

    def swap(self, distances: Tensor, medoid_indices: Tensor,
             labels: Tensor) -> SwapResult:
        D = distances.double()
        snapshot = medoid_indices.clone()
        n_points, k = D.shape[0], len(snapshot)

        to_medoids = D[:, snapshot]  # (n, k)
        cost_before = to_medoids.min(dim=1).values.sum().item()

        is_medoid = torch.zeros(n_points, dtype=torch.bool, device=D.device)
        is_medoid[snapshot] = True
        candidates = torch.where(~is_medoid)[0]
        if len(candidates) == 0:
            return SwapResult(snapshot, 0, cost_before, cost_before)

        to_candidates = D[:, candidates]  # (n, n - k)
        best_cost = cost_before - self.tol
        best_swap = None

        for slot in range(k):
            if k > 1:
                keep = torch.arange(k, device=D.device) != slot
                others = to_medoids[:, keep].min(dim=1).values
            else:
                others = torch.full((n_points,), float('inf'), dtype=D.dtype, device=D.device)
            # Cost of the whole dataset with medoid `slot` replaced by each candidate
            costs = torch.minimum(others.unsqueeze(1), to_candidates).sum(dim=0)
            j = int(torch.argmin(costs))
            if costs[j].item() < best_cost:
                best_cost = costs[j].item()
                best_swap = (slot, int(snapshot[slot]), int(candidates[j]))

        if best_swap is None:
            return SwapResult(snapshot, 0, cost_before, cost_before)

        medoids = snapshot.clone()
        medoids[best_swap[0]] = best_swap[2]
        return SwapResult(
            medoid_indices=medoids,
            n_swaps=1,
            cost_before=cost_before,
            cost_after=best_cost,
            swaps=[best_swap]
        )
