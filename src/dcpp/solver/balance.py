"""Deficit/surplus partition and the greedy seed flow for cycle canceling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class ImbalancePartition:
    """Unbalanced vertices in ascending index order.

    ``deficit`` vertices have more incoming than outgoing arcs (negative
    delta) and send augmenting flow; ``surplus`` vertices receive it.
    """

    deficit: Tuple[int, ...]
    surplus: Tuple[int, ...]

    @property
    def is_balanced(self) -> bool:
        return not self.deficit and not self.surplus

    def surplus_mask(self, num_vertices: int) -> np.ndarray:
        mask = np.zeros(num_vertices, dtype=bool)
        mask[list(self.surplus)] = True
        return mask


def partition_imbalance(delta: np.ndarray) -> ImbalancePartition:
    delta = np.asarray(delta)
    deficit = tuple(int(v) for v in np.flatnonzero(delta < 0))
    surplus = tuple(int(v) for v in np.flatnonzero(delta > 0))
    return ImbalancePartition(deficit=deficit, surplus=surplus)


def build_feasible_flow(delta: np.ndarray, partition: ImbalancePartition) -> np.ndarray:
    """Transportation-style greedy sweep in index order.

    Every deficit vertex ends up sending exactly ``-delta`` units and every
    surplus vertex receives exactly ``delta`` units. Costs are ignored; the
    optimizer is responsible for making the flow cheap.
    """
    remaining = np.array(delta, dtype=np.int64, copy=True)
    n = remaining.shape[0]
    flow = np.zeros((n, n), dtype=np.int64)
    for i in partition.deficit:
        for j in partition.surplus:
            amount = min(-remaining[i], remaining[j])
            flow[i, j] = amount
            remaining[i] += amount
            remaining[j] -= amount
    return flow


__all__ = ["ImbalancePartition", "build_feasible_flow", "partition_imbalance"]
