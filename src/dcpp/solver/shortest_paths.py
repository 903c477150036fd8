"""All-pairs cheapest routes with next-hop reconstruction.

The relaxation is the classic Floyd–Warshall triple loop over a dense
``defined`` / ``cost`` / ``next_hop`` triple. The innermost loop over target
vertices is evaluated one row at a time with numpy, but stops exactly where
the scalar loop would: as soon as a vertex's self-distance becomes negative
the relaxation returns, leaving the matrices in the state the cycle-canceling
optimizer walks.

Only the diagonal entry updated at that moment triggers the early exit. A
negative cycle that never surfaces as a freshly relaxed diagonal entry is left
to :func:`check_valid` on the main graph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .domain_types import NO_VERTEX
from .errors import CycleWalkError, DisconnectedGraphError, NegativeCycleError

logger = logging.getLogger(__name__)


@dataclass
class PathMatrix:
    """Dense cheapest-route state for every ordered vertex pair."""

    defined: np.ndarray
    cost: np.ndarray
    next_hop: np.ndarray

    @classmethod
    def empty(cls, num_vertices: int) -> "PathMatrix":
        n = int(num_vertices)
        return cls(
            defined=np.zeros((n, n), dtype=bool),
            cost=np.zeros((n, n), dtype=np.float64),
            next_hop=np.full((n, n), NO_VERTEX, dtype=np.int64),
        )

    @property
    def size(self) -> int:
        return int(self.defined.shape[0])

    def set_direct(self, u: int, v: int, cost: float) -> None:
        """Record a single-arc route ``u -> v``."""
        self.defined[u, v] = True
        self.cost[u, v] = cost
        self.next_hop[u, v] = v

    def negative_cycle_vertex(self) -> Optional[int]:
        """Return the first vertex whose self-distance is negative, if any."""
        diagonal = np.diagonal(self.cost)
        hits = np.flatnonzero(np.diagonal(self.defined) & (diagonal < 0))
        if hits.size == 0:
            return None
        return int(hits[0])

    def route(self, source: int, target: int) -> List[int]:
        """Vertices visited from ``source`` to ``target`` along next-hop pointers."""
        vertices = [source]
        current = source
        for _ in range(self.size):
            if current == target:
                return vertices
            current = int(self.next_hop[current, target])
            if current == NO_VERTEX:
                raise CycleWalkError(f"No route recorded from {source} to {target}.")
            vertices.append(current)
        if current == target:
            return vertices
        raise CycleWalkError(
            f"Route from {source} to {target} did not terminate within {self.size} hops."
        )

    def cycle_through(self, origin: int) -> List[int]:
        """Closed walk ``[origin, ..., origin]`` following pointers toward ``origin``."""
        vertices = [origin]
        current = origin
        for _ in range(self.size):
            current = int(self.next_hop[current, origin])
            if current == NO_VERTEX:
                raise CycleWalkError(f"Broken next-hop chain on the cycle through {origin}.")
            vertices.append(current)
            if current == origin:
                return vertices
        raise CycleWalkError(
            f"Cycle through {origin} did not close within {self.size} steps."
        )


def relax_all_pairs(paths: PathMatrix) -> bool:
    """Run Floyd–Warshall in place.

    Returns ``False`` when relaxation stopped early on a negative self-distance,
    ``True`` when every intermediate vertex was processed.
    """
    n = paths.size
    defined, cost, next_hop = paths.defined, paths.cost, paths.next_hop
    for k in range(n):
        for i in range(n):
            if not defined[i, k]:
                continue
            candidate = cost[i, k] + cost[k]
            improve = defined[k] & (~defined[i] | (cost[i] > candidate))
            if not improve.any():
                continue
            hop = next_hop[i, k]
            stop = bool(improve[i] and candidate[i] < 0)
            if stop:
                # the scalar loop would not have reached the columns after i
                improve[i + 1 :] = False
            cost[i, improve] = candidate[improve]
            defined[i, improve] = True
            next_hop[i, improve] = hop
            if stop:
                logger.debug("Negative self-distance at vertex %d via %d", i, k)
                return False
    return True


def check_valid(paths: PathMatrix) -> None:
    """Raise when the relaxed graph has a negative cycle or an unreachable pair."""
    negative = paths.negative_cycle_vertex()
    if negative is not None:
        raise NegativeCycleError(f"Graph has a negative cycle through vertex {negative}.")
    missing = np.argwhere(~paths.defined)
    if missing.size:
        i, j = (int(x) for x in missing[0])
        raise DisconnectedGraphError(
            f"Graph is not strongly connected: no path from {i} to {j}."
        )


__all__ = ["PathMatrix", "check_valid", "relax_all_pairs"]
