"""Directed multigraph with per-pair cheapest arcs and vertex imbalance."""

from __future__ import annotations

import math
from typing import List

import numpy as np

from .domain_types import Label
from .errors import EmptyGraphError
from .shortest_paths import PathMatrix


class PostmanGraph:
    """Append-only arc store backing one solve.

    Parallel arcs are counted per ordered pair; the cheapest one seeds the
    shortest-path state with a single-hop route.
    """

    def __init__(self, num_vertices: int) -> None:
        if num_vertices <= 0:
            raise EmptyGraphError("Graph is empty: vertex count must be positive.")
        n = int(num_vertices)
        self.num_vertices = n
        self.delta = np.zeros(n, dtype=np.int64)
        self.arcs = np.zeros((n, n), dtype=np.int64)
        self.arc_cost = np.zeros((n, n), dtype=np.float64)
        self.labels: List[List[List[Label]]] = [[[] for _ in range(n)] for _ in range(n)]
        self.cheapest_label: List[List[Label]] = [[None] * n for _ in range(n)]
        self.paths = PathMatrix.empty(n)
        self.basic_cost = 0.0

    # ---------------------------------------------------------------- building --
    def add_arc(self, label: Label, u: int, v: int, cost: float) -> "PostmanGraph":
        """Append one parallel arc ``u -> v`` and return the graph."""
        u = self._check_vertex(u, "source")
        v = self._check_vertex(v, "target")
        cost = float(cost)
        if not math.isfinite(cost):
            raise ValueError(f"Arc {label!r} has non-finite cost {cost}.")

        self.labels[u][v].append(label)
        self.basic_cost += cost
        if self.arcs[u, v] == 0 or cost < self.arc_cost[u, v]:
            self.arc_cost[u, v] = cost
            self.cheapest_label[u][v] = label
            self.paths.set_direct(u, v, cost)
        self.arcs[u, v] += 1
        self.delta[u] += 1
        self.delta[v] -= 1
        return self

    def _check_vertex(self, vertex: int, role: str) -> int:
        index = int(vertex)
        if index < 0 or index >= self.num_vertices:
            raise ValueError(
                f"Arc {role} {vertex} outside 0..{self.num_vertices - 1}."
            )
        return index

    # -------------------------------------------------------------- inspection --
    @property
    def num_arcs(self) -> int:
        return int(self.arcs.sum())

    def is_balanced(self) -> bool:
        return not self.delta.any()


__all__ = ["PostmanGraph"]
