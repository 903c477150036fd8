"""Directed Chinese postman solver.

Finds a minimum-cost closed walk that uses every arc of a weighted directed
multigraph at least once, then reconstructs it arc by arc from any start
vertex.

Pipeline
--------
1. :func:`~dcpp.solver.shortest_paths.relax_all_pairs` on the input graph,
   followed by :func:`~dcpp.solver.shortest_paths.check_valid`.
2. :func:`~dcpp.solver.balance.partition_imbalance` and
   :func:`~dcpp.solver.balance.build_feasible_flow` seed a flow from deficit
   to surplus vertices.
3. :class:`~dcpp.solver.cycle_canceling.CycleCancelingOptimizer` cancels
   negative residual cycles until the flow is cost-optimal.
4. :class:`~dcpp.solver.circuit_tracer.CircuitTracer` replays original arcs
   plus ``f[i][j]`` copies of each cheapest ``i -> j`` route.

Example
-------
>>> solver = ChinesePostmanSolver(3)
>>> _ = solver.add_arc("a", 0, 1, 1).add_arc("b", 1, 2, 1).add_arc("c", 2, 0, 1)
>>> solver.solve().cost()
3.0
>>> [arc.label for arc in solver.trace_route(0)]
['a', 'b', 'c']
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from .balance import ImbalancePartition, build_feasible_flow, partition_imbalance
from .circuit_tracer import CircuitTracer
from .cycle_canceling import CycleCancelingOptimizer
from .domain_types import Label
from .errors import SolverStateError, VertexNotFoundError
from .graph_model import PostmanGraph
from .shortest_paths import check_valid, relax_all_pairs

logger = logging.getLogger(__name__)


class ChinesePostmanSolver:
    """Owns one graph instance and solves it exactly once."""

    def __init__(self, num_vertices: int, *, max_iterations: Optional[int] = None) -> None:
        self.graph = PostmanGraph(num_vertices)
        self.max_iterations = max_iterations
        self._partition: Optional[ImbalancePartition] = None
        self._flow: Optional[np.ndarray] = None
        self._iterations = 0

    @property
    def num_vertices(self) -> int:
        return self.graph.num_vertices

    @property
    def basic_cost(self) -> float:
        return self.graph.basic_cost

    @property
    def solved(self) -> bool:
        return self._flow is not None

    # ---------------------------------------------------------------- building --
    def add_arc(self, label: Label, u: int, v: int, cost: float = 1) -> "ChinesePostmanSolver":
        if self.solved:
            raise SolverStateError("Cannot add arcs to a solved graph.")
        self.graph.add_arc(label, u, v, cost)
        return self

    # ----------------------------------------------------------------- solving --
    def solve(self) -> "ChinesePostmanSolver":
        if self.solved:
            raise SolverStateError("Graph already solved; build a new solver instance.")
        graph = self.graph
        logger.info(
            "Solving postman tour over %d vertices and %d arcs (basic cost %.6g)",
            graph.num_vertices,
            graph.num_arcs,
            graph.basic_cost,
        )
        relax_all_pairs(graph.paths)
        check_valid(graph.paths)

        partition = partition_imbalance(graph.delta)
        logger.info(
            "Unbalanced vertices: %d deficit, %d surplus",
            len(partition.deficit),
            len(partition.surplus),
        )
        flow = build_feasible_flow(graph.delta, partition)
        optimizer = CycleCancelingOptimizer(
            graph.paths, partition, flow, max_iterations=self.max_iterations
        )
        self._iterations = optimizer.run()
        self._partition = partition
        self._flow = optimizer.flow
        logger.info("Optimal postman tour cost %.6g", self.cost())
        return self

    # ----------------------------------------------------------------- results --
    def phi(self) -> float:
        """Extra cost of the augmenting routes, ``sum(c[i][j] * f[i][j])``."""
        flow = self._require_flow()
        return float((self.graph.paths.cost * flow).sum())

    def cost(self) -> float:
        """Total cost of the optimal closed walk."""
        return self.graph.basic_cost + self.phi()

    def trace_route(self, start_vertex: int) -> CircuitTracer:
        flow = self._require_flow()
        try:
            start = int(start_vertex)
        except (TypeError, ValueError) as exc:
            raise VertexNotFoundError(f"Start vertex {start_vertex!r} not found.") from exc
        if start < 0 or start >= self.num_vertices:
            raise VertexNotFoundError(f"Start vertex {start_vertex!r} not found.")
        return CircuitTracer(self.graph, flow, start)

    @property
    def flow(self) -> np.ndarray:
        return self._require_flow().copy()

    @property
    def distances(self) -> np.ndarray:
        self._require_flow()
        return self.graph.paths.cost.copy()

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def deficit_vertices(self) -> Tuple[int, ...]:
        self._require_flow()
        return self._partition.deficit

    @property
    def surplus_vertices(self) -> Tuple[int, ...]:
        self._require_flow()
        return self._partition.surplus

    def _require_flow(self) -> np.ndarray:
        if self._flow is None:
            raise SolverStateError("solve() must complete before reading results.")
        return self._flow


__all__ = ["ChinesePostmanSolver"]
