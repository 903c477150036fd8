"""High-level API that turns a named edge list into a postman route.

:class:`PostmanService` owns the boundary work around the solver core: it
maps vertex names to dense indices, solves the instance once, and traces
closed walks from any named start vertex.

Example Usage
-------------
.. code-block:: python

    from dcpp.ingest import EdgeList, SolverConfig
    from dcpp.route import PostmanService

    edges = EdgeList.from_file("data/streets.txt")
    service = PostmanService(edges, config=SolverConfig(max_iterations=10_000))
    result = service.route_from("1")

    for step in result.steps:
        print(step.label, step.source, step.target)
    print(f"Total cost: {result.cost}")
    result.route_dataframe.to_csv("route.csv", index=False)

Notes
-----
- The instance is solved on the first call to :meth:`PostmanService.solve` or
  :meth:`PostmanService.route_from`; later calls reuse the solved state.
- An unknown start vertex raises :class:`VertexNotFoundError` and leaves the
  solved state usable for further calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import List, NamedTuple, Optional

import pandas as pd

from dcpp.ingest.edge_list import EdgeList
from dcpp.ingest.solver_config import SolverConfig
from dcpp.ingest.vertex_indexer import VertexIndexer
from dcpp.solver.errors import VertexNotFoundError
from dcpp.solver.solver import ChinesePostmanSolver

logger = logging.getLogger(__name__)


class RouteStep(NamedTuple):
    label: object
    source: str
    target: str


@dataclass(frozen=True)
class RouteResult:
    """Structured payload returned by :meth:`PostmanService.route_from`."""

    start: str
    steps: List[RouteStep]
    cost: float
    basic_cost: float
    augmentation_cost: float
    route_dataframe: pd.DataFrame
    solve_seconds: float
    trace_seconds: float


class PostmanService:
    """Solves one named edge list and traces routes over it."""

    def __init__(self, edges: EdgeList, *, config: SolverConfig | None = None) -> None:
        if not len(edges):
            raise ValueError("Edge list is empty; nothing to route.")
        self._edges = edges
        self._config = config or SolverConfig()
        self._solver: ChinesePostmanSolver | None = None
        self._indexer: VertexIndexer | None = None
        self._solve_seconds = 0.0

    @property
    def indexer(self) -> VertexIndexer:
        self.solve()
        return self._indexer

    def solve(self) -> ChinesePostmanSolver:
        if self._solver is not None:
            return self._solver
        started = perf_counter()
        solver, indexer = self._edges.build_solver(max_iterations=self._config.max_iterations)
        solver.solve()
        self._solve_seconds = perf_counter() - started
        logger.info(
            "Solved %d edges over %d vertices in %.3fs (%d cycle cancellation(s))",
            len(self._edges),
            len(indexer),
            self._solve_seconds,
            solver.iterations,
        )
        self._solver = solver
        self._indexer = indexer
        return solver

    def route_from(self, start: Optional[str] = None) -> RouteResult:
        """Trace the optimal closed walk beginning and ending at ``start``."""
        solver = self.solve()
        indexer = self._indexer
        start_name = self._resolve_start(start)
        start_idx = indexer.index_of(start_name)
        if start_idx is None:
            raise VertexNotFoundError(f"Start vertex {start_name!r} not found.")

        started = perf_counter()
        steps = [
            RouteStep(arc.label, indexer.name_of(arc.source), indexer.name_of(arc.target))
            for arc in solver.trace_route(start_idx)
        ]
        trace_seconds = perf_counter() - started
        logger.info(
            "Traced %d steps from %r in %.3fs", len(steps), start_name, trace_seconds
        )

        return RouteResult(
            start=start_name,
            steps=steps,
            cost=solver.cost(),
            basic_cost=solver.basic_cost,
            augmentation_cost=solver.phi(),
            route_dataframe=_build_route_dataframe(steps),
            solve_seconds=self._solve_seconds,
            trace_seconds=trace_seconds,
        )

    # ----------------------------------------------------------------- helpers
    def _resolve_start(self, start: Optional[str]) -> str:
        if start is not None and str(start).strip():
            return str(start).strip()
        if self._config.start_vertex is not None:
            return self._config.start_vertex
        return self._indexer.name_of(0)


def _build_route_dataframe(steps: List[RouteStep]) -> pd.DataFrame:
    rows = [
        {"step": idx, "label": step.label, "source": step.source, "target": step.target}
        for idx, step in enumerate(steps)
    ]
    return pd.DataFrame(rows, columns=["step", "label", "source", "target"])


__all__ = ["PostmanService", "RouteResult", "RouteStep"]
