"""Cycle-canceling improvement of the augmenting flow.

Each round builds a fresh residual network over the unbalanced vertices:

* a forward arc ``i -> j`` for every deficit ``i`` and surplus ``j`` with the
  cheapest route cost ``c[i][j]``;
* a reverse arc ``j -> i`` with cost ``-c[i][j]`` whenever ``f[i][j] > 0``.

Floyd–Warshall on that network stops at the first negative self-distance.
The cycle through that vertex is walked along next-hop pointers and the
smallest committed flow on its reverse arcs is shifted around it. One cycle
is canceled per rebuild; the loop ends when a rebuild finds none.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .balance import ImbalancePartition
from .errors import CycleWalkError, IterationLimitError
from .graph_model import PostmanGraph
from .shortest_paths import PathMatrix, relax_all_pairs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CanceledCycle:
    """Record of one cancellation."""

    vertices: Tuple[int, ...]
    bottleneck: int
    unit_cost: float

    @property
    def improvement(self) -> float:
        """Circulation cost removed by this cancellation."""
        return -self.unit_cost * self.bottleneck


class CycleCancelingOptimizer:
    """Drives an initial feasible flow to a minimum-cost one."""

    def __init__(
        self,
        distances: PathMatrix,
        partition: ImbalancePartition,
        flow: np.ndarray,
        *,
        max_iterations: Optional[int] = None,
    ) -> None:
        if max_iterations is not None and max_iterations < 0:
            raise ValueError("max_iterations must be non-negative.")
        self.distances = distances
        self.partition = partition
        self.flow = flow
        self.max_iterations = max_iterations
        self.history: List[CanceledCycle] = []
        self._is_surplus = partition.surplus_mask(distances.size)

    @property
    def iterations(self) -> int:
        return len(self.history)

    def circulation_cost(self) -> float:
        """Extra cost of the current augmenting flow, ``sum(c * f)``."""
        return float((self.distances.cost * self.flow).sum())

    # ---------------------------------------------------------------------- API --
    def run(self) -> int:
        """Cancel negative cycles until none remain; return how many were canceled."""
        while self.cancel_once() is not None:
            pass
        logger.info(
            "Cycle canceling converged after %d cancellation(s); augmentation cost %.6g",
            self.iterations,
            self.circulation_cost(),
        )
        return self.iterations

    def build_residual(self) -> PostmanGraph:
        residual = PostmanGraph(self.distances.size)
        cost = self.distances.cost
        for i in self.partition.deficit:
            for j in self.partition.surplus:
                residual.add_arc(None, i, j, cost[i, j])
                if self.flow[i, j] != 0:
                    residual.add_arc(None, j, i, -cost[i, j])
        return residual

    def cancel_once(self) -> Optional[CanceledCycle]:
        """Cancel a single negative cycle; ``None`` when the flow is optimal."""
        residual = self.build_residual()
        relax_all_pairs(residual.paths)
        origin = residual.paths.negative_cycle_vertex()
        if origin is None:
            return None
        if self.max_iterations is not None and self.iterations >= self.max_iterations:
            raise IterationLimitError(
                f"Cycle canceling exceeded {self.max_iterations} iteration(s)."
            )

        vertices = residual.paths.cycle_through(origin)
        hops = list(zip(vertices, vertices[1:]))
        bottleneck: Optional[int] = None
        unit_cost = 0.0
        for m, n in hops:
            if residual.arcs[m, n] == 0:
                raise CycleWalkError(f"Cycle through {origin} uses missing arc {m}->{n}.")
            unit_cost += residual.arc_cost[m, n]
            if self._is_surplus[m]:
                committed = int(self.flow[n, m])
                if bottleneck is None or committed < bottleneck:
                    bottleneck = committed
        if bottleneck is None or bottleneck <= 0 or unit_cost >= 0:
            raise CycleWalkError(
                f"Cycle {vertices} through {origin} cannot be canceled "
                f"(unit cost {unit_cost}, bottleneck {bottleneck})."
            )

        for m, n in hops:
            if self._is_surplus[m]:
                self.flow[n, m] -= bottleneck
            else:
                self.flow[m, n] += bottleneck

        canceled = CanceledCycle(
            vertices=tuple(vertices), bottleneck=bottleneck, unit_cost=unit_cost
        )
        self.history.append(canceled)
        logger.debug(
            "Canceled cycle %s: shifted %d unit(s) at %.6g per unit",
            "->".join(str(v) for v in vertices),
            bottleneck,
            unit_cost,
        )
        return canceled


__all__ = ["CanceledCycle", "CycleCancelingOptimizer"]
