"""Replays original arcs and augmenting routes as one closed walk."""

from __future__ import annotations

from typing import Iterator

import numpy as np

from .domain_types import NO_VERTEX, TracedArc
from .errors import CircuitError
from .graph_model import PostmanGraph


class CircuitTracer:
    """Lazy Eulerian circuit over a solved graph, starting at ``start``.

    The tracer works on private copies of the arc multiplicities and the
    optimized flow, so several tracers over the same solved graph do not
    interfere. Iteration is single-pass; :meth:`reset` starts over.

    At each vertex any remaining augmenting flow is used first and expanded
    hop by hop along the cheapest route. Otherwise an original arc is taken,
    keeping the arc that heads back toward ``start`` for last so the walk is
    never stranded.
    """

    def __init__(self, graph: PostmanGraph, flow: np.ndarray, start: int) -> None:
        self._graph = graph
        self._solved_flow = flow
        self.start = int(start)
        self.reset()

    def reset(self) -> None:
        self._arcs = self._graph.arcs.copy()
        self._flow = self._solved_flow.copy()
        self._steps = self._walk()

    def __iter__(self) -> "CircuitTracer":
        return self

    def __next__(self) -> TracedArc:
        return next(self._steps)

    # ----------------------------------------------------------------- internal --
    def _walk(self) -> Iterator[TracedArc]:
        graph = self._graph
        paths = graph.paths
        current = self.start
        while True:
            detour_end = self._pending_detour(current)
            if detour_end != NO_VERTEX:
                self._flow[current, detour_end] -= 1
                hops = paths.route(current, detour_end)
                for source, target in zip(hops, hops[1:]):
                    yield TracedArc(graph.cheapest_label[source][target], source, target)
                current = detour_end
                continue

            bridge = int(paths.next_hop[current, self.start])
            if bridge == NO_VERTEX or self._arcs[current, bridge] == 0:
                break
            target = self._direct_target(current, bridge)
            self._arcs[current, target] -= 1
            remaining = int(self._arcs[current, target])
            yield TracedArc(graph.labels[current][target][remaining], current, target)
            current = target
        self._check_exhausted(current)

    def _pending_detour(self, vertex: int) -> int:
        pending = np.flatnonzero(self._flow[vertex] > 0)
        return int(pending[0]) if pending.size else NO_VERTEX

    def _direct_target(self, vertex: int, bridge: int) -> int:
        for k in np.flatnonzero(self._arcs[vertex] > 0):
            if k != bridge:
                return int(k)
        return bridge

    def _check_exhausted(self, vertex: int) -> None:
        if vertex != self.start or self._arcs.any() or self._flow.any():
            raise CircuitError(
                f"Circuit from {self.start} stopped at {vertex} with "
                f"{int(self._arcs.sum())} arc(s) and {int(self._flow.sum())} "
                "augmenting unit(s) unused."
            )


__all__ = ["CircuitTracer"]
