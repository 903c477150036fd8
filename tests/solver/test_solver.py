from __future__ import annotations

from collections import Counter

import numpy as np
import pytest

from dcpp.solver.errors import (
    DisconnectedGraphError,
    EmptyGraphError,
    IterationLimitError,
    NegativeCycleError,
    SolverStateError,
)
from dcpp.solver.solver import ChinesePostmanSolver

FIVE_VERTEX_ARCS = [
    ("ba", 0, 1, 1),
    ("ac", 1, 2, 1),
    ("ad", 1, 3, 1),
    ("ae", 1, 4, 1),
    ("de", 3, 4, 1),
    ("eb", 4, 0, 1),
    ("bc", 0, 2, 1),
    ("cd", 2, 3, 1),
]

CROSSED_SQUARE_ARCS = [
    ("a1", 2, 0, 1),
    ("a2", 2, 0, 5),
    ("b1", 3, 1, 1),
    ("b2", 3, 1, 1),
    ("c", 0, 3, 1),
    ("d", 1, 2, 1),
]


def _build(num_vertices: int, arcs, **kwargs) -> ChinesePostmanSolver:
    solver = ChinesePostmanSolver(num_vertices, **kwargs)
    for label, u, v, cost in arcs:
        solver.add_arc(label, u, v, cost)
    return solver


def _assert_closed_walk(solver: ChinesePostmanSolver, arcs, start: int) -> None:
    route = list(solver.trace_route(start))
    flow = solver.flow
    paths = solver.graph.paths

    expected_labels = Counter(label for label, *_ in arcs)
    detour_hops = 0
    for i, j in zip(*np.nonzero(flow)):
        hops = paths.route(int(i), int(j))
        detour_hops += int(flow[i, j]) * (len(hops) - 1)
        for u, v in zip(hops, hops[1:]):
            expected_labels[solver.graph.cheapest_label[u][v]] += int(flow[i, j])

    assert len(route) == len(arcs) + detour_hops
    assert Counter(arc.label for arc in route) == expected_labels
    assert route[0].source == start
    assert route[-1].target == start
    for prev, curr in zip(route, route[1:]):
        assert prev.target == curr.source
    assert Counter(a.source for a in route) == Counter(a.target for a in route)


def test_five_vertex_scenario():
    solver = _build(5, FIVE_VERTEX_ARCS).solve()

    assert solver.basic_cost == pytest.approx(8.0)
    assert solver.deficit_vertices == (2, 3, 4)
    assert solver.surplus_vertices == (0, 1)
    assert solver.flow.sum() == 3
    assert solver.iterations == 0
    assert solver.phi() == pytest.approx(8.0)
    assert solver.cost() == pytest.approx(16.0)

    route = list(solver.trace_route(1))
    assert [(arc.label, arc.source, arc.target) for arc in route] == [
        ("ac", 1, 2),
        ("cd", 2, 3),
        ("de", 3, 4),
        ("eb", 4, 0),
        ("bc", 0, 2),
        ("cd", 2, 3),
        ("de", 3, 4),
        ("eb", 4, 0),
        ("ba", 0, 1),
        ("ad", 1, 3),
        ("de", 3, 4),
        ("eb", 4, 0),
        ("ba", 0, 1),
        ("ae", 1, 4),
        ("eb", 4, 0),
        ("ba", 0, 1),
    ]


@pytest.mark.parametrize("start", range(5))
def test_five_vertex_closed_walk_from_every_start(start):
    solver = _build(5, FIVE_VERTEX_ARCS).solve()
    _assert_closed_walk(solver, FIVE_VERTEX_ARCS, start)


@pytest.mark.parametrize("start", range(4))
def test_crossed_square_optimized_walk(start):
    solver = _build(4, CROSSED_SQUARE_ARCS).solve()
    assert solver.iterations == 1
    assert solver.basic_cost == pytest.approx(10.0)
    assert solver.cost() == pytest.approx(12.0)
    _assert_closed_walk(solver, CROSSED_SQUARE_ARCS, start)


def test_crossed_square_route_from_zero():
    solver = _build(4, CROSSED_SQUARE_ARCS).solve()
    labels = [arc.label for arc in solver.trace_route(0)]
    assert labels == ["c", "b2", "d", "a2", "c", "b1", "d", "a1"]


def test_cost_matches_independent_recomputation():
    solver = _build(4, CROSSED_SQUARE_ARCS).solve()
    flow = solver.flow
    distances = solver.distances
    extra = sum(
        distances[i, j] * flow[i, j]
        for i in range(solver.num_vertices)
        for j in range(solver.num_vertices)
    )
    assert solver.cost() == pytest.approx(sum(a[3] for a in CROSSED_SQUARE_ARCS) + extra)


def test_eulerian_input_leaves_flow_at_zero():
    arcs = [("a", 0, 1, 2), ("b", 1, 2, 3), ("c", 2, 0, 4), ("d", 0, 2, 1), ("e", 2, 0, 1)]
    solver = _build(3, arcs)
    assert solver.graph.is_balanced()
    solver.solve()
    assert not solver.flow.any()
    assert solver.cost() == pytest.approx(solver.basic_cost)
    for start in range(3):
        assert len(list(solver.trace_route(start))) == len(arcs)


def test_opposite_negative_arcs_raise_negative_cycle():
    solver = _build(2, [("x", 0, 1, -1), ("y", 1, 0, -1)])
    with pytest.raises(NegativeCycleError):
        solver.solve()


def test_missing_connection_raises_disconnected():
    arcs = [("ab", 0, 1, 1), ("ba", 1, 0, 1), ("cd", 2, 3, 1), ("dc", 3, 2, 1)]
    with pytest.raises(DisconnectedGraphError):
        _build(4, arcs).solve()


def test_empty_graph_raises():
    with pytest.raises(EmptyGraphError):
        ChinesePostmanSolver(0)


def test_iteration_cap_is_forwarded():
    solver = _build(4, CROSSED_SQUARE_ARCS, max_iterations=0)
    with pytest.raises(IterationLimitError):
        solver.solve()


def test_lifecycle_is_enforced():
    solver = _build(3, [("a", 0, 1, 1), ("b", 1, 2, 1), ("c", 2, 0, 1)])
    with pytest.raises(SolverStateError):
        solver.cost()
    with pytest.raises(SolverStateError):
        solver.trace_route(0)
    solver.solve()
    with pytest.raises(SolverStateError):
        solver.solve()
    with pytest.raises(SolverStateError):
        solver.add_arc("d", 0, 2, 1)
    assert solver.cost() == pytest.approx(3.0)


def test_add_arc_chains():
    solver = ChinesePostmanSolver(2)
    assert solver.add_arc("a", 0, 1, 1).add_arc("b", 1, 0, 1) is solver
