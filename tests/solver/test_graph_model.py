from __future__ import annotations

import pytest

from dcpp.solver.errors import EmptyGraphError
from dcpp.solver.graph_model import PostmanGraph


def test_parallel_arcs_keep_cheapest_label_and_all_labels():
    graph = PostmanGraph(2)
    graph.add_arc("slow", 0, 1, 5).add_arc("fast", 0, 1, 2).add_arc("tie", 0, 1, 2)
    graph.add_arc("back", 1, 0, 1)

    assert graph.arcs[0, 1] == 3
    assert graph.labels[0][1] == ["slow", "fast", "tie"]
    assert graph.cheapest_label[0][1] == "fast"
    assert graph.arc_cost[0, 1] == pytest.approx(2.0)
    assert graph.paths.next_hop[0, 1] == 1
    assert graph.basic_cost == pytest.approx(10.0)
    assert graph.num_arcs == 4


def test_delta_tracks_out_minus_in():
    graph = PostmanGraph(3)
    graph.add_arc("a", 0, 1, 1).add_arc("b", 0, 2, 1).add_arc("c", 1, 2, 1)
    assert graph.delta.tolist() == [2, 0, -2]
    assert not graph.is_balanced()


def test_self_loop_leaves_delta_unchanged():
    graph = PostmanGraph(1)
    graph.add_arc("loop", 0, 0, 4)
    assert graph.delta.tolist() == [0]
    assert graph.paths.defined[0, 0]


@pytest.mark.parametrize("size", [0, -3])
def test_empty_graph_rejected(size):
    with pytest.raises(EmptyGraphError):
        PostmanGraph(size)


def test_invalid_arcs_rejected():
    graph = PostmanGraph(2)
    with pytest.raises(ValueError):
        graph.add_arc("out", 0, 2, 1)
    with pytest.raises(ValueError):
        graph.add_arc("neg", -1, 0, 1)
    with pytest.raises(ValueError):
        graph.add_arc("inf", 0, 1, float("inf"))
    assert graph.num_arcs == 0
