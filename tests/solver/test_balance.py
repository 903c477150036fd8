from __future__ import annotations

import numpy as np

from dcpp.solver.balance import build_feasible_flow, partition_imbalance


def test_partition_orders_vertices_by_index():
    partition = partition_imbalance(np.array([1, 2, -1, -1, -1, 0]))
    assert partition.deficit == (2, 3, 4)
    assert partition.surplus == (0, 1)
    assert not partition.is_balanced
    assert partition.surplus_mask(6).tolist() == [True, True, False, False, False, False]


def test_greedy_flow_pairs_in_index_order():
    delta = np.array([1, 2, -1, -1, -1])
    flow = build_feasible_flow(delta, partition_imbalance(delta))
    assert flow[2, 0] == 1
    assert flow[3, 1] == 1
    assert flow[4, 1] == 1
    assert flow.sum() == 3


def test_greedy_flow_balances_every_vertex():
    delta = np.array([-3, 2, -1, 4, -2, 0])
    flow = build_feasible_flow(delta, partition_imbalance(delta))
    assert (flow >= 0).all()
    for i in (0, 2, 4):
        assert flow[i].sum() == -delta[i]
    for j in (1, 3):
        assert flow[:, j].sum() == delta[j]
    assert flow[5].sum() == 0 and flow[:, 5].sum() == 0


def test_balanced_input_yields_zero_flow():
    delta = np.zeros(4, dtype=np.int64)
    partition = partition_imbalance(delta)
    assert partition.is_balanced
    assert not build_feasible_flow(delta, partition).any()
