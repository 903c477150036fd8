from __future__ import annotations

import logging
import textwrap

import pytest

from dcpp.ingest.edge_list import EdgeList, EdgeRecord


EDGE_TEXT = textwrap.dedent(
    """
    # street network
    edge ab a -> b 3
    edge bc b -> c      # weight omitted
    edge ca c -> a x

    edge cb c -> b 0
    """
)


def test_text_lines_are_parsed_in_order():
    edges = EdgeList.from_text_lines(EDGE_TEXT.splitlines())
    assert list(edges) == [
        EdgeRecord("ab", "a", "b", 3),
        EdgeRecord("bc", "b", "c", 1),
        EdgeRecord("ca", "c", "a", 1),
        EdgeRecord("cb", "c", "b", 0),
    ]
    assert edges.vertex_names() == ["a", "b", "c"]


def test_default_weight_is_configurable():
    edges = EdgeList.from_text_lines(["edge ab a -> b"], default_weight=4)
    assert edges.records[0].weight == 4


def test_malformed_line_raises_when_strict():
    with pytest.raises(ValueError, match="Line 2"):
        EdgeList.from_text_lines(["edge ab a -> b", "edge bc b c"])


def test_malformed_line_is_skipped_when_lenient(caplog):
    with caplog.at_level(logging.WARNING, logger="dcpp.ingest.edge_list"):
        edges = EdgeList.from_text_lines(["edge ab a -> b", "edge bc b c"], strict=False)
    assert len(edges) == 1
    assert "Skipping malformed edge" in caplog.text


def test_from_file(tmp_path):
    path = tmp_path / "edges.txt"
    path.write_text(EDGE_TEXT, encoding="utf-8")
    edges = EdgeList.from_file(path)
    assert len(edges) == 4

    with pytest.raises(FileNotFoundError):
        EdgeList.from_file(tmp_path / "missing.txt")


def test_csv_roundtrip(tmp_path):
    edges = EdgeList().add("ab", "1", "2", 3).add("ba", "2", "1", 1.5)
    path = tmp_path / "nested" / "edges.csv"
    edges.to_csv(path)

    restored = EdgeList.from_csv(path)
    assert [(r.label, r.source, r.target) for r in restored] == [
        ("ab", "1", "2"),
        ("ba", "2", "1"),
    ]
    assert [r.weight for r in restored] == pytest.approx([3.0, 1.5])


def test_csv_without_weight_uses_default(tmp_path):
    path = tmp_path / "edges.csv"
    path.write_text("label,source,target\nab,a,b\nba,b,a\n", encoding="utf-8")
    edges = EdgeList.from_csv(path, default_weight=2)
    assert [r.weight for r in edges] == [2, 2]


def test_csv_missing_columns(tmp_path):
    path = tmp_path / "edges.csv"
    path.write_text("label,source\nab,a\n", encoding="utf-8")
    with pytest.raises(ValueError, match="target"):
        EdgeList.from_csv(path)


def test_build_solver_maps_names_to_indices():
    edges = EdgeList.from_text_lines(EDGE_TEXT.splitlines())
    solver, indexer = edges.build_solver()
    assert indexer.names == ["a", "b", "c"]
    assert solver.num_vertices == 3
    assert solver.basic_cost == pytest.approx(5.0)
    assert solver.graph.cheapest_label[2][1] == "cb"
