"""Edge-list loaders feeding the postman solver.

Text format
-----------
One arc per line, whitespace separated::

    <tag> <label> <source> <connector> <target> [weight]

for example ``edge ab a -> b 3``. The tag and connector fields are free-form.
Blank lines and lines starting with ``#`` are skipped and anything after an
inline ``#`` is ignored. A missing or non-integer weight falls back to the
default weight (``1`` unless configured otherwise).

CSV format
----------
Columns ``label``, ``source``, ``target`` and an optional ``weight``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from dcpp.solver.solver import ChinesePostmanSolver

from .vertex_indexer import VertexIndexer

logger = logging.getLogger(__name__)

_MIN_FIELDS = 5


@dataclass(frozen=True)
class EdgeRecord:
    """One labelled arc between two named vertices."""

    label: str
    source: str
    target: str
    weight: float = 1


@dataclass
class EdgeList:
    """Ordered collection of arcs as read from an external source."""

    records: List[EdgeRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def add(self, label: str, source: str, target: str, weight: float = 1) -> "EdgeList":
        self.records.append(
            EdgeRecord(label=str(label), source=str(source), target=str(target), weight=weight)
        )
        return self

    def vertex_names(self) -> List[str]:
        return self._index_vertices().names

    def build_solver(
        self, *, max_iterations: Optional[int] = None
    ) -> Tuple[ChinesePostmanSolver, VertexIndexer]:
        """Map names to dense indices and load every arc into a fresh solver."""
        indexer = self._index_vertices()
        solver = ChinesePostmanSolver(len(indexer), max_iterations=max_iterations)
        for record in self.records:
            solver.add_arc(
                record.label,
                indexer.index_of(record.source),
                indexer.index_of(record.target),
                record.weight,
            )
        return solver, indexer

    def _index_vertices(self) -> VertexIndexer:
        indexer = VertexIndexer()
        for record in self.records:
            indexer.add(record.source)
            indexer.add(record.target)
        return indexer

    # --------------------------------------------------------------------- I/O --
    @classmethod
    def from_text_lines(
        cls,
        lines: Iterable[str],
        *,
        default_weight: float = 1,
        strict: bool = True,
    ) -> "EdgeList":
        edges = cls()
        for line_no, raw in enumerate(lines, start=1):
            text = raw.split("#", 1)[0].strip()
            if not text:
                continue
            fields = text.split()
            if len(fields) < _MIN_FIELDS:
                message = (
                    f"Line {line_no}: expected '<tag> <label> <source> <connector> "
                    f"<target> [weight]', got {raw.strip()!r}"
                )
                if strict:
                    raise ValueError(message)
                logger.warning("Skipping malformed edge. %s", message)
                continue
            label, source, target = fields[1], fields[2], fields[4]
            weight = _parse_weight(fields[5] if len(fields) > 5 else None, default_weight)
            edges.add(label, source, target, weight)
            logger.debug("Added edge %s (%s -> %s) weight %s", label, source, target, weight)
        return edges

    @classmethod
    def from_file(
        cls, path: str | Path, *, default_weight: float = 1, strict: bool = True
    ) -> "EdgeList":
        edge_path = Path(path)
        if not edge_path.exists():
            raise FileNotFoundError(f"Edge list not found at {edge_path}")
        with edge_path.open("r", encoding="utf-8") as handle:
            edges = cls.from_text_lines(handle, default_weight=default_weight, strict=strict)
        logger.info("Read %d edges from %s", len(edges), edge_path)
        return edges

    @classmethod
    def from_csv(cls, path: str | Path, *, default_weight: float = 1) -> "EdgeList":
        df = pd.read_csv(path, dtype={"label": str, "source": str, "target": str})
        required_cols = {"label", "source", "target"}
        missing = required_cols.difference(df.columns)
        if missing:
            raise ValueError(f"Edge CSV missing columns: {', '.join(sorted(missing))}")

        has_weight = "weight" in df.columns
        edges = cls()
        for row in df.itertuples(index=False):
            weight = default_weight
            if has_weight and not pd.isna(row.weight):
                weight = float(row.weight)
            edges.add(row.label, row.source, row.target, weight)
        logger.info("Read %d edges from %s", len(edges), path)
        return edges

    def to_csv(self, path: str | Path) -> None:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df = pd.DataFrame(
            [
                {
                    "label": record.label,
                    "source": record.source,
                    "target": record.target,
                    "weight": record.weight,
                }
                for record in self.records
            ],
            columns=["label", "source", "target", "weight"],
        )
        df.to_csv(output_path, index=False)


def _parse_weight(token: Optional[str], default: float) -> float:
    if token is None:
        return default
    try:
        return int(token)
    except ValueError:
        return default


__all__ = ["EdgeList", "EdgeRecord"]
