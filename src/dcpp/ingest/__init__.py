"""Ingestion helpers: vertex naming, edge lists and solver configuration."""

from .edge_list import EdgeList, EdgeRecord
from .solver_config import SolverConfig
from .vertex_indexer import VertexIndexer

__all__ = [
    "EdgeList",
    "EdgeRecord",
    "SolverConfig",
    "VertexIndexer",
]
