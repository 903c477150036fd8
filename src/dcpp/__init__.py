"""Directed Chinese postman tours for weighted multigraphs."""

from .ingest import EdgeList, EdgeRecord, SolverConfig, VertexIndexer
from .route import PostmanService, RouteResult, RouteStep
from .solver import ChinesePostmanSolver, TracedArc

__version__ = "0.1.0"

__all__ = [
    "ChinesePostmanSolver",
    "EdgeList",
    "EdgeRecord",
    "PostmanService",
    "RouteResult",
    "RouteStep",
    "SolverConfig",
    "TracedArc",
    "VertexIndexer",
    "__version__",
]
