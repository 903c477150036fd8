"""Directed Chinese postman solver core."""

from .balance import ImbalancePartition, build_feasible_flow, partition_imbalance
from .circuit_tracer import CircuitTracer
from .cycle_canceling import CanceledCycle, CycleCancelingOptimizer
from .domain_types import NO_VERTEX, TracedArc
from .errors import (
    CircuitError,
    CycleWalkError,
    DisconnectedGraphError,
    EmptyGraphError,
    IterationLimitError,
    NegativeCycleError,
    PostmanError,
    SolverStateError,
    VertexNotFoundError,
)
from .graph_model import PostmanGraph
from .shortest_paths import PathMatrix, check_valid, relax_all_pairs
from .solver import ChinesePostmanSolver

__all__ = [
    "CanceledCycle",
    "ChinesePostmanSolver",
    "CircuitError",
    "CircuitTracer",
    "CycleCancelingOptimizer",
    "CycleWalkError",
    "DisconnectedGraphError",
    "EmptyGraphError",
    "ImbalancePartition",
    "IterationLimitError",
    "NO_VERTEX",
    "NegativeCycleError",
    "PathMatrix",
    "PostmanError",
    "PostmanGraph",
    "SolverStateError",
    "TracedArc",
    "VertexNotFoundError",
    "build_feasible_flow",
    "check_valid",
    "partition_imbalance",
    "relax_all_pairs",
]
