"""Error taxonomy raised by the directed Chinese postman solver."""

from __future__ import annotations


class PostmanError(Exception):
    """Base class for every solver failure."""


class EmptyGraphError(PostmanError, ValueError):
    """Raised at construction when the vertex count is not positive."""


class DisconnectedGraphError(PostmanError):
    """Some ordered vertex pair has no finite path."""


class NegativeCycleError(PostmanError):
    """A vertex of the input graph lies on a negative-cost cycle."""


class VertexNotFoundError(PostmanError, LookupError):
    """Requested start vertex does not belong to the solved graph."""


class SolverStateError(PostmanError):
    """Operation invoked before ``solve()`` or after the graph was frozen."""


class IterationLimitError(PostmanError):
    """Cycle canceling needed more iterations than the configured cap."""


class CycleWalkError(PostmanError):
    """Next-hop pointers did not describe a usable cycle or path."""


class CircuitError(PostmanError):
    """The circuit closed while arcs or augmenting flow were still unused."""


__all__ = [
    "CircuitError",
    "CycleWalkError",
    "DisconnectedGraphError",
    "EmptyGraphError",
    "IterationLimitError",
    "NegativeCycleError",
    "PostmanError",
    "SolverStateError",
    "VertexNotFoundError",
]
