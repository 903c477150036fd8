"""Small value types shared across the solver package."""

from __future__ import annotations

from typing import Hashable, NamedTuple, Optional

Label = Optional[Hashable]

NO_VERTEX = -1


class TracedArc(NamedTuple):
    """One step of a traced circuit: the arc label and its endpoints."""

    label: Label
    source: int
    target: int
