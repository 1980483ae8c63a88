"""Active-computation slot shared by every ReactiveGraph.

Uses a contextvar to remember which computation is running, so reads of
live references made during its evaluation can be recorded against it.
Each graph only records reads for its own computations.
"""

from __future__ import annotations

import contextvars
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from livepath.graph import ReactiveGraph

    Active = tuple[ReactiveGraph, str]

# (graph, computation name) while a computation's function is executing.
# Any LiveRef read made meanwhile is recorded against it.
current_computation: contextvars.ContextVar[Active | None] = contextvars.ContextVar(
    "current_computation", default=None
)


def active_name(graph: ReactiveGraph) -> str | None:
    """Name of the computation running in graph, if any."""
    active = current_computation.get()
    if active is None or active[0] is not graph:
        return None
    return active[1]
