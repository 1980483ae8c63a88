"""livepath: live references into nested state, with self-updating computations."""

from importlib.metadata import version as _version

__version__ = _version("livepath")

from livepath.paths import ABSENT, Path, resolve
from livepath.live_ref import LiveRef, value_of
from livepath.proxy import StateProxy, wrap, graph_of, path_of, snapshot
from livepath.computation import Computation
from livepath.graph import ReactiveGraph, COMPUTED_NAMESPACE
from livepath.errors import LivePathError, DetachedPathError

__all__ = [
    "ABSENT",
    "Path",
    "resolve",
    "LiveRef",
    "value_of",
    "StateProxy",
    "wrap",
    "graph_of",
    "path_of",
    "snapshot",
    "Computation",
    "ReactiveGraph",
    "COMPUTED_NAMESPACE",
    "LivePathError",
    "DetachedPathError",
]
