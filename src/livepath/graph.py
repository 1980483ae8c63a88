"""ReactiveGraph — computation registry and dependency engine.

A graph owns every computation defined on it and the paths each one read
during its most recent run. Writes made through a StateProxy report the
changed path here; every computation whose dependencies cover that path
(equal, ancestor, or descendant) re-runs synchronously, in definition
order, before the write returns.

Computations can depend on one another through lookup(). Those edges live
in the same key space as state paths, under the reserved "__computed__"
prefix, and a run whose result changed notifies them like a state write.

There is no batching and no cycle detection: a computation whose run
ends up writing a path it reads recurses until Python gives up with
RecursionError, which propagates like any other failure.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, TypeVar

from livepath import _tracking
from livepath.computation import Computation
from livepath.paths import ABSENT, Path
from livepath.proxy import StateProxy, wrap

T = TypeVar("T")

Disposer = Callable[[], None]

COMPUTED_NAMESPACE = "__computed__"

logger = logging.getLogger("livepath.graph")


def _noop() -> None:
    pass


class ReactiveGraph:
    """Named computations plus the state paths they depend on."""

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        self._computations: dict[str, Computation] = {}
        self._dependencies: dict[str, set[Path]] = {}
        self._clock = clock

    # --- State ---

    def wrap(self, state: Any) -> StateProxy:
        """Wrap state as a root whose writes notify this graph."""
        return wrap(state, self)

    # --- Registry ---

    def define(self, name: str, fn: Callable[[], T]) -> T:
        """Register fn under name (replacing any previous function) and run it.

        Returns the first result. Failures propagate; the entry stays
        registered so a later change can run it again.
        """
        computation = self._computations.get(name)
        if computation is None:
            self._computations[name] = Computation(name, fn)
            self._dependencies[name] = set()
        else:
            computation.fn = fn
        return self.run(name)

    def lookup(self, name: str) -> Any:
        """Last result of name, or ABSENT if never defined.

        Inside a running computation this records a dependency on name.
        """
        self.record_dependency(Path((COMPUTED_NAMESPACE, name)))
        computation = self._computations.get(name)
        return computation.last_result if computation is not None else ABSENT

    def subscribe(self, name: str, callback: Callable[[Any], None]) -> Disposer:
        """Call callback(result) after every run of name.

        Unknown names are ignored. Returns a function that removes the
        callback.
        """
        computation = self._computations.get(name)
        if computation is None:
            return _noop

        computation.subscribers.append(callback)

        def _unsubscribe() -> None:
            try:
                computation.subscribers.remove(callback)
            except ValueError:
                pass  # already removed

        return _unsubscribe

    def remove(self, name: str) -> bool:
        """Forget a computation and its dependencies. True if it existed."""
        self._dependencies.pop(name, None)
        return self._computations.pop(name, None) is not None

    # --- Dependency engine ---

    @property
    def active(self) -> str | None:
        """Name of the computation currently running in this graph."""
        return _tracking.active_name(self)

    def record_dependency(self, path: Path) -> None:
        """Add path to the running computation's dependencies, if one is running."""
        name = _tracking.active_name(self)
        if name is None:
            return
        deps = self._dependencies.get(name)
        if deps is None:
            # removed mid-run
            return
        deps.add(Path(path))
        logger.debug("Dependency: %s -> %s", name, Path(path))

    def notify_changed(self, path: Path) -> None:
        """Re-run every computation whose dependencies cover path."""
        path = Path(path)
        for name in list(self._computations):
            deps = self._dependencies.get(name)
            if deps and any(dep.covers(path) for dep in deps):
                logger.debug("Recomputing %s after change at %s", name, path)
                self.run(name)

    def run(self, name: str) -> Any:
        """Run a computation, re-tracking its dependencies.

        Unknown names are a no-op returning ABSENT.
        """
        computation = self._computations.get(name)
        if computation is None:
            return ABSENT

        self._dependencies[name] = set()
        token = _tracking.current_computation.set((self, name))
        try:
            result = computation.fn()
        finally:
            _tracking.current_computation.reset(token)

        previous = computation.last_result
        computation.last_result = result
        computation.last_run = self._clock()
        logger.debug("Computed %s = %r", name, result)

        for callback in list(computation.subscribers):
            callback(result)

        if previous is not result and previous != result:
            self.notify_changed(Path((COMPUTED_NAMESPACE, name)))
        return result

    # --- Diagnostics ---

    def computations(self) -> dict[str, Computation]:
        """Registered computations, in definition order."""
        return dict(self._computations)

    def dependencies(self) -> dict[str, frozenset[str]]:
        """Dependency keys per computation, as dotted strings."""
        return {
            name: frozenset(path.key for path in deps)
            for name, deps in self._dependencies.items()
        }

    def __contains__(self, name: str) -> bool:
        return name in self._computations

    def __len__(self) -> int:
        return len(self._computations)

    def __repr__(self) -> str:
        return f"ReactiveGraph({list(self._computations)!r})"
