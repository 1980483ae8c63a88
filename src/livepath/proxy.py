"""StateProxy — path-aware view over a nested state tree.

Reading through a proxy never hands out raw leaves. A container-valued key
yields another proxy one level deeper; a leaf-valued key (or a missing one)
yields a LiveRef bound to the root and the full path. Writing through a
proxy mutates the underlying container and tells the graph which path
changed, so dependent computations re-run before the write returns.

A proxy holds no data. It re-resolves its base path against the root on
every access, so a proxy taken before an ancestor was replaced sees the
replacement.

Usage:
    graph = ReactiveGraph()
    state = graph.wrap({"user": {"first": "Ada"}})

    first = state.user.first      # LiveRef('user.first')
    graph.define("greeting", lambda: f"Hello {first}")

    state.user = {"first": "Grace"}
    graph.lookup("greeting")      # 'Hello Grace'
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping, MutableSequence
from typing import TYPE_CHECKING, Any, Iterator

from livepath.errors import DetachedPathError
from livepath.live_ref import LiveRef
from livepath.paths import (
    ABSENT,
    Path,
    assign,
    canonical_key,
    discard,
    is_container,
    is_leaf,
    keys_of,
    resolve,
    step,
)

if TYPE_CHECKING:
    from livepath.graph import ReactiveGraph

logger = logging.getLogger("livepath.proxy")


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _plain(value: Any, _seen: set[int] | None = None) -> Any:
    """Strip live wrappers from a value before it is stored in state.

    Handles nested anywhere inside value are replaced by what they point
    at. Mutable containers are fixed in place; tuples are rebuilt only when
    they held a handle.
    """
    if isinstance(value, LiveRef):
        return value.peek()
    if isinstance(value, StateProxy):
        return _current(value)
    if not is_container(value):
        return value

    seen = set() if _seen is None else _seen
    if id(value) in seen:
        return value
    seen.add(id(value))

    if isinstance(value, MutableMapping):
        for key, item in list(value.items()):
            plain = _plain(item, seen)
            if plain is not item:
                value[key] = plain
    elif isinstance(value, MutableSequence):
        for index, item in enumerate(list(value)):
            plain = _plain(item, seen)
            if plain is not item:
                value[index] = plain
    elif isinstance(value, tuple):
        items = [_plain(item, seen) for item in value]
        if any(new is not old for new, old in zip(items, value)):
            return value._make(items) if hasattr(value, "_make") else tuple(items)
    elif hasattr(value, "__dict__"):
        for key, item in list(vars(value).items()):
            plain = _plain(item, seen)
            if plain is not item:
                setattr(value, key, plain)
    return value


class StateProxy:
    """Intercepts reads and writes relative to a base path within a root.

    Internals are name-mangled so any other key, underscored or not, reads
    and writes through as state. Dunder keys need item access.
    """

    __slots__ = ("__graph", "__root", "__path")

    def __init__(self, graph: ReactiveGraph, root: Any, path: Path = Path()) -> None:
        object.__setattr__(self, "_StateProxy__graph", graph)
        object.__setattr__(self, "_StateProxy__root", root)
        object.__setattr__(self, "_StateProxy__path", Path(path))

    # --- Reads ---

    def __read(self, key) -> Any:
        container = _current(self)
        key = canonical_key(container, key)
        current_path = self.__path.child(key)
        value = step(container, key)

        if is_leaf(value):
            return LiveRef(self.__root, current_path, self.__graph.record_dependency)
        if is_container(value):
            return StateProxy(self.__graph, self.__root, current_path)
        return value

    def __getattr__(self, name: str) -> Any:
        if _is_dunder(name):
            raise AttributeError(name)
        return self.__read(name)

    def __getitem__(self, key) -> Any:
        return self.__read(key)

    # --- Writes ---

    def __container(self) -> Any:
        container = _current(self)
        if not is_container(container):
            raise DetachedPathError(self.__path)
        return container

    def __write(self, key, value: Any) -> None:
        container = self.__container()
        key = canonical_key(container, key)
        assign(container, key, _plain(value))
        changed_path = self.__path.child(key)
        logger.debug("State changed: %s", changed_path)
        self.__graph.notify_changed(changed_path)

    def __delete(self, key) -> None:
        container = self.__container()
        key = canonical_key(container, key)
        discard(container, key)
        changed_path = self.__path.child(key)
        logger.debug("State removed: %s", changed_path)
        self.__graph.notify_changed(changed_path)

    def __setattr__(self, name: str, value: Any) -> None:
        self.__write(name, value)

    def __setitem__(self, key, value: Any) -> None:
        self.__write(key, value)

    def __delattr__(self, name: str) -> None:
        self.__delete(name)

    def __delitem__(self, key) -> None:
        self.__delete(key)

    # --- Introspection (not tracked) ---

    def __iter__(self) -> Iterator[str]:
        current = _current(self)
        return iter(keys_of(current) if is_container(current) else [])

    def __len__(self) -> int:
        current = _current(self)
        return len(keys_of(current)) if is_container(current) else 0

    def __contains__(self, key) -> bool:
        current = _current(self)
        return step(current, canonical_key(current, key)) is not ABSENT

    def __repr__(self) -> str:
        return f"StateProxy({self.__path.key or '<root>'!r})"


def _current(proxy: StateProxy) -> Any:
    return resolve(proxy._StateProxy__root, proxy._StateProxy__path)


def wrap(state: Any, graph: ReactiveGraph | None = None) -> StateProxy:
    """Wrap state as the root of a live view.

    A fresh ReactiveGraph is created when none is given; reach it through
    the graph the proxy reports to, or pass your own to share computations.
    """
    if not is_container(state):
        raise TypeError(f"cannot wrap {type(state).__name__}: not a container")
    if graph is None:
        from livepath.graph import ReactiveGraph

        graph = ReactiveGraph()
    return StateProxy(graph, state)


def graph_of(proxy: StateProxy) -> ReactiveGraph:
    return proxy._StateProxy__graph


def path_of(value: LiveRef | StateProxy) -> Path:
    """The path a LiveRef or StateProxy is bound to."""
    if isinstance(value, LiveRef):
        return value.path
    if isinstance(value, StateProxy):
        return value._StateProxy__path
    raise TypeError(f"{type(value).__name__} has no live path")


def snapshot(proxy: StateProxy) -> Any:
    """The raw container currently at the proxy's path, or ABSENT."""
    return _current(proxy)
