"""Paths into a nested state tree and the resolver that walks them.

A state tree is built from plain containers: mappings, lists, and attribute
objects (dataclasses, SimpleNamespace). Everything reachable is addressed by
a Path of string keys; list indices are their decimal string.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from numbers import Number
from typing import Iterable


class _Absent:
    """Marker for "nothing lives at this path". Distinct from None."""

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


class Path(tuple):
    """Immutable sequence of string keys from the root to a value."""

    __slots__ = ()

    def __new__(cls, keys: Iterable = ()) -> Path:
        # A bare string is a dotted key, not a sequence of one-letter keys.
        if isinstance(keys, str):
            keys = keys.split(".") if keys else ()
        return super().__new__(cls, (str(k) for k in keys))

    @classmethod
    def parse(cls, key: str) -> Path:
        """Build a Path from its canonical dotted key."""
        return cls(key)

    @property
    def key(self) -> str:
        return ".".join(self)

    def child(self, key) -> Path:
        return Path((*self, key))

    def covers(self, other: Path) -> bool:
        """True if either path is a prefix of the other (inclusive)."""
        n = min(len(self), len(other))
        return self[:n] == other[:n]

    def __str__(self) -> str:
        return self.key

    def __repr__(self) -> str:
        return f"Path({self.key!r})"


def is_leaf(value) -> bool:
    """Values with no navigable structure: ABSENT, None, strings, bools, numbers."""
    return value is ABSENT or value is None or isinstance(value, (str, bytes, Number))


def is_container(value) -> bool:
    if is_leaf(value):
        return False
    if isinstance(value, (Mapping, Sequence)):
        return True
    return hasattr(value, "__dict__") and not callable(value)


def _index(key: str) -> int | None:
    try:
        return int(key)
    except ValueError:
        return None


def canonical_key(container, key) -> str:
    """Key as it appears in a Path: negative list indices become absolute.

    Out-of-range negative indices are left as they are and resolve to ABSENT.
    """
    key = str(key)
    if isinstance(container, Sequence) and is_container(container):
        index = _index(key)
        if index is not None and -len(container) <= index < 0:
            return str(index + len(container))
    return key


def step(container, key: str):
    """Read one key out of a container, or ABSENT."""
    if not is_container(container):
        return ABSENT
    if isinstance(container, Mapping):
        return container.get(key, ABSENT)
    if isinstance(container, Sequence):
        index = _index(key)
        if index is None or index < 0:
            return ABSENT
        try:
            return container[index]
        except IndexError:
            return ABSENT
    return getattr(container, key, ABSENT)


def resolve(root, path: Iterable[str]):
    """Follow path from root. Returns ABSENT if any step is missing."""
    if isinstance(path, str):
        path = Path(path)
    current = root
    for key in path:
        current = step(current, key)
        if current is ABSENT:
            return ABSENT
    return current


def keys_of(container) -> list[str]:
    if isinstance(container, Mapping):
        return [str(k) for k in container]
    if isinstance(container, Sequence):
        return [str(i) for i in range(len(container))]
    return [k for k in vars(container) if not k.startswith("_")]


def assign(container, key: str, value) -> None:
    """Write value at key. Raises TypeError for immutable containers."""
    if isinstance(container, MutableMapping):
        container[key] = value
    elif isinstance(container, MutableSequence):
        index = _index(key)
        if index is None:
            raise TypeError(f"list index must be an integer, not {key!r}")
        container[index] = value
    elif isinstance(container, (Mapping, Sequence)):
        raise TypeError(f"{type(container).__name__} does not support assignment")
    else:
        setattr(container, key, value)


def discard(container, key: str) -> None:
    """Delete key. Raises KeyError/IndexError/AttributeError if missing."""
    if isinstance(container, MutableMapping):
        del container[key]
    elif isinstance(container, MutableSequence):
        index = _index(key)
        if index is None:
            raise TypeError(f"list index must be an integer, not {key!r}")
        del container[index]
    elif isinstance(container, (Mapping, Sequence)):
        raise TypeError(f"{type(container).__name__} does not support deletion")
    else:
        delattr(container, key)
