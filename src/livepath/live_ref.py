"""Live references — handles that re-read their path on every use.

A LiveRef never caches. Each conversion resolves its path against the
current root state and reports the read, so a computation that formats,
adds or compares a LiveRef depends on that path.

Equality stays identity based: two references to the same path are
different objects even when their values agree. Compare `.path`, or
compare `ref.get()` values.
"""

from __future__ import annotations

import operator
from typing import Any, Callable

from livepath.paths import Path, resolve

OnRead = Callable[[Path], None]


def value_of(value: Any) -> Any:
    """Current value of a LiveRef, or value unchanged."""
    if isinstance(value, LiveRef):
        return value.get()
    return value


def _binary(op):
    def method(self, other):
        return op(self.get(), value_of(other))

    method.__name__ = f"__{op.__name__.strip('_')}__"
    return method


def _reflected(op):
    def method(self, other):
        return op(value_of(other), self.get())

    method.__name__ = f"__r{op.__name__.strip('_')}__"
    return method


def _unary(op):
    def method(self):
        return op(self.get())

    method.__name__ = f"__{op.__name__.strip('_')}__"
    return method


class LiveRef:
    """A (root, path) handle that resolves to the value currently at path."""

    __slots__ = ("_root", "_path", "_on_read", "__weakref__")

    def __init__(self, root: Any, path: Path, on_read: OnRead | None = None) -> None:
        self._root = root
        self._path = Path(path)
        self._on_read = on_read

    @property
    def path(self) -> Path:
        """The bound path. Does not read the value."""
        return self._path

    def get(self) -> Any:
        """Resolve against current state and report the read.

        Returns ABSENT when nothing lives at the path.
        """
        value = resolve(self._root, self._path)
        if self._on_read is not None:
            self._on_read(self._path)
        return value

    def peek(self) -> Any:
        """Resolve without reporting a read."""
        return resolve(self._root, self._path)

    # --- Conversions ---

    def __str__(self) -> str:
        return str(self.get())

    def __format__(self, spec: str) -> str:
        return format(self.get(), spec)

    def __bool__(self) -> bool:
        return bool(self.get())

    def __int__(self) -> int:
        return int(self.get())

    def __float__(self) -> float:
        return float(self.get())

    def __index__(self) -> int:
        return operator.index(self.get())

    # --- Arithmetic ---

    __add__ = _binary(operator.add)
    __sub__ = _binary(operator.sub)
    __mul__ = _binary(operator.mul)
    __truediv__ = _binary(operator.truediv)
    __floordiv__ = _binary(operator.floordiv)
    __mod__ = _binary(operator.mod)
    __pow__ = _binary(operator.pow)

    __radd__ = _reflected(operator.add)
    __rsub__ = _reflected(operator.sub)
    __rmul__ = _reflected(operator.mul)
    __rtruediv__ = _reflected(operator.truediv)
    __rfloordiv__ = _reflected(operator.floordiv)
    __rmod__ = _reflected(operator.mod)
    __rpow__ = _reflected(operator.pow)

    __neg__ = _unary(operator.neg)
    __pos__ = _unary(operator.pos)
    __abs__ = _unary(operator.abs)

    # --- Ordering (== and hash are left as identity) ---

    __lt__ = _binary(operator.lt)
    __le__ = _binary(operator.le)
    __gt__ = _binary(operator.gt)
    __ge__ = _binary(operator.ge)

    def __repr__(self) -> str:
        return f"LiveRef({self._path.key!r})"
