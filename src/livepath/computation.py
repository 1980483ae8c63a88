"""Computation records held by a ReactiveGraph's registry."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from livepath.paths import ABSENT

T = TypeVar("T")


class Computation(Generic[T]):
    """A named, re-runnable function with its last result and run time."""

    __slots__ = ("name", "fn", "last_result", "last_run", "subscribers")

    def __init__(self, name: str, fn: Callable[[], T]) -> None:
        self.name = name
        self.fn = fn
        self.last_result: T | Any = ABSENT
        self.last_run: float = 0.0
        self.subscribers: list[Callable[[T], None]] = []

    def __repr__(self) -> str:
        return f"Computation({self.name!r}, last_result={self.last_result!r})"
