"""Exceptions raised by livepath.

Unresolvable paths are not errors: reading them yields ABSENT.
"""


class LivePathError(Exception):
    """Base class for livepath errors."""


class DetachedPathError(LivePathError, LookupError):
    """A write went through a proxy whose base path no longer leads to a container."""

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"no container at {path.key or '<root>'!r}")
