"""Exceptions for Delve.

Only malformed data raises. Movement rejections, lookup misses and false
preconditions are ordinary return values.
"""

from __future__ import annotations

from typing import Iterable


class DelveError(Exception):
    """Base exception for Delve errors."""

    pass


class DataIntegrityError(DelveError):
    """Tile, map or event data failed validation at load time.

    Carries every problem found, not just the first.
    """

    def __init__(self, message: str, errors: Iterable[str] = ()):
        self.errors: tuple[str, ...] = tuple(errors)
        if self.errors:
            detail = "\n".join(f"  - {e}" for e in self.errors)
            message = f"{message}:\n{detail}"
        super().__init__(message)


class UnknownMapError(DelveError):
    """A teleport or lookup named a map that is not loaded."""

    def __init__(self, map_id: str):
        self.map_id = map_id
        super().__init__(f"Map '{map_id}' not found")
