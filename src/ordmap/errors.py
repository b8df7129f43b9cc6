"""Exception types raised by ordered maps.

Every error derives from `OrderedMapError` and from the builtin exception a
caller would naturally catch for the same situation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class OrderedMapError(Exception):
    """Base class for all ordered map errors."""


class ArityMismatchError(OrderedMapError, ValueError):
    """Parallel key and value sequences have different lengths."""

    def __init__(self, key_count: int, value_count: int) -> None:
        self.key_count = key_count
        self.value_count = value_count
        super().__init__(f"got {key_count} keys but {value_count} values")


class MalformedArgumentListError(OrderedMapError, ValueError):
    """Alternating value/key arguments are not well formed."""


class DuplicateKeyError(OrderedMapError, KeyError):
    """A key that must be new is already present."""

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"duplicate key: {self.key!r}"


class IndexOutOfRangeError(OrderedMapError, IndexError):
    """A position falls outside the valid range."""

    def __init__(self, position: int, count: int, *, inclusive: bool = False) -> None:
        self.position = position
        self.count = count
        upper = f"{count}]" if inclusive else f"{count})"
        super().__init__(f"position {position} out of range [0, {upper}")


class ArchiveFormatError(OrderedMapError, ValueError):
    """An archive payload does not follow the keys/objects layout."""


class InvariantViolationError(OrderedMapError, AssertionError):
    """Internal sequence and index disagree."""

    def __init__(self, problems: Sequence[str]) -> None:
        self.problems = list(problems)
        super().__init__("ordered map invariants violated: " + "; ".join(self.problems))
