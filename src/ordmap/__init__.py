"""ordmap: ordered key/value containers.

Mappings that keep a deterministic order of their pairs (insertion order or an
explicit sort order) with hash-indexed key lookup and positional access.

Example:
    >>> from ordmap import MutableOrderedMap
    >>> m = MutableOrderedMap.from_pairs(["a", "b"], [1, 2])
    >>> m.insert_at(99, "m", 1)
    >>> m.all_keys()
    ['a', 'm', 'b']
    >>> m.at[1], m["b"], m.index_of("b")
    (99, 2, 2)
"""

from __future__ import annotations

from ordmap._internal.storage import MISSING, DuplicatePolicy
from ordmap.errors import (
    ArchiveFormatError,
    ArityMismatchError,
    DuplicateKeyError,
    IndexOutOfRangeError,
    InvariantViolationError,
    MalformedArgumentListError,
    OrderedMapError,
)
from ordmap.ordered_map import (
    MutableOrderedMap,
    OrderedMap,
    PositionalAccessor,
    mutable_ordered_copy,
    ordered_copy,
)
from ordmap.synchronized import SynchronizedOrderedMap

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "ArchiveFormatError",
    "ArityMismatchError",
    "DuplicateKeyError",
    "DuplicatePolicy",
    "IndexOutOfRangeError",
    "InvariantViolationError",
    "MalformedArgumentListError",
    "MutableOrderedMap",
    "OrderedMap",
    "OrderedMapError",
    "PositionalAccessor",
    "SynchronizedOrderedMap",
    "__version__",
    "mutable_ordered_copy",
    "ordered_copy",
]
