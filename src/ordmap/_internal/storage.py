"""Dual-indexed pair storage shared by every ordered map variant.

A `PairStore` keeps two representations of the same data:

- the *sequence*: parallel ``keys``/``values`` lists, position 0..count-1
- the *index*: ``dict`` mapping each key to its position in the sequence

The index is derived data. Every method that touches the sequence updates the
index before returning, so callers never see the two disagree.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator
from functools import cmp_to_key
from typing import Any, Final, Generic, Literal, TypeVar

import structlog

from ordmap.errors import (
    ArityMismatchError,
    DuplicateKeyError,
    IndexOutOfRangeError,
    InvariantViolationError,
)

logger = structlog.get_logger()

KT = TypeVar("KT", bound=Hashable)
VT = TypeVar("VT")

DuplicatePolicy = Literal["raise", "keep_first", "keep_last"]
DUPLICATE_POLICIES: Final = ("raise", "keep_first", "keep_last")

Comparator = Callable[[Any, Any], int]
KeyFunc = Callable[[Any], Any]


class _MissingType:
    """Type of the `MISSING` marker."""

    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _MissingType()
"""Marker for "no value". Storing it for a key removes that key."""


def sort_key_for(
    comparator: Comparator | None,
    key: KeyFunc | None,
) -> KeyFunc | None:
    """Combine a three-way comparator and/or a key function into one key function."""
    if comparator is not None and key is not None:
        msg = "pass either a comparator or a key function, not both"
        raise TypeError(msg)
    if comparator is not None:
        return cmp_to_key(comparator)
    return key


class PairStore(Generic[KT, VT]):
    """Ordered pairs plus a key -> position index, kept in lockstep."""

    __slots__ = ("_index", "_keys", "_values", "version")

    _keys: list[KT]
    _values: list[VT]
    _index: dict[KT, int]
    version: int

    def __init__(self) -> None:
        self._keys = []
        self._values = []
        self._index = {}
        # Bumped on every structural change; live iterators compare it.
        self.version = 0

    # -- construction ---------------------------------------------------

    @classmethod
    def build(
        cls,
        keys: Iterable[KT],
        values: Iterable[VT],
        *,
        duplicates: DuplicatePolicy = "raise",
    ) -> PairStore[KT, VT]:
        """Populate a new store from positionally aligned keys and values.

        The store is only returned once fully built, so a failure leaves
        nothing half-constructed behind.

        Raises:
            ArityMismatchError: ``keys`` and ``values`` differ in length.
            DuplicateKeyError: a key repeats and ``duplicates`` is ``"raise"``.
        """
        if duplicates not in DUPLICATE_POLICIES:
            msg = f"Invalid duplicate policy: {duplicates!r}. Must be one of {DUPLICATE_POLICIES}"
            raise ValueError(msg)

        key_list = list(keys)
        value_list = list(values)
        if len(key_list) != len(value_list):
            raise ArityMismatchError(len(key_list), len(value_list))

        # First occurrence fixes the position; the policy picks the value.
        order: list[KT] = []
        chosen: dict[KT, Any] = {}
        for k, v in zip(key_list, value_list):
            if k not in chosen:
                order.append(k)
                chosen[k] = v
            elif duplicates == "raise":
                raise DuplicateKeyError(k)
            elif duplicates == "keep_last":
                chosen[k] = v

        store: PairStore[KT, VT] = cls()
        for k in order:
            if chosen[k] is not MISSING:
                store.append(k, chosen[k])

        return store

    def clone(self) -> PairStore[KT, VT]:
        """Return a store with new structural storage sharing the same elements."""
        other: PairStore[KT, VT] = PairStore()
        other._keys = self._keys.copy()
        other._values = self._values.copy()
        other._index = self._index.copy()
        return other

    # -- queries --------------------------------------------------------

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def position_of(self, key: object) -> int | None:
        return self._index.get(key)  # type: ignore[call-overload]

    def lookup(self, key: object, default: Any = MISSING) -> Any:
        position = self._index.get(key)  # type: ignore[call-overload]
        if position is None:
            return default
        return self._values[position]

    def in_range(self, position: int) -> bool:
        return 0 <= position < len(self._keys)

    def check_position(self, position: int) -> int:
        if not self.in_range(position):
            raise IndexOutOfRangeError(position, len(self._keys))
        return position

    def key_at(self, position: int) -> KT:
        return self._keys[self.check_position(position)]

    def value_at(self, position: int) -> VT:
        return self._values[self.check_position(position)]

    def keys(self) -> list[KT]:
        return self._keys.copy()

    def values(self) -> list[VT]:
        return self._values.copy()

    def iter_keys(self) -> Iterator[KT]:
        """Lazy key iterator that fails if the store changes underneath it."""
        return self._iter_keys(self.version)

    def _iter_keys(self, version: int) -> Iterator[KT]:
        keys = self._keys
        position = 0
        while True:
            if self.version != version:
                msg = "ordered map changed during iteration"
                raise RuntimeError(msg)
            if position >= len(keys):
                return
            yield keys[position]
            position += 1

    # -- mutation -------------------------------------------------------

    def append(self, key: KT, value: VT) -> None:
        """Add a new pair at the end. The key must not be present."""
        self._index[key] = len(self._keys)
        self._keys.append(key)
        self._values.append(value)
        self.version += 1

    def set_value(self, key: KT, value: VT | _MissingType) -> None:
        """Replace, append, or (for `MISSING`) remove the pair for ``key``."""
        if value is MISSING:
            self.remove(key)
            return
        position = self._index.get(key)
        if position is None:
            self.append(key, value)  # type: ignore[arg-type]
        else:
            self._values[position] = value  # type: ignore[assignment]

    def remove(self, key: object) -> bool:
        """Remove ``key`` if present. Returns whether anything was removed."""
        position = self._index.pop(key, None)  # type: ignore[call-overload]
        if position is None:
            return False
        del self._keys[position]
        del self._values[position]
        for moved in self._keys[position:]:
            self._index[moved] -= 1
        self.version += 1
        return True

    def remove_at(self, position: int) -> tuple[KT, VT]:
        self.check_position(position)
        key = self._keys[position]
        value = self._values[position]
        self.remove(key)
        return key, value

    def check_insert(self, position: int, key: object) -> None:
        """Raise if ``key`` could not be inserted at ``position``."""
        if not 0 <= position <= len(self._keys):
            raise IndexOutOfRangeError(position, len(self._keys), inclusive=True)
        if key in self._index:
            raise DuplicateKeyError(key)

    def insert(self, position: int, key: KT, value: VT) -> None:
        """Insert a new pair at ``position``, shifting later pairs right.

        Raises:
            IndexOutOfRangeError: ``position`` is outside ``[0, count]``.
            DuplicateKeyError: ``key`` is already present.
        """
        self.check_insert(position, key)
        self._keys.insert(position, key)
        self._values.insert(position, value)
        for moved in self._keys[position + 1 :]:
            self._index[moved] += 1
        self._index[key] = position
        self.version += 1

    def move(self, key: KT, position: int) -> None:
        """Reposition an existing key so that it ends up at ``position``."""
        current = self._index.get(key)
        if current is None:
            raise KeyError(key)
        self.check_position(position)
        if current == position:
            return
        value = self._values[current]
        del self._keys[current]
        del self._values[current]
        self._keys.insert(position, key)
        self._values.insert(position, value)
        low, high = min(current, position), max(current, position)
        for offset in range(low, high + 1):
            self._index[self._keys[offset]] = offset
        self.version += 1

    def clear(self) -> None:
        self._keys.clear()
        self._values.clear()
        self._index.clear()
        self.version += 1

    def sort(self, sort_key: KeyFunc | None = None, *, reverse: bool = False) -> None:
        """Stable reorder of the sequence by key, then a full index rebuild.

        The new order is computed before anything is touched, so a comparator
        that raises leaves the store unchanged.
        """
        keys = self._keys
        if sort_key is None:
            order = sorted(range(len(keys)), key=keys.__getitem__, reverse=reverse)
        else:
            order = sorted(range(len(keys)), key=lambda i: sort_key(keys[i]), reverse=reverse)
        self._keys = [keys[i] for i in order]
        self._values = [self._values[i] for i in order]
        self.rebuild_index()
        logger.debug("pair_store_sorted", count=len(order), reverse=reverse)

    def rebuild_index(self) -> None:
        self._index = {k: i for i, k in enumerate(self._keys)}
        self.version += 1

    # -- diagnostics ----------------------------------------------------

    def check_invariants(self) -> None:
        """Verify that sequence and index agree.

        Raises:
            InvariantViolationError: describing the first disagreement found.
        """
        problems: list[str] = []
        count = len(self._keys)
        if len(self._values) != count:
            problems.append(f"{count} keys but {len(self._values)} values")
        if len(self._index) != count:
            problems.append(f"{count} keys but {len(self._index)} index entries")
        for position, key in enumerate(self._keys):
            indexed = self._index.get(key)
            if indexed != position:
                problems.append(f"key {key!r} at position {position} is indexed at {indexed}")
                break
        if any(v is MISSING for v in self._values):
            problems.append("MISSING stored as a value")

        if problems:
            logger.error("pair_store_invariant_violation", problems=problems)
            raise InvariantViolationError(problems)
