"""Ordered key/value containers.

`OrderedMap` is read-only after construction; `MutableOrderedMap` adds
insertion, removal, replacement and reordering. Both keep their pairs in a
deterministic sequence (insertion order, or an explicit sort order) while
looking keys up through a hash index.

Example:
    >>> from ordmap import MutableOrderedMap
    >>> m = MutableOrderedMap.from_pairs(["a", "b", "c"], [1, 2, 3])
    >>> m.remove_key("b")
    >>> m.all_keys(), m.get_at(1)
    (['a', 'c'], 3)
"""

from __future__ import annotations

import copy as _copy
from collections.abc import Hashable, Iterable, Iterator, Mapping, MutableMapping, Sequence
from typing import Any, Generic, Self, TypeVar

from ordmap._internal.storage import (
    MISSING,
    Comparator,
    DuplicatePolicy,
    KeyFunc,
    PairStore,
    sort_key_for,
)
from ordmap.config import get_settings
from ordmap.errors import MalformedArgumentListError

KT = TypeVar("KT", bound=Hashable)
VT = TypeVar("VT")


def _rebuild(cls: type[OrderedMap[Any, Any]], keys: list[Any], values: list[Any]) -> Any:
    """Unpickle helper: rebuild through the parallel-sequence constructor."""
    return cls.from_pairs(keys, values, duplicates="raise")


class PositionalAccessor(Generic[VT]):
    """Subscript access by position: ``m.at[0]``."""

    __slots__ = ("_map",)

    def __init__(self, owner: OrderedMap[Any, VT]) -> None:
        self._map = owner

    def __getitem__(self, position: int) -> VT:
        return self._map.value_at(position)

    def __len__(self) -> int:
        return len(self._map)


class OrderedMap(Mapping[KT, VT], Generic[KT, VT]):
    """An immutable mapping that remembers the order of its pairs.

    Equality against another ordered map is positional; against any other
    `Mapping` it ignores order. Hashable when all keys and values are; the
    hash ignores order so it agrees with both kinds of equality.
    """

    _store: PairStore[KT, VT]

    def __init__(
        self,
        mapping: Mapping[KT, VT] | Iterable[tuple[KT, VT]] = (),
        /,
        **kwargs: VT,
    ) -> None:
        pairs: list[tuple[Any, Any]]
        if isinstance(mapping, Mapping):
            pairs = list(mapping.items())
        else:
            pairs = [(k, v) for k, v in mapping]
        pairs.extend(kwargs.items())
        self._init_store(
            PairStore.build(
                [k for k, _ in pairs],
                [v for _, v in pairs],
                duplicates="keep_last",
            )
        )

    def _init_store(self, store: PairStore[KT, VT]) -> None:
        self._store = store

    @classmethod
    def _from_store(cls, store: PairStore[KT, VT]) -> Self:
        instance = cls.__new__(cls)
        instance._init_store(store)
        return instance

    # -- construction ---------------------------------------------------

    @classmethod
    def empty(cls) -> Self:
        """Return a map with no pairs."""
        return cls._from_store(PairStore())

    @classmethod
    def from_pairs(
        cls,
        keys: Iterable[KT],
        values: Iterable[VT],
        *,
        duplicates: DuplicatePolicy | None = None,
    ) -> Self:
        """Build a map from positionally aligned keys and values.

        Args:
            keys: Keys in the desired order.
            values: One value per key.
            duplicates: What to do with repeated keys: ``"raise"``,
                ``"keep_first"`` or ``"keep_last"`` (the first occurrence
                keeps its position, the last value wins). Defaults to the
                configured ``duplicate_policy``.

        Raises:
            ArityMismatchError: If the two sequences differ in length.
            DuplicateKeyError: If a key repeats under the ``"raise"`` policy.
        """
        if duplicates is None:
            duplicates = get_settings().duplicate_policy
        return cls._from_store(PairStore.build(keys, values, duplicates=duplicates))

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[KT, VT],
        comparator: Comparator | None = None,
        *,
        key: KeyFunc | None = None,
        reverse: bool = False,
    ) -> Self:
        """Build a map from an unordered mapping, optionally sorted by key.

        Without ``comparator`` or ``key`` the pairs keep the mapping's own
        iteration order. ``comparator`` is a three-way ``(a, b) -> int``
        function; ``key`` is a ``sorted``-style key function. The sort is
        stable.
        """
        store: PairStore[KT, VT] = PairStore.build(
            list(mapping.keys()), list(mapping.values()), duplicates="raise"
        )
        sort_key = sort_key_for(comparator, key)
        if sort_key is not None or reverse:
            store.sort(sort_key, reverse=reverse)
        return cls._from_store(store)

    @classmethod
    def from_values_and_keys(cls, *args: Any) -> Self:
        """Build a map from alternating ``value, key, value, key, ...`` arguments.

        Raises:
            MalformedArgumentListError: If an odd number of arguments is given.
        """
        if len(args) % 2:
            msg = f"expected alternating value/key arguments, got {len(args)} arguments"
            raise MalformedArgumentListError(msg)
        return cls.from_pairs(args[1::2], args[0::2])

    @classmethod
    def from_value_key_pairs(cls, pairs: Iterable[Sequence[Any]]) -> Self:
        """Build a map from an iterable of ``(value, key)`` pairs."""
        values: list[Any] = []
        keys: list[Any] = []
        for position, pair in enumerate(pairs):
            if isinstance(pair, (str, bytes)) or not isinstance(pair, Sequence) or len(pair) != 2:
                msg = f"argument {position} is not a (value, key) pair: {pair!r}"
                raise MalformedArgumentListError(msg)
            values.append(pair[0])
            keys.append(pair[1])
        return cls.from_pairs(keys, values)

    # -- lookup ---------------------------------------------------------

    def __getitem__(self, key: KT) -> VT:
        value = self._store.lookup(key)
        if value is MISSING:
            raise KeyError(key)
        return value

    def get(self, key: KT, default: Any = None) -> Any:
        return self._store.lookup(key, default)

    def get_at(self, position: int, default: Any = None) -> Any:
        """Value at ``position``, or ``default`` when out of range."""
        if not self._store.in_range(position):
            return default
        return self._store.value_at(position)

    def value_at(self, position: int) -> VT:
        """Value at ``position``; raises `IndexOutOfRangeError` when out of range."""
        return self._store.value_at(position)

    def key_at(self, position: int) -> KT:
        """Key at ``position``; raises `IndexOutOfRangeError` when out of range."""
        return self._store.key_at(position)

    def item_at(self, position: int) -> tuple[KT, VT]:
        return self._store.key_at(position), self._store.value_at(position)

    def index_of(self, key: KT) -> int:
        """Position of ``key``; raises `KeyError` when absent."""
        position = self._store.position_of(key)
        if position is None:
            raise KeyError(key)
        return position

    @property
    def at(self) -> PositionalAccessor[VT]:
        """Positional subscript sugar: ``m.at[i]`` is ``m.value_at(i)``."""
        return PositionalAccessor(self)

    def all_keys(self) -> list[KT]:
        return self._store.keys()

    def all_values(self) -> list[VT]:
        return self._store.values()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __iter__(self) -> Iterator[KT]:
        return self._store.iter_keys()

    def __reversed__(self) -> Iterator[KT]:
        return reversed(self.all_keys())

    def _snapshot(self) -> tuple[list[KT], list[VT]]:
        return self._store.keys(), self._store.values()

    # -- equality -------------------------------------------------------

    def equals_ordered(self, other: OrderedMap[Any, Any]) -> bool:
        """True when both maps hold equal pairs at every position."""
        other_keys, other_values = other._snapshot()
        keys, values = self._snapshot()
        return keys == other_keys and values == other_values

    def equals_unordered(self, other: Mapping[Any, Any]) -> bool:
        """True when ``other`` holds exactly the same pairs, in any order."""
        keys, values = self._snapshot()
        if len(keys) != len(other):
            return False
        for k, v in zip(keys, values):
            if k not in other or not other[k] == v:
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedMap):
            return self.equals_ordered(other)
        if isinstance(other, Mapping):
            return self.equals_unordered(other)
        return NotImplemented

    def __hash__(self) -> int:
        keys, values = self._snapshot()
        return hash(frozenset(zip(keys, values)))

    # -- copying --------------------------------------------------------

    def _clone_store(self) -> PairStore[KT, VT]:
        return self._store.clone()

    def copy(self) -> OrderedMap[KT, VT]:
        """Immutable snapshot with its own storage and shared elements."""
        return OrderedMap._from_store(self._clone_store())

    def mutable_copy(self) -> MutableOrderedMap[KT, VT]:
        """Independent mutable map with its own storage and shared elements."""
        return MutableOrderedMap._from_store(self._clone_store())

    def __copy__(self) -> Self:
        return type(self)._from_store(self._clone_store())

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        result = type(self).empty()
        memo[id(self)] = result
        keys, values = self._snapshot()
        result._store = PairStore.build(
            _copy.deepcopy(keys, memo),
            _copy.deepcopy(values, memo),
            duplicates="raise",
        )
        return result

    def __reduce__(self) -> tuple[Any, ...]:
        keys, values = self._snapshot()
        return _rebuild, (type(self), keys, values)

    # -- diagnostics ----------------------------------------------------

    def check_invariants(self) -> None:
        """Raise `InvariantViolationError` if sequence and index disagree."""
        self._store.check_invariants()

    def __repr__(self) -> str:
        keys, values = self._snapshot()
        if not keys:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({list(zip(keys, values))!r})"


class MutableOrderedMap(OrderedMap[KT, VT], MutableMapping[KT, VT]):
    """An ordered map that can be changed after construction.

    New keys are appended at the end, including after a `sort`: sorting is a
    one-shot reordering, not a maintained order.
    """

    __hash__ = None  # type: ignore[assignment]

    def _after_mutation(self) -> None:
        if get_settings().check_invariants:
            self._store.check_invariants()

    def set_value(self, value: VT, key: KT) -> None:
        """Replace or append the value for ``key``.

        Setting `MISSING` removes the key; for an absent key it is a no-op.
        """
        self._store.set_value(key, value)
        self._after_mutation()

    def __setitem__(self, key: KT, value: VT) -> None:
        self.set_value(value, key)

    def remove_key(self, key: KT) -> None:
        """Remove ``key`` and its value. Absent keys are ignored."""
        if self._store.remove(key):
            self._after_mutation()

    def __delitem__(self, key: KT) -> None:
        if not self._store.remove(key):
            raise KeyError(key)
        self._after_mutation()

    def insert_at(self, value: VT, key: KT, position: int) -> None:
        """Insert a new pair so that it ends up at ``position``.

        A `MISSING` value stores nothing, but ``position`` and ``key`` are
        still checked.

        Raises:
            IndexOutOfRangeError: If ``position`` is outside ``[0, len(self)]``.
            DuplicateKeyError: If ``key`` is already present.
        """
        if value is MISSING:
            self._store.check_insert(position, key)
            return
        self._store.insert(position, key, value)
        self._after_mutation()

    def move_to(self, key: KT, position: int) -> None:
        """Move an existing ``key`` (with its value) to ``position``."""
        self._store.move(key, position)
        self._after_mutation()

    def sort(
        self,
        comparator: Comparator | None = None,
        *,
        key: KeyFunc | None = None,
        reverse: bool = False,
    ) -> None:
        """Stable in-place reorder of the pairs by key.

        With neither ``comparator`` nor ``key`` the keys are compared
        directly. A comparator that raises leaves the map unchanged.
        """
        self._store.sort(sort_key_for(comparator, key), reverse=reverse)
        self._after_mutation()

    def pop(self, key: KT, default: Any = MISSING) -> Any:
        value = self._store.lookup(key)
        if value is MISSING:
            if default is MISSING:
                raise KeyError(key)
            return default
        self._store.remove(key)
        self._after_mutation()
        return value

    def popitem(self, last: bool = True) -> tuple[KT, VT]:
        """Remove and return the last pair, or the first if ``last`` is false."""
        count = len(self._store)
        if not count:
            msg = "popitem(): ordered map is empty"
            raise KeyError(msg)
        item = self._store.remove_at(count - 1 if last else 0)
        self._after_mutation()
        return item

    def clear(self) -> None:
        self._store.clear()
        self._after_mutation()


def ordered_copy(mapping: Mapping[KT, VT]) -> OrderedMap[KT, VT]:
    """Ordered snapshot of ``mapping`` in its iteration order."""
    return OrderedMap.from_mapping(mapping)


def mutable_ordered_copy(mapping: Mapping[KT, VT]) -> MutableOrderedMap[KT, VT]:
    """Mutable ordered copy of ``mapping`` in its iteration order."""
    return MutableOrderedMap.from_mapping(mapping)
