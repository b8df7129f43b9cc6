"""Thread-safe mutable ordered map.

Every public operation runs under one re-entrant lock, acquired on entry and
released on exit (error paths included). Iteration works on a snapshot taken
under the lock, so a concurrent writer never invalidates a live iterator.
"""

from __future__ import annotations

import functools
import threading
from collections.abc import Callable, Hashable, Iterator, Mapping
from typing import Any, ParamSpec, TypeVar

from ordmap._internal.storage import PairStore
from ordmap.ordered_map import MutableOrderedMap

KT = TypeVar("KT", bound=Hashable)
VT = TypeVar("VT")
P = ParamSpec("P")
R = TypeVar("R")


def _locked(method: Callable[P, R]) -> Callable[P, R]:
    @functools.wraps(method)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        self = args[0]
        with self._lock:  # type: ignore[attr-defined]
            return method(*args, **kwargs)

    return wrapper


class SynchronizedOrderedMap(MutableOrderedMap[KT, VT]):
    """A `MutableOrderedMap` that may be shared between threads.

    Comparisons and `update` snapshot the other map under its own lock first
    and never hold both locks at once.
    """

    _lock: threading.RLock

    def _init_store(self, store: PairStore[KT, VT]) -> None:
        self._lock = threading.RLock()
        super()._init_store(store)

    # lookup
    __getitem__ = _locked(MutableOrderedMap.__getitem__)
    __contains__ = _locked(MutableOrderedMap.__contains__)
    __len__ = _locked(MutableOrderedMap.__len__)
    get = _locked(MutableOrderedMap.get)
    get_at = _locked(MutableOrderedMap.get_at)
    value_at = _locked(MutableOrderedMap.value_at)
    key_at = _locked(MutableOrderedMap.key_at)
    item_at = _locked(MutableOrderedMap.item_at)
    index_of = _locked(MutableOrderedMap.index_of)
    all_keys = _locked(MutableOrderedMap.all_keys)
    all_values = _locked(MutableOrderedMap.all_values)
    check_invariants = _locked(MutableOrderedMap.check_invariants)
    _snapshot = _locked(MutableOrderedMap._snapshot)
    _clone_store = _locked(MutableOrderedMap._clone_store)

    # mutation
    set_value = _locked(MutableOrderedMap.set_value)
    __setitem__ = _locked(MutableOrderedMap.__setitem__)
    remove_key = _locked(MutableOrderedMap.remove_key)
    __delitem__ = _locked(MutableOrderedMap.__delitem__)
    insert_at = _locked(MutableOrderedMap.insert_at)
    move_to = _locked(MutableOrderedMap.move_to)
    sort = _locked(MutableOrderedMap.sort)
    pop = _locked(MutableOrderedMap.pop)
    popitem = _locked(MutableOrderedMap.popitem)
    clear = _locked(MutableOrderedMap.clear)
    setdefault = _locked(MutableOrderedMap.setdefault)

    def __iter__(self) -> Iterator[KT]:
        return iter(self.all_keys())

    def values(self) -> list[VT]:  # type: ignore[override]
        """Snapshot of the values in order."""
        return self.all_values()

    def items(self) -> list[tuple[KT, VT]]:  # type: ignore[override]
        """Snapshot of the pairs in order."""
        keys, values = self._snapshot()
        return list(zip(keys, values))

    def update(self, other: Any = (), /, **kwargs: VT) -> None:  # type: ignore[override]
        """Copy pairs from ``other`` and ``kwargs``, then store them in order."""
        if isinstance(other, Mapping):
            pairs = list(other.items())
        elif hasattr(other, "keys"):
            pairs = [(k, other[k]) for k in other.keys()]
        else:
            pairs = [(k, v) for k, v in other]
        pairs.extend(kwargs.items())

        with self._lock:
            for k, v in pairs:
                MutableOrderedMap.set_value(self, v, k)
