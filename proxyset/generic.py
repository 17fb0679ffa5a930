"""A mix of Datastructures and Adapters for traversing sets with live element removal."""
from __future__ import annotations

import abc
import logging
from collections import deque
from typing import (
    AbstractSet,
    Any,
    Final,
    Hashable,
    Iterable,
    Iterator,
    MutableSet,
    TypeVar,
)

from typing_extensions import Self

from ._typing import SupportsCursor
from .constants import DEFAULT_COMPACT_RATIO, MIN_COMPACT_SLOTS
from .exceptions import (
    ConcurrentModificationError,
    IllegalStateError,
    UnsupportedOperationError,
)

# =====================================================================================================================
# - Type Variables
# =====================================================================================================================
_T1 = TypeVar("_T1", bound=Any)
_H1 = TypeVar("_H1", bound=Hashable)

_MISSING: Final = object()
_TOMBSTONE: Final = object()


# =====================================================================================================================
# - Cursors
# =====================================================================================================================
class Cursor(Iterator[_T1], abc.ABC):
    """An iterator that can delete the element it returned last from its container.

    ```python
    cursor = cursor_of(data)
    while cursor.has_next():
        if cursor.next() < 0:
            cursor.remove()
    ```
    """

    __slots__ = ()

    @abc.abstractmethod
    def has_next(self) -> bool:
        ...

    @abc.abstractmethod
    def next(self) -> _T1:
        """Return the next element, raising `StopIteration` when exhausted."""

    @abc.abstractmethod
    def remove(self) -> None:
        """Delete the element most recently returned by `next()` from the container."""

    # - __dunder__
    def __iter__(self) -> Self:
        return self

    def __next__(self) -> _T1:
        if not self.has_next():
            raise StopIteration
        return self.next()


class SetCursor(Cursor[_T1]):
    """Cursor over any `collections.abc.Set`.

    Reads go through the set's native iterator with a single element of lookahead.
    The native iterator is invalidated by any mutation, so the first `remove()` drains
    whatever it still holds into a queue *before* discarding, after which removals are
    applied to the set immediately.
    """

    __slots__ = ("data", "_it", "_pending", "_queue", "_last", "_size")

    def __init__(self, data: AbstractSet[_T1], /) -> None:
        super().__init__()
        self.data: Final = data
        self._it: Iterator[_T1] = iter(data)
        self._pending: Any = _MISSING
        self._queue: deque[_T1] | None = None
        self._last: Any = _MISSING
        self._size = len(data)

    def _check_for_comodification(self) -> None:
        if len(self.data) != self._size:
            raise ConcurrentModificationError(f"{type(self.data).__name__} changed size during iteration")

    def has_next(self) -> bool:
        self._check_for_comodification()
        if self._queue is not None:
            return len(self._queue) > 0
        if self._pending is _MISSING:
            self._pending = next(self._it, _MISSING)
        return self._pending is not _MISSING

    def next(self) -> _T1:
        if not self.has_next():
            raise StopIteration
        if self._queue is not None:
            item = self._queue.popleft()
        else:
            item, self._pending = self._pending, _MISSING
        self._last = item
        return item

    def remove(self) -> None:
        if not isinstance(self.data, MutableSet):
            raise UnsupportedOperationError(f"{type(self.data).__name__} does not support removal")
        if self._last is _MISSING:
            raise IllegalStateError("remove() must follow a call to next()")
        self._check_for_comodification()

        if self._queue is None:
            queue: deque[_T1] = deque() if self._pending is _MISSING else deque((self._pending,))
            queue.extend(self._it)
            self._queue, self._it, self._pending = queue, iter(()), _MISSING
            logging.debug(f"SetCursor drained {len(queue)} pending elements before the first removal")

        self.data.discard(self._last)
        self._last = _MISSING
        self._size = len(self.data)


class IndexedSetCursor(Cursor[_H1]):
    __slots__ = ("owner", "_pos", "_last", "_expected")

    def __init__(self, owner: IndexedSet[_H1], /) -> None:
        super().__init__()
        self.owner: Final = owner
        self._pos = 0
        self._last = -1
        self._expected = owner._modcount

    def _check_for_comodification(self) -> None:
        if self.owner._modcount != self._expected:
            raise ConcurrentModificationError("IndexedSet changed during iteration")

    def has_next(self) -> bool:
        self._check_for_comodification()
        slots = self.owner._slots
        while self._pos < len(slots) and slots[self._pos] is _TOMBSTONE:
            self._pos += 1
        return self._pos < len(slots)

    def next(self) -> _H1:
        if not self.has_next():
            raise StopIteration
        self._last, self._pos = self._pos, self._pos + 1
        return self.owner._slots[self._last]

    def remove(self) -> None:
        if self._last < 0:
            raise IllegalStateError("remove() must follow a call to next()")
        self._check_for_comodification()
        # tombstoning keeps every other slot in place, so the cursor position stays valid
        self.owner._remove_at(self._last)
        self._last = -1
        self._expected = self.owner._modcount


def cursor_of(data: AbstractSet[_T1], /) -> Cursor[_T1]:
    """Return the container's own cursor when it offers one, otherwise adapt it with a `SetCursor`."""
    if isinstance(data, SupportsCursor):
        return data.cursor()
    return SetCursor(data)


# =====================================================================================================================
# - Datastructures
# =====================================================================================================================
class IndexedSet(MutableSet[_H1]):
    """Insertion ordered set whose cursor removes elements in place without copying.

    Elements live in a slot list addressed through a `dict` index. Removal leaves a
    tombstone behind; tombstones are compacted away by `add`/`discard` once they make up
    more than `compact_ratio` of the slots. Every structural change bumps a modification
    counter that cursors use to fail fast.

    ```python
    s = IndexedSet([3, 1, 2])
    cursor = s.cursor()
    while cursor.has_next():
        if cursor.next() != 1:
            cursor.remove()
    assert list(s) == [1]
    ```
    """

    __slots__ = ("_slots", "_index", "_modcount", "compact_ratio")

    def __init__(self, iterable: Iterable[_H1] = (), /, *, compact_ratio: float = DEFAULT_COMPACT_RATIO) -> None:
        if not 0.0 < compact_ratio <= 1.0:
            raise ValueError(f"compact_ratio must be in (0, 1], got: {compact_ratio}")
        self._slots: list[Any] = []
        self._index: dict[_H1, int] = {}
        self._modcount = 0
        self.compact_ratio: Final = compact_ratio
        for item in iterable:
            self.add(item)

    def cursor(self) -> IndexedSetCursor[_H1]:
        return IndexedSetCursor(self)

    # - MutableSet
    def add(self, item: _H1) -> None:
        if item in self._index:
            return
        self._index[item] = len(self._slots)
        self._slots.append(item)
        self._modcount += 1
        self._compact_if_sparse()

    def discard(self, item: _H1) -> None:
        pos = self._index.get(item)
        if pos is None:
            return
        self._remove_at(pos)
        self._compact_if_sparse()

    def clear(self) -> None:
        self._slots.clear()
        self._index.clear()
        self._modcount += 1

    # - internals
    def _remove_at(self, pos: int) -> None:
        item = self._slots[pos]
        self._slots[pos] = _TOMBSTONE
        del self._index[item]
        self._modcount += 1

    def _compact_if_sparse(self) -> None:
        n_slots = len(self._slots)
        holes = n_slots - len(self._index)
        if n_slots < MIN_COMPACT_SLOTS or holes <= self.compact_ratio * n_slots:
            return
        self._slots = [item for item in self._slots if item is not _TOMBSTONE]
        self._index = {item: pos for pos, item in enumerate(self._slots)}
        self._modcount += 1
        logging.debug(f"IndexedSet compacted {holes} tombstones, {len(self._slots)} elements remain")

    # - __dunder__
    def __contains__(self, item: object) -> bool:
        return item in self._index

    def __iter__(self) -> Iterator[_H1]:
        return self.cursor()

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        if not self:
            return f"{self.__class__.__name__}()"
        return f"{self.__class__.__name__}({{{', '.join(repr(item) for item in self)}}})"
