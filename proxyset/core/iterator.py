from __future__ import annotations

from typing import Final, Generic, TypeVar

from ..generic import Cursor
from .mapper import Mapper

_S = TypeVar("_S")
_P = TypeVar("_P")


class ProxyIterator(Cursor[_P], Generic[_S, _P]):
    """Iterates over proxies in the same order as the wrapped cursor iterates over subjects.

    A subject is mapped only when `next()` hands it out. `remove()` is forwarded to the
    subject cursor and therefore deletes the subject from the backing set; whatever that
    cursor raises (`UnsupportedOperationError`, `IllegalStateError`, ...) reaches the caller
    unchanged.
    """

    __slots__ = ("subjects", "mapper")

    def __init__(self, subjects: Cursor[_S], mapper: Mapper[_S, _P], /) -> None:
        super().__init__()
        if subjects is None:
            raise ValueError("subjects is None")
        if mapper is None:
            raise ValueError("mapper is None")
        self.subjects: Final = subjects
        self.mapper: Final = mapper

    def has_next(self) -> bool:
        return self.subjects.has_next()

    def next(self) -> _P:
        return self.mapper.get_proxy(self.subjects.next())

    def remove(self) -> None:
        self.subjects.remove()
