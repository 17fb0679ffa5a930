"""A transparent set of proxies backed by a set of subjects."""
from __future__ import annotations

import logging
from typing import (
    AbstractSet,
    Any,
    Container,
    Generic,
    Iterable,
    MutableSet,
    TypeVar,
    overload,
)

import numpy as np
import pandas as pd

from ..constants import DEFAULT_VALIDATE
from ..exceptions import MapperError
from ..generic import cursor_of
from .iterator import ProxyIterator
from .mapper import Mapper

_S = TypeVar("_S")
_P = TypeVar("_P")
_ArrayT = TypeVar("_ArrayT", np.ndarray, list)


class ProxySet(MutableSet[_P], Generic[_S, _P]):
    """A "proxy view" of a whole set of subjects.

    A `ProxySet` behaves like the eagerly built set
    ```python
    proxies = {mapper.get_proxy(s) for s in subjects}
    ```
    but it never copies `subjects` and maps an element only when it is observed.
    The view is transparent: changing it changes the underlying subjects and vice versa.

    ```python
    subjects = {1, 2, 3}
    view = ProxySet(subjects, IdentityMapper())
    view.add(4)
    view.discard(2)
    assert subjects == {1, 3, 4}
    subjects.add(5)
    assert 5 in view
    ```
    """

    __slots__ = ("_subjects", "_mapper", "validate")

    def __init__(
        self, subjects: MutableSet[_S], mapper: Mapper[_S, _P], /, *, validate: bool = DEFAULT_VALIDATE
    ) -> None:
        if subjects is None:
            raise ValueError("subjects is None")
        if mapper is None:
            raise ValueError("mapper is None")
        self._subjects = subjects
        self._mapper = mapper
        self.validate = validate

    # - Properties
    @property
    def subjects(self) -> MutableSet[_S]:
        return self._subjects

    @property
    def mapper(self) -> Mapper[_S, _P]:
        return self._mapper

    @classmethod
    def _from_iterable(cls, it: Iterable[Any]) -> set[Any]:
        # binary set operators produce a materialized set rather than a second view
        return set(it)

    def _to_subject(self, proxy: _P) -> _S:
        subject = self._mapper.get_subject(proxy)
        if self.validate:
            echo = self._mapper.get_subject(self._mapper.get_proxy(subject))
            if echo != subject:
                raise MapperError(f"{self._mapper!r} does not preserve identity: {subject!r} came back as {echo!r}")
        return subject

    # =================================================================================================================
    # - Mutation
    def add(self, proxy: _P) -> bool:  # type: ignore[override]
        """Add the subject of `proxy` to the backing set, returning whether its size changed."""
        subject = self._to_subject(proxy)
        n = len(self._subjects)
        self._subjects.add(subject)
        return len(self._subjects) != n

    def add_all(self, proxies: Iterable[_P]) -> bool:
        changed = False
        for proxy in proxies:
            changed |= self.add(proxy)
        return changed

    def discard(self, candidate: object) -> bool:  # type: ignore[override]
        """Remove the subject of `candidate` from the backing set, returning whether its size changed.

        Objects the mapper does not accept are ignored.
        """
        if not self._mapper.accepts(candidate):
            return False
        n = len(self._subjects)
        self._subjects.discard(self._mapper.get_subject(candidate))  # type: ignore[arg-type]
        return len(self._subjects) != n

    def remove(self, candidate: object) -> None:
        if not self.discard(candidate):
            raise KeyError(candidate)

    def remove_all(self, candidates: Iterable[object]) -> bool:
        changed = False
        for candidate in candidates:
            changed |= self.discard(candidate)
        return changed

    def retain_all(self, candidates: Iterable[object]) -> bool:
        """Keep only the proxies found in `candidates`.

        Deletions happen through the live iterator while traversing, never as a second pass.
        """
        keep = candidates if isinstance(candidates, Container) else list(candidates)
        it = self.iterator()
        removed = 0
        while it.has_next():
            if it.next() not in keep:
                it.remove()
                removed += 1
        logging.debug(f"retain_all removed {removed} elements, {len(self._subjects)} remain")
        return removed > 0

    def clear(self) -> None:
        self._subjects.clear()

    # =================================================================================================================
    # - Queries
    def contains(self, candidate: object) -> bool:
        if not self._mapper.accepts(candidate):
            return False
        return self._mapper.get_subject(candidate) in self._subjects  # type: ignore[arg-type]

    def contains_all(self, candidates: Iterable[object]) -> bool:
        for candidate in candidates:
            if not self.contains(candidate):
                return False
        return True

    def size(self) -> int:
        return len(self._subjects)

    def is_empty(self) -> bool:
        return len(self._subjects) == 0

    def iterator(self) -> ProxyIterator[_S, _P]:
        """Note: calling `remove()` on the returned iterator affects the underlying subjects, too."""
        return ProxyIterator(cursor_of(self._subjects), self._mapper)

    def equals(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, AbstractSet):
            return False
        return len(self) == len(other) and self.contains_all(other) and all(proxy in other for proxy in self)

    def hash_code(self) -> int:
        """Order independent hash: the sum of the proxies' hashes, `None` counting as 0."""
        return sum(0 if proxy is None else hash(proxy) for proxy in self)

    # =================================================================================================================
    # - Exports
    @overload
    def to_array(self) -> list[_P]:
        ...

    @overload
    def to_array(self, template: _ArrayT) -> _ArrayT:
        ...

    def to_array(self, template: np.ndarray | list | None = None) -> np.ndarray | list:
        """Export the proxies, mapping the backing set directly.

        Without a `template` a new list is returned. A `numpy.ndarray` or `list` template is
        filled in place when it is large enough, otherwise a fresh one of the same kind
        (and dtype) is allocated. An ndarray whose dtype cannot hold every proxy exactly raises
        `TypeError` before anything is written.
        """
        proxies = [self._mapper.get_proxy(subject) for subject in self._subjects]
        if template is None:
            return proxies

        if isinstance(template, list):
            if len(template) < len(proxies):
                return proxies
            template[: len(proxies)] = proxies
            return template

        if isinstance(template, np.ndarray):
            if template.ndim != 1:
                raise ValueError(f"template must be one dimensional, but got shape: {template.shape}")
            staged = self._stage(template.dtype, proxies)
            if len(template) < len(staged):
                return staged
            template[: len(staged)] = staged
            return template

        raise TypeError(f"Invalid type for template: {type(template)}")

    def _stage(self, dtype: np.dtype, proxies: list[_P]) -> np.ndarray:
        """Copy `proxies` into a fresh array of `dtype`, raising `TypeError` unless every value survives intact."""
        staged = np.empty(len(proxies), dtype=dtype)
        if dtype == np.object_:
            for i, proxy in enumerate(proxies):
                staged[i] = proxy
            return staged
        witness = self._mapper.proxy_type
        if witness is None:
            types = {type(proxy) for proxy in proxies}
        else:
            types = set(witness) if isinstance(witness, tuple) else {witness}
        for type_ in types:
            if not np.can_cast(np.dtype(type_), dtype, casting="same_kind"):
                raise TypeError(f"cannot store {type_.__name__} proxies in an array of dtype {dtype}")
        try:
            for i, proxy in enumerate(proxies):
                staged[i] = proxy
        except (OverflowError, ValueError) as e:
            raise TypeError(f"cannot store {proxy!r} in an array of dtype {dtype}") from e
        for proxy, value in zip(proxies, staged.tolist()):
            # NaN is the only value allowed to differ from itself
            if value != proxy and not (value != value and proxy != proxy):
                raise TypeError(f"an array of dtype {dtype} cannot hold {proxy!r} (stored as {value!r})")
        return staged

    def to_series(self, name: str | None = None) -> pd.Series:
        return pd.Series(self.to_array(), name=name)

    # =================================================================================================================
    # - __dunder__
    def __contains__(self, candidate: object) -> bool:
        return self.contains(candidate)

    def __iter__(self) -> ProxyIterator[_S, _P]:
        return self.iterator()

    def __len__(self) -> int:
        return len(self._subjects)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbstractSet):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"[{', '.join(str(proxy) for proxy in self)}]"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}([{', '.join(repr(proxy) for proxy in self)}])"
