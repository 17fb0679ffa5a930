from __future__ import annotations

import abc
from typing import Any, Callable, Final, Generic, TypeVar

from .._typing import TypeWitness

_S = TypeVar("_S")
_P = TypeVar("_P")


class Mapper(Generic[_S, _P], abc.ABC):
    """Converts a subject into its proxy and back.

    A mapper must preserve identity: for every subject `s` held by a backing set,
    `get_subject(get_proxy(s)) == s`, and repeated `get_proxy(s)` calls return proxies
    that compare equal even when they are not the same object. Mappers carry no state
    that could make either direction depend on call history.

    `proxy_type` and `subject_type` are optional runtime witnesses. When `proxy_type` is
    set, `ProxySet` uses it to reject foreign objects in membership tests and removals
    instead of passing them to `get_subject`.
    """

    proxy_type: TypeWitness = None
    subject_type: TypeWitness = None

    @abc.abstractmethod
    def get_proxy(self, subject: _S) -> _P:
        ...

    @abc.abstractmethod
    def get_subject(self, proxy: _P) -> _S:
        ...

    def accepts(self, candidate: object) -> bool:
        """Whether `candidate` may be translated by `get_subject`."""
        return candidate is None or self.proxy_type is None or isinstance(candidate, self.proxy_type)

    def inverse(self) -> Mapper[_P, _S]:
        return InverseMapper(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(proxy_type={self.proxy_type!r}, subject_type={self.subject_type!r})"


class IdentityMapper(Mapper[_S, _S]):
    def __init__(self, type_: TypeWitness = None) -> None:
        self.proxy_type = self.subject_type = type_

    def get_proxy(self, subject: _S) -> _S:
        return subject

    def get_subject(self, proxy: _S) -> _S:
        return proxy

    def inverse(self) -> IdentityMapper[_S]:
        return self


class FunctionMapper(Mapper[_S, _P]):
    """
    ```python
    mapper = FunctionMapper(str, int, proxy_type=str, subject_type=int)
    view = ProxySet({1, 2, 3}, mapper)
    assert "2" in view
    ```
    `None` is passed through unchanged in both directions.
    """

    def __init__(
        self,
        to_proxy: Callable[[_S], _P],
        to_subject: Callable[[_P], _S],
        /,
        *,
        proxy_type: TypeWitness = None,
        subject_type: TypeWitness = None,
    ) -> None:
        if not callable(to_proxy) or not callable(to_subject):
            raise TypeError("to_proxy and to_subject must be callable")
        self.to_proxy: Final = to_proxy
        self.to_subject: Final = to_subject
        self.proxy_type = proxy_type
        self.subject_type = subject_type

    def get_proxy(self, subject: _S) -> _P:
        return None if subject is None else self.to_proxy(subject)  # type: ignore[return-value]

    def get_subject(self, proxy: _P) -> _S:
        return None if proxy is None else self.to_subject(proxy)  # type: ignore[return-value]


class InverseMapper(Mapper[_P, _S]):
    def __init__(self, mapper: Mapper[_S, _P], /) -> None:
        if mapper is None:
            raise ValueError("mapper is None")
        self.mapper: Final = mapper

    @property
    def proxy_type(self) -> Any:  # type: ignore[override]
        return self.mapper.subject_type

    @property
    def subject_type(self) -> Any:  # type: ignore[override]
        return self.mapper.proxy_type

    def get_proxy(self, subject: _P) -> _S:
        return self.mapper.get_subject(subject)

    def get_subject(self, proxy: _S) -> _P:
        return self.mapper.get_proxy(proxy)

    def inverse(self) -> Mapper[_S, _P]:
        return self.mapper
