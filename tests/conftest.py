from __future__ import annotations

from operator import attrgetter
from typing import MutableSet

import pytest

from proxyset import FunctionMapper, IdentityMapper, IndexedSet, ProxySet


class Handle:
    """A proxy that is a distinct object per call but compares equal by subject id."""

    __slots__ = ("id",)

    def __init__(self, id: int) -> None:
        self.id = id

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Handle) and self.id == other.id

    def __hash__(self) -> int:
        return hash(("Handle", self.id))

    def __repr__(self) -> str:
        return f"Handle({self.id})"


@pytest.fixture(params=[set, IndexedSet], ids=["set", "IndexedSet"])
def subjects(request: pytest.FixtureRequest) -> MutableSet[int]:
    return request.param()


@pytest.fixture
def proxies(subjects: MutableSet[int]) -> ProxySet[int, int]:
    return ProxySet(subjects, IdentityMapper(int))


@pytest.fixture(params=["subjects", "proxies"])
def target(request: pytest.FixtureRequest, subjects: MutableSet[int], proxies: ProxySet[int, int]) -> MutableSet[int]:
    """The side of the view that a test mutates, the other side must follow."""
    return subjects if request.param == "subjects" else proxies


@pytest.fixture
def handle_mapper() -> FunctionMapper[int, Handle]:
    return FunctionMapper(Handle, attrgetter("id"), proxy_type=Handle, subject_type=int)
