from __future__ import annotations

import pytest

from proxyset import FunctionMapper, IdentityMapper, IllegalStateError, IndexedSet, ProxyIterator, SetCursor


def test_requires_cursor_and_mapper() -> None:
    with pytest.raises(ValueError):
        ProxyIterator(None, IdentityMapper())  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        ProxyIterator(SetCursor(set()), None)  # type: ignore[arg-type]


def test_maps_lazily() -> None:
    mapped: list[int] = []
    mapper = FunctionMapper(lambda s: mapped.append(s) or -s, lambda p: -p)
    it = ProxyIterator(IndexedSet([1, 2, 3]).cursor(), mapper)
    assert it.has_next()
    assert mapped == []
    assert it.next() == -1
    assert mapped == [1]
    assert list(it) == [-2, -3]
    assert mapped == [1, 2, 3]
    assert not it.has_next()
    with pytest.raises(StopIteration):
        it.next()


def test_is_its_own_iterator(handle_mapper) -> None:
    it = ProxyIterator(SetCursor({1, 2}), handle_mapper)
    assert iter(it) is it
    assert {h.id for h in it} == {1, 2}


def test_remove_is_forwarded() -> None:
    subjects = IndexedSet([1, 2, 3])
    it = ProxyIterator(subjects.cursor(), FunctionMapper(str, int))
    with pytest.raises(IllegalStateError):
        it.remove()
    assert it.next() == "1"
    it.remove()
    with pytest.raises(IllegalStateError):
        it.remove()
    assert list(subjects) == [2, 3]
    assert it.next() == "2"
