import importlib
import logging

import pytest

from proxyset import constants


@pytest.fixture
def reload_constants(monkeypatch: pytest.MonkeyPatch):
    yield lambda: importlib.reload(constants)
    monkeypatch.undo()
    importlib.reload(constants)


def test_defaults() -> None:
    assert 0.0 < constants.DEFAULT_COMPACT_RATIO <= 1.0
    assert isinstance(constants.DEFAULT_VALIDATE, bool)


@pytest.mark.parametrize(
    "value,expected",
    [("1", True), ("true", True), ("YES", True), ("0", False), ("", False)],
)
def test_validate_from_environment(
    monkeypatch: pytest.MonkeyPatch, reload_constants, value: str, expected: bool
) -> None:
    monkeypatch.setenv("PROXYSET_VALIDATE", value)
    assert reload_constants().DEFAULT_VALIDATE is expected


def test_compact_ratio_from_environment(monkeypatch: pytest.MonkeyPatch, reload_constants) -> None:
    monkeypatch.setenv("PROXYSET_COMPACT_RATIO", "0.25")
    assert reload_constants().DEFAULT_COMPACT_RATIO == 0.25
    monkeypatch.setenv("PROXYSET_COMPACT_RATIO", "2")
    with pytest.raises(ValueError):
        reload_constants()


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch, reload_constants) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setenv("PROXYSET_LOG_LEVEL", "debug")
    reload_constants()
    assert root.level == logging.DEBUG
