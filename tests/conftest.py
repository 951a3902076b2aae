from __future__ import annotations

import pytest

from fusion import models


class TimeController:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> TimeController:
    return TimeController()


@pytest.fixture
def session_factory(tmp_path) -> models.SessionFactory:
    models.configure_engine(f"sqlite:///{tmp_path / 'test.db'}")
    return models.get_session_factory()
