from __future__ import annotations

from datetime import datetime, timedelta

import pytest


class FakeClock:
    """Clock that only moves when a test tells it to."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 6, 15, 9, 0, 0))
