"""Shared fixtures for forecastctx tests."""

from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from forecastctx.models.bar import DailyBar

# 2024-01-01 is a Monday; Alpaca stamps daily bars at 05:00 UTC (ET midnight).
SERIES_START = datetime(2024, 1, 1, 5, 0, tzinfo=timezone.utc)


def weekday_timestamps(n: int, start: datetime = SERIES_START) -> list[datetime]:
    """``n`` consecutive weekday timestamps starting at ``start``."""
    out: list[datetime] = []
    current = start
    while len(out) < n:
        if current.weekday() < 5:
            out.append(current)
        current += timedelta(days=1)
    return out


def make_bars(
    n: int,
    ohlc: Callable[[int], tuple[float, float, float, float]] | None = None,
) -> list[DailyBar]:
    """Build ``n`` weekday bars; ``ohlc(i)`` returns (open, high, low, close)."""
    if ohlc is None:
        ohlc = lambda i: (100.0 + i, 102.0 + i, 99.0 + i, 101.0 + i)  # noqa: E731
    bars = []
    for i, ts in enumerate(weekday_timestamps(n)):
        o, h, l, c = ohlc(i)  # noqa: E741
        bars.append(DailyBar(timestamp=ts, open=o, high=h, low=l, close=c, volume=1_000_000.0))
    return bars


@pytest.fixture
def sample_bars() -> list[DailyBar]:
    """60 weekday bars, each closing above its open, trending up."""
    return make_bars(60)
