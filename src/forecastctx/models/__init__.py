"""Forecast-context models."""

from forecastctx.models.bar import DailyBar
from forecastctx.models.context import (
    DayOfWeekPerformance,
    Direction,
    GainLossStreak,
    HistoricalContext,
    PricePosition,
    RecentPerformance,
)

__all__ = [
    "DailyBar",
    "Direction",
    "GainLossStreak",
    "RecentPerformance",
    "PricePosition",
    "DayOfWeekPerformance",
    "HistoricalContext",
]
