"""Historical context models: the statistics handed to the forecaster."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Direction(str, Enum):
    """Same-bar direction of a daily bar (close vs. open)."""

    GAIN = "gain"
    LOSS = "loss"


@dataclass(frozen=True)
class GainLossStreak:
    """Run of most-recent bars sharing the same direction.

    Attributes:
        direction: Direction of the most recent bar.
        days: Number of consecutive bars in that direction (>= 1).
    """

    direction: Direction
    days: int


@dataclass(frozen=True)
class RecentPerformance:
    """Close-to-close fractional changes over 1, 5 and 30 bars."""

    change_1d: float
    change_5d: float
    change_30d: float


@dataclass(frozen=True)
class PricePosition:
    """Close relative to the trailing 52-week range.

    Attributes:
        high: Highest high in the window.
        low: Lowest low in the window.
        position: 0 at the window low, 1 at the window high.
    """

    high: float
    low: float
    position: float


@dataclass(frozen=True)
class DayOfWeekPerformance:
    """Same-day return profile for one weekday.

    Attributes:
        day: English weekday name ("Monday" ...).
        avg_gain: Mean of the strictly positive same-day returns.
        avg_loss: Mean of the strictly negative same-day returns.
        win_rate: Fraction of bars on this weekday that closed above open.
        observations: Number of bars seen on this weekday.
    """

    day: str
    avg_gain: float
    avg_loss: float
    win_rate: float
    observations: int


@dataclass(frozen=True)
class HistoricalContext:
    """Summary statistics of a daily bar series."""

    streak: GainLossStreak
    recent_performance: RecentPerformance
    average_true_range_14d: float
    price_position_52w: PricePosition
    day_of_week_performance: tuple[DayOfWeekPerformance, ...]

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dict, ready for ``json.dumps``."""
        return {
            "consecutive_gain_loss_streak": {
                "direction": self.streak.direction.value,
                "days": self.streak.days,
            },
            "recent_performance": {
                "change_1d": self.recent_performance.change_1d,
                "change_5d": self.recent_performance.change_5d,
                "change_30d": self.recent_performance.change_30d,
            },
            "average_true_range_14d": self.average_true_range_14d,
            "price_position_52w": {
                "high": self.price_position_52w.high,
                "low": self.price_position_52w.low,
                "position": self.price_position_52w.position,
            },
            "day_of_week_performance": [
                {
                    "day": d.day,
                    "avg_gain": d.avg_gain,
                    "avg_loss": d.avg_loss,
                    "win_rate": d.win_rate,
                    "observations": d.observations,
                }
                for d in self.day_of_week_performance
            ],
        }
