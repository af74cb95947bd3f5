"""Historical statistics engine for daily bars.

Turns an oldest-to-newest series of daily bars into a ``HistoricalContext``:
gain/loss streak, recent performance, 14-day ATR, 52-week position and
day-of-week performance.

CONVENTION:
- All changes and returns are decimal (0.10 = 10%)
- Windows are in bars (trading days), not calendar days
- Day-of-week is taken from the bar timestamp's UTC calendar date
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import timezone

from forecastctx.errors import InsufficientHistoryError
from forecastctx.models.bar import DailyBar
from forecastctx.models.context import (
    DayOfWeekPerformance,
    Direction,
    GainLossStreak,
    HistoricalContext,
    PricePosition,
    RecentPerformance,
)

logger = logging.getLogger(__name__)

MIN_HISTORY_BARS = 30
ATR_PERIOD = 14
PERFORMANCE_LOOKBACKS = (1, 5, 30)
TRADING_DAYS_PER_YEAR = 252

DAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


def _direction(bar: DailyBar) -> Direction:
    return Direction.GAIN if bar.close > bar.open else Direction.LOSS


def _same_day_return(bar: DailyBar) -> float:
    if bar.open == 0:
        return 0.0
    return (bar.close - bar.open) / bar.open


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


# ---- Streak ----

def gain_loss_streak(bars: Sequence[DailyBar]) -> GainLossStreak:
    """Count consecutive most-recent bars with the same close-vs-open sign.

    Each bar is judged on its own open and close, not on the change from the
    previous close. Requires at least one bar.
    """
    direction = _direction(bars[-1])
    days = 0
    for bar in reversed(bars):
        if _direction(bar) is not direction:
            break
        days += 1
    return GainLossStreak(direction=direction, days=days)


# ---- Recent performance ----

def percent_change(bars: Sequence[DailyBar], days_ago: int) -> float:
    """Close-to-close change between the last bar and ``days_ago`` bars earlier.

    Returns 0.0 when the series does not reach back that far.
    """
    if len(bars) <= days_ago:
        return 0.0
    last_close = bars[-1].close
    past_close = bars[-1 - days_ago].close
    if past_close == 0:
        return 0.0
    return (last_close - past_close) / past_close


def recent_performance(bars: Sequence[DailyBar]) -> RecentPerformance:
    one, five, thirty = (percent_change(bars, n) for n in PERFORMANCE_LOOKBACKS)
    return RecentPerformance(change_1d=one, change_5d=five, change_30d=thirty)


# ---- Volatility ----

def true_ranges(bars: Sequence[DailyBar]) -> list[float]:
    """True range of every bar that has a predecessor (len(bars) - 1 values)."""
    ranges: list[float] = []
    for i in range(1, len(bars)):
        high = bars[i].high
        low = bars[i].low
        prev_close = bars[i - 1].close
        ranges.append(max(high - low, abs(high - prev_close), abs(low - prev_close)))
    return ranges


def average_true_range(bars: Sequence[DailyBar], period: int = ATR_PERIOD) -> float:
    """Mean of the last ``period`` true ranges, or 0.0 if fewer exist."""
    ranges = true_ranges(bars)
    if len(ranges) < period:
        return 0.0
    return _mean(ranges[-period:])


# ---- Range position ----

def price_position(
    bars: Sequence[DailyBar], window: int = TRADING_DAYS_PER_YEAR,
) -> PricePosition:
    """Position of the last close within the trailing ``window``-bar range.

    A flat range (high == low) maps to 0.5.
    """
    if not bars:
        return PricePosition(high=0.0, low=0.0, position=0.0)

    recent = bars[-window:]
    high = max(b.high for b in recent)
    low = min(b.low for b in recent)
    current = bars[-1].close

    if high - low > 0:
        position = (current - low) / (high - low)
    else:
        position = 0.5
    return PricePosition(high=high, low=low, position=position)


# ---- Seasonality ----

def day_of_week_performance(
    bars: Sequence[DailyBar],
) -> tuple[DayOfWeekPerformance, ...]:
    """Per-weekday average gain, average loss and win rate.

    Weekdays are taken from the UTC calendar date of each timestamp (naive
    timestamps count as UTC). Weekdays with no bars are omitted; the rest
    are ordered Monday first.
    """
    gains: dict[int, list[float]] = {}
    losses: dict[int, list[float]] = {}
    wins: dict[int, int] = {}
    totals: dict[int, int] = {}

    for bar in bars:
        ts = bar.timestamp
        if ts.tzinfo is not None:
            ts = ts.astimezone(timezone.utc)
        weekday = ts.weekday()

        change = _same_day_return(bar)
        totals[weekday] = totals.get(weekday, 0) + 1
        if change > 0:
            gains.setdefault(weekday, []).append(change)
            wins[weekday] = wins.get(weekday, 0) + 1
        elif change < 0:
            losses.setdefault(weekday, []).append(change)

    return tuple(
        DayOfWeekPerformance(
            day=DAY_NAMES[weekday],
            avg_gain=_mean(gains.get(weekday, [])),
            avg_loss=_mean(losses.get(weekday, [])),
            win_rate=wins.get(weekday, 0) / totals[weekday],
            observations=totals[weekday],
        )
        for weekday in sorted(totals)
    )


# ---- Public API ----

def compute_statistics(bars: Sequence[DailyBar]) -> HistoricalContext:
    """Compute the full historical context for a daily bar series.

    Args:
        bars: Daily bars sorted oldest to newest.

    Returns:
        HistoricalContext with all five statistics.

    Raises:
        InsufficientHistoryError: If fewer than ``MIN_HISTORY_BARS`` bars
            are supplied.
    """
    if len(bars) < MIN_HISTORY_BARS:
        raise InsufficientHistoryError(required=MIN_HISTORY_BARS, actual=len(bars))

    context = HistoricalContext(
        streak=gain_loss_streak(bars),
        recent_performance=recent_performance(bars),
        average_true_range_14d=average_true_range(bars, ATR_PERIOD),
        price_position_52w=price_position(bars, TRADING_DAYS_PER_YEAR),
        day_of_week_performance=day_of_week_performance(bars),
    )
    logger.debug(
        "Computed statistics over %d bars: streak=%s/%d atr=%.4f position=%.4f",
        len(bars), context.streak.direction.value, context.streak.days,
        context.average_true_range_14d, context.price_position_52w.position,
    )
    return context
