"""Data quality validation for daily bar series."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from forecastctx.historical import MIN_HISTORY_BARS
from forecastctx.models.bar import DailyBar

# Longest tolerated calendar gap between consecutive daily bars
# (a holiday next to a weekend is 4 days).
MAX_CALENDAR_GAP = timedelta(days=5)


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def _as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def validate_bars(bars: Sequence[DailyBar]) -> ValidationResult:
    """Run all quality checks on a daily bar series.

    Checks:
        1. Not empty
        2. No NaN/Inf OHLCV
        3. Positive prices
        4. Volume sanity (non-negative)
        5. Timestamp ordering (strictly increasing, no duplicates)
        6. OHLC consistency (high >= low, high >= open/close)
        7. Calendar gaps (> 5 days between bars flagged)
        8. Sufficient history for the statistics engine
    """
    result = ValidationResult()

    # 1. Not empty
    if not bars:
        result.checks.append(ValidationCheck("not_empty", False, "No bars provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(bars)} bars"))

    # 2. No NaN/Inf
    nan_count = 0
    for b in bars:
        for val in (b.open, b.high, b.low, b.close, b.volume):
            if math.isnan(val) or math.isinf(val):
                nan_count += 1
    if nan_count:
        result.checks.append(ValidationCheck("no_nulls", False, f"{nan_count} NaN/Inf values"))
    else:
        result.checks.append(ValidationCheck("no_nulls", True))

    # 3. Positive prices
    non_positive = sum(
        1 for b in bars if min(b.open, b.high, b.low, b.close) <= 0
    )
    if non_positive:
        result.checks.append(
            ValidationCheck("positive_prices", False, f"{non_positive} bars with price <= 0")
        )
    else:
        result.checks.append(ValidationCheck("positive_prices", True))

    # 4. Volume sanity
    neg_vol = sum(1 for b in bars if b.volume < 0)
    if neg_vol:
        result.checks.append(
            ValidationCheck("volume_sanity", False, f"{neg_vol} bars with negative volume")
        )
    else:
        result.checks.append(ValidationCheck("volume_sanity", True))

    # 5. Timestamp ordering (naive timestamps compared as UTC)
    stamps = [_as_utc(b.timestamp) for b in bars]
    out_of_order = 0
    for i in range(1, len(bars)):
        if stamps[i] <= stamps[i - 1]:
            out_of_order += 1
    if out_of_order:
        result.checks.append(
            ValidationCheck("timestamp_order", False, f"{out_of_order} out of order or duplicated")
        )
    else:
        result.checks.append(ValidationCheck("timestamp_order", True))

    # 6. OHLC consistency
    inconsistent = 0
    for b in bars:
        if b.high < b.low:
            inconsistent += 1
        elif b.high < b.open or b.high < b.close:
            inconsistent += 1
        elif b.low > b.open or b.low > b.close:
            inconsistent += 1
    if inconsistent:
        result.checks.append(
            ValidationCheck("ohlc_consistency", False, f"{inconsistent} bars with H<L or H<O/C")
        )
    else:
        result.checks.append(ValidationCheck("ohlc_consistency", True))

    # 7. Calendar gaps
    large_gaps = 0
    for i in range(1, len(bars)):
        if stamps[i] - stamps[i - 1] > MAX_CALENDAR_GAP:
            large_gaps += 1
    if large_gaps:
        result.checks.append(
            ValidationCheck("calendar_gaps", False, f"{large_gaps} gaps > {MAX_CALENDAR_GAP.days} days")
        )
    else:
        result.checks.append(ValidationCheck("calendar_gaps", True))

    # 8. Sufficient history
    if len(bars) < MIN_HISTORY_BARS:
        result.checks.append(
            ValidationCheck(
                "sufficient_history", False,
                f"{len(bars)} bars, need at least {MIN_HISTORY_BARS}",
            )
        )
    else:
        result.checks.append(ValidationCheck("sufficient_history", True))

    return result
