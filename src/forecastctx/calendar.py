"""Trading calendar — next N trading days relative to the market close.

Weekends are skipped; exchange holidays are not modeled, so a returned
"trading day" may fall on a market holiday.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date, datetime, timedelta, tzinfo
from itertools import islice
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

DEFAULT_EXCHANGE_TIMEZONE = "America/New_York"
DEFAULT_FORECAST_DAYS = 5

# Local hour at/after which the current session counts as closed.
MARKET_CLOSE_HOUR = 16

_SATURDAY = 5


# ---- Timezone handling ----

def _resolve_tz(exchange_tz: str | tzinfo) -> tzinfo:
    if isinstance(exchange_tz, str):
        return ZoneInfo(exchange_tz)
    return exchange_tz


def to_exchange_time(reference: datetime, exchange_tz: str | tzinfo) -> datetime:
    """Convert ``reference`` to exchange-local wall time.

    Args:
        reference: Instant to convert. A naive datetime is taken to already
            be exchange-local wall time.
        exchange_tz: IANA timezone name (e.g. "America/New_York") or tzinfo.
    """
    tz = _resolve_tz(exchange_tz)
    if reference.tzinfo is None:
        return reference.replace(tzinfo=tz)
    return reference.astimezone(tz)


# ---- Day arithmetic ----

def is_trading_day(d: date) -> bool:
    """Check if a date is a trading day (Monday-Friday, holidays ignored)."""
    return d.weekday() < _SATURDAY


def roll_to_weekday(d: date) -> date:
    """Return ``d`` if it is a weekday, otherwise the following Monday."""
    if d.weekday() >= _SATURDAY:
        return d + timedelta(days=7 - d.weekday())
    return d


def first_trading_day(
    reference: datetime,
    exchange_tz: str | tzinfo = DEFAULT_EXCHANGE_TIMEZONE,
    close_hour: int = MARKET_CLOSE_HOUR,
) -> date:
    """First day a forecast made at ``reference`` can cover.

    Weekend -> next Monday. Weekday at/after ``close_hour`` local -> next
    trading day. Otherwise the local day itself.
    """
    local = to_exchange_time(reference, exchange_tz)
    today = local.date()

    if not is_trading_day(today):
        return roll_to_weekday(today)
    if local.hour >= close_hour:
        return roll_to_weekday(today + timedelta(days=1))
    return today


def iter_trading_days(start: date) -> Iterator[date]:
    """Yield trading days from ``start`` (inclusive) onward, indefinitely."""
    current = start
    while True:
        if is_trading_day(current):
            yield current
        current += timedelta(days=1)


# ---- Public API ----

def next_trading_days(
    reference: datetime,
    exchange_tz: str | tzinfo = DEFAULT_EXCHANGE_TIMEZONE,
    count: int = DEFAULT_FORECAST_DAYS,
    close_hour: int = MARKET_CLOSE_HOUR,
) -> tuple[date, ...]:
    """Next ``count`` trading days relative to ``reference``.

    Args:
        reference: The "now" of the caller. Always injected, never read from
            the system clock.
        exchange_tz: Exchange timezone name or tzinfo.
        count: Number of trading days to return.
        close_hour: Local market-close hour; exactly ``close_hour``:00 is
            already after the close.

    Returns:
        Strictly increasing tuple of exactly ``count`` weekday dates.

    Raises:
        ValueError: If ``count`` is less than 1.
    """
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count}")

    start = first_trading_day(reference, exchange_tz, close_hour)
    days = tuple(islice(iter_trading_days(start), count))
    logger.debug(
        "Trading days for %s (%s): %s",
        reference.isoformat(), exchange_tz, [d.isoformat() for d in days],
    )
    return days
