"""Forecast context: historical statistics plus the days to forecast."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from forecastctx.calendar import next_trading_days, to_exchange_time
from forecastctx.config import ForecastContextConfig
from forecastctx.historical import compute_statistics
from forecastctx.models.bar import DailyBar
from forecastctx.models.context import HistoricalContext
from forecastctx.quality import validate_bars

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastContext:
    """Everything the forecasting model is conditioned on.

    Attributes:
        historical: Statistics of the supplied bar series.
        trading_days: Dates to forecast, ascending.
        reference: The reference instant in exchange-local time.
        exchange_timezone: IANA name of the exchange timezone.
    """

    historical: HistoricalContext
    trading_days: tuple[date, ...]
    reference: datetime
    exchange_timezone: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "reference": self.reference.isoformat(),
            "exchange_timezone": self.exchange_timezone,
            "trading_days": [d.isoformat() for d in self.trading_days],
            "historical": self.historical.to_dict(),
        }


def build_forecast_context(
    bars: Sequence[DailyBar],
    reference: datetime,
    config: ForecastContextConfig | None = None,
) -> ForecastContext:
    """Run the statistics engine and the trading calendar for one request.

    Args:
        bars: Daily bars, oldest first.
        reference: The caller's "now".
        config: Calendar settings; defaults to ``ForecastContextConfig()``.

    Raises:
        InsufficientHistoryError: If ``bars`` is too short.
    """
    config = config or ForecastContextConfig()

    if config.validate:
        result = validate_bars(bars)
        for check in result.failed_checks:
            logger.warning("Bar quality check %s failed: %s", check.name, check.message)

    historical = compute_statistics(bars)
    days = next_trading_days(
        reference,
        config.exchange_timezone,
        count=config.forecast_days,
        close_hour=config.market_close_hour,
    )
    return ForecastContext(
        historical=historical,
        trading_days=days,
        reference=to_exchange_time(reference, config.exchange_timezone),
        exchange_timezone=config.exchange_timezone,
    )
