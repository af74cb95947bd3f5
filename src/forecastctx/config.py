"""Forecast-context configuration."""

from __future__ import annotations

from dataclasses import dataclass

from forecastctx.calendar import (
    DEFAULT_EXCHANGE_TIMEZONE,
    DEFAULT_FORECAST_DAYS,
    MARKET_CLOSE_HOUR,
)


@dataclass
class ForecastContextConfig:
    """Configuration for building a forecast context.

    Attributes:
        exchange_timezone: IANA timezone of the exchange.
        market_close_hour: Local hour at which the session counts as closed.
        forecast_days: Number of trading days to forecast.
        validate: Whether to run quality checks on the bars and log failures.
    """

    exchange_timezone: str = DEFAULT_EXCHANGE_TIMEZONE
    market_close_hour: int = MARKET_CLOSE_HOUR
    forecast_days: int = DEFAULT_FORECAST_DAYS
    validate: bool = False
