"""forecastctx — Historical statistics and trading-day calendar for forecasts.

Turns a daily bar series into the statistics a forecasting model is
conditioned on, and works out which trading days the forecast covers.

Quick start::

    from forecastctx import build_forecast_context
    ctx = build_forecast_context(bars, datetime.now(timezone.utc))
    ctx.trading_days, ctx.historical.streak
"""

from __future__ import annotations

import os

from forecastctx.calendar import (
    DEFAULT_EXCHANGE_TIMEZONE,
    DEFAULT_FORECAST_DAYS,
    MARKET_CLOSE_HOUR,
    first_trading_day,
    is_trading_day,
    next_trading_days,
)
from forecastctx.config import ForecastContextConfig
from forecastctx.context import ForecastContext, build_forecast_context
from forecastctx.errors import (
    ForecastContextError,
    ForecastContextErrorCode,
    InsufficientHistoryError,
)
from forecastctx.frames import bars_from_frame, bars_from_records, bars_to_frame
from forecastctx.historical import MIN_HISTORY_BARS, compute_statistics
from forecastctx.models.bar import DailyBar
from forecastctx.models.context import (
    DayOfWeekPerformance,
    Direction,
    GainLossStreak,
    HistoricalContext,
    PricePosition,
    RecentPerformance,
)
from forecastctx.quality import ValidationResult, validate_bars
from forecastctx.trace import TraceStep, trace_forecast_context

__version__ = "0.1.0"

__all__ = [
    # Engine
    "compute_statistics",
    "MIN_HISTORY_BARS",
    # Calendar
    "next_trading_days",
    "first_trading_day",
    "is_trading_day",
    "DEFAULT_EXCHANGE_TIMEZONE",
    "DEFAULT_FORECAST_DAYS",
    "MARKET_CLOSE_HOUR",
    # Composition
    "ForecastContext",
    "build_forecast_context",
    "TraceStep",
    "trace_forecast_context",
    # Config
    "ForecastContextConfig",
    "create_config_from_env",
    # Errors
    "ForecastContextError",
    "ForecastContextErrorCode",
    "InsufficientHistoryError",
    # Models
    "DailyBar",
    "Direction",
    "GainLossStreak",
    "RecentPerformance",
    "PricePosition",
    "DayOfWeekPerformance",
    "HistoricalContext",
    # Data utilities
    "bars_to_frame",
    "bars_from_frame",
    "bars_from_records",
    "validate_bars",
    "ValidationResult",
]


def create_config_from_env() -> ForecastContextConfig:
    """Zero-config factory — reads calendar settings from env vars.

    Environment variables:
        FORECAST_EXCHANGE_TIMEZONE: IANA timezone (default: "America/New_York").
        FORECAST_MARKET_CLOSE_HOUR: Local close hour (default: 16).
        FORECAST_DAYS: Number of trading days to forecast (default: 5).
        FORECAST_VALIDATE: "1"/"true" to run bar quality checks (default: off).
    """
    return ForecastContextConfig(
        exchange_timezone=os.getenv("FORECAST_EXCHANGE_TIMEZONE", DEFAULT_EXCHANGE_TIMEZONE),
        market_close_hour=int(os.getenv("FORECAST_MARKET_CLOSE_HOUR", str(MARKET_CLOSE_HOUR))),
        forecast_days=int(os.getenv("FORECAST_DAYS", str(DEFAULT_FORECAST_DAYS))),
        validate=os.getenv("FORECAST_VALIDATE", "").strip().lower() in ("1", "true", "yes"),
    )
