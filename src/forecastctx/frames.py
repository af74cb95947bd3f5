"""Conversions between ``DailyBar`` lists, DataFrames and vendor records.

The brokerage data API returns daily bars as JSON objects keyed ``t``, ``o``,
``h``, ``l``, ``c``, ``v``; ``bars_from_records`` accepts that shape as well
as the long field names used by ``bars_to_frame``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

import pandas as pd

from forecastctx.errors import ForecastContextError, ForecastContextErrorCode
from forecastctx.models.bar import DailyBar

BAR_COLUMNS = ["timestamp", "open", "high", "low", "close", "volume"]

_SHORT_KEYS = {
    "t": "timestamp",
    "o": "open",
    "h": "high",
    "l": "low",
    "c": "close",
    "v": "volume",
}


def bars_to_frame(bars: Iterable[DailyBar]) -> pd.DataFrame:
    """DataFrame with one row per bar and ``BAR_COLUMNS`` as columns."""
    records = [
        {
            "timestamp": b.timestamp,
            "open": b.open,
            "high": b.high,
            "low": b.low,
            "close": b.close,
            "volume": b.volume,
        }
        for b in bars
    ]
    return pd.DataFrame(records, columns=BAR_COLUMNS)


def _parse_timestamp(value: Any) -> datetime:
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"missing timestamp: {value!r}")
    return ts.to_pydatetime()


def _bar_from_mapping(rec: Mapping[str, Any]) -> DailyBar:
    volume = rec.get("volume")
    return DailyBar(
        timestamp=_parse_timestamp(rec["timestamp"]),
        open=float(rec["open"]),
        high=float(rec["high"]),
        low=float(rec["low"]),
        close=float(rec["close"]),
        volume=float(volume) if pd.notna(volume) else 0.0,
    )


def bars_from_frame(df: pd.DataFrame) -> list[DailyBar]:
    """Build bars from a DataFrame, sorted oldest to newest.

    The timestamp is read from a ``timestamp`` column if present, otherwise
    from a DatetimeIndex. A missing ``volume`` column defaults to 0.

    Raises:
        ForecastContextError: If timestamps or OHLC columns are missing, or a
            row holds a value that is not a price or timestamp.
    """
    if "timestamp" not in df.columns:
        if not isinstance(df.index, pd.DatetimeIndex):
            raise ForecastContextError(
                "DataFrame needs a 'timestamp' column or a DatetimeIndex",
                code=ForecastContextErrorCode.INVALID_INPUT,
            )
        df = df.rename_axis("timestamp").reset_index()

    missing = [c for c in ("open", "high", "low", "close") if c not in df.columns]
    if missing:
        raise ForecastContextError(
            f"DataFrame missing columns: {', '.join(missing)}",
            code=ForecastContextErrorCode.INVALID_INPUT,
        )

    bars: list[DailyBar] = []
    for idx, row in df.iterrows():
        try:
            bars.append(_bar_from_mapping(row))
        except (KeyError, TypeError, ValueError) as exc:
            raise ForecastContextError(
                f"DataFrame row {idx!r} is not a valid bar: {exc}",
                code=ForecastContextErrorCode.INVALID_INPUT,
            ) from exc
    try:
        return sorted(bars, key=lambda b: b.timestamp)
    except TypeError as exc:
        raise ForecastContextError(
            f"DataFrame timestamps cannot be ordered: {exc}",
            code=ForecastContextErrorCode.INVALID_INPUT,
        ) from exc


def _normalize_record(record: Mapping[str, Any]) -> dict[str, Any]:
    return {_SHORT_KEYS.get(k, k): v for k, v in record.items()}


def bars_from_records(records: Iterable[Mapping[str, Any]]) -> list[DailyBar]:
    """Build bars from vendor JSON records, preserving their order.

    Timestamps may be ISO-8601 strings ("2024-01-02T05:00:00Z") or datetimes.

    Raises:
        ForecastContextError: If a record lacks a required field or holds a
            value that is not a price or timestamp.
    """
    bars: list[DailyBar] = []
    for i, raw in enumerate(records):
        rec = _normalize_record(raw)
        try:
            bars.append(_bar_from_mapping(rec))
        except KeyError as exc:
            raise ForecastContextError(
                f"Bar record {i} missing field {exc.args[0]!r}",
                code=ForecastContextErrorCode.INVALID_INPUT,
            ) from exc
        except (TypeError, ValueError) as exc:
            raise ForecastContextError(
                f"Bar record {i} is not a valid bar: {exc}",
                code=ForecastContextErrorCode.INVALID_INPUT,
            ) from exc
    return bars
