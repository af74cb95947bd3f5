"""Step-by-step trace of a forecast-context build, for debugging.

Each step records its name, status, input summary, output, error message and
duration. A failing step is recorded rather than raised and ends the trace.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

from forecastctx.calendar import next_trading_days
from forecastctx.config import ForecastContextConfig
from forecastctx.historical import compute_statistics
from forecastctx.models.bar import DailyBar
from forecastctx.quality import validate_bars

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class TraceStep:
    """Outcome of one traced step.

    Attributes:
        name: Step name.
        status: "success" or "error".
        input: Summary of the step's input.
        output: Step result (None on error).
        error: Error message (None on success).
        duration_ms: Wall time spent in the step, in milliseconds.
    """

    name: str
    status: str
    input: Any = None
    output: Any = None
    error: str | None = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status == "success"


def trace_step(
    name: str, step_input: Any, fn: Callable[[], T],
) -> tuple[TraceStep, T | None]:
    """Run ``fn`` and record the outcome as a ``TraceStep``."""
    start = time.perf_counter()
    try:
        result = fn()
    except Exception as exc:
        duration = (time.perf_counter() - start) * 1000
        logger.warning("Trace step %r failed: %s", name, exc)
        return TraceStep(name, "error", input=step_input, error=str(exc), duration_ms=duration), None
    duration = (time.perf_counter() - start) * 1000
    return TraceStep(name, "success", input=step_input, output=result, duration_ms=duration), result


def trace_forecast_context(
    bars: Sequence[DailyBar],
    reference: datetime,
    config: ForecastContextConfig | None = None,
) -> list[TraceStep]:
    """Trace validation, statistics and calendar steps for one request.

    Stops after the first step that raises. Failed quality checks do not stop
    the trace; they are reported in the validation step's output.
    """
    config = config or ForecastContextConfig()
    steps: list[TraceStep] = []

    step, _ = trace_step(
        "Validate Bars", {"bar_count": len(bars)}, lambda: validate_bars(bars),
    )
    steps.append(step)
    if not step.ok:
        return steps

    step, stats = trace_step(
        "Calculate Historical Statistics",
        {"bar_count": len(bars)},
        lambda: compute_statistics(bars),
    )
    steps.append(step)
    if stats is None:
        return steps

    step, _ = trace_step(
        "Compute Trading Days",
        {
            "reference": reference.isoformat(),
            "exchange_timezone": config.exchange_timezone,
            "count": config.forecast_days,
        },
        lambda: next_trading_days(
            reference,
            config.exchange_timezone,
            count=config.forecast_days,
            close_hour=config.market_close_hour,
        ),
    )
    steps.append(step)
    return steps
