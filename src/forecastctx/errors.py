"""Forecast-context error types."""

from __future__ import annotations

from enum import Enum


class ForecastContextErrorCode(Enum):
    """Error classification codes."""

    INSUFFICIENT_HISTORY = "insufficient_history"
    INVALID_INPUT = "invalid_input"


class ForecastContextError(Exception):
    """Forecast-context exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the caller may retry with different input.
    """

    def __init__(
        self,
        message: str,
        code: ForecastContextErrorCode = ForecastContextErrorCode.INVALID_INPUT,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable


class InsufficientHistoryError(ForecastContextError):
    """Raised when a bar series is too short to compute statistics.

    Attributes:
        required: Minimum number of bars needed.
        actual: Number of bars supplied.
    """

    def __init__(self, required: int, actual: int) -> None:
        super().__init__(
            f"Not enough historical data to calculate statistics: "
            f"need at least {required} bars, got {actual}",
            code=ForecastContextErrorCode.INSUFFICIENT_HISTORY,
        )
        self.required = required
        self.actual = actual
