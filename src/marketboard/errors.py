"""Market data error types."""

from __future__ import annotations

from enum import Enum


class MarketDataErrorCode(Enum):
    """Error classification codes."""

    TRANSIENT = "transient"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"
    MALFORMED_RESPONSE = "malformed_response"
    PROVIDER_ERROR = "provider_error"


class MarketDataError(Exception):
    """Market data exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code, used for logging only. Stores treat
            every failure the same way.
        retryable: Whether a later fetch is expected to succeed.
    """

    def __init__(
        self,
        message: str,
        code: MarketDataErrorCode = MarketDataErrorCode.PROVIDER_ERROR,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.retryable = retryable


class TransientFetchError(MarketDataError):
    """Network error, timeout or non-2xx response."""

    def __init__(
        self,
        message: str,
        code: MarketDataErrorCode = MarketDataErrorCode.TRANSIENT,
    ) -> None:
        super().__init__(message, code=code, retryable=True)


class MalformedResponseError(MarketDataError):
    """Payload did not have the expected shape."""

    def __init__(self, message: str) -> None:
        super().__init__(
            message,
            code=MarketDataErrorCode.MALFORMED_RESPONSE,
            retryable=True,
        )


def as_market_data_error(exc: Exception) -> MarketDataError:
    """Return ``exc`` unchanged if it is a ``MarketDataError``, else wrap it."""
    if isinstance(exc, MarketDataError):
        return exc
    return MarketDataError(
        f"Unexpected provider error: {type(exc).__name__}: {exc}",
        code=MarketDataErrorCode.PROVIDER_ERROR,
    )
