"""Abstract base class for market data providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketboard.models.instrument import Instrument


class BaseMarketDataProvider(ABC):
    """Abstract base for all market data providers.

    Methods are blocking; stores run them off the event loop. Every failure
    must surface as a ``MarketDataError`` subclass.
    """

    # --- Market snapshot (required) ---

    @abstractmethod
    def get_markets(
        self,
        currency: str,
        per_page: int = 100,
        page: int = 1,
    ) -> list[Instrument]:
        """Fetch the instrument set ranked by market cap, descending.

        Args:
            currency: Display currency code (e.g. "brl").
            per_page: Page size.
            page: 1-based page number.

        Returns:
            Instruments in upstream rank order.
        """
        ...

    # --- Historical series ---

    def get_series(
        self,
        instrument_id: str,
        currency: str,
        days: int,
    ) -> list[tuple[float, float]]:
        """Fetch raw ``(timestamp_ms, price)`` samples, oldest first."""
        raise NotImplementedError

    # --- Capabilities ---

    def capabilities(self) -> set[str]:
        """Return the set of supported features: ``markets``, ``series``."""
        return {"markets"}
