"""Mock provider for testing and demos — no network required."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from marketboard.errors import MarketDataError, MarketDataErrorCode
from marketboard.models.instrument import Instrument
from marketboard.providers.base import BaseMarketDataProvider


class MockProvider(BaseMarketDataProvider):
    """In-memory provider that returns configurable static data.

    Use ``set_markets`` and ``set_series`` to pre-load data, or leave the
    defaults for synthetic data. ``fail_next`` makes the next call of a
    given kind raise. Every call is recorded in ``calls``.
    """

    def __init__(self) -> None:
        self._markets: list[Instrument] | None = None
        self._series: dict[tuple[str, int], list[tuple[float, float]]] = {}
        self._failures: dict[str, list[Exception]] = {"markets": [], "series": []}
        self.calls: list[tuple] = []

    # --- Pre-load helpers ---

    def set_markets(self, instruments: list[Instrument]) -> None:
        self._markets = list(instruments)

    def set_series(
        self, instrument_id: str, days: int, samples: list[tuple[float, float]],
    ) -> None:
        self._series[(instrument_id, days)] = list(samples)

    def fail_next(self, kind: str, error: Exception | None = None) -> None:
        """Queue a failure for the next ``markets`` or ``series`` call."""
        self._failures[kind].append(
            error or MarketDataError(
                f"mock {kind} failure",
                code=MarketDataErrorCode.TRANSIENT,
                retryable=True,
            )
        )

    # --- Provider implementation ---

    def get_markets(
        self,
        currency: str,
        per_page: int = 100,
        page: int = 1,
    ) -> list[Instrument]:
        self.calls.append(("markets", currency, per_page, page))
        self._raise_queued("markets")
        if self._markets is not None:
            start = (page - 1) * per_page
            return self._markets[start:start + per_page]
        return self._generate_markets(per_page)

    def get_series(
        self,
        instrument_id: str,
        currency: str,
        days: int,
    ) -> list[tuple[float, float]]:
        self.calls.append(("series", instrument_id, currency, days))
        self._raise_queued("series")
        key = (instrument_id, days)
        if key in self._series:
            return self._series[key]
        return self._generate_series(days)

    def capabilities(self) -> set[str]:
        return {"markets", "series"}

    # --- Synthetic data generation ---

    def _raise_queued(self, kind: str) -> None:
        if self._failures[kind]:
            raise self._failures[kind].pop(0)

    @staticmethod
    def _generate_markets(count: int) -> list[Instrument]:
        instruments: list[Instrument] = []
        for i in range(min(count, 10)):
            instruments.append(Instrument(
                id=f"coin-{i + 1}",
                symbol=f"c{i + 1}",
                name=f"Coin {i + 1}",
                current_price=round(1000.0 / (i + 1), 2),
                price_change_24h=round((i % 5 - 2) * 1.25, 2),
                total_volume=1_000_000.0 / (i + 1),
                market_cap=10_000_000.0 / (i + 1),
                market_cap_rank=i + 1,
            ))
        return instruments

    @staticmethod
    def _generate_series(days: int) -> list[tuple[float, float]]:
        end = datetime(2024, 1, 15, tzinfo=timezone.utc)
        # Hourly granularity up to 30 days, daily beyond.
        step = timedelta(hours=1) if days <= 30 else timedelta(days=1)
        start = end - timedelta(days=days)
        samples: list[tuple[float, float]] = []
        ts = start
        i = 0
        while ts <= end:
            samples.append((ts.timestamp() * 1000, 100.0 + (i % 10) * 0.5))
            ts += step
            i += 1
        return samples
