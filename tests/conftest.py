"""Shared fixtures for marketboard tests."""

from __future__ import annotations

import asyncio
import sys
import threading
import time
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from marketboard.config import MarketDataConfig, MarketDataProviderType
from marketboard.models.instrument import Instrument
from marketboard.providers.mock import MockProvider


class GatedProvider(MockProvider):
    """MockProvider whose calls block until the test opens their gate.

    Gates are keyed ``("markets",)`` and ``("series", instrument_id, days)``.
    """

    def __init__(self) -> None:
        super().__init__()
        self._gates: dict[tuple, threading.Event] = {}
        self._lock = threading.Lock()

    def gate(self, *key) -> threading.Event:
        with self._lock:
            return self._gates.setdefault(key, threading.Event())

    def get_markets(self, currency, per_page=100, page=1):
        self.calls.append(("markets-started", currency))
        self.gate("markets").wait(timeout=5)
        return super().get_markets(currency, per_page, page)

    def get_series(self, instrument_id, currency, days):
        self.calls.append(("series-started", instrument_id, days))
        self.gate("series", instrument_id, days).wait(timeout=5)
        return super().get_series(instrument_id, currency, days)

    def started(self, kind: str) -> int:
        return sum(1 for c in self.calls if c[0] == f"{kind}-started")


async def _wait_until(predicate, timeout: float = 2.0) -> None:
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(0.005)


@pytest.fixture
def wait_until():
    return _wait_until


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def gated_provider() -> GatedProvider:
    return GatedProvider()


@pytest.fixture
def config() -> MarketDataConfig:
    return MarketDataConfig(
        provider=MarketDataProviderType.MOCK,
        refresh_interval_seconds=30.0,
    )


@pytest.fixture
def sample_instruments() -> list[Instrument]:
    """Three instruments in upstream rank order X, Y, Z."""
    return [
        Instrument(
            id="x", symbol="xen", name="Xeno",
            current_price=50.0, price_change_24h=1.5,
            total_volume=500.0, market_cap=100.0, market_cap_rank=1,
        ),
        Instrument(
            id="y", symbol="yld", name="Yield",
            current_price=30.0, price_change_24h=-2.0,
            total_volume=700.0, market_cap=80.0, market_cap_rank=2,
        ),
        Instrument(
            id="z", symbol="zet", name="Zeta",
            current_price=10.0, price_change_24h=0.0,
            total_volume=300.0, market_cap=120.0, market_cap_rank=3,
        ),
    ]
