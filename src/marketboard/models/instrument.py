"""Instrument (market snapshot) data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Instrument:
    """One tradable asset and its latest market snapshot.

    Attributes:
        id: Stable provider identifier, unique across the set.
        symbol: Short ticker code.
        name: Display name.
        image: Icon URL.
        current_price: Last price in the display currency.
        price_change_24h: 24h price change, in percent.
        total_volume: 24h traded volume in the display currency.
        market_cap: Market capitalization in the display currency.
        market_cap_rank: Upstream rank by market cap.
        last_updated: Upstream timestamp of the snapshot.
    """

    id: str
    symbol: str
    name: str
    image: str | None = None
    current_price: float | None = None
    price_change_24h: float | None = None
    total_volume: float | None = None
    market_cap: float | None = None
    market_cap_rank: int | None = None
    last_updated: datetime | None = None

    @property
    def is_up(self) -> bool:
        """Whether the 24h change is strictly positive."""
        return self.price_change_24h is not None and self.price_change_24h > 0
