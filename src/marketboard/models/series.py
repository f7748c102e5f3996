"""Historical price series data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

import pandas as pd


class Period(Enum):
    """Time window for a historical series query."""

    H24 = "24h"
    D7 = "7d"
    D30 = "30d"
    D90 = "90d"

    @property
    def days(self) -> int:
        return _PERIOD_DAYS[self]


_PERIOD_DAYS: dict[Period, int] = {
    Period.H24: 1,
    Period.D7: 7,
    Period.D30: 30,
    Period.D90: 90,
}


@dataclass(frozen=True)
class SeriesKey:
    """The (instrument, period) pair a series belongs to."""

    instrument_id: str
    period: Period


@dataclass(frozen=True)
class SeriesPoint:
    """Single (timestamp, price) sample with a display-ready date label."""

    timestamp: datetime
    price: float
    label: str


@dataclass(frozen=True)
class SeriesSet:
    """Price series for exactly one (instrument, period) pair.

    Points are ordered by timestamp ascending.
    """

    instrument_id: str
    period: Period
    points: tuple[SeriesPoint, ...] = field(default_factory=tuple)

    @property
    def key(self) -> SeriesKey:
        return SeriesKey(self.instrument_id, self.period)

    def __len__(self) -> int:
        return len(self.points)

    def to_frame(self) -> pd.DataFrame:
        """Return the series as a DataFrame with timestamp, label, price."""
        return pd.DataFrame(
            {
                "timestamp": [p.timestamp for p in self.points],
                "label": [p.label for p in self.points],
                "price": [p.price for p in self.points],
            }
        )
