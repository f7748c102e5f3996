"""SeriesCache — single-slot, on-demand historical price series."""

from __future__ import annotations

import asyncio

import pandas as pd
from loguru import logger

from marketboard.config import MarketDataConfig
from marketboard.errors import as_market_data_error
from marketboard.models.series import Period, SeriesKey, SeriesPoint, SeriesSet
from marketboard.models.status import Failed, FetchStatus, Idle, Loading, Ready
from marketboard.providers.base import BaseMarketDataProvider
from marketboard.quality import validate_series


def build_series(
    instrument_id: str,
    period: Period,
    samples: list[tuple[float, float]],
    date_format: str = "%d/%m/%Y",
) -> SeriesSet:
    """Map raw ``(timestamp_ms, price)`` samples 1:1 onto a SeriesSet.

    No resampling: every sample becomes one point, labelled with its UTC
    date.
    """
    if not samples:
        return SeriesSet(instrument_id=instrument_id, period=period)

    stamps = pd.to_datetime([ts for ts, _ in samples], unit="ms", utc=True)
    labels = stamps.strftime(date_format)
    points = tuple(
        SeriesPoint(timestamp=ts.to_pydatetime(), price=float(price), label=label)
        for ts, label, (_, price) in zip(stamps, labels, samples)
    )
    return SeriesSet(instrument_id=instrument_id, period=period, points=points)


class SeriesCache:
    """Holds the series for the most recent selection only.

    Each ``select`` tags its request with a sequence number; a result is
    applied only if its tag is still the latest when it arrives, whatever
    the completion order. Failures clear the held series.
    """

    def __init__(self, provider: BaseMarketDataProvider, config: MarketDataConfig) -> None:
        self.provider = provider
        self.config = config

        self._series: SeriesSet | None = None
        self._status: FetchStatus = Idle()
        self._seq = 0
        self._current: SeriesKey | None = None
        # Superseded fetches keep running until their thread returns.
        self._tasks: set[asyncio.Task] = set()

    @property
    def series(self) -> SeriesSet | None:
        return self._series

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def pending_fetches(self) -> int:
        """Fetches not yet settled, superseded ones included."""
        return len(self._tasks)

    @property
    def current(self) -> SeriesKey | None:
        """Selection the next applied result must match."""
        return self._current

    def select(self, instrument_id: str, period: Period) -> asyncio.Task:
        """Fetch the series for ``(instrument_id, period)``, superseding any
        fetch still in flight. Must be called from the event loop thread.
        """
        self._seq += 1
        key = SeriesKey(instrument_id, period)
        self._current = key
        self._status = Loading()
        logger.debug("Series fetch #{} for {} {}", self._seq, instrument_id, period.value)
        task = asyncio.get_running_loop().create_task(self._fetch(self._seq, key))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _fetch(self, seq: int, key: SeriesKey) -> None:
        try:
            samples = await asyncio.to_thread(
                self.provider.get_series,
                key.instrument_id,
                self.config.currency,
                key.period.days,
            )
            if self.config.validate:
                validate_series(samples).raise_for_failures(
                    f"Series {key.instrument_id}/{key.period.value}"
                )
            series = build_series(key.instrument_id, key.period, samples, self.config.date_format)
        except Exception as exc:
            error = as_market_data_error(exc)
            if seq != self._seq:
                logger.debug("Discarding superseded series failure #{}: {}", seq, error)
                return
            logger.error(
                "Series fetch failed for {} {} ({}): {}",
                key.instrument_id, key.period.value, error.code.value, error,
            )
            self._series = None
            self._status = Failed(str(error))
            return

        if seq != self._seq:
            logger.debug("Discarding superseded series result #{}", seq)
            return

        self._series = series
        self._status = Ready(series)
        logger.info(
            "Loaded {} points for {} {}", len(series), key.instrument_id, key.period.value,
        )
