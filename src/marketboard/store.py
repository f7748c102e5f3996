"""DataStore — live instrument set with a periodic background refresh."""

from __future__ import annotations

import asyncio

from loguru import logger

from marketboard.config import MarketDataConfig
from marketboard.errors import as_market_data_error
from marketboard.models.instrument import Instrument
from marketboard.models.status import Failed, FetchStatus, Idle, Loading, Ready
from marketboard.providers.base import BaseMarketDataProvider
from marketboard.quality import validate_instruments


class DataStore:
    """Owns the current instrument set and its fetch status.

    ``start()`` schedules one refresh immediately and then one every
    ``config.refresh_interval_seconds`` until ``stop()``. At most one refresh
    is in flight; a tick that finds one outstanding is skipped.

    Once a refresh has succeeded, later failures keep the stale set and
    leave the status at ``Ready``; they are only logged.

    Usage::

        store = DataStore(provider, config)
        async with store:
            ...
            rows = store.instruments
    """

    def __init__(self, provider: BaseMarketDataProvider, config: MarketDataConfig) -> None:
        self.provider = provider
        self.config = config

        self._instruments: tuple[Instrument, ...] = ()
        self._status: FetchStatus = Idle()
        self._has_baseline = False

        # Bumped on every start/stop; a refresh only applies its result if
        # the generation it was issued under is still current.
        self._generation = 0
        self._ticker: asyncio.Task | None = None
        self._refresh_task: asyncio.Task | None = None
        self._refresh_generation = 0

    # ------------------------------------------------------------- state

    @property
    def instruments(self) -> tuple[Instrument, ...]:
        return self._instruments

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def running(self) -> bool:
        return self._ticker is not None and not self._ticker.done()

    def get(self, instrument_id: str) -> Instrument | None:
        for inst in self._instruments:
            if inst.id == instrument_id:
                return inst
        return None

    # --------------------------------------------------------- lifecycle

    def start(self) -> None:
        """Start the refresh loop on the running event loop."""
        if self.running:
            return
        self._generation += 1
        self._ticker = asyncio.get_running_loop().create_task(
            self._run(self._generation), name="marketboard-refresh-loop",
        )
        logger.debug(
            "DataStore started (every {}s, generation {})",
            self.config.refresh_interval_seconds, self._generation,
        )

    def stop(self) -> None:
        """Cancel the timer; an in-flight result will be discarded."""
        self._generation += 1
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
            logger.debug("DataStore stopped")

    async def __aenter__(self) -> DataStore:
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.stop()

    # ----------------------------------------------------------- refresh

    async def refresh(self) -> FetchStatus:
        """Run one refresh cycle now, or join the one already in flight.

        A request left over from a stopped loop is never joined: a fresh
        fetch is issued once it has settled.
        """
        task = self._schedule(self._generation)
        await asyncio.shield(task)
        return self._status

    async def _run(self, generation: int) -> None:
        while True:
            self._schedule(generation)
            await asyncio.sleep(self.config.refresh_interval_seconds)

    def _schedule(self, generation: int) -> asyncio.Task:
        pending = self._refresh_task
        loop = asyncio.get_running_loop()
        if pending is not None and not pending.done():
            if self._refresh_generation == generation:
                logger.debug("Refresh already in flight, not issuing another")
                return pending
            # Outstanding request belongs to a stopped loop; its result will be
            # discarded, so fetch again as soon as it settles.
            self._refresh_task = loop.create_task(self._refresh_after(pending, generation))
        else:
            self._refresh_task = loop.create_task(self._refresh(generation))
        self._refresh_generation = generation
        return self._refresh_task

    async def _refresh_after(self, previous: asyncio.Task, generation: int) -> None:
        await asyncio.wait({previous})
        if generation != self._generation:
            return
        await self._refresh(generation)

    async def _refresh(self, generation: int) -> None:
        if not self._has_baseline:
            self._status = Loading()

        try:
            instruments = await asyncio.to_thread(
                self.provider.get_markets,
                self.config.currency,
                self.config.per_page,
                1,
            )
            if self.config.validate:
                validate_instruments(instruments).raise_for_failures("Instrument set")
        except Exception as exc:
            error = as_market_data_error(exc)
            if generation != self._generation:
                logger.debug("Discarding refresh failure after stop: {}", error)
                return
            if self._has_baseline:
                logger.warning(
                    "Background refresh failed ({}), keeping {} stale instruments: {}",
                    error.code.value, len(self._instruments), error,
                )
                return
            logger.error("Initial instrument fetch failed ({}): {}", error.code.value, error)
            self._status = Failed(str(error))
            return

        if generation != self._generation:
            logger.debug("Discarding refresh result after stop")
            return

        self._instruments = tuple(instruments)
        self._has_baseline = True
        self._status = Ready(self._instruments)
        logger.info("Refreshed {} instruments", len(self._instruments))
