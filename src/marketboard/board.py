"""MarketBoard — wires provider, stores and selection state together."""

from __future__ import annotations

import asyncio
from typing import Any

from marketboard.config import MarketDataConfig, MarketDataProviderType
from marketboard.errors import MarketDataError, MarketDataErrorCode
from marketboard.formatting import format_change, format_number, format_price
from marketboard.models.instrument import Instrument
from marketboard.models.series import Period, SeriesSet
from marketboard.models.sort import SortKey, SortSpec
from marketboard.models.status import FetchStatus
from marketboard.providers import create_provider
from marketboard.providers.base import BaseMarketDataProvider
from marketboard.selection import Selecting, Selection, SelectionController
from marketboard.series import SeriesCache
from marketboard.store import DataStore


class MarketBoard:
    """Single entry point for a presentation layer.

    Usage::

        from marketboard import create_board_from_env
        board = create_board_from_env()
        async with board:
            await board.refresh()
            board.set_search_text("bit")
            rows = board.rows()
            await board.open_detail(rows[0].id)
            chart = board.series
    """

    def __init__(
        self,
        config: MarketDataConfig,
        provider: BaseMarketDataProvider | None = None,
    ) -> None:
        self.config = config
        self.provider = provider or self._build_provider(config)

        for capability in ("markets", "series"):
            if capability not in self.provider.capabilities():
                raise MarketDataError(
                    f"Provider {type(self.provider).__name__} does not support '{capability}'",
                    code=MarketDataErrorCode.PROVIDER_ERROR,
                )

        self.store = DataStore(self.provider, config)
        self.series_cache = SeriesCache(self.provider, config)
        self.selection_controller = SelectionController(
            self.series_cache, default_period=config.default_period,
        )

    @staticmethod
    def _build_provider(config: MarketDataConfig) -> BaseMarketDataProvider:
        kwargs: dict[str, Any] = {}
        if config.provider == MarketDataProviderType.COINGECKO:
            kwargs["api_key"] = config.api_key
            kwargs["base_url"] = config.base_url
            kwargs["timeout"] = config.request_timeout_seconds
        return create_provider(config.provider, **kwargs)

    # --------------------------------------------------------- lifecycle

    def start(self) -> None:
        self.store.start()

    def stop(self) -> None:
        self.store.stop()

    async def refresh(self) -> FetchStatus:
        return await self.store.refresh()

    async def __aenter__(self) -> MarketBoard:
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.stop()

    # ------------------------------------------------------------- table

    @property
    def status(self) -> FetchStatus:
        return self.store.status

    @property
    def instruments(self) -> tuple[Instrument, ...]:
        return self.store.instruments

    @property
    def sort_spec(self) -> SortSpec:
        return self.selection_controller.sort_spec

    @property
    def search_text(self) -> str:
        return self.selection_controller.search_text

    def rows(self) -> list[Instrument]:
        """Current projection of the live instrument set."""
        return self.selection_controller.project(self.store.instruments)

    def set_search_text(self, text: str) -> None:
        self.selection_controller.set_search_text(text)

    def set_sort_key(self, key: SortKey | str) -> SortSpec:
        return self.selection_controller.set_sort_key(key)

    # -------------------------------------------------------- formatting

    def format_number(self, value: float | None) -> str:
        return format_number(value, self.config.locale)

    def format_price(self, value: float | None) -> str:
        """Amount in the configured display currency and locale."""
        return format_price(value, self.config.currency, self.config.locale)

    def format_change(self, pct: float | None) -> str:
        return format_change(pct)

    # ------------------------------------------------------------ detail

    @property
    def selection(self) -> Selection:
        return self.selection_controller.selection

    @property
    def series(self) -> SeriesSet | None:
        return self.series_cache.series

    @property
    def series_status(self) -> FetchStatus:
        return self.series_cache.status

    def selected_instrument(self) -> Instrument | None:
        """Latest snapshot of the instrument under inspection, if any."""
        selection = self.selection_controller.selection
        if isinstance(selection, Selecting):
            return self.store.get(selection.instrument_id)
        return None

    def open_detail(self, instrument_id: str) -> asyncio.Task:
        return self.selection_controller.open_detail(instrument_id)

    def change_period(self, period: Period | str) -> asyncio.Task:
        return self.selection_controller.change_period(period)

    def close_detail(self) -> None:
        self.selection_controller.close_detail()
