"""marketboard — live, searchable market table with on-demand price history.

A periodically refreshed instrument set, a pure filter/sort projection over
it, and a single-slot price series cache driven by a selection controller.

Quick start::

    from marketboard import create_board_from_env, format_price
    board = create_board_from_env()
    async with board:
        await board.refresh()
        for inst in board.rows():
            print(inst.symbol, format_price(inst.current_price))
"""

from __future__ import annotations

import os

from marketboard.board import MarketBoard
from marketboard.config import MarketDataConfig, MarketDataProviderType
from marketboard.errors import (
    MalformedResponseError,
    MarketDataError,
    MarketDataErrorCode,
    TransientFetchError,
)
from marketboard.formatting import format_change, format_number, format_price
from marketboard.models.instrument import Instrument
from marketboard.models.series import Period, SeriesKey, SeriesPoint, SeriesSet
from marketboard.models.sort import DEFAULT_SORT, SortDirection, SortKey, SortSpec
from marketboard.models.status import Failed, FetchStatus, Idle, Loading, Ready
from marketboard.projection import project
from marketboard.selection import NoSelection, Selecting, SelectionController, SelectionError
from marketboard.series import SeriesCache, build_series
from marketboard.store import DataStore

__version__ = "0.1.0"

__all__ = [
    # Board
    "MarketBoard",
    "create_board_from_env",
    # Core components
    "DataStore",
    "SeriesCache",
    "SelectionController",
    "project",
    "build_series",
    # Config
    "MarketDataConfig",
    "MarketDataProviderType",
    # Errors
    "MarketDataError",
    "MarketDataErrorCode",
    "TransientFetchError",
    "MalformedResponseError",
    "SelectionError",
    # Models
    "Instrument",
    "Period",
    "SeriesKey",
    "SeriesPoint",
    "SeriesSet",
    "SortKey",
    "SortDirection",
    "SortSpec",
    "DEFAULT_SORT",
    "FetchStatus",
    "Idle",
    "Loading",
    "Ready",
    "Failed",
    "NoSelection",
    "Selecting",
    # Formatting
    "format_number",
    "format_price",
    "format_change",
]


def create_board_from_env() -> MarketBoard:
    """Zero-config factory — reads provider and display settings from env vars.

    Environment variables:
        MARKETBOARD_PROVIDER: "coingecko" or "mock" (default: "coingecko").
        MARKETBOARD_CURRENCY: Display currency (default: "brl").
        MARKETBOARD_BASE_URL: Provider REST root (default: provider's own).
        COINGECKO_API_KEY: CoinGecko demo API key.
        MARKETBOARD_REFRESH_SECONDS: Refresh interval (default: 30).
        MARKETBOARD_LOCALE: Number formatting locale (default: "pt-BR").
    """
    config = MarketDataConfig(
        provider=MarketDataProviderType(os.getenv("MARKETBOARD_PROVIDER", "coingecko").strip()),
        currency=os.getenv("MARKETBOARD_CURRENCY", "brl"),
        base_url=os.getenv("MARKETBOARD_BASE_URL") or None,
        api_key=os.getenv("COINGECKO_API_KEY"),
        refresh_interval_seconds=float(os.getenv("MARKETBOARD_REFRESH_SECONDS", "30")),
        locale=os.getenv("MARKETBOARD_LOCALE", "pt-BR"),
    )

    return MarketBoard(config)
