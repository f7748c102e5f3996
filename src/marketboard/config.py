"""Market board configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from marketboard.models.series import Period


class MarketDataProviderType(Enum):
    """Supported data provider backends."""

    COINGECKO = "coingecko"
    MOCK = "mock"


@dataclass
class MarketDataConfig:
    """Configuration for MarketBoard.

    Attributes:
        provider: Provider backend.
        currency: Display currency, fixed for the lifetime of the board.
        base_url: Provider REST root; ``None`` uses the provider default.
        api_key: Optional provider API key.
        per_page: Number of instruments requested per refresh.
        refresh_interval_seconds: Delay between background refreshes.
        request_timeout_seconds: Per-request HTTP timeout.
        default_period: Period used when a detail view is opened.
        locale: Number formatting locale ("pt-BR", "en-US", ...).
        date_format: strftime pattern for series point labels.
        validate: Whether to run quality checks on fetched payloads.
    """

    provider: MarketDataProviderType = MarketDataProviderType.COINGECKO
    currency: str = "brl"
    base_url: str | None = None
    api_key: str | None = None
    per_page: int = 100
    refresh_interval_seconds: float = 30.0
    request_timeout_seconds: float = 10.0
    default_period: Period = Period.D7
    locale: str = "pt-BR"
    date_format: str = "%d/%m/%Y"
    validate: bool = True
