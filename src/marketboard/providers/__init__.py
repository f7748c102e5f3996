"""Market data provider registry."""

from __future__ import annotations

from marketboard.config import MarketDataProviderType
from marketboard.providers.base import BaseMarketDataProvider

# Lazy registry — actual classes imported on demand so the REST stack is
# only loaded when a REST provider is used.
PROVIDER_CLASSES: dict[MarketDataProviderType, str] = {
    MarketDataProviderType.COINGECKO: "marketboard.providers.coingecko.CoinGeckoProvider",
    MarketDataProviderType.MOCK: "marketboard.providers.mock.MockProvider",
}


def create_provider(
    provider_type: MarketDataProviderType,
    **kwargs,
) -> BaseMarketDataProvider:
    """Instantiate a provider by type, forwarding kwargs to its constructor."""
    import importlib

    dotted = PROVIDER_CLASSES[provider_type]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseMarketDataProvider", "PROVIDER_CLASSES", "create_provider"]
