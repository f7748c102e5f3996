"""CoinGecko REST provider.

Talks to the public ``/coins/markets`` and ``/coins/{id}/market_chart``
endpoints with a plain ``requests`` session.
"""

from __future__ import annotations

import math
import os
from datetime import datetime
from typing import Any

import certifi
import requests

from marketboard.errors import (
    MalformedResponseError,
    MarketDataErrorCode,
    TransientFetchError,
)
from marketboard.models.instrument import Instrument
from marketboard.providers.base import BaseMarketDataProvider

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"


class CoinGeckoProvider(BaseMarketDataProvider):
    """Fetch market snapshots and price series from CoinGecko.

    Capabilities: markets, series.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key or os.getenv("COINGECKO_API_KEY")
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout

        self.session = requests.Session()
        self.session.verify = certifi.where()
        self.session.headers["Accept"] = "application/json"
        if self.api_key:
            self.session.headers["x-cg-demo-api-key"] = self.api_key

    def capabilities(self) -> set[str]:
        return {"markets", "series"}

    # --------------------------------------------------------------- markets

    def get_markets(
        self,
        currency: str,
        per_page: int = 100,
        page: int = 1,
    ) -> list[Instrument]:
        data = self._get(
            "/coins/markets",
            {
                "vs_currency": currency,
                "order": "market_cap_desc",
                "per_page": per_page,
                "page": page,
                "sparkline": "false",
            },
        )
        if not isinstance(data, list):
            raise MalformedResponseError(
                f"CoinGecko markets: expected a list, got {type(data).__name__}"
            )
        return [self._record_to_instrument(r) for r in data]

    # ---------------------------------------------------------------- series

    def get_series(
        self,
        instrument_id: str,
        currency: str,
        days: int,
    ) -> list[tuple[float, float]]:
        data = self._get(
            f"/coins/{instrument_id}/market_chart",
            {"vs_currency": currency, "days": days},
        )
        prices = data.get("prices") if isinstance(data, dict) else None
        if not isinstance(prices, list):
            raise MalformedResponseError(
                f"CoinGecko market_chart for {instrument_id}: missing 'prices' array"
            )

        samples: list[tuple[float, float]] = []
        for row in prices:
            if not isinstance(row, (list, tuple)) or len(row) < 2:
                raise MalformedResponseError(
                    f"CoinGecko market_chart for {instrument_id}: bad sample {row!r}"
                )
            samples.append((_require_float(row[0], "timestamp"), _require_float(row[1], "price")))
        return samples

    # -------------------------------------------------------------- internal

    def _get(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise TransientFetchError(
                f"CoinGecko request timed out: {path}",
                code=MarketDataErrorCode.TIMEOUT,
            ) from exc
        except requests.RequestException as exc:
            raise TransientFetchError(f"CoinGecko request failed: {exc}") from exc

        self._check_response(resp, path)
        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedResponseError(f"CoinGecko returned invalid JSON for {path}") from exc

    def _check_response(self, resp: Any, path: str) -> None:
        if resp.status_code == 429:
            raise TransientFetchError(
                "CoinGecko rate limited",
                code=MarketDataErrorCode.RATE_LIMITED,
            )
        if resp.status_code == 404:
            raise TransientFetchError(
                f"Not found on CoinGecko: {path}",
                code=MarketDataErrorCode.NOT_FOUND,
            )
        if not 200 <= resp.status_code < 300:
            raise TransientFetchError(f"CoinGecko HTTP {resp.status_code} for {path}")

    @staticmethod
    def _record_to_instrument(record: Any) -> Instrument:
        if not isinstance(record, dict):
            raise MalformedResponseError(f"CoinGecko market record is not an object: {record!r}")
        try:
            ident = record["id"]
            symbol = record["symbol"]
            name = record["name"]
        except KeyError as exc:
            raise MalformedResponseError(f"CoinGecko market record missing {exc}") from exc
        if not all(isinstance(v, str) and v for v in (ident, symbol, name)):
            raise MalformedResponseError(f"CoinGecko market record has bad identity: {ident!r}")

        rank = _optional_float(record.get("market_cap_rank"), "market_cap_rank")
        if rank is not None and not math.isfinite(rank):
            raise MalformedResponseError(f"CoinGecko market_cap_rank is not finite: {rank!r}")
        return Instrument(
            id=ident,
            symbol=symbol,
            name=name,
            image=record.get("image"),
            current_price=_optional_float(record.get("current_price"), "current_price"),
            price_change_24h=_optional_float(
                record.get("price_change_percentage_24h"), "price_change_percentage_24h",
            ),
            total_volume=_optional_float(record.get("total_volume"), "total_volume"),
            market_cap=_optional_float(record.get("market_cap"), "market_cap"),
            market_cap_rank=int(rank) if rank is not None else None,
            last_updated=_parse_timestamp(record.get("last_updated")),
        )


def _optional_float(value: Any, name: str) -> float | None:
    if value is None:
        return None
    return _require_float(value, name)


def _require_float(value: Any, name: str) -> float:
    # bool is an int subclass; a boolean price is never valid.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(f"Expected a number for {name}, got {value!r}")
    return float(value)


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


__all__ = ["CoinGeckoProvider", "DEFAULT_BASE_URL"]
