"""Sort specification for the instrument table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SortKey(Enum):
    """Sortable instrument columns."""

    NAME = "name"
    PRICE = "price"
    CHANGE_24H = "change24h"
    VOLUME = "volume"
    MARKET_CAP = "marketCap"

    @property
    def attribute(self) -> str:
        """Name of the Instrument attribute this key sorts on."""
        return _SORT_ATTRIBUTES[self]


_SORT_ATTRIBUTES: dict[SortKey, str] = {
    SortKey.NAME: "name",
    SortKey.PRICE: "current_price",
    SortKey.CHANGE_24H: "price_change_24h",
    SortKey.VOLUME: "total_volume",
    SortKey.MARKET_CAP: "market_cap",
}


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    """Active sort column and direction."""

    key: SortKey = SortKey.MARKET_CAP
    direction: SortDirection = SortDirection.DESC

    def toggled(self, key: SortKey) -> SortSpec:
        """Spec after a click on ``key``.

        Clicking the active ascending column flips it to descending; any
        other click sorts ascending by the clicked column.
        """
        if key == self.key and self.direction == SortDirection.ASC:
            return SortSpec(key, SortDirection.DESC)
        return SortSpec(key, SortDirection.ASC)


DEFAULT_SORT = SortSpec()
