"""Selection controller — UI-local state and detail-view state machine."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from marketboard.models.instrument import Instrument
from marketboard.models.series import Period
from marketboard.models.sort import DEFAULT_SORT, SortKey, SortSpec
from marketboard.projection import project
from marketboard.series import SeriesCache


class SelectionError(ValueError):
    """Intent that is invalid in the current state."""


@dataclass(frozen=True)
class NoSelection:
    pass


@dataclass(frozen=True)
class Selecting:
    instrument_id: str
    period: Period


Selection = NoSelection | Selecting


def parse_period(value: Period | str) -> Period:
    if isinstance(value, Period):
        return value
    try:
        return Period(value)
    except ValueError:
        valid = [p.value for p in Period]
        raise SelectionError(f"Unknown period {value!r}. Valid: {valid}") from None


def parse_sort_key(value: SortKey | str) -> SortKey:
    if isinstance(value, SortKey):
        return value
    try:
        return SortKey(value)
    except ValueError:
        valid = [k.value for k in SortKey]
        raise SelectionError(f"Unknown sort key {value!r}. Valid: {valid}") from None


class SelectionController:
    """Tracks search text, sort spec and the instrument under inspection.

    Opening a detail view or changing its period issues exactly one
    ``SeriesCache.select``. Closing leaves the cached series in place.
    """

    def __init__(self, series_cache: SeriesCache, default_period: Period = Period.D7) -> None:
        self.series_cache = series_cache
        self.default_period = default_period

        self.search_text = ""
        self.sort_spec: SortSpec = DEFAULT_SORT
        self.selection: Selection = NoSelection()

    # ------------------------------------------------------------ table

    def set_search_text(self, text: str) -> None:
        self.search_text = text

    def set_sort_key(self, key: SortKey | str) -> SortSpec:
        self.sort_spec = self.sort_spec.toggled(parse_sort_key(key))
        return self.sort_spec

    def project(self, instruments: Sequence[Instrument]) -> list[Instrument]:
        return project(instruments, self.search_text, self.sort_spec)

    # ----------------------------------------------------------- detail

    @property
    def period(self) -> Period | None:
        if isinstance(self.selection, Selecting):
            return self.selection.period
        return None

    def open_detail(self, instrument_id: str) -> asyncio.Task:
        self.selection = Selecting(instrument_id, self.default_period)
        logger.debug("Opened detail for {}", instrument_id)
        return self.series_cache.select(instrument_id, self.default_period)

    def change_period(self, period: Period | str) -> asyncio.Task:
        if not isinstance(self.selection, Selecting):
            raise SelectionError("No instrument selected; open a detail view first")
        period = parse_period(period)
        self.selection = Selecting(self.selection.instrument_id, period)
        return self.series_cache.select(self.selection.instrument_id, period)

    def close_detail(self) -> None:
        self.selection = NoSelection()
