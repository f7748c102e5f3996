"""Projection engine — filtered, sorted view of an instrument set.

Pure functions: no I/O, inputs are never mutated, safe to call on every
intent change.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from marketboard.models.instrument import Instrument
from marketboard.models.sort import DEFAULT_SORT, SortDirection, SortKey, SortSpec


def matches(instrument: Instrument, search_text: str) -> bool:
    """Case-insensitive substring match on name or symbol."""
    needle = search_text.strip().lower()
    if not needle:
        return True
    return needle in instrument.name.lower() or needle in instrument.symbol.lower()


def sort_value(instrument: Instrument, key: SortKey) -> Any:
    """Comparable value for ``key``; missing numbers order lowest."""
    value = getattr(instrument, key.attribute)
    if isinstance(value, str):
        return value.lower()
    if value is None:
        return -math.inf
    return value


def project(
    instruments: Sequence[Instrument],
    search_text: str = "",
    sort_spec: SortSpec = DEFAULT_SORT,
) -> list[Instrument]:
    """Filter by ``search_text`` then sort by ``sort_spec``.

    The sort is stable in both directions: instruments that compare equal
    keep their upstream (rank) order whether ascending or descending.
    """
    filtered = [inst for inst in instruments if matches(inst, search_text)]
    return sorted(
        filtered,
        key=lambda inst: sort_value(inst, sort_spec.key),
        reverse=sort_spec.direction == SortDirection.DESC,
    )
