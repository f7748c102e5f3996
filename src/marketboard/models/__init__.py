"""Market board models."""

from marketboard.models.instrument import Instrument
from marketboard.models.series import Period, SeriesKey, SeriesPoint, SeriesSet
from marketboard.models.sort import DEFAULT_SORT, SortDirection, SortKey, SortSpec
from marketboard.models.status import Failed, FetchStatus, Idle, Loading, Ready

__all__ = [
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
]
