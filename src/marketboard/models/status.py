"""FetchStatus — tagged state of an asynchronous data source."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Idle:
    """Nothing requested yet."""

    state: str = "idle"


@dataclass(frozen=True)
class Loading:
    """A user-visible fetch is in progress."""

    state: str = "loading"


@dataclass(frozen=True)
class Ready:
    """Last fetch succeeded; ``payload`` is the applied value."""

    payload: Any
    state: str = "ready"


@dataclass(frozen=True)
class Failed:
    """Last fetch failed; ``reason`` is an opaque description."""

    reason: str
    state: str = "failed"


FetchStatus = Idle | Loading | Ready | Failed
