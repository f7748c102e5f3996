"""Data quality validation for instrument sets and price series."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from marketboard.errors import MalformedResponseError
from marketboard.models.instrument import Instrument


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]

    def raise_for_failures(self, what: str) -> None:
        """Raise ``MalformedResponseError`` if any check failed."""
        if not self.passed:
            msgs = "; ".join(c.message for c in self.failed_checks)
            raise MalformedResponseError(f"{what} failed validation: {msgs}")


def validate_instruments(instruments: list[Instrument]) -> ValidationResult:
    """Run quality checks on a fetched instrument set.

    Checks:
        1. Not empty
        2. Unique ids
        3. Finite numeric fields
        4. Non-negative price, volume and market cap
    """
    result = ValidationResult()

    # 1. Not empty
    if not instruments:
        result.checks.append(ValidationCheck("not_empty", False, "No instruments provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(instruments)} instruments"))

    # 2. Unique ids
    seen: set[str] = set()
    dupes: list[str] = []
    for inst in instruments:
        if inst.id in seen:
            dupes.append(inst.id)
        seen.add(inst.id)
    if dupes:
        result.checks.append(
            ValidationCheck("unique_ids", False, f"duplicate ids: {', '.join(dupes[:5])}")
        )
    else:
        result.checks.append(ValidationCheck("unique_ids", True))

    # 3. NaN/Inf
    bad = 0
    for inst in instruments:
        for val in _numeric_fields(inst):
            if val is not None and (math.isnan(val) or math.isinf(val)):
                bad += 1
    if bad:
        result.checks.append(ValidationCheck("finite_values", False, f"{bad} NaN/Inf values"))
    else:
        result.checks.append(ValidationCheck("finite_values", True))

    # 4. Sign — the 24h change is the only field allowed to be negative
    negative = sum(
        1 for inst in instruments
        for val in (inst.current_price, inst.total_volume, inst.market_cap)
        if val is not None and val < 0
    )
    if negative:
        result.checks.append(
            ValidationCheck("non_negative", False, f"{negative} negative price/volume/cap values")
        )
    else:
        result.checks.append(ValidationCheck("non_negative", True))

    return result


def validate_series(samples: list[tuple[float, float]]) -> ValidationResult:
    """Run quality checks on raw ``(timestamp_ms, price)`` samples.

    An empty series is valid; the upstream may have no history yet.

    Checks:
        1. Finite timestamps and prices
        2. Timestamp ordering (strictly ascending)
    """
    result = ValidationResult()

    bad = sum(
        1 for ts, price in samples
        if math.isnan(ts) or math.isinf(ts) or math.isnan(price) or math.isinf(price)
    )
    if bad:
        result.checks.append(ValidationCheck("finite_values", False, f"{bad} NaN/Inf samples"))
    else:
        result.checks.append(ValidationCheck("finite_values", True))

    out_of_order = 0
    for i in range(1, len(samples)):
        if samples[i][0] <= samples[i - 1][0]:
            out_of_order += 1
    if out_of_order:
        result.checks.append(
            ValidationCheck("timestamp_order", False, f"{out_of_order} out of order")
        )
    else:
        result.checks.append(ValidationCheck("timestamp_order", True))

    return result


def _numeric_fields(inst: Instrument) -> tuple[float | None, ...]:
    return (inst.current_price, inst.price_change_24h, inst.total_volume, inst.market_cap)
