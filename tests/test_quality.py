"""Tests for payload quality validation."""

import math

import pytest

from marketboard.errors import MalformedResponseError, MarketDataErrorCode
from marketboard.models.instrument import Instrument
from marketboard.quality import validate_instruments, validate_series


class TestValidateInstruments:
    def test_valid_set_passes(self, sample_instruments):
        assert validate_instruments(sample_instruments).passed

    def test_empty_fails(self):
        result = validate_instruments([])
        assert not result.passed
        assert result.failed_checks[0].name == "not_empty"

    def test_duplicate_ids(self, sample_instruments):
        result = validate_instruments(sample_instruments + [sample_instruments[0]])
        assert [c.name for c in result.failed_checks] == ["unique_ids"]

    def test_nan_values(self):
        inst = Instrument(id="a", symbol="a", name="A", current_price=math.nan)
        assert [c.name for c in validate_instruments([inst]).failed_checks] == ["finite_values"]

    def test_negative_price(self):
        inst = Instrument(id="a", symbol="a", name="A", current_price=-1.0)
        assert [c.name for c in validate_instruments([inst]).failed_checks] == ["non_negative"]

    def test_negative_change_is_fine(self):
        inst = Instrument(id="a", symbol="a", name="A", price_change_24h=-12.0)
        assert validate_instruments([inst]).passed

    def test_missing_numbers_are_fine(self):
        assert validate_instruments([Instrument(id="a", symbol="a", name="A")]).passed


class TestValidateSeries:
    def test_empty_passes(self):
        assert validate_series([]).passed

    def test_ascending_passes(self):
        assert validate_series([(1.0, 10.0), (2.0, 11.0), (3.0, 9.0)]).passed

    def test_out_of_order(self):
        result = validate_series([(2.0, 10.0), (1.0, 11.0)])
        assert [c.name for c in result.failed_checks] == ["timestamp_order"]

    def test_inf_price(self):
        result = validate_series([(1.0, math.inf)])
        assert [c.name for c in result.failed_checks] == ["finite_values"]


class TestRaiseForFailures:
    def test_raises_malformed(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            validate_series([(2.0, 1.0), (1.0, 1.0)]).raise_for_failures("Series")
        assert exc_info.value.code == MarketDataErrorCode.MALFORMED_RESPONSE
        assert "out of order" in str(exc_info.value)

    def test_passes_silently(self):
        validate_series([(1.0, 1.0)]).raise_for_failures("Series")
