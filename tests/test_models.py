"""Tests for data models."""

from datetime import datetime, timezone

import pytest

from marketboard.models.instrument import Instrument
from marketboard.models.series import Period, SeriesKey, SeriesPoint, SeriesSet
from marketboard.models.sort import DEFAULT_SORT, SortDirection, SortKey, SortSpec
from marketboard.models.status import Failed, Idle, Loading, Ready


class TestInstrument:
    def test_optional_fields_default_none(self):
        inst = Instrument(id="bitcoin", symbol="btc", name="Bitcoin")
        assert inst.current_price is None
        assert inst.market_cap_rank is None

    def test_frozen(self):
        inst = Instrument(id="bitcoin", symbol="btc", name="Bitcoin", current_price=1.0)
        with pytest.raises(AttributeError):
            inst.current_price = 2.0  # type: ignore[misc]

    def test_is_up(self):
        assert Instrument(id="a", symbol="a", name="A", price_change_24h=0.1).is_up
        assert not Instrument(id="a", symbol="a", name="A", price_change_24h=0.0).is_up
        assert not Instrument(id="a", symbol="a", name="A").is_up


class TestPeriod:
    def test_days(self):
        assert [p.days for p in Period] == [1, 7, 30, 90]

    def test_from_value(self):
        assert Period("30d") is Period.D30


class TestSeriesSet:
    def _series(self):
        points = tuple(
            SeriesPoint(
                timestamp=datetime(2024, 1, d, tzinfo=timezone.utc),
                price=100.0 + d,
                label=f"{d:02d}/01/2024",
            )
            for d in (1, 2, 3)
        )
        return SeriesSet(instrument_id="bitcoin", period=Period.D7, points=points)

    def test_key_and_len(self):
        series = self._series()
        assert series.key == SeriesKey("bitcoin", Period.D7)
        assert len(series) == 3

    def test_empty_default(self):
        assert len(SeriesSet(instrument_id="bitcoin", period=Period.H24)) == 0

    def test_to_frame(self):
        df = self._series().to_frame()
        assert list(df.columns) == ["timestamp", "label", "price"]
        assert df["price"].tolist() == [101.0, 102.0, 103.0]
        assert df["label"].iloc[0] == "01/01/2024"


class TestSortSpec:
    def test_default(self):
        assert DEFAULT_SORT == SortSpec(SortKey.MARKET_CAP, SortDirection.DESC)

    def test_new_key_starts_ascending(self):
        assert DEFAULT_SORT.toggled(SortKey.PRICE) == SortSpec(SortKey.PRICE, SortDirection.ASC)

    def test_same_key_toggles(self):
        spec = SortSpec(SortKey.PRICE, SortDirection.ASC)
        assert spec.toggled(SortKey.PRICE).direction == SortDirection.DESC
        assert spec.toggled(SortKey.PRICE).toggled(SortKey.PRICE).direction == SortDirection.ASC

    def test_active_descending_key_flips_to_ascending(self):
        assert DEFAULT_SORT.toggled(SortKey.MARKET_CAP).direction == SortDirection.ASC

    def test_attribute_mapping(self):
        inst = Instrument(id="a", symbol="a", name="A", total_volume=5.0)
        assert getattr(inst, SortKey.VOLUME.attribute) == 5.0


class TestFetchStatus:
    def test_tags(self):
        assert Idle().state == "idle"
        assert Loading().state == "loading"
        assert Ready(payload=()).state == "ready"
        assert Failed(reason="boom").state == "failed"

    def test_equality(self):
        assert Failed("boom") == Failed("boom")
        assert Ready((1,)) != Ready((2,))
