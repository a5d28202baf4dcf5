"""
Unit tests for timestamp parsing and aggregate snapshot files.
"""

import json
import pytest
from datetime import datetime, timezone

from encore_export.core.models import TourAggregate
from encore_export.core.utils import (
    dump_aggregate,
    format_timestamp,
    load_aggregate,
    parse_optional_timestamp,
    parse_timestamp,
)

from conftest import make_aggregate


class TestParseTimestamp:
    """Tests for parse_timestamp()."""

    def test_when_iso_with_z_then_utc(self):
        dt = parse_timestamp("2025-06-18T16:30:00Z")

        assert dt == datetime(2025, 6, 18, 16, 30, tzinfo=timezone.utc)

    def test_when_naive_iso_then_assumed_utc(self):
        dt = parse_timestamp("2025-06-18T16:30:00")

        assert dt.tzinfo is not None
        assert dt.hour == 16

    def test_when_epoch_seconds_then_parsed(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_when_firestore_map_then_parsed(self):
        dt = parse_timestamp({"seconds": 60, "nanoseconds": 500_000_000})

        assert dt.minute == 1
        assert dt.microsecond == 500_000

    @pytest.mark.parametrize("value", ["", None, True, [], "yesterday"])
    def test_when_not_a_timestamp_then_raises(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)

    def test_when_optional_blank_then_none(self):
        assert parse_optional_timestamp(None) is None
        assert parse_optional_timestamp("") is None

    def test_format_uses_z_suffix(self):
        assert format_timestamp(datetime(2025, 1, 2, 3, 4, tzinfo=timezone.utc)) == "2025-01-02T03:04:00Z"
        assert format_timestamp(None) is None


class TestAggregateFiles:
    """Tests for load_aggregate() / dump_aggregate()."""

    def test_when_dumped_and_loaded_then_equal(self, tmp_path):
        agg = make_aggregate()
        path = tmp_path / "snapshots" / "tour-1.json"

        dump_aggregate(agg, path)
        loaded = load_aggregate(path)

        assert loaded == agg
        assert loaded.guest_lists["show-2"] == ()

    def test_when_invalid_json_then_value_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_aggregate(path)

    def test_when_tour_missing_then_value_error(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"shows": []}), encoding="utf-8")

        with pytest.raises(ValueError, match="Malformed"):
            load_aggregate(path)

    def test_when_optional_collections_absent_then_empty(self):
        data = {"tour": make_aggregate().tour.to_dict()}

        agg = TourAggregate.from_dict(data)

        assert agg.shows == ()
        assert agg.guest_lists == {}
