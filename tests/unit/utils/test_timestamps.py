"""
Tests for ISO timestamp helpers.
"""
from datetime import datetime, timedelta, timezone

from writr.utils.timestamps import iso_date, now_iso, to_iso


class TestToIso:
    def test_millisecond_utc_with_z(self):
        moment = datetime(2024, 3, 1, 12, 5, 9, 123456, tzinfo=timezone.utc)
        assert to_iso(moment) == "2024-03-01T12:05:09.123Z"

    def test_converts_offsets_to_utc(self):
        moment = datetime(2024, 3, 1, 1, 0, tzinfo=timezone(timedelta(hours=2)))
        assert to_iso(moment) == "2024-02-29T23:00:00.000Z"

    def test_naive_taken_as_utc(self):
        assert to_iso(datetime(2024, 3, 1)) == "2024-03-01T00:00:00.000Z"


class TestHelpers:
    def test_now_iso_with_given_moment(self):
        moment = datetime(2024, 3, 1, tzinfo=timezone.utc)
        assert now_iso(moment) == "2024-03-01T00:00:00.000Z"

    def test_now_iso_format(self):
        value = now_iso()
        assert value.endswith("Z")
        assert len(value) == len("2024-03-01T00:00:00.000Z")

    def test_iso_date_uses_utc(self):
        moment = datetime(2024, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert iso_date(moment) == "2024-03-02"
