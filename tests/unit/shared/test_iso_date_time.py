from datetime import datetime, timedelta, timezone

import pytest

from skybooking.shared.domain import IsoDateTime


class TestIsoDateTime:
    def test_naive_value_is_treated_as_utc(self):
        dt = IsoDateTime(datetime(2025, 6, 1, 12, 0))
        assert dt.value.tzinfo == timezone.utc

    def test_from_string_accepts_z_suffix(self):
        dt = IsoDateTime.from_string("2025-06-01T12:00:00Z")
        assert dt.value == datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

    def test_from_string_rejects_garbage(self):
        with pytest.raises(ValueError):
            IsoDateTime.from_string("tomorrow")

    def test_whole_hours_until_truncates(self):
        """端数の時間は切り捨て（47時間59分 → 47）"""
        now = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
        departure = IsoDateTime(now + timedelta(hours=47, minutes=59))
        assert departure.whole_hours_until(now) == 47

    def test_whole_hours_until_is_negative_in_the_past(self):
        now = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
        departure = IsoDateTime(now - timedelta(minutes=30))
        assert departure.whole_hours_until(now) < 0

    def test_date_string(self):
        assert IsoDateTime.from_string("2025-06-01T23:30:00+00:00").date_string() == "2025-06-01"
