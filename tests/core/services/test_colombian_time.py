"""Tests for America/Bogota date helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from pae_inventory.core.services import (
    COLOMBIA_TZ,
    colombian_date,
    colombian_to_utc,
    current_colombian_date,
    to_date_only,
    to_utc_iso,
)


class TestColombianDate:
    def test_fixed_offset(self):
        assert COLOMBIA_TZ.utcoffset(None) == timedelta(hours=-5)

    def test_late_utc_evening_is_same_day(self):
        assert colombian_date(datetime(2025, 3, 1, 23, 0, tzinfo=timezone.utc)) == date(2025, 3, 1)

    def test_early_utc_morning_is_previous_day(self):
        assert colombian_date(datetime(2025, 3, 2, 4, 59, tzinfo=timezone.utc)) == date(2025, 3, 1)
        assert colombian_date(datetime(2025, 3, 2, 5, 0, tzinfo=timezone.utc)) == date(2025, 3, 2)

    def test_naive_is_utc(self):
        assert colombian_date(datetime(2025, 3, 2, 3, 0)) == date(2025, 3, 1)

    def test_current_date_matches_now(self):
        assert current_colombian_date() in {
            (datetime.now(timezone.utc) + timedelta(hours=-5, minutes=m)).date()
            for m in (-1, 0, 1)
        }


class TestColombianToUtc:
    def test_datetime_with_seconds(self):
        assert colombian_to_utc("2025-03-01T20:30:15") == datetime(
            2025, 3, 2, 1, 30, 15, tzinfo=timezone.utc
        )

    def test_datetime_without_seconds(self):
        assert colombian_to_utc("2025-03-01T08:00") == datetime(
            2025, 3, 1, 13, 0, tzinfo=timezone.utc
        )

    def test_date_only_takes_current_colombian_time(self):
        now = datetime(2025, 6, 10, 14, 45, 30, tzinfo=COLOMBIA_TZ)
        assert colombian_to_utc("2025-03-01", now=now) == datetime(
            2025, 3, 1, 19, 45, 30, tzinfo=timezone.utc
        )

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            colombian_to_utc("ayer")

    def test_utc_iso_string(self):
        assert to_utc_iso("2025-03-01T08:00") == "2025-03-01T13:00:00.000Z"

    def test_utc_iso_defaults_to_now(self):
        assert to_utc_iso(None).endswith("Z")


class TestToDateOnly:
    def test_date_only_unchanged(self):
        assert to_date_only("2025-09-30") == "2025-09-30"

    def test_utc_datetime_converted_to_colombian_day(self):
        assert to_date_only("2025-10-01T03:00:00Z") == "2025-09-30"

    def test_unparseable_keeps_date_part(self):
        assert to_date_only("2025-13-45Tgarbage") == "2025-13-45"

    def test_empty(self):
        assert to_date_only("") == ""
        assert to_date_only(None) == ""
