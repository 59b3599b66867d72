from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from datekeys import date_key_for, resolve_tz, yesterday_of
from errors import ConfigurationError

BAKU = ZoneInfo("Asia/Baku")


class TestDateKeyFor(unittest.TestCase):
    def test_title_and_iso_date_in_configured_zone(self) -> None:
        key = date_key_for(datetime(2026, 2, 28, 9, 0, tzinfo=BAKU), BAKU)
        self.assertEqual(key.iso_date, "2026-02-28")
        self.assertEqual(key.title, "2026-Feb-28 Sat")

    def test_utc_instant_resolves_to_local_calendar_day(self) -> None:
        # 21:30 UTC on the 27th is already 01:30 on the 28th in Baku (UTC+4).
        key = date_key_for(datetime(2026, 2, 27, 21, 30, tzinfo=timezone.utc), BAKU)
        self.assertEqual(key.iso_date, "2026-02-28")
        self.assertEqual(key.title, "2026-Feb-28 Sat")

    def test_every_instant_of_a_local_day_shares_one_key(self) -> None:
        start = datetime(2026, 2, 28, 0, 0, tzinfo=BAKU)
        keys = {date_key_for(start + timedelta(minutes=m), BAKU) for m in range(0, 24 * 60, 17)}
        self.assertEqual(len(keys), 1)

    def test_iso_dates_increase_with_calendar_days(self) -> None:
        start = datetime(2025, 12, 20, 12, 0, tzinfo=BAKU)
        dates = [date_key_for(start + timedelta(days=n), BAKU).iso_date for n in range(400)]
        self.assertEqual(dates, sorted(set(dates)))

    def test_single_digit_day_is_zero_padded(self) -> None:
        key = date_key_for(datetime(2026, 3, 2, 8, 0, tzinfo=BAKU), BAKU)
        self.assertEqual(key.title, "2026-Mar-02 Mon")

    def test_naive_timestamp_rejected(self) -> None:
        with self.assertRaises(ValueError):
            date_key_for(datetime(2026, 2, 28, 9, 0), BAKU)


class TestYesterdayOf(unittest.TestCase):
    def test_subtracts_exactly_one_day_of_seconds(self) -> None:
        now = datetime(2026, 2, 28, 9, 0, tzinfo=BAKU)
        prev = yesterday_of(now)
        self.assertEqual((now - prev).total_seconds(), 86400)
        self.assertEqual(date_key_for(prev, BAKU).title, "2026-Feb-27 Fri")

    def test_dst_start_can_skip_a_calendar_day(self) -> None:
        # Known approximation: 00:30 EDT on Mar 9 minus 86400s is 23:30 EST on Mar 7.
        ny = ZoneInfo("America/New_York")
        now = datetime(2026, 3, 9, 0, 30, tzinfo=ny)
        self.assertEqual(date_key_for(yesterday_of(now), ny).iso_date, "2026-03-07")


class TestResolveTz(unittest.TestCase):
    def test_valid_identifiers(self) -> None:
        self.assertEqual(resolve_tz("UTC"), timezone.utc)
        self.assertEqual(resolve_tz("+04:00"), timezone(timedelta(hours=4)))
        self.assertEqual(resolve_tz("-0530"), timezone(-timedelta(hours=5, minutes=30)))
        self.assertEqual(resolve_tz("Asia/Baku"), BAKU)

    def test_blank_falls_back_to_default_zone(self) -> None:
        self.assertEqual(resolve_tz(None), BAKU)
        self.assertEqual(resolve_tz("  "), BAKU)

    def test_invalid_identifiers_raise(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_tz("No/Such_Zone")
        with self.assertRaises(ConfigurationError):
            resolve_tz("+25:00")


if __name__ == "__main__":
    unittest.main(verbosity=2)
