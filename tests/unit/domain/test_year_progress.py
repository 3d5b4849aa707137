"""Unit tests for the year-progress clock."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from domain.services.clock import Clock
from domain.services.year_progress import (
    current_year,
    format_percent,
    year_progress,
    year_window,
)

UTC = timezone.utc


class TestYearProgress:
    def test_start_of_year_is_zero(self):
        result = year_progress(datetime(2026, 1, 1, tzinfo=UTC), 2026)

        assert result.percent == 0
        assert (result.days, result.hours, result.minutes, result.seconds) == (0, 0, 0, 0)
        assert result.display == "0.00000"

    def test_last_millisecond_is_exactly_100(self):
        _, end = year_window(2026)

        result = year_progress(end, 2026)

        assert result.percent == 100.0
        assert result.display == "100.000"

    def test_before_year_clamps_to_zero(self):
        result = year_progress(datetime(2025, 6, 1, tzinfo=UTC), 2026)

        assert result.percent == 0
        assert result.days == 0

    def test_after_year_clamps_to_100(self):
        result = year_progress(datetime(2027, 2, 1, tzinfo=UTC), 2026)

        assert result.percent == 100.0
        assert result.days == 364

    def test_decomposes_elapsed_time(self):
        now = datetime(2026, 1, 3, 4, 5, 6, 789000, tzinfo=UTC)

        result = year_progress(now, 2026)

        assert (result.days, result.hours, result.minutes, result.seconds) == (2, 4, 5, 6)

    def test_midyear_is_roughly_half(self):
        result = year_progress(datetime(2026, 7, 2, 12, tzinfo=UTC), 2026)

        assert 49.5 < result.percent < 50.5
        assert result.days == 182

    def test_is_monotonic(self):
        start = datetime(2025, 12, 30, tzinfo=UTC)
        samples = [
            year_progress(start + timedelta(days=step * 3), 2026).percent
            for step in range(130)
        ]

        assert samples == sorted(samples)
        assert samples[0] == 0
        assert samples[-1] == 100.0

    def test_naive_now_is_treated_as_utc(self):
        naive = datetime(2026, 5, 5, 5, 5)
        aware = naive.replace(tzinfo=UTC)

        assert year_progress(naive, 2026) == year_progress(aware, 2026)

    def test_leap_year(self):
        result = year_progress(datetime(2028, 12, 31, tzinfo=UTC), 2028)

        assert result.days == 365

    def test_year_boundary_follows_timezone(self):
        tz = ZoneInfo("Asia/Tokyo")
        # 2026-01-01 00:00 in Tokyo is 2025-12-31 15:00 UTC
        now = datetime(2025, 12, 31, 16, tzinfo=UTC)

        result = year_progress(now, 2026, tz)

        assert result.hours == 1
        assert result.days == 0


class TestCurrentYear:
    def test_utc(self):
        assert current_year(datetime(2026, 12, 31, 23, 59, tzinfo=UTC)) == 2026

    def test_ahead_of_utc(self):
        now = datetime(2026, 12, 31, 20, tzinfo=UTC)

        assert current_year(now, ZoneInfo("Asia/Tokyo")) == 2027

    def test_behind_utc(self):
        now = datetime(2027, 1, 1, 2, tzinfo=UTC)

        assert current_year(now, ZoneInfo("America/New_York")) == 2026


class TestFormatPercent:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0.0, "0.00000"),
            (45.12345678, "45.1235"),
            (7.5, "7.50000"),
            (100.0, "100.000"),
        ],
    )
    def test_six_significant_digits(self, value: float, expected: str):
        assert format_percent(value) == expected


class TestClock:
    def test_uses_injected_now(self):
        fixed = datetime(2026, 3, 1, tzinfo=UTC)
        clock = Clock(now=lambda: fixed)

        assert clock.now() == fixed
        assert clock.current_year() == 2026
        assert clock.year_progress().year == 2026

    def test_explicit_year(self):
        clock = Clock(now=lambda: datetime(2026, 3, 1, tzinfo=UTC))

        assert clock.year_progress(2025).percent == 100.0
        assert clock.year_progress(2030).percent == 0


class TestCalendarEdges:
    def test_first_year_east_of_utc(self):
        clock = Clock(tz=ZoneInfo("Asia/Tokyo"), now=lambda: datetime(2026, 3, 1, tzinfo=UTC))

        result = clock.year_progress(1)

        assert result.percent == 100.0
        assert result.display == "100.000"

    def test_last_year_west_of_utc(self):
        clock = Clock(
            tz=ZoneInfo("America/New_York"), now=lambda: datetime(2026, 3, 1, tzinfo=UTC)
        )

        result = clock.year_progress(9999)

        assert result.percent == 0
        assert result.days == 0

    def test_last_year_east_of_utc(self):
        clock = Clock(tz=ZoneInfo("Asia/Tokyo"), now=lambda: datetime(2026, 3, 1, tzinfo=UTC))

        assert clock.year_progress(9999).percent == 0

    def test_span_ignores_daylight_saving(self):
        tz = ZoneInfo("America/New_York")
        _, end = year_window(2026, tz)

        result = year_progress(end, 2026, tz)

        assert (result.days, result.hours, result.minutes, result.seconds) == (364, 23, 59, 59)

    def test_elapsed_across_spring_forward(self):
        tz = ZoneInfo("America/New_York")
        # 2026-07-01 00:00 EDT; one hour of wall clock was skipped in March
        now = datetime(2026, 7, 1, 4, tzinfo=UTC)

        result = year_progress(now, 2026, tz)

        assert (result.days, result.hours) == (180, 23)

    def test_aware_now_in_other_zone(self):
        tz = ZoneInfo("Asia/Tokyo")
        now = datetime(2026, 1, 1, 1, tzinfo=tz)

        assert year_progress(now, 2026, tz).hours == 1
