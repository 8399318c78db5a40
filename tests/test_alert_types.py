"""
Tests for weather alert status text.

Tests cover:
- Phases: before start, while active, after expiry
- Boundary value analysis: now exactly at start and at end
- Same-day times versus times on another day
- Time zone handling
"""

from zoneinfo import ZoneInfo

import pytest
from features.weather.models.alert_types import AlertPhase, WeatherAlert

from conftest import BASE_TIME, HOUR, UTC

NEXT_MONDAY_0615 = 1792390500  # Monday 2026-10-19 06:15 UTC
TODAY_1430 = 1792333800        # Sunday 2026-10-18 14:30 UTC


class TestWeatherAlert:
    """Test suite for WeatherAlert.status."""

    @pytest.fixture
    def upcoming(self):
        return WeatherAlert(name="Wind advisory", start=BASE_TIME + HOUR, end=TODAY_1430)

    # ==================== Phases ====================

    def test_phase_before(self, upcoming):
        assert upcoming.phase(BASE_TIME) is AlertPhase.BEFORE

    def test_phase_during(self, upcoming):
        assert upcoming.phase(BASE_TIME + 2 * HOUR) is AlertPhase.DURING

    def test_phase_after(self, upcoming):
        assert upcoming.phase(TODAY_1430 + 1) is AlertPhase.AFTER

    def test_phase_at_start_is_during(self, upcoming):
        assert upcoming.phase(BASE_TIME + HOUR) is AlertPhase.DURING

    def test_phase_at_end_is_after(self, upcoming):
        assert upcoming.phase(TODAY_1430) is AlertPhase.AFTER

    # ==================== Status Text ====================

    def test_starts_later_today(self, upcoming):
        assert upcoming.status(BASE_TIME, UTC) == "Starts at 10:00"

    def test_starts_another_day(self):
        alert = WeatherAlert(name="Frost", start=NEXT_MONDAY_0615, end=NEXT_MONDAY_0615 + 6 * HOUR)
        assert alert.status(BASE_TIME, UTC) == "Starts at Mon 06:15"

    def test_ends_later_today(self, upcoming):
        assert upcoming.status(BASE_TIME + 2 * HOUR, UTC) == "Ends at 14:30"

    def test_ends_another_day(self):
        alert = WeatherAlert(name="Storm", start=BASE_TIME - HOUR, end=NEXT_MONDAY_0615)
        assert alert.status(BASE_TIME, UTC) == "Ends at Mon 06:15"

    def test_at_start_reports_end(self, upcoming):
        assert upcoming.status(BASE_TIME + HOUR, UTC) == "Ends at 14:30"

    def test_expired_alert_is_blank(self, upcoming):
        assert upcoming.status(TODAY_1430 + HOUR, UTC) == ""

    def test_at_end_is_blank(self, upcoming):
        assert upcoming.status(TODAY_1430, UTC) == ""

    # ==================== Time Zones ====================

    def test_time_zone_shifts_clock_time(self, upcoming):
        # Amsterdam is UTC+2 in October
        assert upcoming.status(BASE_TIME, ZoneInfo("Europe/Amsterdam")) == "Starts at 12:00"

    def test_time_zone_changes_calendar_day(self):
        # 23:30 UTC Sunday is already Monday in Tokyo, 06:15 UTC Monday is 15:15 there
        now = BASE_TIME + 14 * HOUR + 30 * 60
        alert = WeatherAlert(name="Heavy rain", start=NEXT_MONDAY_0615, end=NEXT_MONDAY_0615 + HOUR)
        assert alert.status(now, UTC) == "Starts at Mon 06:15"
        assert alert.status(now, ZoneInfo("Asia/Tokyo")) == "Starts at 15:15"
