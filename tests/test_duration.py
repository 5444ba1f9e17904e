"""Tests for duration formatting and minute arithmetic."""

from datetime import datetime, timedelta

import pytest

from parkmeter.utils.duration import format_duration, minutes_since, minutes_until, round_half_up


class TestFormatDuration:
    """Test human-readable durations."""

    @pytest.mark.parametrize(
        "minutes, expected",
        [
            (0, "0 minutos"),
            (1, "1 minutos"),
            (45, "45 minutos"),
            (59, "59 minutos"),
            (60, "1 hora"),
            (90, "1 hora 30 min"),
            (120, "2 horas"),
            (121, "2 horas 1 min"),
            (600, "10 horas"),
        ],
    )
    def test_format(self, minutes: int, expected: str):
        assert format_duration(minutes) == expected

    def test_minutes_never_pluralized_after_hours(self):
        """Only the hour part changes with the count."""
        assert format_duration(61).endswith("1 min")
        assert format_duration(62).endswith("2 min")


class TestMinuteArithmetic:
    """Test rounding of remaining and elapsed minutes."""

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(0.49) == 0
        assert round_half_up(-0.5) == 0
        assert round_half_up(-2.5) == -2
        assert round_half_up(-2.51) == -3

    def test_minutes_until_future_end(self):
        now = datetime(2026, 10, 19, 12, 0, 0)
        assert minutes_until(now + timedelta(minutes=30), now) == 30

    def test_minutes_until_rounds_to_nearest_minute(self):
        now = datetime(2026, 10, 19, 12, 0, 0)
        assert minutes_until(now + timedelta(seconds=29), now) == 0
        assert minutes_until(now + timedelta(seconds=31), now) == 1
        assert minutes_until(now + timedelta(seconds=30), now) == 1

    def test_minutes_until_elapsed_end_is_negative(self):
        now = datetime(2026, 10, 19, 12, 0, 0)
        assert minutes_until(now - timedelta(minutes=10), now) == -10

    def test_minutes_since(self):
        now = datetime(2026, 10, 19, 12, 0, 0)
        assert minutes_since(now - timedelta(minutes=15), now) == 15
