"""Tests for window generation."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from nuvaclub.seasons import (
    CalendarOverlapError,
    find_overlaps,
    generate_windows,
    get_year_challenges,
    validate_calendar,
)
from nuvaclub.seasons import windows as windows_module
from nuvaclub.seasons.windows import create_window


class TestCreateWindow:
    """Tests for single window construction."""

    def test_starts_at_local_midnight(self):
        """Test the window opens at midnight on the first."""
        window = create_window(2025, 3)
        assert window.start_date == datetime(2025, 3, 1, 0, 0, 0)

    def test_ends_45_days_later(self):
        """Test the end is 45 calendar days after the start."""
        window = create_window(2025, 3)
        assert window.end_date == datetime(2025, 4, 15)
        assert window.end_date - window.start_date == timedelta(days=45)

    def test_november_window_ends_in_december(self):
        """Test the last window of the year stays within the year."""
        window = create_window(2025, 11)
        assert window.end_date == datetime(2025, 12, 16)

    def test_key_and_theme(self):
        """Test the window key and theme match the generating month."""
        window = create_window(2026, 7)
        assert window.key == "2026-07"
        assert window.theme.month == 7
        assert window.year == 2026

    def test_timezone_aware(self):
        """Test windows open at midnight in the supplied zone."""
        tz = timezone(timedelta(hours=8))
        window = create_window(2025, 1, tz)
        assert window.start_date.tzinfo is tz
        assert window.start_date.hour == 0

    def test_windows_are_immutable(self):
        """Test windows cannot be modified after construction."""
        window = create_window(2025, 1)
        with pytest.raises(ValidationError):
            window.year = 2030


class TestGenerateWindows:
    """Tests for generate_windows."""

    def test_single_year(self):
        """Test one year produces seven windows."""
        windows = generate_windows(2025, 2025)
        assert len(windows) == 7
        assert [w.month for w in windows] == [1, 3, 4, 5, 7, 9, 11]

    def test_three_years_sorted(self):
        """Test a range is sorted ascending by start."""
        windows = generate_windows(2024, 2026)
        assert len(windows) == 21
        starts = [w.start_date for w in windows]
        assert starts == sorted(starts)
        assert windows[0].key == "2024-01"
        assert windows[-1].key == "2026-11"

    def test_empty_range(self):
        """Test an inverted range yields nothing."""
        assert generate_windows(2026, 2025) == []

    def test_any_year(self):
        """Test years far from today are accepted."""
        windows = generate_windows(1999, 1999)
        assert windows[0].start_date == datetime(1999, 1, 1)

    def test_regenerated_equal(self):
        """Test generation is deterministic."""
        assert generate_windows(2025, 2026) == generate_windows(2025, 2026)

    def test_last_year_fits(self):
        """Test every window of year 9999 ends within range."""
        windows = generate_windows(9999, 9999)
        assert windows[-1].end_date == datetime(9999, 12, 16)

    def test_skips_window_ending_past_last_year(self, monkeypatch):
        """Test a window whose end is not representable is left out."""
        monkeypatch.setattr(windows_module, "CHALLENGE_DURATION_DAYS", 61)
        windows = generate_windows(9999, 9999)
        assert [w.month for w in windows] == [1, 3, 4, 5, 7, 9]


class TestGetYearChallenges:
    """Tests for get_year_challenges."""

    def test_calendar_order(self):
        windows = get_year_challenges(2025)
        assert [w.key for w in windows] == [
            "2025-01",
            "2025-03",
            "2025-04",
            "2025-05",
            "2025-07",
            "2025-09",
            "2025-11",
        ]


class TestOverlaps:
    """Tests for the non-overlap check between consecutive windows."""

    def test_known_spring_overlaps(self):
        """Test March overlaps April and April overlaps May."""
        overlaps = find_overlaps(2025)
        assert [(a.key, b.key) for a, b in overlaps] == [
            ("2025-03", "2025-04"),
            ("2025-04", "2025-05"),
        ]

    def test_other_pairs_disjoint(self):
        """Test every other consecutive pair ends before the next starts."""
        windows = generate_windows(2025, 2026)[:8]
        overlapping = {(a.key, b.key) for a, b in find_overlaps(2025)}
        for earlier, later in zip(windows, windows[1:]):
            if (earlier.key, later.key) not in overlapping:
                assert earlier.end_date <= later.start_date

    def test_year_boundary_disjoint(self):
        """Test the November window ends before next January starts."""
        november = create_window(2025, 11)
        january = create_window(2026, 1)
        assert november.end_date <= january.start_date
        assert all(b.key != "2026-01" for _, b in find_overlaps(2025))

    def test_validate_calendar_reports_pairs(self):
        """Test validation raises with the offending pairs."""
        with pytest.raises(CalendarOverlapError, match="2025-03 ends after 2025-04 starts") as exc_info:
            validate_calendar(2025)
        assert len(exc_info.value.overlaps) == 2
