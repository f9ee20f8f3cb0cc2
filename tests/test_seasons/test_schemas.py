"""Tests for seasonal challenge schemas."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from nuvaclub.seasons import ChallengeState, ChallengeStatusResult
from nuvaclub.seasons.windows import create_window


class TestChallengeStatusResult:
    """Tests for the state-dependent fields of a status result."""

    def test_countdown_without_window(self):
        result = ChallengeStatusResult(
            status=ChallengeState.COUNTDOWN,
            next_challenge=create_window(2025, 3),
            days_left=1,
            hours_left=0,
            minutes_left=0,
            total_milliseconds_left=86_400_000,
        )
        assert not result.is_active

    def test_active_requires_window(self):
        """Test an active result must name its window."""
        with pytest.raises(ValidationError, match="current_challenge"):
            ChallengeStatusResult(
                status=ChallengeState.ACTIVE,
                next_challenge=create_window(2025, 3),
                days_left=1,
                hours_left=0,
                minutes_left=0,
                total_milliseconds_left=86_400_000,
                progress_percentage=10,
            )

    def test_countdown_rejects_progress(self):
        """Test a countdown result cannot carry progress."""
        with pytest.raises(ValidationError, match="progress_percentage"):
            ChallengeStatusResult(
                status=ChallengeState.COUNTDOWN,
                next_challenge=create_window(2025, 3),
                days_left=1,
                hours_left=0,
                minutes_left=0,
                total_milliseconds_left=86_400_000,
                progress_percentage=10,
            )

    def test_window_contains(self):
        window = create_window(2025, 1)
        assert window.contains(datetime(2025, 1, 1))
        assert not window.contains(datetime(2025, 2, 15))
