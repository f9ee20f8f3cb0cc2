"""Derive concrete challenge windows from the static calendar."""

import logging
from datetime import MAXYEAR, datetime, timedelta, tzinfo
from typing import Optional

from .calendar import CHALLENGE_DURATION_DAYS, CHALLENGE_START_MONTHS, get_challenge_theme
from .schemas import ChallengeWindow

logger = logging.getLogger(__name__)


class CalendarOverlapError(ValueError):
    """Raised when consecutive challenge windows overlap."""

    def __init__(self, overlaps: list[tuple[ChallengeWindow, ChallengeWindow]]):
        self.overlaps = overlaps
        pairs = ", ".join(f"{a.key} ends after {b.key} starts" for a, b in overlaps)
        super().__init__(f"Overlapping challenge windows: {pairs}")


def create_window(year: int, month: int, tz: Optional[tzinfo] = None) -> ChallengeWindow:
    """Build the window for one (year, month) key.

    The window opens at midnight on the first of the month and closes
    exactly ``CHALLENGE_DURATION_DAYS`` calendar days later.
    """
    start = datetime(year, month, 1, tzinfo=tz)
    end = start + timedelta(days=CHALLENGE_DURATION_DAYS)
    return ChallengeWindow(
        start_date=start,
        end_date=end,
        year=year,
        month=month,
        theme=get_challenge_theme(month),
    )


def generate_windows(
    from_year: int, to_year: int, tz: Optional[tzinfo] = None
) -> list[ChallengeWindow]:
    """Generate every window for the inclusive year range, sorted by start.

    Args:
        from_year: First year to include
        to_year: Last year to include
        tz: Zone the windows open in; naive local wall-clock times if None

    Returns:
        Windows sorted ascending by start date (empty if from_year > to_year).
        Windows whose end falls past the last representable date are left out.
    """
    windows = []
    for year in range(from_year, to_year + 1):
        for month in CHALLENGE_START_MONTHS:
            try:
                windows.append(create_window(year, month, tz))
            except OverflowError:
                logger.debug("Skipping %04d-%02d: window ends past year %d", year, month, MAXYEAR)
    return sorted(windows, key=lambda w: w.start_date)


def get_year_challenges(year: int, tz: Optional[tzinfo] = None) -> list[ChallengeWindow]:
    """Get the challenges of a single year in calendar order."""
    return [create_window(year, month, tz) for month in CHALLENGE_START_MONTHS]


def find_overlaps(year: int) -> list[tuple[ChallengeWindow, ChallengeWindow]]:
    """Find consecutive windows where the earlier one ends after the later starts.

    Checks every consecutive pair within ``year`` plus the pair crossing into
    the following January.
    """
    windows = generate_windows(year, year + 1)[: len(CHALLENGE_START_MONTHS) + 1]
    return [
        (earlier, later)
        for earlier, later in zip(windows, windows[1:])
        if earlier.end_date > later.start_date
    ]


def validate_calendar(year: int) -> None:
    """Raise CalendarOverlapError if any windows of ``year`` overlap."""
    overlaps = find_overlaps(year)
    if overlaps:
        raise CalendarOverlapError(overlaps)
