"""Resolve the seasonal challenge status for a given instant.

The status is recomputed from scratch on every call: windows for the year
before, of, and after ``now`` are generated, searched for the one containing
``now``, and the remaining time and progress are derived from it. Nothing is
cached, so the result for a fixed ``now`` is always identical.
"""

import logging
from datetime import MAXYEAR, MINYEAR, datetime, timedelta, timezone
from typing import Optional

from .schemas import ChallengeState, ChallengeStatusResult, ChallengeWindow, TimeLeft
from .windows import generate_windows

logger = logging.getLogger(__name__)

# Extra years tried past the default horizon before giving up on a next window.
MAX_HORIZON_EXTENSION = 10

_ONE_MS = timedelta(milliseconds=1)


class NoUpcomingChallengeError(LookupError):
    """Raised when no future challenge window is configured."""

    pass


def _elapsed_ms(earlier: datetime, later: datetime) -> int:
    """Milliseconds from ``earlier`` to ``later``.

    Naive values are treated as wall-clock times; aware values are compared as
    absolute instants.
    """
    if later.tzinfo is not None:
        earlier = earlier.astimezone(timezone.utc)
        later = later.astimezone(timezone.utc)
    return (later - earlier) // _ONE_MS


def decompose_remaining(milliseconds: int) -> TimeLeft:
    """Break a duration into days, hours and minutes, truncating seconds.

    Example:
        >>> decompose_remaining(90061000)
        TimeLeft(days=1, hours=1, minutes=1)
    """
    total_minutes = milliseconds // 60_000
    total_hours = total_minutes // 60
    return TimeLeft(
        days=total_hours // 24,
        hours=total_hours % 24,
        minutes=total_minutes % 60,
    )


def _progress_percentage(window: ChallengeWindow, now: datetime) -> int:
    """Elapsed share of the window as a whole percentage, rounding halves up."""
    total = _elapsed_ms(window.start_date, window.end_date)
    elapsed = _elapsed_ms(window.start_date, now)
    percentage = (200 * elapsed + total) // (2 * total)
    return max(0, min(100, percentage))


def _find_active(windows: list[ChallengeWindow], now: datetime) -> Optional[ChallengeWindow]:
    return next((w for w in windows if w.contains(now)), None)


def _find_next(
    windows: list[ChallengeWindow],
    after: datetime,
    from_year: int,
    to_year: int,
) -> ChallengeWindow:
    """Earliest window starting strictly after ``after``, widening the horizon if needed."""
    extension = 0
    while True:
        upcoming = next((w for w in windows if w.start_date > after), None)
        if upcoming is not None:
            return upcoming
        if extension >= MAX_HORIZON_EXTENSION or to_year >= MAXYEAR:
            raise NoUpcomingChallengeError(
                f"No challenge window starts after {after.isoformat()} "
                f"within {from_year}-{to_year}"
            )
        extension += 1
        to_year += 1
        logger.debug("Widening challenge horizon to %d-%d", from_year, to_year)
        windows = generate_windows(from_year, to_year, after.tzinfo)


def get_challenge_status(now: datetime) -> ChallengeStatusResult:
    """Determine whether a challenge is running at ``now``.

    Args:
        now: Reference instant, naive local time or timezone-aware

    Returns:
        An ``active`` result with the containing window and its progress, or
        a ``countdown`` result with the time until the next window opens

    Raises:
        NoUpcomingChallengeError: If no future window can be found
    """
    from_year = max(now.year - 1, MINYEAR)
    to_year = min(now.year + 1, MAXYEAR)
    windows = generate_windows(from_year, to_year, now.tzinfo)

    active = _find_active(windows, now)
    if active is not None:
        ms_left = _elapsed_ms(now, active.end_date)
        left = decompose_remaining(ms_left)
        return ChallengeStatusResult(
            status=ChallengeState.ACTIVE,
            current_challenge=active,
            next_challenge=_find_next(windows, active.end_date, from_year, to_year),
            days_left=left.days,
            hours_left=left.hours,
            minutes_left=left.minutes,
            total_milliseconds_left=ms_left,
            progress_percentage=_progress_percentage(active, now),
        )

    upcoming = _find_next(windows, now, from_year, to_year)
    ms_left = _elapsed_ms(now, upcoming.start_date)
    left = decompose_remaining(ms_left)
    return ChallengeStatusResult(
        status=ChallengeState.COUNTDOWN,
        next_challenge=upcoming,
        days_left=left.days,
        hours_left=left.hours,
        minutes_left=left.minutes,
        total_milliseconds_left=ms_left,
    )
