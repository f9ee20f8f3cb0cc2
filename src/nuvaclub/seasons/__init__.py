"""Seasonal challenges module.

Provides functionality for:
- The fixed annual calendar of themed 45-day challenge windows
- Generating concrete windows for a range of years
- Resolving whether a challenge is active or counting down at a given instant
- Formatting countdowns and date ranges for display
"""

from .calendar import (
    CHALLENGE_DURATION_DAYS,
    CHALLENGE_START_MONTHS,
    CHALLENGE_THEMES,
    UnknownChallengeMonthError,
    get_challenge_theme,
)
from .formatters import format_challenge_date, format_countdown, format_progress_bar
from .resolver import NoUpcomingChallengeError, decompose_remaining, get_challenge_status
from .schemas import (
    ChallengeState,
    ChallengeStatusResult,
    ChallengeTheme,
    ChallengeWindow,
    TimeLeft,
)
from .windows import (
    CalendarOverlapError,
    find_overlaps,
    generate_windows,
    get_year_challenges,
    validate_calendar,
)

__all__ = [
    "CHALLENGE_DURATION_DAYS",
    "CHALLENGE_START_MONTHS",
    "CHALLENGE_THEMES",
    "CalendarOverlapError",
    "ChallengeState",
    "ChallengeStatusResult",
    "ChallengeTheme",
    "ChallengeWindow",
    "NoUpcomingChallengeError",
    "TimeLeft",
    "UnknownChallengeMonthError",
    "decompose_remaining",
    "find_overlaps",
    "format_challenge_date",
    "format_countdown",
    "format_progress_bar",
    "generate_windows",
    "get_challenge_status",
    "get_challenge_theme",
    "get_year_challenges",
    "validate_calendar",
]
