"""Display strings for challenge status and windows."""

from .schemas import ChallengeStatusResult, ChallengeWindow

# Unit labels per locale: (days, hours, minutes)
COUNTDOWN_UNITS = {
    "en": ("days", "hours", "minutes"),
    "zh-TW": ("天", "小時", "分鐘"),
}

SUPPORTED_LOCALES = tuple(COUNTDOWN_UNITS)


def format_countdown(status: ChallengeStatusResult, locale: str = "en") -> str:
    """Format the remaining time using its two largest units.

    Args:
        status: Result of a status query
        locale: One of SUPPORTED_LOCALES

    Returns:
        e.g. "12 days 3 hours", "5 hours 20 minutes" or "7 minutes"

    Raises:
        ValueError: If the locale is not supported
    """
    try:
        days_label, hours_label, minutes_label = COUNTDOWN_UNITS[locale]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale}") from None

    if status.days_left > 0:
        return f"{status.days_left} {days_label} {status.hours_left} {hours_label}"
    if status.hours_left > 0:
        return f"{status.hours_left} {hours_label} {status.minutes_left} {minutes_label}"
    return f"{status.minutes_left} {minutes_label}"


def format_challenge_date(window: ChallengeWindow) -> str:
    """Format a window's span as "3/1 - 4/15", or "3/1 - 20" within one month."""
    start, end = window.start_date, window.end_date
    if start.month == end.month:
        return f"{start.month}/{start.day} - {end.day}"
    return f"{start.month}/{start.day} - {end.month}/{end.day}"


def format_progress_bar(percentage: int, width: int = 30) -> str:
    """Render a percentage as a fixed-width block bar, rounding halves up."""
    filled = (2 * width * max(0, min(100, percentage)) + 100) // 200
    return "█" * filled + "░" * (width - filled)
