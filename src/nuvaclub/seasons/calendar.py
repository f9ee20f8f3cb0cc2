"""Static calendar of seasonal challenges.

Seven challenges start each year, always on the first of the month, and each
runs for a fixed number of days regardless of month length.
"""

from .schemas import ChallengeTheme

CHALLENGE_DURATION_DAYS = 45

CHALLENGE_START_MONTHS = (1, 3, 4, 5, 7, 9, 11)

CHALLENGE_THEMES = (
    ChallengeTheme(
        month=1,
        emoji="🎯",
        title="AI New Year Goals",
        description="Use AI to plan and track your resolutions for the year",
    ),
    ChallengeTheme(
        month=3,
        emoji="🌸",
        title="AI Creative Spring",
        description="Brainstorm and design with AI as a creative partner",
    ),
    ChallengeTheme(
        month=4,
        emoji="📚",
        title="AI Learning Boost",
        description="Learn faster with AI study tools",
    ),
    ChallengeTheme(
        month=5,
        emoji="💼",
        title="AI at Work",
        description="Bring AI into your everyday workflow",
    ),
    ChallengeTheme(
        month=7,
        emoji="🎨",
        title="AI Art Studio",
        description="Explore what generative art can do",
    ),
    ChallengeTheme(
        month=9,
        emoji="🔧",
        title="AI Tool Master",
        description="Go deep on advanced AI tooling",
    ),
    ChallengeTheme(
        month=11,
        emoji="🎄",
        title="AI Year in Review",
        description="Look back on a year of growth with AI",
    ),
)

_THEMES_BY_MONTH = {theme.month: theme for theme in CHALLENGE_THEMES}


class UnknownChallengeMonthError(ValueError):
    """Raised when no challenge starts in the requested month."""

    pass


def get_challenge_theme(month: int) -> ChallengeTheme:
    """Get the theme of the challenge starting in ``month``.

    Args:
        month: Calendar month, 1-12

    Returns:
        The configured theme

    Raises:
        UnknownChallengeMonthError: If no challenge starts in that month
    """
    theme = _THEMES_BY_MONTH.get(month)
    if theme is None:
        raise UnknownChallengeMonthError(f"No challenge starts in month {month}")
    return theme
