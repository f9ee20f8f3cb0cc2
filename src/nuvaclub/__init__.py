"""nuvaclub: seasonal challenges, roles and participations for the club platform."""

__version__ = "0.1.0"
