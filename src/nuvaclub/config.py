"""Configuration management for nuvaclub.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from .seasons.formatters import SUPPORTED_LOCALES

# Load .env file if present
load_dotenv()

DEFAULT_HOME = Path.home() / ".nuvaclub"


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Simulated clock state file
    state_path: Path

    # Display
    timezone: Optional[str]  # IANA name; naive local time when unset
    locale: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path = Path(
            os.environ.get("NUVACLUB_DB_PATH", str(DEFAULT_HOME / "club.db"))
        ).expanduser()
        state_path = Path(
            os.environ.get(
                "NUVACLUB_STATE_PATH", str(DEFAULT_HOME / "simulated-time.json")
            )
        ).expanduser()

        return cls(
            db_path=db_path,
            state_path=state_path,
            timezone=os.environ.get("NUVACLUB_TIMEZONE") or None,
            locale=os.environ.get("NUVACLUB_LOCALE", "en"),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.timezone:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError):
                errors.append(f"Unknown timezone: {self.timezone}")

        if self.locale not in SUPPORTED_LOCALES:
            errors.append(f"Unsupported locale: {self.locale}")

        for directory in {self.db_path.parent, self.state_path.parent}:
            if not directory.exists():
                try:
                    directory.mkdir(parents=True, exist_ok=True)
                except PermissionError:
                    errors.append(f"Cannot create directory: {directory}")

        return errors

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        """Configured zone, or None for naive local time."""
        return ZoneInfo(self.timezone) if self.timezone else None


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
