"""Sources of "now" for challenge status queries.

The simulated clock lets guardians preview how the challenge calendar looks
on any date. Its state is a small JSON file so the simulated date survives
between CLI invocations.
"""

import json
import logging
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Optional, Protocol

from .config import Config

logger = logging.getLogger(__name__)


class Clock(Protocol):
    """Anything that can report the current instant."""

    def now(self) -> datetime: ...


class SystemClock:
    """Real wall-clock time."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock:
    """Always reports the same instant."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


class SimulatedClock:
    """Clock that reports a persisted simulated date when one is set."""

    def __init__(self, state_path: Path, fallback: Optional[Clock] = None):
        """Initialize simulated clock.

        Args:
            state_path: JSON file holding the simulated date
            fallback: Clock used when no simulated date is set
        """
        self.state_path = Path(state_path)
        self.fallback = fallback or SystemClock()

    def _load(self) -> Optional[datetime]:
        if not self.state_path.exists():
            return None
        try:
            payload = json.loads(self.state_path.read_text(encoding="utf-8"))
            return datetime.fromisoformat(payload["date"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Ignoring unreadable simulated time in %s: %s", self.state_path, exc)
            return None

    @property
    def simulated_date(self) -> Optional[datetime]:
        """The simulated date, or None when running on real time."""
        return self._load()

    @property
    def is_simulating(self) -> bool:
        return self._load() is not None

    def now(self) -> datetime:
        simulated = self._load()
        if simulated is not None:
            return simulated
        return self.fallback.now()

    def set(self, when: datetime) -> None:
        """Persist a simulated date."""
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        self.state_path.write_text(
            json.dumps({"date": when.isoformat()}), encoding="utf-8"
        )
        logger.info("Simulated time set to %s", when.isoformat())

    def reset(self) -> None:
        """Return to real time."""
        if self.state_path.exists():
            self.state_path.unlink()
            logger.info("Simulated time cleared")


def get_clock(config: Config) -> SimulatedClock:
    """Build the application clock from configuration."""
    return SimulatedClock(config.state_path, SystemClock(config.tzinfo))
