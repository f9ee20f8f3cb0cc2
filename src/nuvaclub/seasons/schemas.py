"""Pydantic schemas for seasonal challenges."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class ChallengeState(str, Enum):
    """Whether now falls inside a window or in the gap before the next."""

    ACTIVE = "active"
    COUNTDOWN = "countdown"


class ChallengeTheme(BaseModel):
    """Display metadata for the window starting in a given month."""

    month: int = Field(..., ge=1, le=12)
    emoji: str
    title: str
    description: str

    model_config = {"frozen": True}


class ChallengeWindow(BaseModel):
    """A concrete 45-day challenge period."""

    start_date: datetime
    end_date: datetime
    year: int
    month: int = Field(..., ge=1, le=12)
    theme: ChallengeTheme

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        """Stable identifier, e.g. ``2025-03``."""
        return f"{self.year:04d}-{self.month:02d}"

    def contains(self, moment: datetime) -> bool:
        """Half-open containment: start included, end excluded."""
        return self.start_date <= moment < self.end_date


class TimeLeft(BaseModel):
    """Remaining duration broken into display units."""

    days: int
    hours: int
    minutes: int

    model_config = {"frozen": True}


class ChallengeStatusResult(BaseModel):
    """Outcome of a status query for a single instant."""

    status: ChallengeState
    current_challenge: Optional[ChallengeWindow] = None
    next_challenge: ChallengeWindow
    days_left: int
    hours_left: int
    minutes_left: int
    total_milliseconds_left: int
    progress_percentage: Optional[int] = Field(None, ge=0, le=100)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_state_fields(self) -> "ChallengeStatusResult":
        """Active results carry a window and progress; countdowns carry neither."""
        is_active = self.status == ChallengeState.ACTIVE
        if is_active != (self.current_challenge is not None):
            raise ValueError("current_challenge must be set exactly when active")
        if is_active != (self.progress_percentage is not None):
            raise ValueError("progress_percentage must be set exactly when active")
        return self

    @property
    def is_active(self) -> bool:
        return self.status == ChallengeState.ACTIVE
