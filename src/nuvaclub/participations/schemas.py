"""Pydantic schemas for seasonal challenge participations."""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import AnyHttpUrl, BaseModel

from ..seasons.schemas import ChallengeWindow
from ..seasons.windows import create_window


class ParticipationStatus(str, Enum):
    """Status of a participation."""

    JOINED = "joined"
    SUBMITTED = "submitted"
    COMPLETED = "completed"


# Allowed status moves: current -> next statuses
PARTICIPATION_TRANSITIONS = {
    ParticipationStatus.JOINED: {ParticipationStatus.SUBMITTED},
    ParticipationStatus.SUBMITTED: {ParticipationStatus.SUBMITTED, ParticipationStatus.COMPLETED},
    ParticipationStatus.COMPLETED: set(),
}


class ParticipationSubmit(BaseModel):
    """Schema for submitting work to a challenge."""

    submission_url: AnyHttpUrl


class ParticipationResponse(BaseModel):
    """Schema for participation responses."""

    id: UUID
    user_id: UUID
    challenge_key: str
    status: ParticipationStatus
    submission_url: Optional[str] = None
    submitted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}

    @property
    def window(self) -> ChallengeWindow:
        """The challenge window this participation belongs to."""
        year, month = self.challenge_key.split("-")
        return create_window(int(year), int(month))
