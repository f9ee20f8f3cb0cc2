"""Challenge participations module.

Provides functionality for:
- Joining the seasonal challenge that is currently open
- Submitting work and marking participations completed
- Listing a profile's challenge history
"""

from .manager import (
    ChallengeNotActiveError,
    InvalidParticipationTransition,
    ParticipationManager,
    ParticipationNotFoundError,
)
from .models import Participation
from .schemas import ParticipationResponse, ParticipationStatus, ParticipationSubmit

__all__ = [
    "ChallengeNotActiveError",
    "InvalidParticipationTransition",
    "Participation",
    "ParticipationManager",
    "ParticipationNotFoundError",
    "ParticipationResponse",
    "ParticipationStatus",
    "ParticipationSubmit",
]
