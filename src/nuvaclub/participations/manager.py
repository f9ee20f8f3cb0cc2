"""Participation manager for seasonal challenge operations."""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..clock import Clock
from ..db.sqlite import Database
from ..roles.manager import ProfileNotFoundError
from ..roles.models import Profile
from ..seasons.resolver import get_challenge_status
from .models import Participation
from .schemas import (
    PARTICIPATION_TRANSITIONS,
    ParticipationResponse,
    ParticipationStatus,
    ParticipationSubmit,
)

logger = logging.getLogger(__name__)


class ChallengeNotActiveError(ValueError):
    """Raised when joining while no challenge window is open."""

    pass


class ParticipationNotFoundError(ValueError):
    """Raised when a profile has not joined the given challenge."""

    pass


class InvalidParticipationTransition(ValueError):
    """Raised when a participation cannot move to the requested status."""

    pass


class ParticipationManager:
    """Manages profiles' participation in seasonal challenges."""

    def __init__(self, db: Database, clock: Clock):
        """Initialize participation manager.

        Args:
            db: Database instance
            clock: Source of "now" for deciding which challenge is open
        """
        self.db = db
        self.clock = clock

    @staticmethod
    def _find(session: Session, user_id: str, challenge_key: str) -> Optional[Participation]:
        stmt = select(Participation).where(
            Participation.user_id == str(user_id),
            Participation.challenge_key == challenge_key,
        )
        return session.execute(stmt).scalar_one_or_none()

    def _get(self, session: Session, user_id: str, challenge_key: str) -> Participation:
        participation = self._find(session, user_id, challenge_key)
        if participation is None:
            raise ParticipationNotFoundError(
                f"No participation for {user_id} in challenge {challenge_key}"
            )
        return participation

    @staticmethod
    def _transition(participation: Participation, target: ParticipationStatus) -> None:
        current = ParticipationStatus(participation.status)
        if target not in PARTICIPATION_TRANSITIONS[current]:
            raise InvalidParticipationTransition(
                f"Cannot move participation from {current.value} to {target.value}"
            )
        participation.status = target.value

    def join(self, user_id: str) -> ParticipationResponse:
        """Join the challenge that is open right now.

        Joining a challenge already joined returns the existing participation.

        Raises:
            ProfileNotFoundError: If the profile does not exist
            ChallengeNotActiveError: If no challenge window is open
        """
        status = get_challenge_status(self.clock.now())
        if not status.is_active:
            raise ChallengeNotActiveError(
                f"No challenge is open; next one starts {status.next_challenge.start_date.date()}"
            )
        challenge_key = status.current_challenge.key

        with self.db.get_session() as session:
            if session.get(Profile, str(user_id)) is None:
                raise ProfileNotFoundError(f"Profile not found: {user_id}")

            participation = self._find(session, user_id, challenge_key)
            if participation is None:
                participation = Participation(user_id=str(user_id), challenge_key=challenge_key)
                session.add(participation)
                session.flush()
                session.refresh(participation)
                logger.info("Profile %s joined challenge %s", user_id, challenge_key)
            return ParticipationResponse.model_validate(participation)

    def submit(
        self, user_id: str, challenge_key: str, data: ParticipationSubmit
    ) -> ParticipationResponse:
        """Submit work for a joined challenge.

        Re-submitting replaces the previous submission URL.
        """
        with self.db.get_session() as session:
            participation = self._get(session, user_id, challenge_key)
            self._transition(participation, ParticipationStatus.SUBMITTED)
            participation.submission_url = str(data.submission_url)
            participation.submitted_at = datetime.now(timezone.utc).isoformat()
            session.flush()
            logger.info("Profile %s submitted to challenge %s", user_id, challenge_key)
            return ParticipationResponse.model_validate(participation)

    def complete(self, user_id: str, challenge_key: str) -> ParticipationResponse:
        """Mark a submitted participation as completed."""
        with self.db.get_session() as session:
            participation = self._get(session, user_id, challenge_key)
            self._transition(participation, ParticipationStatus.COMPLETED)
            participation.completed_at = datetime.now(timezone.utc).isoformat()
            session.flush()
            logger.info("Profile %s completed challenge %s", user_id, challenge_key)
            return ParticipationResponse.model_validate(participation)

    def get(self, user_id: str, challenge_key: str) -> Optional[ParticipationResponse]:
        """Get a participation, or None if the profile has not joined."""
        with self.db.get_session() as session:
            participation = self._find(session, user_id, challenge_key)
            if participation is None:
                return None
            return ParticipationResponse.model_validate(participation)

    def list_for_user(self, user_id: str) -> list[ParticipationResponse]:
        """List a profile's participations, most recent challenge first."""
        with self.db.get_session() as session:
            stmt = (
                select(Participation)
                .where(Participation.user_id == str(user_id))
                .order_by(Participation.challenge_key.desc())
            )
            return [
                ParticipationResponse.model_validate(p)
                for p in session.execute(stmt).scalars()
            ]
