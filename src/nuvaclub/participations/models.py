"""SQLAlchemy models for challenge participations.

Tables:
- challenge_participations: A profile's entry in one seasonal challenge
"""

from typing import Optional

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..db.models import Base, generate_uuid, utc_now_iso
from .schemas import ParticipationStatus


class Participation(Base):
    """Participation model - one profile taking part in one challenge window."""

    __tablename__ = "challenge_participations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Window key, e.g. "2025-03"
    challenge_key: Mapped[str] = mapped_column(String(7), nullable=False, index=True)

    status: Mapped[str] = mapped_column(String(20), default=ParticipationStatus.JOINED.value)
    submission_url: Mapped[Optional[str]] = mapped_column(Text)

    # Timestamps
    submitted_at: Mapped[Optional[str]] = mapped_column(String(32))
    completed_at: Mapped[Optional[str]] = mapped_column(String(32))
    created_at: Mapped[str] = mapped_column(String(32), default=utc_now_iso)

    # A profile joins each challenge at most once
    __table_args__ = (
        UniqueConstraint("user_id", "challenge_key", name="uq_participation_user_challenge"),
    )

    def __repr__(self) -> str:
        return (
            f"<Participation(user_id={self.user_id}, "
            f"challenge_key={self.challenge_key}, status={self.status})>"
        )
