"""SQLAlchemy models for profiles.

Tables:
- profiles: Club members with their active and available roles
"""

import json
from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..db.models import Base, generate_uuid, utc_now_iso
from .schemas import UserRole


class Profile(Base):
    """Profile model - a club member and the roles they may act as."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    username: Mapped[str] = mapped_column(String(30), nullable=False, unique=True, index=True)
    display_name: Mapped[Optional[str]] = mapped_column(String(100))

    # Active role and the roles it may switch between (JSON list)
    role: Mapped[str] = mapped_column(String(20), default=UserRole.VAVA.value, index=True)
    available_roles: Mapped[str] = mapped_column(Text, default='["vava"]')

    # Timestamps
    created_at: Mapped[str] = mapped_column(String(32), default=utc_now_iso)
    updated_at: Mapped[str] = mapped_column(
        String(32), default=utc_now_iso, onupdate=utc_now_iso
    )

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, username='{self.username}', role={self.role})>"

    def get_available_roles(self) -> list[UserRole]:
        """Get available roles as enum members."""
        return [UserRole(r) for r in json.loads(self.available_roles or "[]")]

    def set_available_roles(self, roles: list[UserRole]) -> None:
        """Set available roles from enum members."""
        self.available_roles = json.dumps([UserRole(r).value for r in roles])
