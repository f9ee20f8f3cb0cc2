"""SQLAlchemy ORM base for the local SQLite database.

Feature packages declare their tables against ``Base``:
- profiles: roles.models
- challenge_participations: participations.models
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string for primary keys."""
    return str(uuid4())


def utc_now_iso() -> str:
    """Current UTC time as an ISO string for timestamp columns."""
    return datetime.now(timezone.utc).isoformat()
