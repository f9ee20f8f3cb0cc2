"""Role manager for profile and role-switching operations."""

import logging
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.sqlite import Database
from .models import Profile
from .schemas import ProfileCreate, ProfileResponse, UserRole

logger = logging.getLogger(__name__)


class ProfileNotFoundError(ValueError):
    """Raised when a profile does not exist."""

    pass


class RoleTransitionError(ValueError):
    """Raised when a profile may not act as the requested role."""

    pass


def validate_role_transition(
    current: UserRole, target: UserRole, available_roles: Iterable[UserRole]
) -> UserRole:
    """Check that a profile may switch from ``current`` to ``target``.

    Switching to the current role is allowed and changes nothing.

    Returns:
        The target role

    Raises:
        RoleTransitionError: If target is not among the available roles
    """
    target = UserRole(target)
    allowed = {UserRole(r) for r in available_roles}
    if target not in allowed:
        names = ", ".join(sorted(r.value for r in allowed))
        raise RoleTransitionError(
            f"Cannot switch from {UserRole(current).value} to {target.value}; "
            f"available roles: {names}"
        )
    return target


def _to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        username=profile.username,
        display_name=profile.display_name,
        role=UserRole(profile.role),
        available_roles=profile.get_available_roles(),
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


class RoleManager:
    """Manages profiles and the roles they act as."""

    def __init__(self, db: Database):
        """Initialize role manager.

        Args:
            db: Database instance
        """
        self.db = db

    def _get(self, session: Session, profile_id: str) -> Profile:
        profile = session.execute(
            select(Profile).where(Profile.id == str(profile_id))
        ).scalar_one_or_none()
        if profile is None:
            raise ProfileNotFoundError(f"Profile not found: {profile_id}")
        return profile

    def create_profile(self, data: ProfileCreate) -> ProfileResponse:
        """Create a new profile.

        Args:
            data: Profile creation data

        Returns:
            Created profile

        Raises:
            ValueError: If the username is already taken
        """
        with self.db.get_session() as session:
            if self._find_by_username(session, data.username) is not None:
                raise ValueError(f"Username already taken: {data.username}")

            profile = Profile(
                username=data.username,
                display_name=data.display_name,
                role=data.role.value,
            )
            profile.set_available_roles(data.available_roles)
            session.add(profile)
            session.flush()
            session.refresh(profile)
            logger.info("Created profile %s as %s", profile.username, profile.role)
            return _to_response(profile)

    @staticmethod
    def _find_by_username(session: Session, username: str) -> Optional[Profile]:
        return session.execute(
            select(Profile).where(Profile.username == username)
        ).scalar_one_or_none()

    def get_profile(self, profile_id: str) -> Optional[ProfileResponse]:
        """Get a profile by ID.

        Args:
            profile_id: Profile ID

        Returns:
            Profile or None
        """
        with self.db.get_session() as session:
            try:
                return _to_response(self._get(session, profile_id))
            except ProfileNotFoundError:
                return None

    def get_profile_by_username(self, username: str) -> Optional[ProfileResponse]:
        """Get a profile by username."""
        with self.db.get_session() as session:
            profile = self._find_by_username(session, username)
            return _to_response(profile) if profile else None

    def list_profiles(self, role: Optional[UserRole] = None) -> list[ProfileResponse]:
        """List profiles, optionally only those currently acting as ``role``."""
        with self.db.get_session() as session:
            stmt = select(Profile).order_by(Profile.username)
            if role is not None:
                stmt = stmt.where(Profile.role == UserRole(role).value)
            return [_to_response(p) for p in session.execute(stmt).scalars()]

    def switch_role(self, profile_id: str, target: UserRole) -> ProfileResponse:
        """Switch the active role of a profile.

        Raises:
            ProfileNotFoundError: If the profile does not exist
            RoleTransitionError: If the profile does not have the target role
        """
        with self.db.get_session() as session:
            profile = self._get(session, profile_id)
            current = UserRole(profile.role)
            target = validate_role_transition(current, target, profile.get_available_roles())
            if target != current:
                profile.role = target.value
                session.flush()
                logger.info("Profile %s switched %s -> %s", profile.username, current.value, target.value)
            return _to_response(profile)

    def grant_role(self, profile_id: str, role: UserRole) -> ProfileResponse:
        """Add a role to the profile's available roles."""
        with self.db.get_session() as session:
            profile = self._get(session, profile_id)
            roles = profile.get_available_roles()
            role = UserRole(role)
            if role not in roles:
                roles.append(role)
                profile.set_available_roles(roles)
                session.flush()
                logger.info("Granted %s to %s", role.value, profile.username)
            return _to_response(profile)

    def revoke_role(self, profile_id: str, role: UserRole) -> ProfileResponse:
        """Remove a role from the profile's available roles.

        If the revoked role is active, the profile switches to the first
        remaining role.

        Raises:
            RoleTransitionError: If it is the profile's only role
        """
        with self.db.get_session() as session:
            profile = self._get(session, profile_id)
            role = UserRole(role)
            roles = profile.get_available_roles()
            if role not in roles:
                return _to_response(profile)
            remaining = [r for r in roles if r != role]
            if not remaining:
                raise RoleTransitionError(f"Cannot revoke the only role of {profile.username}")
            profile.set_available_roles(remaining)
            if profile.role == role.value:
                profile.role = remaining[0].value
            session.flush()
            logger.info("Revoked %s from %s", role.value, profile.username)
            return _to_response(profile)
