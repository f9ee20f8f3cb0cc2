"""Pydantic schemas for profile roles."""

import re
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,30}$")


class UserRole(str, Enum):
    """Roles a profile can act as."""

    VAVA = "vava"  # Learner
    NUNU = "nunu"  # Coach
    GUARDIAN = "guardian"  # Administrator


class VavaRole(BaseModel):
    """Learner: takes courses and joins challenges."""

    kind: Literal["vava"] = "vava"
    label: str = "Vava"
    icon: str = "🎓"
    can_coach: bool = False
    can_administer: bool = False


class NunuRole(BaseModel):
    """Coach: reviews learners and gives feedback."""

    kind: Literal["nunu"] = "nunu"
    label: str = "Nunu"
    icon: str = "🌟"
    can_coach: bool = True
    can_administer: bool = False


class GuardianRole(BaseModel):
    """Administrator: manages users, courses, events and challenges."""

    kind: Literal["guardian"] = "guardian"
    label: str = "Guardian"
    icon: str = "👑"
    can_coach: bool = True
    can_administer: bool = True


RoleVariant = Annotated[
    Union[VavaRole, NunuRole, GuardianRole], Field(discriminator="kind")
]

_VARIANTS = {
    UserRole.VAVA: VavaRole,
    UserRole.NUNU: NunuRole,
    UserRole.GUARDIAN: GuardianRole,
}


def role_variant(role: UserRole) -> Union[VavaRole, NunuRole, GuardianRole]:
    """Get the variant carrying the capabilities of ``role``."""
    return _VARIANTS[UserRole(role)]()


class ProfileCreate(BaseModel):
    """Schema for creating a profile."""

    username: str
    display_name: Optional[str] = Field(None, max_length=100)
    role: UserRole = UserRole.VAVA
    available_roles: list[UserRole] = Field(default_factory=lambda: [UserRole.VAVA])

    @field_validator("username")
    @classmethod
    def username_shape(cls, v):
        """Validate username is 3-30 letters, digits or underscores."""
        if not USERNAME_PATTERN.match(v):
            raise ValueError("username must be 3-30 letters, digits or underscores")
        return v

    @field_validator("available_roles")
    @classmethod
    def dedupe_roles(cls, v):
        """Drop duplicate roles, keeping first occurrence order."""
        if not v:
            raise ValueError("available_roles must not be empty")
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def role_is_available(self) -> "ProfileCreate":
        """Validate the active role is one of the available roles."""
        if self.role not in self.available_roles:
            raise ValueError("role must be one of available_roles")
        return self


class ProfileResponse(BaseModel):
    """Schema for profile responses."""

    id: UUID
    username: str
    display_name: Optional[str] = None
    role: UserRole
    available_roles: list[UserRole]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @property
    def variant(self) -> Union[VavaRole, NunuRole, GuardianRole]:
        return role_variant(self.role)

    @property
    def can_switch(self) -> bool:
        """Only profiles with more than one role get a switcher."""
        return len(self.available_roles) > 1
