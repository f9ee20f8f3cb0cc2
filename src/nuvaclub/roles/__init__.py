"""Profile roles module.

Provides functionality for:
- The vava (learner), nunu (coach) and guardian (administrator) role variants
- Validating role switches against a profile's available roles
- Creating profiles and granting, revoking and switching roles
"""

from .manager import (
    ProfileNotFoundError,
    RoleManager,
    RoleTransitionError,
    validate_role_transition,
)
from .models import Profile
from .schemas import (
    GuardianRole,
    NunuRole,
    ProfileCreate,
    ProfileResponse,
    RoleVariant,
    UserRole,
    VavaRole,
    role_variant,
)

__all__ = [
    "GuardianRole",
    "NunuRole",
    "Profile",
    "ProfileCreate",
    "ProfileNotFoundError",
    "ProfileResponse",
    "RoleManager",
    "RoleTransitionError",
    "RoleVariant",
    "UserRole",
    "VavaRole",
    "role_variant",
    "validate_role_transition",
]
