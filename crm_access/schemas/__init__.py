"""
Schemas Package
===============

Pydantic models shared between the directory store, the access engine
and the HTTP layer.
"""

from .directory import (
    DirectoryUser,
    DirectoryRole,
    Profile,
    ProfilePermission,
    SharingRule,
)
from .permissions import (
    PermissionCheckRequest,
    ResolutionResult,
    HierarchyNode,
    ProfileAccessSummary,
    PermissionSummary,
)

__all__ = [
    "DirectoryUser",
    "DirectoryRole",
    "Profile",
    "ProfilePermission",
    "SharingRule",
    "PermissionCheckRequest",
    "ResolutionResult",
    "HierarchyNode",
    "ProfileAccessSummary",
    "PermissionSummary",
]
