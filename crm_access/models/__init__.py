"""
Model Package Initialization
============================

Ensures models are properly registered when imported by the application.

All SQLAlchemy ORM models are exported from this module.

Usage:
    from crm_access.models import User, Organization, CrmRole
"""

from .organization import Organization
from .user import User
from .role import CrmRole
from .profile import CrmProfile, CrmProfilePermission
from .sharing_rule import CrmSharingRule
from .contact import Contact

__all__ = [
    "Organization",
    "User",
    "CrmRole",
    "CrmProfile",
    "CrmProfilePermission",
    "CrmSharingRule",
    "Contact",
]
