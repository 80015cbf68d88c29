"""
Access resolution services.
"""

from .access_resolver import AccessResolver
from .permission_evaluator import has_module_access, profile_grants_module
from .role_hierarchy import build_role_hierarchy, roles_at_or_above
from .sync_schedule import is_sync_due

__all__ = [
    "AccessResolver",
    "has_module_access",
    "profile_grants_module",
    "build_role_hierarchy",
    "roles_at_or_above",
    "is_sync_due",
]
