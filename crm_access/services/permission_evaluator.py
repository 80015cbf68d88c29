"""
Permission Evaluator
====================

Answers "does this user's profile enable this module?".

Fail-closed: a user with no profile, a profile that has not been
synchronized yet, or a profile without an enabled entry for the module
has no access.
"""

from typing import TYPE_CHECKING

from crm_access.core.logging import get_logger
from crm_access.schemas.directory import DirectoryUser, Profile

if TYPE_CHECKING:
    from crm_access.directory.store import DirectoryStore

logger = get_logger(__name__)


def profile_grants_module(profile: Profile, module_name: str) -> bool:
    """True if any entry of the profile enables the module."""
    return any(
        permission.module == module_name and permission.enabled
        for permission in profile.permissions
    )


def has_module_access(user: DirectoryUser, module_name: str, store: "DirectoryStore") -> bool:
    """
    Check module access through the user's assigned profile.

    Args:
        user: User to check
        module_name: CRM module API name
        store: Directory store used to load the profile

    Returns:
        True if the user's profile enables the module
    """
    if not user.profile_id:
        logger.debug("user_without_profile", user_id=user.id)
        return False

    profile = store.get_profile_with_permissions(user.profile_id)
    if profile is None:
        logger.debug("profile_not_synced", user_id=user.id, profile_id=user.profile_id)
        return False

    granted = profile_grants_module(profile, module_name)
    logger.debug(
        "module_access_evaluated",
        user_id=user.id,
        module=module_name,
        profile=profile.display_label,
        granted=granted,
    )
    return granted
