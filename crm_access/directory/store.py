"""
Directory Store Module
======================

Read-only query surface over the synchronized CRM directory.

Provides:
- `DirectoryStore`: the protocol the access engine depends on
- `SqlDirectoryStore`: the SQLAlchemy implementation bound to a session

Every query is scoped by organization where the entity has one, and every
method returns immutable snapshots from `crm_access.schemas.directory`
(or a record variant from `crm_access.records`), never ORM objects.
"""

from typing import Dict, List, Optional, Protocol, Tuple, Type

from sqlalchemy import select
from sqlalchemy.orm import Session

from crm_access.core.enums import ModuleName
from crm_access.core.exceptions import UnsupportedModuleError
from crm_access.core.logging import get_logger
from crm_access.models import (
    Contact,
    CrmProfile,
    CrmRole,
    CrmSharingRule,
    User,
)
from crm_access.records import ContactRecord, CrmRecord
from crm_access.schemas.directory import (
    DirectoryRole,
    DirectoryUser,
    Profile,
    SharingRule,
)

# Initialize logger
logger = get_logger(__name__)


class DirectoryStore(Protocol):
    """Query operations the access engine needs from the directory."""

    def find_record_by_primary_id(self, module_name: ModuleName, record_id: str) -> Optional[CrmRecord]: ...

    def find_record_by_external_id(self, module_name: ModuleName, external_id: str) -> Optional[CrmRecord]: ...

    def find_user_by_external_id(self, external_id: str) -> Optional[DirectoryUser]: ...

    def find_user_by_id(self, user_id: str) -> Optional[DirectoryUser]: ...

    def list_active_users(self, organization_id: str) -> List[DirectoryUser]: ...

    def list_users_in_role(self, organization_id: str, role_id: str) -> List[DirectoryUser]: ...

    def get_profile_with_permissions(self, profile_id: str) -> Optional[Profile]: ...

    def list_profiles(self, organization_id: str) -> List[Profile]: ...

    def list_roles(self, organization_id: str) -> List[DirectoryRole]: ...

    def get_sharing_rule(self, organization_id: str, module_name: str) -> Optional[SharingRule]: ...


# Record table and snapshot type for each supported module
RECORD_TABLES: Dict[ModuleName, Tuple[Type, Type[CrmRecord]]] = {
    ModuleName.CONTACTS: (Contact, ContactRecord),
}


class SqlDirectoryStore:
    """
    SQLAlchemy-backed directory store.

    Usage:
        store = SqlDirectoryStore(db)
        rule = store.get_sharing_rule(org_id, "Contacts")
    """

    def __init__(self, db: Session):
        """
        Initialize the store.

        Args:
            db: Database session (only read from)
        """
        self.db = db

    # =====================================
    # Records
    # =====================================

    def _record_table(self, module_name: ModuleName) -> Tuple[Type, Type[CrmRecord]]:
        try:
            return RECORD_TABLES[ModuleName(module_name)]
        except (KeyError, ValueError):
            raise UnsupportedModuleError(str(module_name)) from None

    def find_record_by_primary_id(self, module_name: ModuleName, record_id: str) -> Optional[CrmRecord]:
        model, variant = self._record_table(module_name)
        row = self.db.get(model, record_id)
        return variant.model_validate(row) if row is not None else None

    def find_record_by_external_id(self, module_name: ModuleName, external_id: str) -> Optional[CrmRecord]:
        model, variant = self._record_table(module_name)
        row = self.db.scalars(
            select(model).where(model.external_id == external_id)
        ).first()
        return variant.model_validate(row) if row is not None else None

    # =====================================
    # Users
    # =====================================

    def find_user_by_external_id(self, external_id: str) -> Optional[DirectoryUser]:
        row = self.db.scalars(
            select(User).where(User.external_id == external_id)
        ).first()
        return DirectoryUser.model_validate(row) if row is not None else None

    def find_user_by_id(self, user_id: str) -> Optional[DirectoryUser]:
        row = self.db.get(User, user_id)
        return DirectoryUser.model_validate(row) if row is not None else None

    def list_active_users(self, organization_id: str) -> List[DirectoryUser]:
        """Active users of the organization that are linked to a CRM user."""
        rows = self.db.scalars(
            select(User)
            .where(
                User.organization_id == organization_id,
                User.is_active.is_(True),
                User.external_id.is_not(None),
            )
            .order_by(User.created_at, User.id)
        ).all()
        return [DirectoryUser.model_validate(row) for row in rows]

    def list_users_in_role(self, organization_id: str, role_id: str) -> List[DirectoryUser]:
        """Active, CRM-linked users of the organization assigned to `role_id`."""
        rows = self.db.scalars(
            select(User)
            .where(
                User.organization_id == organization_id,
                User.role_id == role_id,
                User.is_active.is_(True),
                User.external_id.is_not(None),
            )
            .order_by(User.created_at, User.id)
        ).all()
        return [DirectoryUser.model_validate(row) for row in rows]

    # =====================================
    # Profiles
    # =====================================

    def get_profile_with_permissions(self, profile_id: str) -> Optional[Profile]:
        """Look up a profile by the CRM id users are assigned with."""
        row = self.db.scalars(
            select(CrmProfile).where(CrmProfile.external_id == profile_id)
        ).first()
        return Profile.model_validate(row) if row is not None else None

    def list_profiles(self, organization_id: str) -> List[Profile]:
        rows = self.db.scalars(
            select(CrmProfile)
            .where(CrmProfile.organization_id == organization_id)
            .order_by(CrmProfile.created_at, CrmProfile.id)
        ).all()
        return [Profile.model_validate(row) for row in rows]

    # =====================================
    # Roles and Sharing Rules
    # =====================================

    def list_roles(self, organization_id: str) -> List[DirectoryRole]:
        rows = self.db.scalars(
            select(CrmRole)
            .where(
                CrmRole.organization_id == organization_id,
                CrmRole.is_active.is_(True),
            )
            .order_by(CrmRole.created_at, CrmRole.id)
        ).all()
        return [DirectoryRole.model_validate(row) for row in rows]

    def get_sharing_rule(self, organization_id: str, module_name: str) -> Optional[SharingRule]:
        """
        First active rule for the module, by insertion order.

        Several active rules for one module are a data problem upstream;
        the earliest one is used and the ambiguity is logged.
        """
        rows = self.db.scalars(
            select(CrmSharingRule)
            .where(
                CrmSharingRule.organization_id == organization_id,
                CrmSharingRule.module_name == module_name,
                CrmSharingRule.is_active.is_(True),
            )
            .order_by(CrmSharingRule.created_at, CrmSharingRule.id)
        ).all()

        if not rows:
            return None

        if len(rows) > 1:
            logger.warning(
                "multiple_sharing_rules",
                module=module_name,
                organization_id=organization_id,
                rule_ids=[row.id for row in rows],
                selected_rule_id=rows[0].id,
            )

        return SharingRule.model_validate(rows[0])
