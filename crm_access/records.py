"""
Record Variants
===============

One typed record model per supported CRM module, plus the function that
derives (owner, organization) for that variant.

Adding a module means adding a `ModuleName` member, a record model here,
an extractor registered in `OWNERSHIP_EXTRACTORS`, and a table mapping in
the directory store.
"""

from typing import TYPE_CHECKING, Callable, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict

from crm_access.core.enums import ModuleName
from crm_access.schemas.directory import DirectoryUser

if TYPE_CHECKING:
    from crm_access.directory.store import DirectoryStore


class RecordOwnership(BaseModel):
    """Who owns a record and which organization it belongs to."""

    model_config = ConfigDict(frozen=True)

    owner_external_id: Optional[str] = None
    organization_id: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.owner_external_id is not None and self.organization_id is not None


class ContactRecord(BaseModel):
    """A Contacts record as seen by the access engine."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    module: Literal[ModuleName.CONTACTS] = ModuleName.CONTACTS
    id: str
    external_id: Optional[str] = None
    owner_external_id: Optional[str] = None
    organization_id: Optional[str] = None
    user_id: Optional[str] = None
    user: Optional[DirectoryUser] = None


# Union of every supported record variant; extend alongside ModuleName.
CrmRecord = ContactRecord


def extract_contact_ownership(record: ContactRecord, store: "DirectoryStore") -> RecordOwnership:
    """
    Derive ownership of a contact.

    Each step only fills what the previous ones left unknown, and the
    chain stops as soon as both owner and organization are known:
    1. fields stored on the record
    2. the linked local user
    3. the user linked to the row carrying the record's CRM id
    """
    ownership = RecordOwnership(
        owner_external_id=record.owner_external_id,
        organization_id=record.organization_id,
    )
    if ownership.is_complete:
        return ownership

    if record.user_id:
        user = store.find_user_by_id(record.user_id)
        if user is not None:
            ownership = _merge(ownership, user)
            if ownership.is_complete:
                return ownership

    if ownership.owner_external_id is None and record.external_id:
        twin = store.find_record_by_external_id(ModuleName.CONTACTS, record.external_id)
        if twin is not None and twin.user is not None:
            ownership = _merge(ownership, twin.user)

    return ownership


def _merge(ownership: RecordOwnership, user: DirectoryUser) -> RecordOwnership:
    return RecordOwnership(
        owner_external_id=ownership.owner_external_id or user.external_id,
        organization_id=ownership.organization_id or user.organization_id,
    )


OwnershipExtractor = Callable[[CrmRecord, "DirectoryStore"], RecordOwnership]

OWNERSHIP_EXTRACTORS: Dict[ModuleName, OwnershipExtractor] = {
    ModuleName.CONTACTS: extract_contact_ownership,
}


def extract_ownership(record: CrmRecord, store: "DirectoryStore") -> RecordOwnership:
    """Dispatch to the extractor registered for the record's module."""
    return OWNERSHIP_EXTRACTORS[record.module](record, store)
