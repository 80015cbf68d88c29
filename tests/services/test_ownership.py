"""
Record Ownership Tests
======================

Tests for extract_contact_ownership against an in-memory directory store:
- Fields stored on the record end the lookup
- Linked user fills what the record lacks
- Row found by the record's CRM id is consulted last
"""

from typing import Dict, List, Optional, Tuple

import pytest

from crm_access.core.enums import ModuleName
from crm_access.records import ContactRecord, extract_contact_ownership, extract_ownership
from crm_access.schemas.directory import DirectoryUser


pytestmark = pytest.mark.resolver


class InMemoryStore:
    """Directory store holding contacts and users in dicts, recording every lookup."""

    def __init__(self, records: List[ContactRecord] = (), users: List[DirectoryUser] = ()):
        self.records_by_external_id: Dict[str, ContactRecord] = {
            r.external_id: r for r in records if r.external_id
        }
        self.users: Dict[str, DirectoryUser] = {u.id: u for u in users}
        self.calls: List[Tuple[str, str]] = []

    def find_record_by_external_id(self, module_name: ModuleName, external_id: str) -> Optional[ContactRecord]:
        self.calls.append(("record_by_external_id", external_id))
        return self.records_by_external_id.get(external_id)

    def find_user_by_id(self, user_id: str) -> Optional[DirectoryUser]:
        self.calls.append(("user_by_id", user_id))
        return self.users.get(user_id)


def crm_user(user_id: str = "u-1", external_id: str = "zuser-1", organization_id: str = "org-1") -> DirectoryUser:
    return DirectoryUser(id=user_id, external_id=external_id, organization_id=organization_id)


class TestExtractContactOwnership:
    """Tests for the ownership fallback chain."""

    def test_stored_fields_skip_the_store(self):
        """Test a record carrying owner and organization never queries the store."""
        # Arrange
        record = ContactRecord(
            id="c-1",
            external_id="zcontact-1",
            owner_external_id="zuser-9",
            organization_id="org-9",
            user_id="u-1",
        )
        store = InMemoryStore(users=[crm_user()])

        # Act
        ownership = extract_contact_ownership(record, store)

        # Assert
        assert ownership.owner_external_id == "zuser-9"
        assert ownership.organization_id == "org-9"
        assert store.calls == []

    def test_row_with_same_crm_id_supplies_owner(self):
        """Test the row found by CRM id fills owner and organization when nothing else does."""
        # Arrange
        record = ContactRecord(id="c-1", external_id="zcontact-1")
        twin = ContactRecord(
            id="c-2",
            external_id="zcontact-1",
            user_id="u-1",
            user=crm_user(),
        )
        store = InMemoryStore(records=[twin])

        # Act
        ownership = extract_contact_ownership(record, store)

        # Assert
        assert ownership.owner_external_id == "zuser-1"
        assert ownership.organization_id == "org-1"
        assert store.calls == [("record_by_external_id", "zcontact-1")]

    def test_linked_user_completes_before_crm_id_lookup(self):
        """Test a linked user supplying both fields ends the chain."""
        record = ContactRecord(id="c-1", external_id="zcontact-1", user_id="u-1")
        store = InMemoryStore(users=[crm_user()])

        ownership = extract_contact_ownership(record, store)

        assert ownership.is_complete
        assert store.calls == [("user_by_id", "u-1")]

    def test_crm_id_lookup_keeps_stored_organization(self):
        """Test the last step only fills the missing owner."""
        # Arrange
        record = ContactRecord(id="c-1", external_id="zcontact-1", organization_id="org-stored")
        twin = ContactRecord(id="c-2", external_id="zcontact-1", user=crm_user(organization_id="org-other"))
        store = InMemoryStore(records=[twin])

        # Act
        ownership = extract_contact_ownership(record, store)

        # Assert
        assert ownership.owner_external_id == "zuser-1"
        assert ownership.organization_id == "org-stored"

    def test_nothing_found(self):
        """Test an unresolvable record leaves both fields unknown."""
        record = ContactRecord(id="c-1", external_id="zcontact-1", user_id="u-missing")
        store = InMemoryStore()

        ownership = extract_contact_ownership(record, store)

        assert ownership.owner_external_id is None
        assert ownership.organization_id is None
        assert store.calls == [
            ("user_by_id", "u-missing"),
            ("record_by_external_id", "zcontact-1"),
        ]

    def test_dispatch_by_module(self):
        record = ContactRecord(id="c-1", owner_external_id="zuser-1", organization_id="org-1")

        ownership = extract_ownership(record, InMemoryStore())

        assert ownership.is_complete
