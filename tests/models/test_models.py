"""
Model Tests
===========

Tests for:
- ShareType / ModuleName enums
- ORM defaults and constraints
- Record snapshots built from ORM rows
"""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from crm_access.core.enums import ModuleName, ShareType
from crm_access.models import CrmProfilePermission, Organization, User
from crm_access.records import ContactRecord


class TestShareTypeEnum:
    """Tests for ShareType enum."""

    def test_values(self):
        assert {s.value for s in ShareType} == {"private", "public", "public_read_only"}

    def test_is_string_enum(self):
        assert ShareType.PRIVATE == "private"

    def test_can_be_created_from_string(self):
        assert ShareType("public_read_only") is ShareType.PUBLIC_READ_ONLY

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            ShareType("territory")


class TestModuleNameEnum:
    """Tests for ModuleName enum."""

    def test_contacts(self):
        assert ModuleName("Contacts") is ModuleName.CONTACTS


class TestUserModel:
    """Tests for User model."""

    def test_default_is_active(self, db_session: Session, sample_organization: Organization):
        user = User(email="rep@example.com", organization_id=sample_organization.id)
        db_session.add(user)
        db_session.commit()

        assert user.is_active is True
        assert user.id is not None
        assert user.created_at is not None

    def test_external_id_is_unique(self, db_session: Session):
        db_session.add(User(email="a@example.com", external_id="zuser-1"))
        db_session.add(User(email="b@example.com", external_id="zuser-1"))

        with pytest.raises(IntegrityError):
            db_session.commit()


class TestProfileModel:
    """Tests for CrmProfile and its permission entries."""

    def test_permissions_relationship(self, contacts_profile):
        assert [(p.module, p.enabled) for p in contacts_profile.permissions] == [("Contacts", True)]

    def test_duplicate_permission_rejected(self, db_session: Session, contacts_profile):
        existing = contacts_profile.permissions[0]
        db_session.add(
            CrmProfilePermission(
                profile_id=contacts_profile.id,
                external_id=existing.external_id,
                name="dup",
                module="Contacts",
                enabled=False,
            )
        )

        with pytest.raises(IntegrityError):
            db_session.commit()


class TestSharingRuleModel:
    """Tests for CrmSharingRule."""

    def test_defaults(self, directory, sample_organization):
        rule = directory.sharing_rule(sample_organization, "private")

        assert isinstance(rule.id, int)
        assert rule.is_active is True
        assert rule.created_at is not None
        assert rule.rule_data["share_type"] == "private"


class TestContactRecord:
    """Tests for ContactRecord snapshots."""

    def test_from_orm_row(self, directory, sample_organization):
        owner = directory.user(sample_organization)
        contact = directory.contact(sample_organization, owner=owner, linked_user=owner)

        record = ContactRecord.model_validate(contact)

        assert record.module is ModuleName.CONTACTS
        assert record.owner_external_id == owner.external_id
        assert record.user.id == owner.id
