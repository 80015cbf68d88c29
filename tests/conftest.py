"""
Test Configuration and Fixtures
================================

Central configuration for pytest with all shared fixtures.

Features:
- SQLite in-memory database for testing
- TestClient setup with the database dependency overridden
- DirectoryBuilder for seeding organizations, profiles, roles, users,
  sharing rules and contacts
"""

import os
import uuid
from typing import Generator, Iterable, Optional, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Set testing environment before importing app modules
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from crm_access.db.base import Base
from crm_access.db.session import get_db
from crm_access.directory.store import SqlDirectoryStore
from crm_access.models import (
    Contact,
    CrmProfile,
    CrmProfilePermission,
    CrmRole,
    CrmSharingRule,
    Organization,
    User,
)
from crm_access.main import app as main_app
from crm_access.services.access_resolver import AccessResolver


# =====================================
# Database Configuration
# =====================================

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =====================================
# Database Fixtures
# =====================================

@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    Creates all tables before each test and drops them after.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a TestClient with database dependency override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    main_app.dependency_overrides[get_db] = override_get_db

    with TestClient(main_app) as test_client:
        yield test_client

    main_app.dependency_overrides.clear()


# =====================================
# Directory Builder
# =====================================

class DirectoryBuilder:
    """
    Seeds directory rows the way the sync process would.

    Every helper commits and returns the ORM object.
    """

    def __init__(self, db: Session):
        self.db = db
        self._counter = 0

    def _next(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}-{self._counter}"

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def organization(self, name: str = "Acme") -> Organization:
        return self._save(Organization(external_id=self._next("zorg"), name=name))

    def profile(
        self,
        organization: Organization,
        permissions: Iterable[Tuple[str, bool]] = (("Contacts", True),),
        label: Optional[str] = None,
    ) -> CrmProfile:
        external_id = self._next("zprofile")
        profile = CrmProfile(
            external_id=external_id,
            organization_id=organization.id,
            name=label or external_id,
            display_label=label or external_id,
        )
        for module, enabled in permissions:
            profile.permissions.append(
                CrmProfilePermission(
                    external_id=self._next("zperm"),
                    name=f"{module} view",
                    module=module,
                    enabled=enabled,
                )
            )
        return self._save(profile)

    def role(
        self,
        organization: Organization,
        reports_to: Optional[CrmRole] = None,
        label: Optional[str] = None,
        is_active: bool = True,
    ) -> CrmRole:
        external_id = self._next("zrole")
        return self._save(
            CrmRole(
                external_id=external_id,
                organization_id=organization.id,
                name=label or external_id,
                display_label=label or external_id,
                reports_to_id=reports_to.external_id if reports_to else None,
                is_active=is_active,
            )
        )

    def user(
        self,
        organization: Optional[Organization],
        profile: Optional[CrmProfile] = None,
        role: Optional[CrmRole] = None,
        is_active: bool = True,
        linked: bool = True,
    ) -> User:
        external_id = self._next("zuser")
        return self._save(
            User(
                email=f"{external_id}@example.com",
                external_id=external_id if linked else None,
                organization_id=organization.id if organization else None,
                profile_id=profile.external_id if profile else None,
                role_id=role.external_id if role else None,
                is_active=is_active,
            )
        )

    def sharing_rule(
        self,
        organization: Organization,
        share_type: str,
        module_name: str = "Contacts",
        is_active: bool = True,
    ) -> CrmSharingRule:
        return self._save(
            CrmSharingRule(
                organization_id=organization.id,
                module_name=module_name,
                share_type=share_type,
                rule_data={"module": {"api_name": module_name}, "share_type": share_type},
                is_active=is_active,
            )
        )

    def contact(
        self,
        organization: Optional[Organization] = None,
        owner: Optional[User] = None,
        linked_user: Optional[User] = None,
        external_id: Optional[str] = None,
    ) -> Contact:
        return self._save(
            Contact(
                external_id=external_id or self._next("zcontact"),
                first_name="Ada",
                last_name=f"Contact {uuid.uuid4().hex[:6]}",
                owner_external_id=owner.external_id if owner else None,
                organization_id=organization.id if organization else None,
                user_id=linked_user.id if linked_user else None,
            )
        )


@pytest.fixture
def directory(db_session: Session) -> DirectoryBuilder:
    """Directory builder bound to the test session."""
    return DirectoryBuilder(db_session)


@pytest.fixture
def store(db_session: Session) -> SqlDirectoryStore:
    """SQL directory store bound to the test session."""
    return SqlDirectoryStore(db_session)


@pytest.fixture
def resolver(store: SqlDirectoryStore) -> AccessResolver:
    """Access resolver over the SQL store."""
    return AccessResolver(store)


# =====================================
# Organization Fixtures
# =====================================

@pytest.fixture
def sample_organization(directory: DirectoryBuilder) -> Organization:
    return directory.organization("Test Organization")


@pytest.fixture
def second_organization(directory: DirectoryBuilder) -> Organization:
    return directory.organization("Second Organization")


@pytest.fixture
def contacts_profile(directory: DirectoryBuilder, sample_organization: Organization) -> CrmProfile:
    """Profile with Contacts enabled."""
    return directory.profile(sample_organization, [("Contacts", True)], label="Sales")


@pytest.fixture
def no_contacts_profile(directory: DirectoryBuilder, sample_organization: Organization) -> CrmProfile:
    """Profile with Contacts explicitly disabled and Leads enabled."""
    return directory.profile(
        sample_organization,
        [("Contacts", False), ("Leads", True)],
        label="Leads Only",
    )
