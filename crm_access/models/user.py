"""
User Model
==========

A CRM user mirrored into the local directory.

The directory-sync process creates and updates these rows; the access
resolver only reads them. Profile and role assignments reference the
CRM-issued identifiers of the profile and role, so a user can point at a
profile or role that has not been synchronized yet.

Database Indexes:
- Primary key: id
- Unique index: email
- Unique index: external_id (CRM user id)
- Index: organization_id, role_id
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    String,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from crm_access.db.base import Base

if TYPE_CHECKING:
    from crm_access.models.organization import Organization


class User(Base):
    """
    User entity.

    Attributes:
        id: Local primary key
        email: Unique email address
        name: Display name
        external_id: CRM user id (nullable until the user is linked)
        organization_id: Foreign key to organization (nullable)
        profile_id: CRM id of the assigned profile (nullable)
        role_id: CRM id of the assigned role (nullable)
        is_active: Account active status
    """

    __tablename__ = "users"

    def __init__(self, **kwargs):
        """Initialize User with Python-level defaults."""
        if "is_active" not in kwargs:
            kwargs["is_active"] = True
        super().__init__(**kwargs)

    # ==========================
    # Primary Key
    # ==========================
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    # ==========================
    # Identity
    # ==========================
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    external_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        unique=True,
        nullable=True,
        index=True,
    )

    # ==========================
    # Membership
    # ==========================
    organization_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    organization: Mapped[Optional["Organization"]] = relationship(
        "Organization",
        back_populates="users",
    )

    profile_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    role_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    # ==========================
    # Timestamps
    # ==========================
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_users_org_role", "organization_id", "role_id"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, external_id={self.external_id}, role_id={self.role_id})>"
