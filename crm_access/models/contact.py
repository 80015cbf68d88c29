"""
Contact Model
=============

A CRM contact record mirrored locally.

Ownership can be known three ways, in decreasing order of preference:
- `owner_external_id` / `organization_id` stored directly on the row
- the linked local user (`user_id`)
- the user linked to the row found by the record's CRM id

Database Indexes:
- Primary key: id
- Unique index: external_id (CRM record id)
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from crm_access.db.base import Base

if TYPE_CHECKING:
    from crm_access.models.user import User


class Contact(Base):
    """
    Contact entity.

    Attributes:
        id: Local primary key
        external_id: CRM record id
        owner_external_id: CRM id of the owning user, when synchronized
        organization_id: Owning organization, when synchronized
        user_id: Linked local user
    """

    __tablename__ = "contacts"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    external_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        unique=True,
        nullable=True,
        index=True,
    )

    first_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # ==========================
    # Ownership
    # ==========================
    owner_external_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    organization_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    user_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    user: Mapped[Optional["User"]] = relationship("User", lazy="joined")

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

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

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, external_id={self.external_id})>"
