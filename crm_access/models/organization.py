"""
Organization Model
==================

Represents a CRM organization (tenant) whose directory has been
synchronized locally.

Each organization:
- Owns users, roles, profiles and sharing rules
- Acts as the boundary for every access decision

Database Indexes:
- Primary key: id
- Unique index: external_id (CRM organization id)
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from crm_access.db.base import Base

if TYPE_CHECKING:
    from crm_access.models.user import User


class Organization(Base):
    """
    Organization Entity (Tenant Root).

    Attributes:
        id: Local primary key
        external_id: Organization id issued by the CRM
        name: Display name
        is_active: Whether the organization is still synchronized
        users: Relationship to users (lazy loaded)
    """

    __tablename__ = "organizations"

    # ==========================
    # Primary Key
    # ==========================
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    # ==========================
    # Organization Info
    # ==========================
    external_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

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

    # ==========================
    # Relationships
    # ==========================
    users: Mapped[List["User"]] = relationship(
        "User",
        back_populates="organization",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, external_id={self.external_id})>"
