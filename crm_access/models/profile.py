"""
CRM Profile Models
==================

A profile is a permission template assigned to users independently of
their role. Each profile carries one permission entry per CRM permission;
entries are tagged with the module they apply to.
"""

import uuid
from datetime import datetime
from typing import List

from sqlalchemy import (
    String,
    Boolean,
    DateTime,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from crm_access.db.base import Base


class CrmProfile(Base):
    """
    Profile entity.

    Attributes:
        id: Local primary key
        external_id: CRM profile id (users reference this)
        organization_id: Owning organization
        name: Profile name
        display_label: Label shown in the CRM
        permissions: Permission entries (eager loaded)
    """

    __tablename__ = "crm_profiles"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    external_id: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
    )

    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    display_label: Mapped[str] = mapped_column(String(255), nullable=False)

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

    permissions: Mapped[List["CrmProfilePermission"]] = relationship(
        "CrmProfilePermission",
        back_populates="profile",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CrmProfilePermission.created_at",
    )

    def __repr__(self) -> str:
        return f"<CrmProfile(external_id={self.external_id}, display_label={self.display_label})>"


class CrmProfilePermission(Base):
    """
    One (module, enabled) entry of a profile.

    Uniqueness is on the CRM permission id; several entries may name the
    same module (view, create, edit...), and any enabled one grants access.
    """

    __tablename__ = "crm_profile_permissions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    profile_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("crm_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    external_id: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    module: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

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

    profile: Mapped["CrmProfile"] = relationship("CrmProfile", back_populates="permissions")

    __table_args__ = (
        UniqueConstraint("profile_id", "external_id", name="uq_profile_permission"),
    )

    def __repr__(self) -> str:
        return f"<CrmProfilePermission(module={self.module}, enabled={self.enabled})>"
