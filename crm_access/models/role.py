"""
CRM Role Model
==============

A node in the CRM's manager/subordinate role hierarchy.

`reports_to_id` holds the CRM id of the parent role. It is not a foreign
key: the CRM may report a parent that has not been synchronized (or that
was deleted), and the hierarchy builder treats such a role as a root.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column

from crm_access.db.base import Base


class CrmRole(Base):
    """
    Role entity.

    Attributes:
        id: Local primary key
        external_id: CRM role id
        organization_id: Owning organization
        name: Role name
        display_label: Label shown in the CRM
        reports_to_id: CRM id of the parent role (None for a root)
        is_active: Only active roles take part in hierarchy resolution
    """

    __tablename__ = "crm_roles"

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

    reports_to_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

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
        return f"<CrmRole(external_id={self.external_id}, reports_to_id={self.reports_to_id})>"
