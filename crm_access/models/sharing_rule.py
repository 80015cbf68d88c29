"""
Sharing Rule Model
==================

Organization-wide default visibility ("data sharing") for one CRM module.

`share_type` is stored as received from the CRM and validated only at
resolution time, so an unexpected value surfaces as a configuration error
instead of being rejected by the sync job. `rule_data` keeps the raw
payload for diagnostics.

The integer primary key doubles as the insertion sequence used to break
ties when several active rules exist for the same module.
"""

from datetime import datetime, UTC
from typing import Any, Dict, Optional

from sqlalchemy import (
    JSON,
    String,
    Boolean,
    Integer,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column

from crm_access.db.base import Base


class CrmSharingRule(Base):
    """
    Sharing rule entity.

    Attributes:
        id: Autoincrement primary key (insertion order)
        organization_id: Owning organization
        module_name: CRM module API name, e.g. "Contacts"
        share_type: "private", "public" or "public_read_only"
        rule_data: Raw rule payload from the CRM
        is_active: Only active rules are consulted
        created_at: Insertion time, primary ordering key for rule selection
    """

    __tablename__ = "crm_sharing_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    module_name: Mapped[str] = mapped_column(String(100), nullable=False)
    share_type: Mapped[str] = mapped_column(String(50), nullable=False)

    rule_data: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_sharing_rules_org_module", "organization_id", "module_name"),
    )

    def __repr__(self) -> str:
        return f"<CrmSharingRule(module_name={self.module_name}, share_type={self.share_type})>"
