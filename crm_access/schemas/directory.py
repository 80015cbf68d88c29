"""
Directory Schemas Module
========================

Immutable snapshots of directory rows handed to the access engine.

The engine never sees ORM objects: the directory store converts rows into
these models (`from_attributes=True`), so the resolution code works the
same against any store implementation.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DirectorySnapshot(BaseModel):
    """Base for read-only directory value objects."""

    model_config = ConfigDict(from_attributes=True, frozen=True)


class DirectoryUser(DirectorySnapshot):
    """A CRM user with the membership data the engine needs."""

    id: str = Field(..., description="Local user id")
    external_id: Optional[str] = Field(default=None, description="CRM user id")
    organization_id: Optional[str] = Field(default=None, description="Organization id")
    profile_id: Optional[str] = Field(default=None, description="CRM id of the assigned profile")
    role_id: Optional[str] = Field(default=None, description="CRM id of the assigned role")
    is_active: bool = True


class DirectoryRole(DirectorySnapshot):
    """A role node as stored, before hierarchy construction."""

    external_id: str = Field(..., description="CRM role id")
    organization_id: str
    display_label: str = ""
    reports_to_id: Optional[str] = Field(default=None, description="CRM id of the parent role")


class ProfilePermission(DirectorySnapshot):
    """One (module, enabled) entry of a profile."""

    external_id: str = ""
    name: str = ""
    module: str
    enabled: bool


class Profile(DirectorySnapshot):
    """A profile together with its permission entries."""

    id: str
    external_id: str
    organization_id: str
    display_label: str = ""
    permissions: List[ProfilePermission] = Field(default_factory=list)


class SharingRule(DirectorySnapshot):
    """The organization's default sharing policy for one module."""

    id: int
    organization_id: str
    module_name: str
    share_type: str
    rule_data: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
