"""
Permission Schemas Module
=========================

Pydantic models for access resolution requests and results.

Request and response bodies use camelCase keys on the wire
(`moduleName`, `recordId`, `userIds`, `accessType`, `hierarchyUsed`) and
accept snake_case names in Python.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from crm_access.core.enums import ShareType
from crm_access.schemas.directory import ProfilePermission, SharingRule


class CamelModel(BaseModel):
    """Base schema serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==========================
# Request Schemas
# ==========================

class PermissionCheckRequest(CamelModel):
    """Body of a permission check."""

    module_name: str = Field(
        ...,
        min_length=1,
        description="CRM module API name",
    )
    record_id: str = Field(
        ...,
        min_length=1,
        description="Local record id or CRM record id",
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "moduleName": "Contacts",
                "recordId": "4876876000000345001",
            }
        },
    )


# ==========================
# Result Schemas
# ==========================

class ResolutionResult(CamelModel):
    """
    Outcome of one access resolution.

    `user_ids` has set semantics with first-seen order: duplicates are
    dropped on construction.
    """

    user_ids: List[str] = Field(default_factory=list, description="CRM ids of users who can view the record")
    access_type: ShareType = Field(..., description="Share type that governed the decision")
    hierarchy_used: bool = Field(default=False, description="Whether the role hierarchy was traversed")

    @field_validator("user_ids")
    @classmethod
    def dedupe_user_ids(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))


class HierarchyNode(CamelModel):
    """A role placed in the organization's hierarchy forest."""

    role_id: str
    display_label: str = ""
    reports_to: Optional[str] = None
    level: int = 0
    children: List[str] = Field(default_factory=list)


class ProfileAccessSummary(CamelModel):
    """A profile that grants the module, with the entries that do so."""

    id: str
    display_label: str
    permissions: List[ProfilePermission]


class PermissionSummary(CamelModel):
    """Diagnostic view of everything that feeds a module's access decisions."""

    organization_id: str
    module_name: str
    sharing_rule: Optional[SharingRule] = None
    profiles_with_module_access: List[ProfileAccessSummary] = Field(default_factory=list)
    role_hierarchy: List[HierarchyNode] = Field(default_factory=list)
