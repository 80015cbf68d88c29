"""
Permission Routes Module
========================

HTTP surface of the access resolver.

Endpoints:
- POST /permissions/check: who can view a record
- GET /permissions/summary/{organization_id}/{module_name}: diagnostic view

Errors raised by the resolver are rendered by the application's
CRMAccessException handler:
- NotFoundError -> 404
- ConfigurationError -> 422 (400 for an unsupported module)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from crm_access.db.session import get_db
from crm_access.core.logging import get_logger
from crm_access.directory.store import SqlDirectoryStore
from crm_access.schemas.permissions import (
    PermissionCheckRequest,
    PermissionSummary,
    ResolutionResult,
)
from crm_access.services.access_resolver import AccessResolver

# Initialize logger
logger = get_logger(__name__)


# =====================================
# Router Setup
# =====================================

router = APIRouter(
    prefix="/permissions",
    tags=["Permissions"],
    responses={
        404: {"description": "Record not found"},
        422: {"description": "Directory configuration error"},
    },
)


def get_access_resolver(db: Session = Depends(get_db)) -> AccessResolver:
    """Build a resolver over the request's database session."""
    return AccessResolver(SqlDirectoryStore(db))


# =====================================
# Endpoints
# =====================================

@router.post(
    "/check",
    response_model=ResolutionResult,
    summary="Check Record Access",
    description="List the CRM users who can view a record under the organization's sharing rules.",
)
def check_permissions(
    payload: PermissionCheckRequest,
    resolver: AccessResolver = Depends(get_access_resolver),
) -> ResolutionResult:
    """
    Resolve record visibility.

    Args:
        payload: Module name and record id (local or CRM)
        resolver: Access resolver dependency

    Returns:
        ResolutionResult serialized with camelCase keys
    """
    logger.info("permission_check_requested", module=payload.module_name, record_id=payload.record_id)
    return resolver.resolve(payload.module_name, payload.record_id)


@router.get(
    "/summary/{organization_id}/{module_name}",
    response_model=PermissionSummary,
    summary="Permission Summary",
    description="Sharing rule, granting profiles and role hierarchy for a module.",
)
def permission_summary(
    organization_id: str,
    module_name: str,
    resolver: AccessResolver = Depends(get_access_resolver),
) -> PermissionSummary:
    logger.info("permission_summary_requested", organization_id=organization_id, module=module_name)
    return resolver.permission_summary(organization_id, module_name)
