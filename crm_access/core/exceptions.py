"""
Centralized Exception Handling Module
=====================================

Defines custom exception classes for the application.

Two families matter to callers of the access resolver:
- NotFoundError: the record cannot be located in either identifier space
- ConfigurationError: the directory is not set up to answer the question
  (organization unknown, sharing rule missing, unrecognized share type)

Fail-closed outcomes (no owner, owner without access) are results, not
exceptions.

Usage:
    raise RecordNotFoundError(module_name="Contacts", record_id="c-1")
    raise SharingRuleNotFoundError(module_name="Contacts", organization_id="org-1")
"""

from typing import Any, Dict, Optional
from fastapi import status


class CRMAccessException(Exception):
    """
    Base exception class for the access service.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ==========================
# Resource Exceptions
# ==========================

class NotFoundError(CRMAccessException):
    """Raised when a resource is not found."""

    def __init__(self, resource: str = "Resource", identifier: Optional[str] = None):
        message = f"{resource} not found"
        details = {"resource": resource}
        if identifier:
            details["identifier"] = identifier
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
        )


class RecordNotFoundError(NotFoundError):
    """Raised when a record exists in neither the local nor the CRM identifier space."""

    def __init__(self, module_name: str, record_id: str):
        super().__init__(resource=f"{module_name} record", identifier=record_id)
        self.message = f"Record not found: {module_name} with ID {record_id}"
        self.details["module"] = module_name


# ==========================
# Configuration Exceptions
# ==========================

class ConfigurationError(CRMAccessException):
    """Raised when directory data needed for a decision is missing or invalid."""

    def __init__(
        self,
        message: str = "Directory configuration error",
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY,
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            details=details,
        )


class OrganizationUndeterminedError(ConfigurationError):
    """Raised when a record's organization cannot be derived."""

    def __init__(self, module_name: str, record_id: str):
        super().__init__(
            message="Could not determine organization from record",
            details={"module": module_name, "record_id": record_id},
        )


class SharingRuleNotFoundError(ConfigurationError):
    """Raised when the organization has no active sharing rule for the module."""

    def __init__(self, module_name: str, organization_id: str):
        super().__init__(
            message=f'No sharing rule found for module "{module_name}" in organization',
            details={"module": module_name, "organization_id": organization_id},
        )


class UnsupportedShareTypeError(ConfigurationError):
    """Raised when a sharing rule carries a share type the resolver does not know."""

    def __init__(self, share_type: Optional[str], module_name: str):
        super().__init__(
            message=f"Unsupported share type: {share_type}",
            details={"share_type": share_type, "module": module_name},
        )


class UnsupportedModuleError(ConfigurationError):
    """Raised when access resolution is requested for a module without a record variant."""

    def __init__(self, module_name: str):
        super().__init__(
            message=f"Unsupported module type: {module_name}",
            details={"module": module_name},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

