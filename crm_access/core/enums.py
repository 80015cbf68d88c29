"""
Enumeration Module
==================

Defines enumerations used across the application.
"""

from enum import Enum


class ShareType(str, Enum):
    """Organization-wide default visibility for a module."""

    PRIVATE = "private"
    PUBLIC = "public"
    PUBLIC_READ_ONLY = "public_read_only"


class ModuleName(str, Enum):
    """CRM modules with a record variant the resolver understands."""

    CONTACTS = "Contacts"
