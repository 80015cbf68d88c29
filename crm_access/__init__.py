"""
CRM record access resolution service.

Mirrors a CRM's record-level visibility rules (sharing rules, profile
module permissions, role hierarchy) over a locally synchronized directory.
"""

__version__ = "1.0.0"
