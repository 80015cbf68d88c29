"""
Directory store package.

Usage:
    from crm_access.directory import SqlDirectoryStore
"""

from .store import DirectoryStore, SqlDirectoryStore

__all__ = ["DirectoryStore", "SqlDirectoryStore"]
