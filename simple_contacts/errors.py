"""Exceptions raised by the contacts store."""

from __future__ import annotations


class StorageError(RuntimeError):
    """Base error for contacts store operations."""


class MigrationError(StorageError):
    """Raised when a schema upgrade step fails."""

    def __init__(self, version: int, name: str, cause: Exception):
        super().__init__(f"Migration {version} ({name}) failed: {cause}")
        self.version = version
        self.name = name


class PhotoError(StorageError):
    """Raised when a photo reference cannot be fetched or decoded."""
