"""
Exceptions raised by the contact store and the tool layer.

File: errors.py
Created: 2026-10-17
Last Modified: 2026-10-17
"""

from typing import Optional, Union


class CRMError(Exception):
    """Base error carrying the failing operation and the identity it addressed."""

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        identity: Optional[Union[int, str]] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.identity = identity


class ContactNotFoundError(CRMError):
    def __init__(self, contact_id: int, *, operation: Optional[str] = None):
        super().__init__(
            f"Contact with ID {contact_id} not found",
            operation=operation,
            identity=contact_id,
        )


class EntryNotFoundError(CRMError):
    def __init__(self, entry_id: int, *, operation: Optional[str] = None):
        super().__init__(
            f"Contact entry with ID {entry_id} not found",
            operation=operation,
            identity=entry_id,
        )


class TodoNotFoundError(CRMError):
    def __init__(self, todo_id: int, *, operation: Optional[str] = None):
        super().__init__(
            f"Todo with ID {todo_id} not found",
            operation=operation,
            identity=todo_id,
        )


class UnknownToolError(CRMError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", operation=name)


class ArchiveNotFoundError(CRMError):
    def __init__(self, archive_name: str):
        super().__init__(
            f"Archive not found: {archive_name}",
            operation="restore",
            identity=archive_name,
        )


__all__ = [
    "CRMError",
    "ContactNotFoundError",
    "EntryNotFoundError",
    "TodoNotFoundError",
    "UnknownToolError",
    "ArchiveNotFoundError",
]
