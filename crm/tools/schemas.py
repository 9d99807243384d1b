"""
Argument and result records for the tool layer.

File: tools/schemas.py
Created: 2026-10-18
Last Modified: 2026-10-18
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import ContactUpdate, EntryUpdate, TodoUpdate


class ToolResult(BaseModel):
    """What every tool call hands back to the transport."""

    ok: bool = Field(..., description="False when the call failed")
    message: str = Field(..., description="Human-readable summary")
    data: Any = Field(None, description="JSON-serializable payload")

    @classmethod
    def success(cls, message: str, data: Any = None) -> "ToolResult":
        return cls(ok=True, message=message, data=data)

    @classmethod
    def failure(cls, message: str, data: Any = None) -> "ToolResult":
        return cls(ok=False, message=message, data=data)


class _Args(BaseModel):
    model_config = ConfigDict(extra='forbid')


class NoArgs(_Args):
    pass


class ContactIdArgs(_Args):
    id: int = Field(..., description="Contact ID")


class ListContactsArgs(_Args):
    include_archived: bool = Field(False, description="Whether to include archived contacts (default: false)")


class SearchContactsArgs(_Args):
    query: str = Field(
        ..., description="Search query to match against name, organization, job title, email, telegram, or x_account"
    )


class OrganizationArgs(_Args):
    organization: str = Field(..., description="Organization name to filter contacts by")


class UpdateContactArgs(ContactUpdate):
    id: int = Field(..., description="Contact ID to update")

    def to_update(self) -> ContactUpdate:
        return ContactUpdate(**self.model_dump(exclude_unset=True, exclude={"id"}))


class UpdateEntryArgs(EntryUpdate):
    entry_id: int = Field(..., description="ID of the contact entry to update")

    def to_update(self) -> EntryUpdate:
        return EntryUpdate(**self.model_dump(exclude_unset=True, exclude={"entry_id"}))


class EntryIdArgs(_Args):
    entry_id: int = Field(..., description="ID of the contact entry")


class HistoryArgs(_Args):
    contact_id: int = Field(..., description="Contact ID to get history for")
    limit: Optional[int] = Field(None, description="Maximum number of entries to return (default: all)", ge=0)


class RecentActivitiesArgs(_Args):
    limit: int = Field(10, description="Maximum number of recent activities to return (default: 10)", ge=0)


class ExportContactsArgs(_Args):
    include_archived: bool = Field(False, description="Whether to include archived contacts (default: false)")


class ExportHistoryArgs(_Args):
    contact_id: Optional[int] = Field(
        None, description="Specific contact ID to export history for (omit for all contacts)"
    )


class UpdateTodoArgs(TodoUpdate):
    todo_id: int = Field(..., description="Todo ID to update")

    def to_update(self) -> TodoUpdate:
        return TodoUpdate(**self.model_dump(exclude_unset=True, exclude={"todo_id"}))


class TodoIdArgs(_Args):
    todo_id: int = Field(..., description="Todo ID")


class GetTodosArgs(_Args):
    contact_id: Optional[int] = Field(None, description="Filter by specific contact ID")
    include_completed: bool = Field(False, description="Include completed todos (default: false)")
    days_ahead: Optional[int] = Field(None, description="Show todos due within X days", ge=0)
    days_old: Optional[int] = Field(None, description="Show todos created more than X days ago", ge=0)
