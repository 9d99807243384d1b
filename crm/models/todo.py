"""
File: models/todo.py
Created: 2026-10-17
Last Modified: 2026-10-18
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContactTodo(BaseModel):
    """A task attached to a contact."""
    model_config = ConfigDict(validate_assignment=True, extra='ignore')

    id: int = Field(..., description="Row identity", gt=0)
    contact_id: int = Field(..., description="Owning contact")
    todo_text: str = Field(..., description="What needs doing")
    target_date: Optional[str] = Field(None, description="Optional due date")
    is_completed: bool = Field(False, description="Completion flag")
    created_at: str = Field(..., description="When the row was inserted")
    updated_at: str = Field(..., description="Refreshed on every update")

    @classmethod
    def from_db_dict(cls, data: Dict[str, Any]) -> "ContactTodo":
        data["is_completed"] = bool(data.get("is_completed") or 0)
        return cls(**data)


class ContactTodoWithName(ContactTodo):
    contact_name: str = Field(..., description="Name of the owning contact")


class TodoCreate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    contact_id: int = Field(..., description="Contact ID to add todo for")
    todo_text: str = Field(..., description="Todo description", min_length=1)
    target_date: Optional[str] = Field(
        None, description="Target completion date (ISO datetime string, e.g. '2025-06-15T10:00:00Z')"
    )


class TodoUpdate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    todo_text: Optional[str] = Field(None, description="Updated todo description", min_length=1)
    target_date: Optional[str] = Field(None, description="Updated target completion date")
    is_completed: Optional[bool] = Field(None, description="Mark todo as completed/incomplete")

    @field_validator("todo_text", "is_completed")
    @classmethod
    def _required_columns_not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be cleared")
        return value

    def changes(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        if "is_completed" in data:
            data["is_completed"] = 1 if data["is_completed"] else 0
        return data


class TodoFilters(BaseModel):
    """
    Filters for listing todos. All supplied filters are combined with AND.

    Date bounds are inclusive and compared as text against the stored column,
    so they should use the same format as the values they are compared to.
    """
    model_config = ConfigDict(extra='forbid')

    contact_id: Optional[int] = Field(None, description="Only todos for this contact")
    include_completed: bool = Field(False, description="Include completed todos")
    target_date_before: Optional[str] = Field(None, description="Target date upper bound")
    target_date_after: Optional[str] = Field(None, description="Target date lower bound")
    created_before: Optional[str] = Field(None, description="Creation date upper bound")
    created_after: Optional[str] = Field(None, description="Creation date lower bound")
