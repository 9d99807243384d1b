"""
Interaction log (contact entry) models.

The interaction date is always supplied by the caller: the log records when
something happened, not when it was typed in.

File: models/entry.py
Created: 2026-10-17
Last Modified: 2026-10-17
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EntryType(str, Enum):
    CALL = "call"
    EMAIL = "email"
    MEETING = "meeting"
    NOTE = "note"
    TASK = "task"


class ContactEntry(BaseModel):
    """A dated interaction belonging to one contact."""
    model_config = ConfigDict(validate_assignment=True, use_enum_values=True, extra='ignore')

    id: int = Field(..., description="Row identity", gt=0)
    contact_id: int = Field(..., description="Owning contact")
    entry_type: EntryType = Field(..., description="call, email, meeting, note or task")
    subject: str = Field(..., description="Short subject line")
    content: Optional[str] = Field(None, description="Free-form details")
    entry_date: str = Field(..., description="When the interaction took place (caller-supplied)")
    created_at: str = Field(..., description="When the row was inserted")

    @classmethod
    def from_db_dict(cls, data: Dict[str, Any]) -> "ContactEntry":
        return cls(**data)


class ContactEntryWithName(ContactEntry):
    """Entry joined with its owning contact's name."""

    contact_name: str = Field(..., description="Name of the owning contact")


class EntryCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, extra='forbid')

    contact_id: int = Field(..., description="ID of the contact this entry belongs to")
    entry_type: EntryType = Field(..., description="Type of interaction")
    subject: str = Field(..., description="Brief subject or title", min_length=1)
    content: Optional[str] = Field(None, description="Detailed notes about the interaction")
    interaction_date: str = Field(
        ...,
        description="When the interaction happened (ISO datetime string, e.g. '2025-06-15T10:00:00Z')",
        min_length=1,
    )


class EntryUpdate(BaseModel):
    """Partial entry update; only fields explicitly set are written."""
    model_config = ConfigDict(use_enum_values=True, extra='forbid')

    entry_type: Optional[EntryType] = Field(None, description="Updated interaction type")
    subject: Optional[str] = Field(None, description="Updated subject", min_length=1)
    content: Optional[str] = Field(None, description="Updated content")
    interaction_date: Optional[str] = Field(None, description="Corrected interaction date", min_length=1)

    @field_validator("entry_type", "subject", "interaction_date")
    @classmethod
    def _required_columns_not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be cleared")
        return value

    def changes(self) -> Dict[str, Any]:
        """Supplied fields keyed by column name (interaction_date maps to entry_date)."""
        data = self.model_dump(exclude_unset=True)
        if "interaction_date" in data:
            data["entry_date"] = data.pop("interaction_date")
        return data
