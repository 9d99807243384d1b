"""
Contact record models.

File: models/contact.py
Created: 2026-10-17
Last Modified: 2026-10-17
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Columns a caller may set on create/update, in storage order
CONTACT_FIELDS = (
    "name",
    "organization",
    "job_title",
    "email",
    "phone",
    "telegram",
    "x_account",
    "notes",
)


class Contact(BaseModel):
    """A person or organization as stored in the contacts table."""
    model_config = ConfigDict(validate_assignment=True, extra='ignore')

    id: int = Field(..., description="Row identity, assigned on creation and never reused", gt=0)
    name: str = Field(..., description="Full name of the contact")
    organization: Optional[str] = Field(None, description="Organization/company name")
    job_title: Optional[str] = Field(None, description="Job title or position")
    email: Optional[str] = Field(None, description="Email address (stored as given)")
    phone: Optional[str] = Field(None, description="Phone number (stored as given)")
    telegram: Optional[str] = Field(None, description="Telegram username or handle")
    x_account: Optional[str] = Field(None, description="X (Twitter) username or handle")
    notes: Optional[str] = Field(None, description="Free-form notes")
    is_archived: bool = Field(False, description="Soft-removed from default listings")
    created_at: str = Field(..., description="Set once when the row is inserted")
    updated_at: str = Field(..., description="Refreshed on every mutation")

    @classmethod
    def from_db_dict(cls, data: Dict[str, Any]) -> "Contact":
        """Create Contact instance from database dictionary"""
        data["is_archived"] = bool(data.get("is_archived") or 0)
        return cls(**data)


class ContactCreate(BaseModel):
    """Fields accepted when creating a contact. Only ``name`` is required."""
    model_config = ConfigDict(extra='forbid')

    name: str = Field(..., description="Full name of the contact", min_length=1)
    organization: Optional[str] = Field(None, description="Organization/company name")
    job_title: Optional[str] = Field(None, description="Job title or position")
    email: Optional[str] = Field(None, description="Email address")
    phone: Optional[str] = Field(None, description="Phone number")
    telegram: Optional[str] = Field(None, description="Telegram username or handle")
    x_account: Optional[str] = Field(None, description="X (Twitter) username or handle")
    notes: Optional[str] = Field(None, description="Additional notes about the contact")


class ContactUpdate(BaseModel):
    """Partial contact update; only fields explicitly set are written."""
    model_config = ConfigDict(extra='forbid')

    name: Optional[str] = Field(None, description="Updated full name", min_length=1)
    organization: Optional[str] = Field(None, description="Updated organization/company name")
    job_title: Optional[str] = Field(None, description="Updated job title or position")
    email: Optional[str] = Field(None, description="Updated email address")
    phone: Optional[str] = Field(None, description="Updated phone number")
    telegram: Optional[str] = Field(None, description="Updated Telegram username or handle")
    x_account: Optional[str] = Field(None, description="Updated X (Twitter) username or handle")
    notes: Optional[str] = Field(None, description="Updated notes about the contact")

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("name cannot be cleared")
        return value

    def changes(self) -> Dict[str, Any]:
        """Supplied fields only, keyed by column name."""
        return self.model_dump(exclude_unset=True)
