"""
Contact CRUD and queries.

Field values are stored exactly as given; no format checks on email or
phone. Contacts are never hard-deleted here, archiving is the only way to
take one out of the default views.

File: database/contacts.py
Created: 2026-10-17
Last Modified: 2026-10-19
"""

import logging
from typing import List, Optional

import aiosqlite

from ..models import CONTACT_FIELDS, Contact, ContactCreate, ContactUpdate
from .common import UNICODE_LOWER, execute_write, fetch_all, fetch_one, like_pattern

log = logging.getLogger(__name__)

SEARCH_COLUMNS = ("name", "organization", "job_title", "email", "telegram", "x_account")


async def add_contact(conn: aiosqlite.Connection, data: ContactCreate) -> int:
    """Insert a contact and return its new ID."""
    columns = ", ".join(CONTACT_FIELDS)
    placeholders = ", ".join("?" * len(CONTACT_FIELDS))
    cursor = await execute_write(
        conn,
        f"INSERT INTO contacts ({columns}) VALUES ({placeholders})",
        [getattr(data, column) for column in CONTACT_FIELDS],
    )
    log.debug(f"Added contact {cursor.lastrowid}: {data.name}")
    return cursor.lastrowid


async def get_contact(conn: aiosqlite.Connection, contact_id: int) -> Optional[Contact]:
    """Return the contact or None when the ID does not exist."""
    row = await fetch_one(conn, "SELECT * FROM contacts WHERE id = ?", (contact_id,))
    return Contact.from_db_dict(row) if row else None


async def list_contacts(conn: aiosqlite.Connection, include_archived: bool = False) -> List[Contact]:
    query = (
        "SELECT * FROM contacts ORDER BY name ASC, id ASC"
        if include_archived
        else "SELECT * FROM contacts WHERE is_archived = 0 ORDER BY name ASC, id ASC"
    )
    rows = await fetch_all(conn, query)
    return [Contact.from_db_dict(row) for row in rows]


async def search_contacts(conn: aiosqlite.Connection, query: str) -> List[Contact]:
    """
    Case-insensitive substring search across name, organization, job title,
    email and both social handles. Archived contacts are left out.

    An empty query matches every active contact. Case folding covers
    non-ASCII letters too ("élise" finds "Élise").
    """
    conditions = " OR ".join(
        f"{UNICODE_LOWER}({column}) LIKE ? ESCAPE '\\'" for column in SEARCH_COLUMNS
    )
    term = like_pattern((query or "").lower())
    rows = await fetch_all(
        conn,
        f"""
            SELECT * FROM contacts
            WHERE is_archived = 0 AND ({conditions})
            ORDER BY name ASC, id ASC
        """,
        [term] * len(SEARCH_COLUMNS),
    )
    return [Contact.from_db_dict(row) for row in rows]


async def list_contacts_by_organization(conn: aiosqlite.Connection, organization: str) -> List[Contact]:
    rows = await fetch_all(
        conn,
        f"""
            SELECT * FROM contacts
            WHERE is_archived = 0 AND {UNICODE_LOWER}(organization) LIKE ? ESCAPE '\\'
            ORDER BY name ASC, id ASC
        """,
        (like_pattern((organization or "").lower()),),
    )
    return [Contact.from_db_dict(row) for row in rows]


async def update_contact(conn: aiosqlite.Connection, contact_id: int, data: ContactUpdate) -> bool:
    """
    Apply the supplied fields and refresh updated_at.

    Returns:
        True if a row was changed; False if the ID is unknown or nothing was supplied
    """
    changes = data.changes()
    if not changes:
        return False

    assignments = ", ".join(f"{column} = ?" for column in changes)
    cursor = await execute_write(
        conn,
        f"UPDATE contacts SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
        [*changes.values(), contact_id],
    )
    return cursor.rowcount > 0


async def archive_contact(conn: aiosqlite.Connection, contact_id: int) -> bool:
    """
    Mark a contact archived. Returns False when the contact is unknown or
    already archived, so a second call is a reported no-op.
    """
    cursor = await execute_write(
        conn,
        """
            UPDATE contacts SET is_archived = 1, updated_at = CURRENT_TIMESTAMP
            WHERE id = ? AND is_archived = 0
        """,
        (contact_id,),
    )
    return cursor.rowcount > 0
