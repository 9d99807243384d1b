"""
Interaction history (contact entries).

Live queries return newest interactions first. Deleting a contact's entry
never touches the contact, and nothing here deletes entries when a contact
goes away.

File: database/entries.py
Created: 2026-10-18
Last Modified: 2026-10-18
"""

from typing import List, Optional

import aiosqlite

from ..models import ContactEntry, ContactEntryWithName, EntryCreate, EntryUpdate
from .common import execute_write, fetch_all, fetch_one


async def add_entry(conn: aiosqlite.Connection, data: EntryCreate) -> int:
    """
    Record an interaction. The caller supplies the interaction date; it is
    never filled in from the clock.

    Returns:
        ID of the new entry
    """
    cursor = await execute_write(
        conn,
        """
            INSERT INTO contact_entries (contact_id, entry_type, subject, content, entry_date)
            VALUES (?, ?, ?, ?, ?)
        """,
        (data.contact_id, data.entry_type, data.subject, data.content, data.interaction_date),
    )
    return cursor.lastrowid


async def get_entry(conn: aiosqlite.Connection, entry_id: int) -> Optional[ContactEntryWithName]:
    row = await fetch_one(
        conn,
        """
            SELECT ce.*, c.name AS contact_name
            FROM contact_entries ce
            JOIN contacts c ON ce.contact_id = c.id
            WHERE ce.id = ?
        """,
        (entry_id,),
    )
    return ContactEntryWithName(**row) if row else None


async def get_history(
    conn: aiosqlite.Connection, contact_id: int, limit: Optional[int] = None
) -> List[ContactEntry]:
    """
    Entries for one contact, newest interaction first.

    Args:
        contact_id: Owning contact
        limit: Maximum number of entries (None returns all)
    """
    query = """
        SELECT * FROM contact_entries
        WHERE contact_id = ?
        ORDER BY entry_date DESC, id DESC
    """
    params: list = [contact_id]
    if limit is not None:
        query += " LIMIT ?"
        params.append(max(limit, 0))

    rows = await fetch_all(conn, query, params)
    return [ContactEntry.from_db_dict(row) for row in rows]


async def get_recent(conn: aiosqlite.Connection, limit: int = 10) -> List[ContactEntryWithName]:
    """Most recent interactions across all active contacts."""
    rows = await fetch_all(
        conn,
        """
            SELECT ce.*, c.name AS contact_name
            FROM contact_entries ce
            JOIN contacts c ON ce.contact_id = c.id
            WHERE c.is_archived = 0
            ORDER BY ce.entry_date DESC, ce.id DESC
            LIMIT ?
        """,
        (max(limit, 0),),
    )
    return [ContactEntryWithName(**row) for row in rows]


async def update_entry(conn: aiosqlite.Connection, entry_id: int, data: EntryUpdate) -> bool:
    """Apply supplied fields only; False if nothing was supplied or the ID is unknown."""
    changes = data.changes()
    if not changes:
        return False

    assignments = ", ".join(f"{column} = ?" for column in changes)
    cursor = await execute_write(
        conn,
        f"UPDATE contact_entries SET {assignments} WHERE id = ?",
        [*changes.values(), entry_id],
    )
    return cursor.rowcount > 0


async def delete_entry(conn: aiosqlite.Connection, entry_id: int) -> bool:
    cursor = await execute_write(conn, "DELETE FROM contact_entries WHERE id = ?", (entry_id,))
    return cursor.rowcount > 0


async def get_chronological_history(
    conn: aiosqlite.Connection, contact_id: Optional[int] = None
) -> List[ContactEntryWithName]:
    """
    Entries oldest first with the owning contact's name, for one contact or
    for everyone (archived contacts included).
    """
    query = """
        SELECT ce.*, c.name AS contact_name
        FROM contact_entries ce
        JOIN contacts c ON ce.contact_id = c.id
    """
    params: list = []
    if contact_id is not None:
        query += " WHERE ce.contact_id = ?"
        params.append(contact_id)
    query += " ORDER BY ce.entry_date ASC, ce.id ASC"

    rows = await fetch_all(conn, query, params)
    return [ContactEntryWithName(**row) for row in rows]
