"""
CSV rendering of contacts and interaction history.

Every text cell is quoted, with embedded quotes doubled, even when it holds
nothing special; numeric IDs are written bare. Header rows are always
emitted, so an empty store still renders a well-formed file.

File: export/csv_export.py
Created: 2026-10-18
Last Modified: 2026-10-19
"""

import csv
import io
from typing import Any, Iterable, List, Optional

import aiosqlite

from ..database import get_chronological_history, get_contact, get_history, list_contacts
from ..errors import ContactNotFoundError
from ..models import Contact, ContactEntry

CONTACT_HEADERS = [
    "ID", "Name", "Organization", "Job Title", "Email", "Phone",
    "Telegram", "X Account", "Notes", "Archived", "Created", "Updated",
]
HISTORY_HEADERS = ["Entry Date", "Entry ID", "Contact Name", "Entry Type", "Subject", "Content", "Created"]
FULL_HEADERS = CONTACT_HEADERS + ["History"]

CONTACT_INFO_MARKER = "=== CONTACT INFORMATION ==="
CONTACT_HISTORY_MARKER = "=== CONTACT HISTORY ==="
HISTORY_SEPARATOR = " / "


class _CsvBuffer:
    """In-memory CSV text with separate writers for headers and data rows."""

    def __init__(self):
        self._buffer = io.StringIO()
        self._plain = csv.writer(self._buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        self._quoted = csv.writer(self._buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")

    def header(self, cells: Iterable[str]) -> None:
        self._plain.writerow(cells)

    def row(self, cells: Iterable[Any]) -> None:
        self._quoted.writerow([_cell(value) for value in cells])

    def blank(self) -> None:
        self._plain.writerow([])

    def getvalue(self) -> str:
        return self._buffer.getvalue()


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, int):
        return value
    return str(value)


def _contact_cells(contact: Contact) -> List[Any]:
    return [
        contact.id,
        contact.name,
        contact.organization,
        contact.job_title,
        contact.email,
        contact.phone,
        contact.telegram,
        contact.x_account,
        contact.notes,
        contact.is_archived,
        contact.created_at,
        contact.updated_at,
    ]


def format_history_entry(entry: ContactEntry) -> str:
    """One entry as ``date [kind] subject: content`` (": content" only if there is content)."""
    text = f"{entry.entry_date} [{entry.entry_type}] {entry.subject}"
    if entry.content:
        text += f": {entry.content}"
    return text


async def export_contacts(conn: aiosqlite.Connection, include_archived: bool = False) -> str:
    """One row per contact, ordered by name."""
    out = _CsvBuffer()
    out.header(CONTACT_HEADERS)
    for contact in await list_contacts(conn, include_archived):
        out.row(_contact_cells(contact))
    return out.getvalue()


async def export_contact_history(conn: aiosqlite.Connection, contact_id: Optional[int] = None) -> str:
    """
    Interaction history, oldest first.

    With a contact ID the output starts with a key/value block describing the
    contact, a blank line and a marker before the history rows. Without one,
    only the history rows for every contact are written.

    Raises:
        ContactNotFoundError: ``contact_id`` does not exist
    """
    out = _CsvBuffer()

    if contact_id is not None:
        contact = await get_contact(conn, contact_id)
        if contact is None:
            raise ContactNotFoundError(contact_id, operation="export_contact_history")

        out.header([CONTACT_INFO_MARKER])
        for key, value in (
            ("Name", contact.name),
            ("Organization", contact.organization),
            ("Job Title", contact.job_title),
            ("Email", contact.email),
            ("Phone", contact.phone),
            ("Telegram", contact.telegram),
            ("X Account", contact.x_account),
            ("Notes", contact.notes),
            ("Created", contact.created_at),
            ("Updated", contact.updated_at),
        ):
            out.row([key, value])
        out.blank()
        out.header([CONTACT_HISTORY_MARKER])

    out.header(HISTORY_HEADERS)
    for entry in await get_chronological_history(conn, contact_id):
        out.row([
            entry.entry_date,
            entry.id,
            entry.contact_name,
            entry.entry_type,
            entry.subject,
            entry.content,
            entry.created_at,
        ])
    return out.getvalue()


async def export_full(conn: aiosqlite.Connection) -> str:
    """
    Every contact, archived ones included, with its whole history folded
    into a trailing History cell (newest entry first).
    """
    out = _CsvBuffer()
    out.header(FULL_HEADERS)
    for contact in await list_contacts(conn, include_archived=True):
        history = await get_history(conn, contact.id)
        history_cell = HISTORY_SEPARATOR.join(format_history_entry(entry) for entry in history)
        out.row(_contact_cells(contact) + [history_cell])
    return out.getvalue()
