"""
Tool handlers: one per named operation exposed to callers.

Handlers check existence where a friendly message is wanted, call into the
store and shape a ToolResult. Exports are written to the export directory
and reported by name, path and size.

File: tools/handlers.py
Created: 2026-10-18
Last Modified: 2026-10-19
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path

from .. import database as db
from ..errors import ContactNotFoundError, EntryNotFoundError, TodoNotFoundError
from ..export import export_contact_history, export_contacts, export_full
from ..models import ContactCreate, EntryCreate, TodoCreate, TodoFilters
from .registry import ToolContext, tool
from .schemas import (
    ContactIdArgs,
    EntryIdArgs,
    ExportContactsArgs,
    ExportHistoryArgs,
    GetTodosArgs,
    HistoryArgs,
    ListContactsArgs,
    NoArgs,
    OrganizationArgs,
    RecentActivitiesArgs,
    SearchContactsArgs,
    TodoIdArgs,
    ToolResult,
    UpdateContactArgs,
    UpdateEntryArgs,
    UpdateTodoArgs,
)

log = logging.getLogger(__name__)

# Stored created_at/updated_at values use SQLite's CURRENT_TIMESTAMP format
SQLITE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
ISO_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _today() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def _save_export(context: ToolContext, filename: str, content: str) -> Path:
    export_dir = context.settings.export_dir
    export_dir.mkdir(parents=True, exist_ok=True)
    path = export_dir / filename
    path.write_text(content, encoding="utf-8")
    log.info(f"Wrote export {path} ({len(content)} characters)")
    return path


# -----------------------------------------------------------------------------
# Contacts
# -----------------------------------------------------------------------------


@tool(
    "add_contact",
    ContactCreate,
    action="add contact",
    description="Create a new contact in the CRM system with personal and professional information",
)
async def add_contact(context: ToolContext, args: ContactCreate) -> ToolResult:
    contact_id = await db.add_contact(context.conn, args)
    contact = await db.get_contact(context.conn, contact_id)
    return ToolResult.success(
        f'Successfully added contact "{args.name}" with ID {contact_id}',
        contact.model_dump() if contact else None,
    )


@tool(
    "list_contacts",
    ListContactsArgs,
    action="list contacts",
    description="List all active contacts in the CRM system with optional archived contacts",
)
async def list_contacts(context: ToolContext, args: ListContactsArgs) -> ToolResult:
    contacts = await db.list_contacts(context.conn, args.include_archived)
    if not contacts:
        return ToolResult.success("No contacts found in the database.", [])
    return ToolResult.success(
        f"Found {len(contacts)} contact(s)",
        [contact.model_dump() for contact in contacts],
    )


@tool(
    "get_contact_details",
    ContactIdArgs,
    action="get contact details",
    description="Retrieve complete information for a specific contact by ID",
)
async def get_contact_details(context: ToolContext, args: ContactIdArgs) -> ToolResult:
    contact = await db.get_contact(context.conn, args.id)
    if contact is None:
        raise ContactNotFoundError(args.id, operation="get_contact_details")
    return ToolResult.success(f'Contact details for "{contact.name}"', contact.model_dump())


@tool(
    "search_contacts",
    SearchContactsArgs,
    action="search contacts",
    description="Search for contacts by name, organization, job title, email, or social handles",
)
async def search_contacts(context: ToolContext, args: SearchContactsArgs) -> ToolResult:
    contacts = await db.search_contacts(context.conn, args.query)
    if not contacts:
        return ToolResult.success(f'No contacts found matching "{args.query}"', [])
    return ToolResult.success(
        f'Found {len(contacts)} contact(s) matching "{args.query}"',
        [contact.model_dump() for contact in contacts],
    )


@tool(
    "list_contacts_by_organization",
    OrganizationArgs,
    action="list contacts by organization",
    description="Filter and list all contacts belonging to a specific organization",
)
async def list_contacts_by_organization(context: ToolContext, args: OrganizationArgs) -> ToolResult:
    contacts = await db.list_contacts_by_organization(context.conn, args.organization)
    if not contacts:
        return ToolResult.success(f'No contacts found for organization "{args.organization}"', [])
    return ToolResult.success(
        f'Found {len(contacts)} contact(s) at "{args.organization}"',
        [contact.model_dump() for contact in contacts],
    )


@tool(
    "archive_contact",
    ContactIdArgs,
    action="archive contact",
    description="Archive (soft delete) a contact to remove it from active lists while preserving data",
)
async def archive_contact(context: ToolContext, args: ContactIdArgs) -> ToolResult:
    contact = await db.get_contact(context.conn, args.id)
    if contact is None:
        raise ContactNotFoundError(args.id, operation="archive_contact")

    if contact.is_archived:
        return ToolResult.success(
            f'Contact "{contact.name}" (ID: {args.id}) is already archived',
            {"id": args.id, "changed": False},
        )

    changed = await db.archive_contact(context.conn, args.id)
    return ToolResult.success(
        f'Successfully archived contact "{contact.name}" (ID: {args.id})',
        {"id": args.id, "changed": changed},
    )


@tool(
    "update_contact",
    UpdateContactArgs,
    action="update contact",
    description="Update existing contact information with new details",
)
async def update_contact(context: ToolContext, args: UpdateContactArgs) -> ToolResult:
    contact = await db.get_contact(context.conn, args.id)
    if contact is None:
        raise ContactNotFoundError(args.id, operation="update_contact")

    update = args.to_update()
    if not update.changes():
        return ToolResult.success(
            f"No fields provided to update for contact ID {args.id}",
            {"id": args.id, "changed": False},
        )

    changed = await db.update_contact(context.conn, args.id, update)
    updated = await db.get_contact(context.conn, args.id)
    return ToolResult.success(
        f'Successfully updated contact "{contact.name}" (ID: {args.id})',
        {
            **(updated.model_dump() if updated else {"id": args.id}),
            "changed": changed,
            "updated_fields": list(update.changes()),
        },
    )


# -----------------------------------------------------------------------------
# Interaction history
# -----------------------------------------------------------------------------


@tool(
    "add_contact_entry",
    EntryCreate,
    action="add contact entry",
    description="Record a dated interaction (call, email, meeting, note or task) for a contact",
)
async def add_contact_entry(context: ToolContext, args: EntryCreate) -> ToolResult:
    contact = await db.get_contact(context.conn, args.contact_id)
    if contact is None:
        raise ContactNotFoundError(args.contact_id, operation="add_contact_entry")

    entry_id = await db.add_entry(context.conn, args)
    return ToolResult.success(
        f'Successfully added {args.entry_type} entry for "{contact.name}" (Entry ID: {entry_id})',
        {"entry_id": entry_id, "contact_id": args.contact_id},
    )


@tool(
    "update_contact_entry",
    UpdateEntryArgs,
    action="update contact entry",
    description="Correct the type, subject, content or interaction date of an existing entry",
)
async def update_contact_entry(context: ToolContext, args: UpdateEntryArgs) -> ToolResult:
    entry = await db.get_entry(context.conn, args.entry_id)
    if entry is None:
        raise EntryNotFoundError(args.entry_id, operation="update_contact_entry")

    update = args.to_update()
    fields = list(update.model_dump(exclude_unset=True))
    if not fields:
        return ToolResult.success(
            f"No fields provided to update for entry ID {args.entry_id}",
            {"entry_id": args.entry_id, "changed": False},
        )

    changed = await db.update_entry(context.conn, args.entry_id, update)
    return ToolResult.success(
        f'Successfully updated contact entry for "{entry.contact_name}" (Entry ID: {args.entry_id})',
        {"entry_id": args.entry_id, "changed": changed, "updated_fields": fields},
    )


@tool(
    "delete_contact_entry",
    EntryIdArgs,
    action="delete contact entry",
    description="Delete a single interaction entry",
)
async def delete_contact_entry(context: ToolContext, args: EntryIdArgs) -> ToolResult:
    if not await db.delete_entry(context.conn, args.entry_id):
        raise EntryNotFoundError(args.entry_id, operation="delete_contact_entry")
    return ToolResult.success(
        f"Successfully deleted contact entry (Entry ID: {args.entry_id})",
        {"entry_id": args.entry_id, "changed": True},
    )


@tool(
    "get_contact_history",
    HistoryArgs,
    action="get contact history",
    description="Get the interaction history for a contact, most recent first",
)
async def get_contact_history(context: ToolContext, args: HistoryArgs) -> ToolResult:
    contact = await db.get_contact(context.conn, args.contact_id)
    if contact is None:
        raise ContactNotFoundError(args.contact_id, operation="get_contact_history")

    history = await db.get_history(context.conn, args.contact_id, args.limit)
    if not history:
        return ToolResult.success(f'No interaction history found for "{contact.name}"', [])
    return ToolResult.success(
        f'Interaction history for "{contact.name}" ({len(history)} entries)',
        [entry.model_dump() for entry in history],
    )


@tool(
    "get_recent_activities",
    RecentActivitiesArgs,
    action="get recent activities",
    description="Most recent interactions across all active contacts",
)
async def get_recent_activities(context: ToolContext, args: RecentActivitiesArgs) -> ToolResult:
    activities = await db.get_recent(context.conn, args.limit)
    if not activities:
        return ToolResult.success("No recent activities found", [])
    return ToolResult.success(
        f"Recent activities ({len(activities)} entries)",
        [activity.model_dump() for activity in activities],
    )


# -----------------------------------------------------------------------------
# Todos
# -----------------------------------------------------------------------------


@tool("add_todo", TodoCreate, action="add todo", description="Add a todo for a contact")
async def add_todo(context: ToolContext, args: TodoCreate) -> ToolResult:
    contact = await db.get_contact(context.conn, args.contact_id)
    if contact is None:
        raise ContactNotFoundError(args.contact_id, operation="add_todo")

    todo_id = await db.add_todo(context.conn, args)
    return ToolResult.success(
        f'Successfully added todo for "{contact.name}" (Todo ID: {todo_id})',
        {"todo_id": todo_id, "contact_id": args.contact_id},
    )


@tool(
    "update_todo",
    UpdateTodoArgs,
    action="update todo",
    description="Update a todo's text, target date or completion status",
)
async def update_todo(context: ToolContext, args: UpdateTodoArgs) -> ToolResult:
    update = args.to_update()
    if not update.changes():
        return ToolResult.success(
            f"No fields provided to update for todo ID {args.todo_id}",
            {"todo_id": args.todo_id, "changed": False},
        )

    if not await db.update_todo(context.conn, args.todo_id, update):
        raise TodoNotFoundError(args.todo_id, operation="update_todo")

    todo = await db.get_todo(context.conn, args.todo_id)
    return ToolResult.success(
        f"Successfully updated todo (ID: {args.todo_id})",
        todo.model_dump() if todo else None,
    )


@tool("delete_todo", TodoIdArgs, action="delete todo", description="Delete a todo")
async def delete_todo(context: ToolContext, args: TodoIdArgs) -> ToolResult:
    if not await db.delete_todo(context.conn, args.todo_id):
        raise TodoNotFoundError(args.todo_id, operation="delete_todo")
    return ToolResult.success(
        f"Successfully deleted todo (ID: {args.todo_id})",
        {"todo_id": args.todo_id, "changed": True},
    )


@tool(
    "get_todos",
    GetTodosArgs,
    action="get todos",
    description="List todos, optionally by contact, due window or age",
)
async def get_todos(context: ToolContext, args: GetTodosArgs) -> ToolResult:
    now = datetime.now(timezone.utc)
    filters = TodoFilters(contact_id=args.contact_id, include_completed=args.include_completed)

    if args.days_ahead is not None:
        filters.target_date_before = (now + timedelta(days=args.days_ahead)).strftime(ISO_TIMESTAMP_FORMAT)
    if args.days_old is not None:
        filters.created_before = (now - timedelta(days=args.days_old)).strftime(SQLITE_TIMESTAMP_FORMAT)

    todos = await db.get_todos(context.conn, filters)
    if not todos:
        return ToolResult.success("No todos found matching your criteria", [])
    return ToolResult.success(
        f"Todos ({len(todos)} found)",
        [todo.model_dump() for todo in todos],
    )


# -----------------------------------------------------------------------------
# Exports
# -----------------------------------------------------------------------------


@tool(
    "export_contacts_csv",
    ExportContactsArgs,
    action="export contacts",
    description="Export contacts to a CSV file",
)
async def export_contacts_csv(context: ToolContext, args: ExportContactsArgs) -> ToolResult:
    content = await export_contacts(context.conn, args.include_archived)
    filename = f"contacts_export_{_today()}.csv"
    path = _save_export(context, filename, content)
    return ToolResult.success(
        f"CSV export saved to {path}",
        {"filename": filename, "path": str(path), "include_archived": args.include_archived, "size": len(content)},
    )


@tool(
    "export_contact_history_csv",
    ExportHistoryArgs,
    action="export contact history",
    description="Export interaction history (one contact or everyone) to a CSV file",
)
async def export_contact_history_csv(context: ToolContext, args: ExportHistoryArgs) -> ToolResult:
    content = await export_contact_history(context.conn, args.contact_id)

    if args.contact_id is not None:
        contact = await db.get_contact(context.conn, args.contact_id)
        stem = re.sub(r"[^a-zA-Z0-9]", "_", contact.name) if contact else f"contact_{args.contact_id}"
        filename = f"{stem}_history_{_today()}.csv"
        scope = f"Contact ID {args.contact_id}"
    else:
        filename = f"all_contact_history_{_today()}.csv"
        scope = "All contacts"

    path = _save_export(context, filename, content)
    return ToolResult.success(
        f"Contact history CSV export saved to {path}",
        {"filename": filename, "path": str(path), "scope": scope, "size": len(content)},
    )


@tool(
    "export_full_crm_csv",
    NoArgs,
    action="export full CRM data",
    description="Export every contact (archived included) with concatenated history to a CSV file",
)
async def export_full_crm_csv(context: ToolContext, args: NoArgs) -> ToolResult:
    content = await export_full(context.conn)
    filename = f"full_crm_export_{_today()}.csv"
    path = _save_export(context, filename, content)
    return ToolResult.success(
        f"Full CRM CSV export saved to {path}",
        {"filename": filename, "path": str(path), "size": len(content)},
    )
