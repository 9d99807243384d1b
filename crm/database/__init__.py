"""
File: database/__init__.py
Created: 2026-10-17
Last Modified: 2026-10-17
"""

from .common import DEFAULT_DB_PATH, open_database
from .create_tables import CONTACT_COLUMN_MIGRATIONS, MigrationBarrier, get_table_columns, init_database
from .contacts import (
    add_contact,
    get_contact,
    list_contacts,
    search_contacts,
    list_contacts_by_organization,
    update_contact,
    archive_contact,
)
from .entries import (
    add_entry,
    get_entry,
    get_history,
    get_recent,
    get_chronological_history,
    update_entry,
    delete_entry,
)
from .todos import (
    add_todo,
    get_todo,
    update_todo,
    get_todos,
    delete_todo,
)
from .backups import (
    ArchiveInfo,
    DatabaseStats,
    get_database_stats,
    archive_database,
    list_archives,
    restore_from_archive,
    reset_database,
)

__all__ = [
    "DEFAULT_DB_PATH",
    "open_database",
    "CONTACT_COLUMN_MIGRATIONS",
    "MigrationBarrier",
    "get_table_columns",
    "init_database",
    "add_contact",
    "get_contact",
    "list_contacts",
    "search_contacts",
    "list_contacts_by_organization",
    "update_contact",
    "archive_contact",
    "add_entry",
    "get_entry",
    "get_history",
    "get_recent",
    "get_chronological_history",
    "update_entry",
    "delete_entry",
    "add_todo",
    "get_todo",
    "update_todo",
    "get_todos",
    "delete_todo",
    "ArchiveInfo",
    "DatabaseStats",
    "get_database_stats",
    "archive_database",
    "list_archives",
    "restore_from_archive",
    "reset_database",
]
