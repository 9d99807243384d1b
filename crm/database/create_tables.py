"""
Schema setup for the contact store.

Creates the contacts table, brings older stores up to date by adding any
columns introduced after the first release, and only then creates the
entry and todo tables. Column additions are additive only: nothing is ever
dropped or renamed.

File: database/create_tables.py
Created: 2026-10-17
Last Modified: 2026-10-17
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Set, Tuple

import aiosqlite

log = logging.getLogger(__name__)

CONTACTS_TABLE = """
    CREATE TABLE IF NOT EXISTS contacts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        organization TEXT,
        job_title TEXT,
        email TEXT,
        phone TEXT,
        telegram TEXT,
        x_account TEXT,
        notes TEXT,
        is_archived BOOLEAN DEFAULT 0,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
"""

CONTACT_ENTRIES_TABLE = """
    CREATE TABLE IF NOT EXISTS contact_entries (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        contact_id INTEGER NOT NULL,
        entry_type TEXT NOT NULL,
        subject TEXT NOT NULL,
        content TEXT,
        entry_date DATETIME NOT NULL,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (contact_id) REFERENCES contacts (id)
    )
"""

CONTACT_TODOS_TABLE = """
    CREATE TABLE IF NOT EXISTS contact_todos (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        contact_id INTEGER NOT NULL,
        todo_text TEXT NOT NULL,
        target_date DATETIME,
        is_completed BOOLEAN DEFAULT 0,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (contact_id) REFERENCES contacts (id)
    )
"""

INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_entries_contact_date ON contact_entries(contact_id, entry_date)",
    "CREATE INDEX IF NOT EXISTS idx_todos_contact ON contact_todos(contact_id)",
)

# Columns added to contacts after the first release: (column, statement)
CONTACT_COLUMN_MIGRATIONS: List[Tuple[str, str]] = [
    ("telegram", "ALTER TABLE contacts ADD COLUMN telegram TEXT"),
    ("x_account", "ALTER TABLE contacts ADD COLUMN x_account TEXT"),
]


@dataclass
class MigrationBarrier:
    """
    Counts additive migrations as they finish, successfully or not.

    ``wait()`` returns once ``completed`` reaches ``needed``; with nothing
    needed it returns immediately.
    """

    needed: int
    completed: int = 0
    applied: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    _done: asyncio.Event = field(default_factory=asyncio.Event, repr=False)

    def __post_init__(self):
        if self.needed == 0:
            self._done.set()

    def mark_complete(self, column: str, ok: bool) -> None:
        (self.applied if ok else self.failed).append(column)
        self.completed += 1
        if self.completed >= self.needed:
            self._done.set()

    async def wait(self) -> None:
        await self._done.wait()


async def get_table_columns(conn: aiosqlite.Connection, table: str) -> Set[str]:
    """Column names currently present on ``table``."""
    async with conn.execute(f"PRAGMA table_info({table})") as cursor:
        rows = await cursor.fetchall()
    return {row[1] for row in rows}


async def _add_column(
    conn: aiosqlite.Connection, column: str, statement: str, barrier: MigrationBarrier
) -> None:
    ok = False
    try:
        await conn.execute(statement)
        ok = True
        log.info(f"Added {column} column to contacts table")
    except aiosqlite.Error as e:
        # Non-fatal: usually the column is already there from an earlier partial run
        log.warning(f"Failed to add {column} column: {e}")
    finally:
        barrier.mark_complete(column, ok)


async def init_database(
    conn: aiosqlite.Connection,
    column_migrations: Sequence[Tuple[str, str]] = CONTACT_COLUMN_MIGRATIONS,
) -> MigrationBarrier:
    """
    Make sure contacts, contact_entries and contact_todos exist with the
    current column set. Safe to call on every start against the same store.

    Args:
        conn: Open store connection
        column_migrations: (column, ALTER statement) pairs checked against contacts

    Returns:
        The barrier that tracked the column additions run during this call
    """
    await conn.execute(CONTACTS_TABLE)

    existing = await get_table_columns(conn, "contacts")
    pending = [(column, stmt) for column, stmt in column_migrations if column not in existing]

    barrier = MigrationBarrier(needed=len(pending))
    tasks = [
        asyncio.create_task(_add_column(conn, column, stmt, barrier))
        for column, stmt in pending
    ]

    # Child tables wait until every column addition has settled
    await barrier.wait()
    await asyncio.gather(*tasks)

    await conn.execute(CONTACT_ENTRIES_TABLE)
    await conn.execute(CONTACT_TODOS_TABLE)
    for statement in INDEXES:
        await conn.execute(statement)

    await conn.commit()

    if barrier.needed:
        log.info(
            f"Contact column migrations: {len(barrier.applied)}/{barrier.needed} applied"
            + (f", failed: {', '.join(barrier.failed)}" if barrier.failed else "")
        )
    log.info("CRM database initialized with contacts, contact_entries, and contact_todos tables")
    return barrier
