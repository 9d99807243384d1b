"""
File: database/todos.py
Created: 2026-10-18
Last Modified: 2026-10-18
"""

from typing import List, Optional

import aiosqlite

from ..models import ContactTodo, ContactTodoWithName, TodoCreate, TodoFilters, TodoUpdate
from .common import execute_write, fetch_all, fetch_one


async def add_todo(conn: aiosqlite.Connection, data: TodoCreate) -> int:
    cursor = await execute_write(
        conn,
        "INSERT INTO contact_todos (contact_id, todo_text, target_date) VALUES (?, ?, ?)",
        (data.contact_id, data.todo_text, data.target_date),
    )
    return cursor.lastrowid


async def get_todo(conn: aiosqlite.Connection, todo_id: int) -> Optional[ContactTodo]:
    row = await fetch_one(conn, "SELECT * FROM contact_todos WHERE id = ?", (todo_id,))
    return ContactTodo.from_db_dict(row) if row else None


async def update_todo(conn: aiosqlite.Connection, todo_id: int, data: TodoUpdate) -> bool:
    """
    Update text, target date and/or completion. At least one field must be
    supplied; otherwise nothing is written and False is returned.
    """
    changes = data.changes()
    if not changes:
        return False

    assignments = ", ".join(f"{column} = ?" for column in changes)
    cursor = await execute_write(
        conn,
        f"UPDATE contact_todos SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
        [*changes.values(), todo_id],
    )
    return cursor.rowcount > 0


async def get_todos(
    conn: aiosqlite.Connection, filters: Optional[TodoFilters] = None
) -> List[ContactTodoWithName]:
    """
    List todos with the owning contact's name.

    Completed todos are left out unless ``include_completed`` is set. Results
    are ordered by target date (todos without one last), then creation time.
    """
    filters = filters or TodoFilters()

    query = """
        SELECT ct.*, c.name AS contact_name
        FROM contact_todos ct
        JOIN contacts c ON ct.contact_id = c.id
        WHERE 1=1
    """
    params: list = []

    if filters.contact_id is not None:
        query += " AND ct.contact_id = ?"
        params.append(filters.contact_id)

    if not filters.include_completed:
        query += " AND ct.is_completed = 0"

    if filters.target_date_before:
        query += " AND ct.target_date <= ?"
        params.append(filters.target_date_before)

    if filters.target_date_after:
        query += " AND ct.target_date >= ?"
        params.append(filters.target_date_after)

    if filters.created_before:
        query += " AND ct.created_at <= ?"
        params.append(filters.created_before)

    if filters.created_after:
        query += " AND ct.created_at >= ?"
        params.append(filters.created_after)

    query += " ORDER BY ct.target_date IS NULL, ct.target_date ASC, ct.created_at ASC, ct.id ASC"

    rows = await fetch_all(conn, query, params)
    return [ContactTodoWithName.from_db_dict(row) for row in rows]


async def delete_todo(conn: aiosqlite.Connection, todo_id: int) -> bool:
    cursor = await execute_write(conn, "DELETE FROM contact_todos WHERE id = ?", (todo_id,))
    return cursor.rowcount > 0
