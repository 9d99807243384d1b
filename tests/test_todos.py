"""Tests for contact todos."""

import pytest

from crm.database import (
    add_contact,
    add_todo,
    delete_todo,
    get_todo,
    get_todos,
    update_todo,
)
from crm.models import ContactCreate, TodoCreate, TodoFilters, TodoUpdate


async def _set_created(conn, todo_id, created_at):
    await conn.execute("UPDATE contact_todos SET created_at = ? WHERE id = ?", (created_at, todo_id))
    await conn.commit()


@pytest.mark.asyncio
async def test_add_and_read_todo(conn):
    ada = await add_contact(conn, ContactCreate(name="Ada"))
    todo_id = await add_todo(conn, TodoCreate(contact_id=ada, todo_text="Send notes", target_date="2024-03-01"))

    todo = await get_todo(conn, todo_id)
    assert todo.todo_text == "Send notes"
    assert todo.target_date == "2024-03-01"
    assert todo.is_completed is False
    assert todo.created_at == todo.updated_at


@pytest.mark.asyncio
async def test_completed_todos_hidden_by_default(conn):
    ada = await add_contact(conn, ContactCreate(name="Ada"))
    done = await add_todo(conn, TodoCreate(contact_id=ada, todo_text="done"))
    await add_todo(conn, TodoCreate(contact_id=ada, todo_text="open"))
    await update_todo(conn, done, TodoUpdate(is_completed=True))

    assert [t.todo_text for t in await get_todos(conn)] == ["open"]
    everything = await get_todos(conn, TodoFilters(include_completed=True))
    assert sorted(t.todo_text for t in everything) == ["done", "open"]
    assert all(t.contact_name == "Ada" for t in everything)


@pytest.mark.asyncio
async def test_todos_ordered_by_target_date_with_undated_last(conn):
    ada = await add_contact(conn, ContactCreate(name="Ada"))
    await add_todo(conn, TodoCreate(contact_id=ada, todo_text="undated"))
    await add_todo(conn, TodoCreate(contact_id=ada, todo_text="march", target_date="2024-03-01"))
    await add_todo(conn, TodoCreate(contact_id=ada, todo_text="january", target_date="2024-01-01"))

    assert [t.todo_text for t in await get_todos(conn)] == ["january", "march", "undated"]


@pytest.mark.asyncio
async def test_ties_fall_back_to_creation_time(conn):
    ada = await add_contact(conn, ContactCreate(name="Ada"))
    later = await add_todo(conn, TodoCreate(contact_id=ada, todo_text="later", target_date="2024-01-01"))
    earlier = await add_todo(conn, TodoCreate(contact_id=ada, todo_text="earlier", target_date="2024-01-01"))
    await _set_created(conn, later, "2024-01-02 00:00:00")
    await _set_created(conn, earlier, "2023-12-01 00:00:00")

    assert [t.todo_text for t in await get_todos(conn)] == ["earlier", "later"]


@pytest.mark.asyncio
async def test_filters_combine_with_and(conn):
    ada = await add_contact(conn, ContactCreate(name="Ada"))
    bob = await add_contact(conn, ContactCreate(name="Bob"))

    old = await add_todo(conn, TodoCreate(contact_id=ada, todo_text="ada old", target_date="2024-01-10"))
    new = await add_todo(conn, TodoCreate(contact_id=ada, todo_text="ada new", target_date="2024-02-10"))
    await add_todo(conn, TodoCreate(contact_id=ada, todo_text="ada far", target_date="2025-01-01"))
    await add_todo(conn, TodoCreate(contact_id=bob, todo_text="bob", target_date="2024-01-15"))
    await _set_created(conn, old, "2023-06-01 00:00:00")
    await _set_created(conn, new, "2024-01-20 00:00:00")

    by_contact = await get_todos(conn, TodoFilters(contact_id=ada, target_date_before="2024-12-31"))
    assert [t.todo_text for t in by_contact] == ["ada old", "ada new"]

    window = await get_todos(conn, TodoFilters(target_date_after="2024-01-12", target_date_before="2024-03-01"))
    assert [t.todo_text for t in window] == ["bob", "ada new"]

    created = await get_todos(
        conn,
        TodoFilters(contact_id=ada, created_after="2024-01-01 00:00:00", created_before="2024-12-31 00:00:00"),
    )
    assert [t.todo_text for t in created] == ["ada new"]


@pytest.mark.asyncio
async def test_update_todo_partial_fields(conn):
    ada = await add_contact(conn, ContactCreate(name="Ada"))
    todo_id = await add_todo(conn, TodoCreate(contact_id=ada, todo_text="draft", target_date="2024-01-01"))

    assert await update_todo(conn, todo_id, TodoUpdate(todo_text="final")) is True
    todo = await get_todo(conn, todo_id)
    assert todo.todo_text == "final"
    assert todo.target_date == "2024-01-01"
    assert todo.is_completed is False

    assert await update_todo(conn, todo_id, TodoUpdate(target_date=None)) is True
    assert (await get_todo(conn, todo_id)).target_date is None


@pytest.mark.asyncio
async def test_update_todo_without_fields_is_a_no_op(conn):
    ada = await add_contact(conn, ContactCreate(name="Ada"))
    todo_id = await add_todo(conn, TodoCreate(contact_id=ada, todo_text="draft"))
    assert await update_todo(conn, todo_id, TodoUpdate()) is False
    assert await update_todo(conn, 9999, TodoUpdate(is_completed=True)) is False


@pytest.mark.asyncio
async def test_delete_todo(conn):
    ada = await add_contact(conn, ContactCreate(name="Ada"))
    todo_id = await add_todo(conn, TodoCreate(contact_id=ada, todo_text="draft"))

    assert await delete_todo(conn, todo_id) is True
    assert await delete_todo(conn, todo_id) is False
    assert await get_todo(conn, todo_id) is None
