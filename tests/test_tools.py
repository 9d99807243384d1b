"""Tests for the named-tool layer."""

import csv
import io

import pytest

from crm.tools import TOOLS, call_tool

EXPECTED_TOOLS = {
    "add_contact",
    "list_contacts",
    "get_contact_details",
    "search_contacts",
    "list_contacts_by_organization",
    "archive_contact",
    "update_contact",
    "add_contact_entry",
    "update_contact_entry",
    "delete_contact_entry",
    "get_contact_history",
    "get_recent_activities",
    "add_todo",
    "update_todo",
    "delete_todo",
    "get_todos",
    "export_contacts_csv",
    "export_contact_history_csv",
    "export_full_crm_csv",
}


async def _add(context, name="Ada Lovelace", **fields):
    result = await call_tool(context, "add_contact", {"name": name, **fields})
    assert result.ok, result.message
    return result.data["id"]


def test_every_tool_is_registered():
    assert set(TOOLS) == EXPECTED_TOOLS
    assert all(entry.description for entry in TOOLS.values())


@pytest.mark.asyncio
async def test_add_and_get_contact(context):
    contact_id = await _add(context, organization="Analytical Engines")

    result = await call_tool(context, "get_contact_details", {"id": contact_id})
    assert result.ok
    assert result.data["name"] == "Ada Lovelace"
    assert result.data["organization"] == "Analytical Engines"
    assert result.data["is_archived"] is False


@pytest.mark.asyncio
async def test_unknown_tool(context):
    result = await call_tool(context, "launch_rocket", {})
    assert not result.ok
    assert "launch_rocket" in result.message


@pytest.mark.asyncio
async def test_invalid_arguments_are_reported(context):
    result = await call_tool(context, "add_contact", {})
    assert not result.ok
    assert result.message.startswith("Invalid arguments for add_contact")

    result = await call_tool(context, "add_contact", {"name": "Ada", "favourite_colour": "green"})
    assert not result.ok

    result = await call_tool(context, "get_contact_details", {"id": "not a number"})
    assert not result.ok


@pytest.mark.asyncio
async def test_missing_contact_names_operation_and_identity(context):
    result = await call_tool(context, "get_contact_details", {"id": 4242})
    assert not result.ok
    assert "Contact with ID 4242 not found" in result.message
    assert result.data == {"operation": "get_contact_details", "identity": 4242}


@pytest.mark.asyncio
async def test_archive_contact_twice(context):
    contact_id = await _add(context)

    first = await call_tool(context, "archive_contact", {"id": contact_id})
    assert first.ok
    assert first.data["changed"] is True

    second = await call_tool(context, "archive_contact", {"id": contact_id})
    assert second.ok
    assert second.data["changed"] is False
    assert "already archived" in second.message

    listed = await call_tool(context, "list_contacts", {})
    assert listed.data == []
    listed = await call_tool(context, "list_contacts", {"include_archived": True})
    assert [c["id"] for c in listed.data] == [contact_id]


@pytest.mark.asyncio
async def test_update_contact(context):
    contact_id = await _add(context, email="ada@example.com")

    result = await call_tool(context, "update_contact", {"id": contact_id, "job_title": "Analyst"})
    assert result.ok
    assert result.data["job_title"] == "Analyst"
    assert result.data["email"] == "ada@example.com"
    assert result.data["changed"] is True
    assert result.data["updated_fields"] == ["job_title"]

    noop = await call_tool(context, "update_contact", {"id": contact_id})
    assert noop.ok
    assert noop.data["changed"] is False

    missing = await call_tool(context, "update_contact", {"id": 999, "notes": "x"})
    assert not missing.ok


@pytest.mark.asyncio
async def test_search_and_organization(context):
    await _add(context, "Ada", organization="Acme")
    await _add(context, "Bob", organization="Globex")

    found = await call_tool(context, "search_contacts", {"query": "acm"})
    assert [c["name"] for c in found.data] == ["Ada"]

    by_org = await call_tool(context, "list_contacts_by_organization", {"organization": "glob"})
    assert [c["name"] for c in by_org.data] == ["Bob"]

    none = await call_tool(context, "search_contacts", {"query": "zzz"})
    assert none.ok
    assert none.data == []


@pytest.mark.asyncio
async def test_history_tools(context):
    contact_id = await _add(context)

    intro = await call_tool(
        context,
        "add_contact_entry",
        {"contact_id": contact_id, "entry_type": "note", "subject": "intro", "interaction_date": "2023-01-01T00:00:00Z"},
    )
    follow_up = await call_tool(
        context,
        "add_contact_entry",
        {"contact_id": contact_id, "entry_type": "call", "subject": "follow-up", "interaction_date": "2023-02-01T00:00:00Z"},
    )
    assert intro.ok and follow_up.ok

    history = await call_tool(context, "get_contact_history", {"contact_id": contact_id})
    assert [e["subject"] for e in history.data] == ["follow-up", "intro"]

    limited = await call_tool(context, "get_contact_history", {"contact_id": contact_id, "limit": 1})
    assert [e["subject"] for e in limited.data] == ["follow-up"]

    entry_id = intro.data["entry_id"]
    updated = await call_tool(context, "update_contact_entry", {"entry_id": entry_id, "content": "met at the salon"})
    assert updated.ok
    assert updated.data["updated_fields"] == ["content"]

    recent = await call_tool(context, "get_recent_activities", {"limit": 5})
    assert [e["contact_name"] for e in recent.data] == ["Ada Lovelace", "Ada Lovelace"]

    deleted = await call_tool(context, "delete_contact_entry", {"entry_id": entry_id})
    assert deleted.ok
    again = await call_tool(context, "delete_contact_entry", {"entry_id": entry_id})
    assert not again.ok
    assert again.data["identity"] == entry_id


@pytest.mark.asyncio
async def test_entry_for_missing_contact(context):
    result = await call_tool(
        context,
        "add_contact_entry",
        {"contact_id": 77, "entry_type": "note", "subject": "hi", "interaction_date": "2024-01-01"},
    )
    assert not result.ok
    assert result.data["operation"] == "add_contact_entry"


@pytest.mark.asyncio
async def test_entry_requires_interaction_date(context):
    contact_id = await _add(context)
    result = await call_tool(
        context, "add_contact_entry", {"contact_id": contact_id, "entry_type": "note", "subject": "hi"}
    )
    assert not result.ok


@pytest.mark.asyncio
async def test_todo_tools(context):
    contact_id = await _add(context)

    due_soon = await call_tool(
        context, "add_todo", {"contact_id": contact_id, "todo_text": "overdue", "target_date": "2000-01-01"}
    )
    await call_tool(context, "add_todo", {"contact_id": contact_id, "todo_text": "someday", "target_date": "2999-01-01"})
    await call_tool(context, "add_todo", {"contact_id": contact_id, "todo_text": "undated"})
    todo_id = due_soon.data["todo_id"]

    everything = await call_tool(context, "get_todos", {})
    assert [t["todo_text"] for t in everything.data] == ["overdue", "someday", "undated"]

    soon = await call_tool(context, "get_todos", {"days_ahead": 7})
    assert [t["todo_text"] for t in soon.data] == ["overdue"]

    done = await call_tool(context, "update_todo", {"todo_id": todo_id, "is_completed": True})
    assert done.ok
    assert done.data["is_completed"] is True

    open_todos = await call_tool(context, "get_todos", {"contact_id": contact_id})
    assert "overdue" not in [t["todo_text"] for t in open_todos.data]
    with_done = await call_tool(context, "get_todos", {"include_completed": True})
    assert len(with_done.data) == 3

    assert (await call_tool(context, "delete_todo", {"todo_id": todo_id})).ok
    assert not (await call_tool(context, "delete_todo", {"todo_id": todo_id})).ok
    assert not (await call_tool(context, "update_todo", {"todo_id": todo_id, "todo_text": "x"})).ok


@pytest.mark.asyncio
async def test_get_todos_days_old(context, conn):
    contact_id = await _add(context)
    old = await call_tool(context, "add_todo", {"contact_id": contact_id, "todo_text": "old"})
    await call_tool(context, "add_todo", {"contact_id": contact_id, "todo_text": "new"})
    await conn.execute(
        "UPDATE contact_todos SET created_at = '2000-01-01 00:00:00' WHERE id = ?", (old.data["todo_id"],)
    )
    await conn.commit()

    result = await call_tool(context, "get_todos", {"days_old": 30})
    assert [t["todo_text"] for t in result.data] == ["old"]


@pytest.mark.asyncio
async def test_exports_are_written_to_export_dir(context, settings):
    contact_id = await _add(context, "Ada Lovelace")
    await call_tool(
        context,
        "add_contact_entry",
        {"contact_id": contact_id, "entry_type": "meeting", "subject": "tea", "interaction_date": "2024-05-01"},
    )

    contacts = await call_tool(context, "export_contacts_csv", {})
    assert contacts.ok
    assert contacts.data["filename"].startswith("contacts_export_")
    path = settings.export_dir / contacts.data["filename"]
    rows = list(csv.reader(io.StringIO(path.read_text(encoding="utf-8"))))
    assert rows[1][1] == "Ada Lovelace"

    history = await call_tool(context, "export_contact_history_csv", {"contact_id": contact_id})
    assert history.ok
    assert history.data["filename"].startswith("Ada_Lovelace_history_")
    assert (settings.export_dir / history.data["filename"]).exists()

    everyone = await call_tool(context, "export_contact_history_csv", {})
    assert everyone.data["filename"].startswith("all_contact_history_")

    full = await call_tool(context, "export_full_crm_csv", {})
    assert full.ok
    text = (settings.export_dir / full.data["filename"]).read_text(encoding="utf-8")
    assert "2024-05-01 [meeting] tea" in text


@pytest.mark.asyncio
async def test_history_export_for_missing_contact_fails(context, settings):
    result = await call_tool(context, "export_contact_history_csv", {"contact_id": 31337})
    assert not result.ok
    assert result.data["identity"] == 31337
    assert not settings.export_dir.exists() or not any(settings.export_dir.iterdir())
