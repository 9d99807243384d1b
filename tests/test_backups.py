"""Tests for store statistics, archives, restore and reset."""

import pytest

from crm.database import (
    add_contact,
    archive_database,
    get_database_stats,
    init_database,
    list_archives,
    list_contacts,
    open_database,
    reset_database,
    restore_from_archive,
)
from crm.errors import ArchiveNotFoundError
from crm.models import ContactCreate


async def _seed(db_path, *names):
    async with open_database(db_path) as conn:
        await init_database(conn)
        for name in names:
            await add_contact(conn, ContactCreate(name=name))


async def _names(db_path):
    async with open_database(db_path) as conn:
        return [c.name for c in await list_contacts(conn, include_archived=True)]


@pytest.mark.asyncio
async def test_stats_for_missing_store(tmp_path):
    assert await get_database_stats(tmp_path / "nothing.sqlite") is None


@pytest.mark.asyncio
async def test_stats_counts_rows(db_path):
    await _seed(db_path, "Ada", "Bob")
    stats = await get_database_stats(db_path)
    assert (stats.contacts, stats.entries, stats.todos) == (2, 0, 0)
    assert stats.size_bytes > 0
    assert stats.size.endswith(" KB")


def test_archive_without_store(tmp_path):
    assert archive_database(tmp_path / "nothing.sqlite", tmp_path / "archives") is None
    assert list_archives(tmp_path / "archives") == []


@pytest.mark.asyncio
async def test_archive_and_list(db_path, tmp_path):
    await _seed(db_path, "Ada")
    archive_dir = tmp_path / "archives"

    first = archive_database(db_path, archive_dir)
    second = archive_database(db_path, archive_dir, "manual")

    assert first.name.startswith("crm-backup-")
    assert second.name.endswith("-manual.sqlite")

    archives = list_archives(archive_dir)
    assert [a.name for a in archives] == [second.name, first.name]
    assert all(a.size_bytes > 0 for a in archives)


@pytest.mark.asyncio
async def test_restore_replaces_store_and_keeps_a_backup(db_path, tmp_path):
    archive_dir = tmp_path / "archives"
    await _seed(db_path, "Ada")
    snapshot = archive_database(db_path, archive_dir)
    await _seed(db_path, "Bob")
    assert await _names(db_path) == ["Ada", "Bob"]

    restore_from_archive(db_path, archive_dir, snapshot.name)

    assert await _names(db_path) == ["Ada"]
    assert any(a.name.endswith("-before-restore.sqlite") for a in list_archives(archive_dir))


def test_restore_missing_archive(db_path, tmp_path):
    with pytest.raises(ArchiveNotFoundError):
        restore_from_archive(db_path, tmp_path / "archives", "crm-backup-nope.sqlite")


@pytest.mark.asyncio
async def test_reset_archives_then_empties(db_path, tmp_path):
    archive_dir = tmp_path / "archives"
    await _seed(db_path, "Ada", "Bob")

    archive_path = await reset_database(db_path, archive_dir, "reset")

    assert archive_path is not None and archive_path.exists()
    stats = await get_database_stats(db_path)
    assert stats.contacts == 0
    assert await _names(archive_path) == ["Ada", "Bob"]
