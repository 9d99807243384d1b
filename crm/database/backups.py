"""
Store maintenance: statistics, timestamped backups, restore and reset.

File: database/backups.py
Created: 2026-10-18
Last Modified: 2026-10-18
"""

import logging
import shutil
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

import aiosqlite

from ..errors import ArchiveNotFoundError
from .common import open_database
from .create_tables import init_database

log = logging.getLogger(__name__)

ARCHIVE_PREFIX = "crm-backup-"
ARCHIVE_SUFFIX = ".sqlite"


@dataclass
class DatabaseStats:
    contacts: int
    entries: int
    todos: int
    size_bytes: int

    @property
    def size(self) -> str:
        return f"{self.size_bytes / 1024:.2f} KB"


@dataclass
class ArchiveInfo:
    name: str
    path: Path
    size_bytes: int
    modified: datetime


async def _count(conn: aiosqlite.Connection, table: str) -> int:
    try:
        async with conn.execute(f"SELECT COUNT(*) FROM {table}") as cursor:
            row = await cursor.fetchone()
            return row[0] if row else 0
    except aiosqlite.OperationalError:
        # Older stores may predate the todo table
        return 0


async def get_database_stats(db_path: Union[str, Path]) -> Optional[DatabaseStats]:
    """Row counts and file size, or None when there is no store file."""
    db_path = Path(db_path)
    if not db_path.exists():
        return None

    async with aiosqlite.connect(db_path) as conn:
        contacts = await _count(conn, "contacts")
        entries = await _count(conn, "contact_entries")
        todos = await _count(conn, "contact_todos")

    return DatabaseStats(
        contacts=contacts,
        entries=entries,
        todos=todos,
        size_bytes=db_path.stat().st_size,
    )


def archive_database(
    db_path: Union[str, Path], archive_dir: Union[str, Path], reason: Optional[str] = None
) -> Optional[Path]:
    """
    Copy the store to ``archive_dir`` as crm-backup-<timestamp>[-reason].sqlite.

    Returns:
        Path of the archive, or None if there was no store to archive
    """
    db_path = Path(db_path)
    archive_dir = Path(archive_dir)
    if not db_path.exists():
        log.info("No existing database to archive")
        return None

    archive_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")
    suffix = f"-{reason}" if reason else ""
    archive_path = archive_dir / f"{ARCHIVE_PREFIX}{timestamp}{suffix}{ARCHIVE_SUFFIX}"

    shutil.copy2(db_path, archive_path)
    log.info(f"Database archived to {archive_path}")
    return archive_path


def list_archives(archive_dir: Union[str, Path]) -> List[ArchiveInfo]:
    """Archived stores, most recent first."""
    archive_dir = Path(archive_dir)
    if not archive_dir.exists():
        return []

    archives = []
    for path in sorted(archive_dir.glob(f"*{ARCHIVE_SUFFIX}"), reverse=True):
        stat = path.stat()
        archives.append(
            ArchiveInfo(
                name=path.name,
                path=path,
                size_bytes=stat.st_size,
                modified=datetime.fromtimestamp(stat.st_mtime),
            )
        )
    return archives


def restore_from_archive(
    db_path: Union[str, Path], archive_dir: Union[str, Path], archive_name: str
) -> Path:
    """Back up the current store, then replace it with the named archive."""
    archive_path = Path(archive_dir) / archive_name
    if not archive_path.is_file():
        raise ArchiveNotFoundError(archive_name)

    archive_database(db_path, archive_dir, "before-restore")
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(archive_path, db_path)
    log.info(f"Database restored from {archive_name}")
    return archive_path


async def reset_database(
    db_path: Union[str, Path], archive_dir: Union[str, Path], reason: Optional[str] = None
) -> Optional[Path]:
    """
    Archive the current store, remove it and create a fresh empty one.

    Returns:
        Path of the archive taken before the reset (None if there was no store)
    """
    db_path = Path(db_path)
    archive_path = archive_database(db_path, archive_dir, reason)

    if db_path.exists():
        db_path.unlink()
        log.info("Current database removed")

    async with open_database(db_path) as conn:
        await init_database(conn)

    log.info("Database reset complete")
    return archive_path
