"""
Common database helpers: opening the store and turning cursor rows into dicts.

File: database/common.py
Created: 2026-10-17
Last Modified: 2026-10-19
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence, Union

import aiosqlite

from ..config import DATA_DIR

DEFAULT_DB_PATH = DATA_DIR / "crm.sqlite"

# SQL name of the Unicode-aware lower() registered on every store connection
UNICODE_LOWER = "unicode_lower"


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


@asynccontextmanager
async def open_database(db_path: Union[str, Path]) -> AsyncIterator[aiosqlite.Connection]:
    """
    Open the single connection used for the lifetime of a process.

    The path is handed to SQLite as-is (":memory:" works too); the parent
    directory is created for file paths.

    The connection gets a ``unicode_lower`` SQL function, since SQLite's own
    lower() and LIKE only fold ASCII letters.
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(db_path) as conn:
        await conn.create_function(UNICODE_LOWER, 1, _unicode_lower, deterministic=True)
        yield conn


async def fetch_all(
    conn: aiosqlite.Connection, query: str, params: Sequence[Any] = ()
) -> List[Dict[str, Any]]:
    """Run a query and return every row as a column -> value dict."""
    rows = []
    async with conn.execute(query, params) as cursor:
        columns = [description[0] for description in cursor.description]
        async for row in cursor:
            rows.append(dict(zip(columns, row)))
    return rows


async def fetch_one(
    conn: aiosqlite.Connection, query: str, params: Sequence[Any] = ()
) -> Optional[Dict[str, Any]]:
    async with conn.execute(query, params) as cursor:
        row = await cursor.fetchone()
        if row is None:
            return None
        columns = [description[0] for description in cursor.description]
        return dict(zip(columns, row))


async def execute_write(
    conn: aiosqlite.Connection, query: str, params: Sequence[Any] = ()
) -> aiosqlite.Cursor:
    """Execute a single mutating statement and commit it."""
    cursor = await conn.execute(query, params)
    await conn.commit()
    return cursor


def like_pattern(text: str) -> str:
    """Substring LIKE pattern with wildcards in ``text`` escaped (use ESCAPE '\\')."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


__all__ = [
    "DEFAULT_DB_PATH",
    "UNICODE_LOWER",
    "open_database",
    "fetch_all",
    "fetch_one",
    "execute_write",
    "like_pattern",
]
