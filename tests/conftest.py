"""Pytest configuration and fixtures."""

import pytest

from crm.config import Settings
from crm.database import init_database, open_database
from crm.tools import ToolContext


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "crm.sqlite"


@pytest.fixture
async def conn(db_path):
    """Open an initialized store in a temporary directory."""
    async with open_database(db_path) as connection:
        await init_database(connection)
        yield connection


@pytest.fixture
def settings(tmp_path, db_path):
    return Settings(
        db_path=db_path,
        export_dir=tmp_path / "exports",
        archive_dir=tmp_path / "archives",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def context(conn, settings):
    return ToolContext(conn=conn, settings=settings)
