"""
Runtime configuration for the contact store.

Paths come from (in order) explicit arguments, CRM_* environment variables
(optionally loaded from a .env file) and finally the defaults under the
project root.

File: config.py
Created: 2026-10-17
Last Modified: 2026-10-17
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"


def _env_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    return Path(value).expanduser() if value else default


@dataclass
class Settings:
    """Locations and logging level used by the CLI and tool layer."""

    db_path: Path = field(default_factory=lambda: DATA_DIR / "crm.sqlite")
    export_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "exports")
    archive_dir: Path = field(default_factory=lambda: DATA_DIR / "archives")
    log_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "logs")
    log_level: str = "INFO"

    def __post_init__(self):
        # Ensure paths are Path objects
        for name in ("db_path", "export_dir", "archive_dir", "log_dir"):
            value = getattr(self, name)
            if isinstance(value, str):
                setattr(self, name, Path(value))

    @classmethod
    def from_env(cls, db_path: Optional[Union[str, Path]] = None) -> "Settings":
        """Build settings from the environment; ``db_path`` wins over CRM_DB_PATH."""
        load_dotenv()

        defaults = cls()
        resolved_db = Path(db_path) if db_path else _env_path("CRM_DB_PATH", defaults.db_path)
        return cls(
            db_path=resolved_db,
            export_dir=_env_path("CRM_EXPORT_DIR", defaults.export_dir),
            archive_dir=_env_path("CRM_ARCHIVE_DIR", resolved_db.parent / "archives"),
            log_dir=_env_path("CRM_LOG_DIR", defaults.log_dir),
            log_level=os.getenv("CRM_LOG_LEVEL", defaults.log_level).upper(),
        )


def setup_logging(settings: Settings) -> None:
    """Log to a daily file and to stderr; stdout carries tool output."""
    settings.log_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(settings.log_dir / f"crm_{datetime.now().strftime('%Y-%m-%d')}.log"),
            logging.StreamHandler(sys.stderr),
        ],
    )


__all__ = [
    "DATA_DIR",
    "PROJECT_ROOT",
    "Settings",
    "setup_logging",
]
