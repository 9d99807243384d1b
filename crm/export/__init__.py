"""
CSV export of contacts and interaction history.
"""

from .csv_export import (
    CONTACT_HEADERS,
    CONTACT_HISTORY_MARKER,
    CONTACT_INFO_MARKER,
    FULL_HEADERS,
    HISTORY_HEADERS,
    HISTORY_SEPARATOR,
    export_contact_history,
    export_contacts,
    export_full,
    format_history_entry,
)

__all__ = [
    "CONTACT_HEADERS",
    "CONTACT_HISTORY_MARKER",
    "CONTACT_INFO_MARKER",
    "FULL_HEADERS",
    "HISTORY_HEADERS",
    "HISTORY_SEPARATOR",
    "export_contact_history",
    "export_contacts",
    "export_full",
    "format_history_entry",
]
