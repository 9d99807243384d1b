"""
Shared data models for the contact store.
"""

from .contact import CONTACT_FIELDS, Contact, ContactCreate, ContactUpdate
from .entry import ContactEntry, ContactEntryWithName, EntryCreate, EntryType, EntryUpdate
from .todo import ContactTodo, ContactTodoWithName, TodoCreate, TodoFilters, TodoUpdate

__all__ = [
    "CONTACT_FIELDS",
    "Contact",
    "ContactCreate",
    "ContactUpdate",
    "ContactEntry",
    "ContactEntryWithName",
    "EntryCreate",
    "EntryType",
    "EntryUpdate",
    "ContactTodo",
    "ContactTodoWithName",
    "TodoCreate",
    "TodoFilters",
    "TodoUpdate",
]
