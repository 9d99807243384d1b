"""
Contact relationship store: contacts, interaction history, todos and CSV export.
"""

__version__ = "1.0.0"
