"""
EDGAR App - Plugin Parameter Synchronization

Turns the EDGAR plugin's parameter form (symbols, form types, date range)
into the flat key/value list persisted on a chat plugin instance, and
rehydrates the form from that list.
"""

__version__ = "0.1.0"
__author__ = "EDGAR App Team"
