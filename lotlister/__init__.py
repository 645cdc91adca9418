"""Inventory spreadsheet -> marketplace listing generator."""

__version__ = "0.1.0"
