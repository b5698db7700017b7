"""Landed-cost pricing for import-resale shops."""

__version__ = "1.0.0"
