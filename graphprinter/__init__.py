"""Time-series charts from JSON and SQLite files, printable to PDF."""

__version__ = "0.1.0"