"""GameStore: SQLite data-storage demos over a thin access wrapper."""

__version__ = "1.0.0"
