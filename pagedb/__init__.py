"""A small single-table paged database with an interactive prompt."""

__version__ = "0.1.0"

__all__ = ["cli", "row", "statement", "table"]