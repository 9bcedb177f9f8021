"""A small banking ledger of accounts, entries and transfers kept in SQLite."""

__version__ = "0.1.0"
__all__ = ["models", "queries", "random_util", "store"]