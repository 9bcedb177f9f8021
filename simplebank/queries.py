"""Typed queries over the accounts, entries and transfers tables."""

from __future__ import annotations

from contextlib import closing
from datetime import datetime, timezone
from typing import Any, Callable, Sequence, TypeVar

from simplebank.models import Account, Entry, Transfer

T = TypeVar("T")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS accounts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    owner TEXT NOT NULL,
    balance INTEGER NOT NULL,
    currency TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS accounts_owner_idx ON accounts (owner);

CREATE TABLE IF NOT EXISTS entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id INTEGER NOT NULL REFERENCES accounts (id),
    amount INTEGER NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS entries_account_id_idx ON entries (account_id);

CREATE TABLE IF NOT EXISTS transfers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    from_account_id INTEGER NOT NULL REFERENCES accounts (id),
    to_account_id INTEGER NOT NULL REFERENCES accounts (id),
    amount INTEGER NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS transfers_from_idx ON transfers (from_account_id);
CREATE INDEX IF NOT EXISTS transfers_to_idx ON transfers (to_account_id);
CREATE INDEX IF NOT EXISTS transfers_from_to_idx
    ON transfers (from_account_id, to_account_id);
"""

_ACCOUNT_COLUMNS = "id, owner, balance, currency, created_at"
_ENTRY_COLUMNS = "id, account_id, amount, created_at"
_TRANSFER_COLUMNS = "id, from_account_id, to_account_id, amount, created_at"


class NoRowsError(LookupError):
    """Raised when a query that must return one row returns none."""

    def __init__(self, message: str = "sql: no rows in result set") -> None:
        super().__init__(message)


def create_schema(conn: Any) -> None:
    """Create the accounts, entries and transfers tables if they are missing."""
    with closing(conn.cursor()) as cursor:
        for statement in _SCHEMA.split(";"):
            if statement.strip():
                cursor.execute(statement)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _account(row: Sequence[Any]) -> Account:
    id_, owner, balance, currency, created_at = row
    return Account(id_, owner, balance, currency, _timestamp(created_at))


def _entry(row: Sequence[Any]) -> Entry:
    id_, account_id, amount, created_at = row
    return Entry(id_, account_id, amount, _timestamp(created_at))


def _transfer(row: Sequence[Any]) -> Transfer:
    id_, from_id, to_id, amount, created_at = row
    return Transfer(id_, from_id, to_id, amount, _timestamp(created_at))


class Queries:
    """Runs the bank's queries on a DB-API connection using qmark parameters.

    Statements are not committed here; the connection's transaction mode
    decides when changes become durable.
    """

    def __init__(self, conn: Any) -> None:
        self.conn = conn

    def with_connection(self, conn: Any) -> Queries:
        """Return a Queries object that runs on ``conn`` instead."""
        return Queries(conn)

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        with closing(self.conn.cursor()) as cursor:
            cursor.execute(sql, tuple(params))
            return cursor.lastrowid

    def _one(
        self, sql: str, params: Sequence[Any], build: Callable[[Sequence[Any]], T]
    ) -> T:
        with closing(self.conn.cursor()) as cursor:
            cursor.execute(sql, tuple(params))
            row = cursor.fetchone()
        if row is None:
            raise NoRowsError()
        return build(row)

    def _many(
        self, sql: str, params: Sequence[Any], build: Callable[[Sequence[Any]], T]
    ) -> list[T]:
        with closing(self.conn.cursor()) as cursor:
            cursor.execute(sql, tuple(params))
            return [build(row) for row in cursor.fetchall()]

    # accounts

    def add_account_balance(self, account_id: int, amount: int) -> Account:
        """Add ``amount`` to an account's balance and return the updated account."""
        self._execute(
            "UPDATE accounts SET balance = balance + ? WHERE id = ?",
            (amount, account_id),
        )
        return self.get_account(account_id)

    def create_account(self, owner: str, balance: int, currency: str) -> Account:
        """Insert a new account and return it."""
        new_id = self._execute(
            "INSERT INTO accounts (owner, balance, currency, created_at) "
            "VALUES (?, ?, ?, ?)",
            (owner, balance, currency, _now().isoformat()),
        )
        return self.get_account(new_id)

    def delete_account(self, account_id: int) -> None:
        """Delete an account; deleting a missing account is not an error."""
        self._execute("DELETE FROM accounts WHERE id = ?", (account_id,))

    def get_account_for_update(self, account_id: int) -> Account:
        """Fetch an account that the caller is about to change."""
        return self.get_account(account_id)

    def get_account(self, account_id: int) -> Account:
        """Fetch one account by id."""
        return self._one(
            f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE id = ? LIMIT 1",
            (account_id,),
            _account,
        )

    def list_accounts(self, limit: int, offset: int) -> list[Account]:
        """Return accounts ordered by id, paged by ``limit`` and ``offset``."""
        return self._many(
            f"SELECT {_ACCOUNT_COLUMNS} FROM accounts ORDER BY id LIMIT ? OFFSET ?",
            (limit, offset),
            _account,
        )

    def update_account(self, account_id: int, balance: int) -> Account:
        """Set an account's balance and return the updated account."""
        self._execute(
            "UPDATE accounts SET balance = ? WHERE id = ?", (balance, account_id)
        )
        return self.get_account(account_id)

    # entries

    def create_entry(self, account_id: int, amount: int) -> Entry:
        """Insert a ledger entry and return it."""
        new_id = self._execute(
            "INSERT INTO entries (account_id, amount, created_at) VALUES (?, ?, ?)",
            (account_id, amount, _now().isoformat()),
        )
        return self.get_entry(new_id)

    def get_entry(self, entry_id: int) -> Entry:
        """Fetch one entry by id."""
        return self._one(
            f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE id = ? LIMIT 1",
            (entry_id,),
            _entry,
        )

    def list_entries(self, account_id: int, limit: int, offset: int) -> list[Entry]:
        """Return an account's entries ordered by id, paged."""
        return self._many(
            f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE account_id = ? "
            "ORDER BY id LIMIT ? OFFSET ?",
            (account_id, limit, offset),
            _entry,
        )

    # transfers

    def create_transfer(
        self, from_account_id: int, to_account_id: int, amount: int
    ) -> Transfer:
        """Insert a transfer record and return it."""
        new_id = self._execute(
            "INSERT INTO transfers (from_account_id, to_account_id, amount, created_at) "
            "VALUES (?, ?, ?, ?)",
            (from_account_id, to_account_id, amount, _now().isoformat()),
        )
        return self.get_transfer(new_id)

    def get_transfer(self, transfer_id: int) -> Transfer:
        """Fetch one transfer by id."""
        return self._one(
            f"SELECT {_TRANSFER_COLUMNS} FROM transfers WHERE id = ? LIMIT 1",
            (transfer_id,),
            _transfer,
        )

    def list_transfers(
        self, from_account_id: int, to_account_id: int, limit: int, offset: int
    ) -> list[Transfer]:
        """Return transfers leaving ``from_account_id`` or reaching ``to_account_id``."""
        return self._many(
            f"SELECT {_TRANSFER_COLUMNS} FROM transfers "
            "WHERE from_account_id = ? OR to_account_id = ? "
            "ORDER BY id LIMIT ? OFFSET ?",
            (from_account_id, to_account_id, limit, offset),
            _transfer,
        )