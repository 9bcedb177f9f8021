"""Transactions over the bank's queries, including money transfers."""

from __future__ import annotations

import threading
from contextlib import closing, contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Sequence, TypeVar

from simplebank.models import Account, Entry, Transfer
from simplebank.queries import Queries

T = TypeVar("T")


@dataclass(frozen=True)
class TransferTxResult:
    """Everything a transfer transaction created or changed."""

    transfer: Transfer
    from_account: Account
    to_account: Account
    from_entry: Entry
    to_entry: Entry


class Store(Queries):
    """Runs queries directly, or grouped into transactions on one connection.

    Transactions are serialised with a lock, so a store may be shared
    between threads when the connection allows it.
    """

    def __init__(self, conn: Any) -> None:
        super().__init__(conn)
        self._lock = threading.Lock()

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        with self._lock:
            return super()._execute(sql, params)

    def _one(
        self, sql: str, params: Sequence[Any], build: Callable[[Sequence[Any]], T]
    ) -> T:
        with self._lock:
            return super()._one(sql, params, build)

    def _many(
        self, sql: str, params: Sequence[Any], build: Callable[[Sequence[Any]], T]
    ) -> list[T]:
        with self._lock:
            return super()._many(sql, params, build)

    @contextmanager
    def transaction(self) -> Iterator[Queries]:
        """Yield a Queries object whose work is committed together.

        The transaction is rolled back and the error re-raised when the block
        fails. If the rollback fails too, a RuntimeError naming both errors
        is raised.
        """
        with self._lock:
            if getattr(self.conn, "isolation_level", "") is None:
                with closing(self.conn.cursor()) as cursor:
                    cursor.execute("BEGIN")
            queries = self.with_connection(self.conn)
            try:
                yield queries
            except BaseException as exc:
                try:
                    self.conn.rollback()
                except Exception as rb_exc:
                    raise RuntimeError(
                        f"tx err: {exc}, rb err: {rb_exc}"
                    ) from rb_exc
                raise
            self.conn.commit()

    def transfer_tx(
        self, from_account_id: int, to_account_id: int, amount: int
    ) -> TransferTxResult:
        """Move ``amount`` between two accounts in a single transaction.

        Records the transfer, one entry per account and updates both
        balances. Balances are changed in order of account id so that
        opposite transfers cannot deadlock.
        """
        with self.transaction() as q:
            transfer = q.create_transfer(from_account_id, to_account_id, amount)
            from_entry = q.create_entry(from_account_id, -amount)
            to_entry = q.create_entry(to_account_id, amount)
            if from_account_id < to_account_id:
                from_account, to_account = _add_money(
                    q, from_account_id, -amount, to_account_id, amount
                )
            else:
                to_account, from_account = _add_money(
                    q, to_account_id, amount, from_account_id, -amount
                )
        return TransferTxResult(
            transfer=transfer,
            from_account=from_account,
            to_account=to_account,
            from_entry=from_entry,
            to_entry=to_entry,
        )


def _add_money(
    q: Queries,
    account_id1: int,
    amount1: int,
    account_id2: int,
    amount2: int,
) -> tuple[Account, Account]:
    account1 = q.add_account_balance(account_id1, amount1)
    account2 = q.add_account_balance(account_id2, amount2)
    return account1, account2