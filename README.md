# simplebank

A small banking ledger kept in an SQLite database. It tracks three kinds of
record:

- **accounts**: an owner, a balance and a currency;
- **entries**: one change to one account's balance, negative or positive;
- **transfers**: an amount moved from one account to another.

A transfer is carried out in a single database transaction. The transfer
record, both entries and both balance updates are committed together, or
rolled back together. Balances are updated in ascending account-id order.

## Installing

```
pip install .
```

The package needs nothing beyond the Python standard library (Python 3.10
or later).

## Using it

```python
import sqlite3

from simplebank.queries import NoRowsError, Queries, create_schema
from simplebank.store import Store

conn = sqlite3.connect("bank.db")
create_schema(conn)

queries = Queries(conn)
alice = queries.create_account("alice", 100, "EUR")
bob = queries.create_account("bob", 50, "EUR")

store = Store(conn)
result = store.transfer_tx(alice.id, bob.id, 10)

print(result.transfer.amount)       # 10
print(result.from_entry.amount)     # -10
print(result.to_entry.amount)       # 10
print(result.from_account.balance)  # 90
print(result.to_account.balance)    # 60
```

### Schema

`create_schema(conn)` creates the `accounts`, `entries` and `transfers`
tables and their indexes if they do not exist yet. The statements use
SQLite syntax.

### Queries

`simplebank.queries.Queries` wraps a DB-API connection that takes `?`
parameters and offers one method per statement:

| Records   | Methods |
|-----------|---------|
| accounts  | `create_account`, `get_account`, `get_account_for_update`, `list_accounts`, `update_account`, `add_account_balance`, `delete_account` |
| entries   | `create_entry`, `get_entry`, `list_entries` |
| transfers | `create_transfer`, `get_transfer`, `list_transfers` |

- The `create_*` methods stamp the new record with the current UTC time and
  return it.
- `update_account` sets a balance. `add_account_balance` adds an amount to
  it. Both return the account as it now stands.
- `get_account_for_update` fetches an account just as `get_account` does.
- The `list_*` methods take a `limit` and an `offset` and return records in
  id order. `list_entries` returns one account's entries. `list_transfers`
  returns every transfer that leaves `from_account_id` or arrives at
  `to_account_id`.
- `delete_account` does not complain when the account does not exist.

`Queries` does not commit. The connection's own transaction handling
decides when changes are written.

A lookup that finds nothing raises `NoRowsError`, a `LookupError` with the
message `sql: no rows in result set`. This includes `update_account` and
`add_account_balance` on a missing account:

```python
queries.delete_account(alice.id)
try:
    queries.get_account(alice.id)
except NoRowsError:
    print("gone")
```

`Queries.with_connection(conn)` returns a new `Queries` bound to another
connection.

### Store and transactions

`simplebank.store.Store` is a `Queries` that also offers:

- `transaction()`: a context manager that yields a `Queries` on the same
  connection. When the block ends normally it commits. When the block
  raises it rolls back and lets the error through. If the rollback fails as
  well, it raises a `RuntimeError` that names both errors. On a connection
  in autocommit mode (`isolation_level` set to `None`) it issues `BEGIN`
  first.
- `transfer_tx(from_account_id, to_account_id, amount)`: records the
  transfer, an entry of `-amount` on the source account and one of `amount`
  on the destination, and updates both balances, all in one transaction. It
  returns a `TransferTxResult` with `transfer`, `from_account`,
  `to_account`, `from_entry` and `to_entry`.

A `Store` serialises its statements and transactions with a lock, so one
store can be shared between threads when the connection allows it (for
SQLite, open it with `check_same_thread=False`).

```python
with store.transaction() as tx:
    tx.add_account_balance(bob.id, 5)
    tx.create_entry(bob.id, 5)
```

### Records

`Account`, `Entry` and `Transfer` in `simplebank.models` are frozen data
classes. Each has a `to_dict()` method that gives its fields by name, with
`created_at` as an ISO 8601 string.

### Random sample data

`simplebank.random_util` has helpers for filling a database with sample
data:

- `random_string(n)`: `n` random lowercase ASCII letters;
- `random_owner()`: a random six-letter name;
- `random_currency()`: one of `EUR`, `USD` or `CAD`;
- `random_int(low, high)`: `low` multiplied by a random integer from 0 to
  `high - low` inclusive; raises `ValueError` when `high < low`;
- `random_money()`: `random_int(0, 1000)`, which for that reason is
  always 0.

## What it does not do

The package is a library only. It has no command-line tool and no network
service. It does not check currencies, does not stop balances from going
negative, and does not check that a transfer amount is positive or that
its accounts exist. Schema changes beyond `create_schema` are up to you.

## Running the tests

```
pip install ".[test]"
pytest
```