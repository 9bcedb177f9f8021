import dataclasses
import json
from datetime import datetime, timezone

import pytest

from simplebank.models import Account, Entry, Transfer

WHEN = datetime(2024, 5, 1, 12, 30, 15, tzinfo=timezone.utc)


def test_account_to_dict_keys_and_values():
    account = Account(id=1, owner="abcdef", balance=100, currency="EUR", created_at=WHEN)
    data = account.to_dict()
    assert list(data) == ["id", "owner", "balance", "currency", "created_at"]
    assert data["owner"] == "abcdef"
    assert data["balance"] == 100
    assert data["currency"] == "EUR"
    assert datetime.fromisoformat(data["created_at"]) == WHEN


def test_entry_to_dict_allows_negative_amount():
    entry = Entry(id=3, account_id=1, amount=-10, created_at=WHEN)
    data = entry.to_dict()
    assert list(data) == ["id", "account_id", "amount", "created_at"]
    assert data["amount"] == -10
    assert data["account_id"] == 1
    assert datetime.fromisoformat(data["created_at"]) == WHEN


def test_transfer_to_dict_keys_and_values():
    transfer = Transfer(id=9, from_account_id=1, to_account_id=2, amount=10, created_at=WHEN)
    data = transfer.to_dict()
    assert list(data) == ["id", "from_account_id", "to_account_id", "amount", "created_at"]
    assert data["from_account_id"] == 1
    assert data["to_account_id"] == 2
    assert data["amount"] == 10


@pytest.mark.parametrize(
    "record",
    [
        Account(id=1, owner="owner", balance=0, currency="USD", created_at=WHEN),
        Entry(id=2, account_id=1, amount=5, created_at=WHEN),
        Transfer(id=3, from_account_id=1, to_account_id=2, amount=7, created_at=WHEN),
    ],
)
def test_to_dict_is_json_serialisable_and_round_trips(record):
    data = json.loads(json.dumps(record.to_dict()))
    data["created_at"] = datetime.fromisoformat(data["created_at"])
    assert type(record)(**data) == record


def test_records_are_immutable():
    account = Account(id=1, owner="owner", balance=0, currency="CAD", created_at=WHEN)
    with pytest.raises(dataclasses.FrozenInstanceError):
        account.balance = 50
    assert account.balance == 0
    assert account.to_dict()["balance"] == 0


def test_equality_depends_on_fields():
    a = Entry(id=1, account_id=1, amount=5, created_at=WHEN)
    b = Entry(id=1, account_id=1, amount=5, created_at=WHEN)
    c = Entry(id=1, account_id=1, amount=6, created_at=WHEN)
    assert a == b
    assert a != c