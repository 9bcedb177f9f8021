"""Random values for accounts, entries and transfers."""

from __future__ import annotations

import random
import string

ALPHABET = string.ascii_lowercase
CURRENCIES = ("EUR", "USD", "CAD")


def random_int(low: int, high: int) -> int:
    """Return ``low`` times a random integer drawn from ``[0, high - low]``.

    Raises ValueError when ``high - low + 1`` is not positive.
    """
    span = high - low + 1
    if span <= 0:
        raise ValueError(f"invalid range: low={low}, high={high}")
    return low * random.randrange(span)


def random_string(n: int) -> str:
    """Return a string of ``n`` random lowercase ASCII letters."""
    return "".join(random.choices(ALPHABET, k=n))


def random_owner() -> str:
    """Return a random six-letter owner name."""
    return random_string(6)


def random_money() -> int:
    """Return a random amount of money."""
    return random_int(0, 1000)


def random_currency() -> str:
    """Return one of the supported currency codes at random."""
    return random.choice(CURRENCIES)