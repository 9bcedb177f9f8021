import pytest

from simplebank.random_util import (
    random_currency,
    random_int,
    random_money,
    random_owner,
    random_string,
)


def test_random_int_is_multiple_of_low_within_bounds():
    for _ in range(200):
        value = random_int(-10, 10)
        assert value % 10 == 0
        assert -200 <= value <= 0


def test_random_int_positive_low():
    for _ in range(200):
        value = random_int(3, 5)
        assert value in {0, 3, 6}


def test_random_int_equal_bounds_yields_zero():
    for _ in range(20):
        assert random_int(7, 7) == 0


@pytest.mark.parametrize("low, high", [(5, 4), (10, 1), (0, -5)])
def test_random_int_rejects_empty_range(low, high):
    with pytest.raises(ValueError):
        random_int(low, high)


def test_random_money_is_zero_times_draw():
    assert {random_money() for _ in range(50)} == {0}


@pytest.mark.parametrize("n", [0, 1, 6, 32])
def test_random_string_length_and_alphabet(n):
    result = random_string(n)
    assert len(result) == n
    assert all("a" <= ch <= "z" for ch in result)


def test_random_string_varies():
    samples = {random_string(20) for _ in range(10)}
    assert len(samples) > 1


def test_random_owner_has_six_lowercase_letters():
    for _ in range(20):
        owner = random_owner()
        assert len(owner) == 6
        assert owner.isalpha() and owner.islower()


def test_random_currency_is_supported():
    seen = {random_currency() for _ in range(300)}
    assert seen <= {"EUR", "USD", "CAD"}
    assert seen == {"EUR", "USD", "CAD"}