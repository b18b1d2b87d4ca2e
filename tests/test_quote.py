from payment.quote import amount_in_max_with_slippage

from decimal import Decimal
import pytest


def test_one_percent_scenario():
    assert amount_in_max_with_slippage(2_000_000_000_000_000_000, 1) == 2_020_000_000_000_000_000


def test_zero_slippage_is_the_quote():
    assert amount_in_max_with_slippage(2_000_000_000_000_000_000, 0) == 2_000_000_000_000_000_000


def test_fractional_slippage_is_floored():
    amount_in = 10_000
    assert amount_in_max_with_slippage(amount_in, '0.99') == amount_in
    assert amount_in_max_with_slippage(amount_in, Decimal('1.5')) == 10_100
    assert amount_in_max_with_slippage(amount_in, 0.5) == amount_in


@pytest.mark.parametrize('amount_in', [1, 99, 10_000, 2_000_000_000_000_000_000, 2 ** 200 + 7])
def test_never_below_quote_and_monotone_in_slippage(amount_in):
    slippages = ['0', '0.3', '1', '1.7', '2', '5', '12.5', '50', '100', '250']
    maxes = [amount_in_max_with_slippage(amount_in, s) for s in slippages]
    assert all(m >= amount_in for m in maxes)
    assert maxes == sorted(maxes)


def test_negative_slippage_is_rejected():
    with pytest.raises(ValueError):
        amount_in_max_with_slippage(100, -1)
