from common.token_amount import TokenAmount

from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR
from typing import Union


@dataclass(frozen=True)
class Quote:
    amount_out: TokenAmount
    amount_in: TokenAmount # what the router asked for at quote time
    amount_in_max: TokenAmount # amount_in padded by the slippage tolerance


def amount_in_max_with_slippage(amount_in: int, slippage_tolerance: Union[Decimal, int, float, str]) -> int:
    """
    amount_in * floor(100 + slippage_tolerance) / 100, in integer arithmetic.
    The multiplier is floored, so a 1.5% tolerance pads by 1%. Never decreases as slippage_tolerance grows
    """
    slippage = Decimal(str(slippage_tolerance))
    if slippage < 0:
        raise ValueError(f'slippage_tolerance must be non-negative, got {slippage_tolerance}')
    multiplier = int((100 + slippage).to_integral_value(rounding=ROUND_FLOOR))
    return amount_in * multiplier // 100
