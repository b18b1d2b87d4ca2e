from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN
import logging
from typing import Union


logging.basicConfig(
    level=logging.INFO,
    format= '[%(asctime)s.%(msecs)03d] %(levelname)s:%(name)s %(message)s | %(pathname)s:%(lineno)d',
    datefmt='%Y%m%d,%H:%M:%S'
)


@dataclass(frozen=True)
class TokenAmount:
    '''
    raw is the integer count of the token's smallest unit. decimals is only used to
    convert to and from human units: never do arithmetic on the human value
    '''
    raw: int
    decimals: int

    def __post_init__(self):
        if self.decimals < 0:
            raise ValueError(f'decimals must be non-negative, got {self.decimals}')
        if self.raw < 0:
            raise ValueError(f'raw amount must be non-negative, got {self.raw}')

    @staticmethod
    def from_human(amount: Union[Decimal, int, float, str], decimals: int) -> 'TokenAmount':
        """
        Floats are converted through str() so that 0.01 means 0.01 and not 0.01000000000000000020816...
        Anything finer than one raw unit is rounded down (we never ask for more than requested)
        """
        human = Decimal(str(amount))
        scaled = human.scaleb(decimals)
        raw = scaled.to_integral_value(rounding=ROUND_DOWN)
        if raw != scaled:
            logging.warning(f'Amount {human} has more precision than {decimals} decimals allow. '
                            f'Rounding down to {raw.scaleb(-decimals)}')
        return TokenAmount(raw=int(raw), decimals=decimals)

    def to_human(self) -> Decimal:
        return Decimal(self.raw).scaleb(-self.decimals)

    def format(self) -> str:
        if self.decimals == 0:
            return str(self.raw)
        whole, frac = divmod(self.raw, 10 ** self.decimals)
        frac_str = str(frac).rjust(self.decimals, '0').rstrip('0') or '0'
        return f'{whole}.{frac_str}'

    def __str__(self):
        return self.format()
