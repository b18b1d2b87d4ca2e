from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SwapRequest:
    '''
    Designed to fit the interface for swapTokensForExactTokens
    (https://github.com/Uniswap/v2-periphery/blob/master/contracts/UniswapV2Router02.sol)
    '''
    amount_out: Decimal # exact amount of token_out wanted, in human units
    slippage_tolerance: Decimal # percentage, e.g. 1 means 1%
    token_in: str
    token_out: str

    def __post_init__(self):
        if self.amount_out <= 0:
            raise ValueError(f'amount_out must be positive, got {self.amount_out}')
        if self.slippage_tolerance < 0:
            raise ValueError(f'slippage_tolerance must be non-negative, got {self.slippage_tolerance}')
        if self.token_in.lower() == self.token_out.lower():
            raise ValueError(f'token_in and token_out must differ, both are {self.token_in}')

    @property
    def path(self):
        return [self.token_in, self.token_out]
