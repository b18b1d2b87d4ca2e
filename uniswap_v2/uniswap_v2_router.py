from common.helpers import load_contract, query_call_wrapper

from typing import List


class UniswapV2RouterContainer:
    '''
    Wraps the two router functions we use
    (https://github.com/Uniswap/v2-periphery/blob/master/contracts/UniswapV2Router02.sol)
    '''
    def __init__(self, router_address, router_abi_path, web3):
        self.router_address = router_address
        self.contract = load_contract(
            router_address,
            router_abi_path,
            web3,
        )

    def get_amounts_in(self, amount_out: int, path: List[str]) -> List[int]:
        """
        Returns the raw amount needed at each hop of path to receive exactly amount_out of path[-1].
        For a single pair that is [amount_in, amount_out]. This is a snapshot of the reserves
        at call time; the price may move before our swap is mined
        """
        amounts = query_call_wrapper(
            self.contract.functions.getAmountsIn(amount_out, path),
            f'getAmountsIn({amount_out}, {path})',
        )
        return [int(a) for a in amounts]

    def swap_tokens_for_exact_tokens(self, amount_out: int, amount_in_max: int, path: List[str], to: str, deadline: int):
        return self.contract.functions.swapTokensForExactTokens(
            amount_out,
            amount_in_max,
            path,
            to,
            deadline,
        )

    def dump(self):
        return {
            'router_address': self.router_address,
        }

    def __repr__(self):
        return '[ ' + ', '.join([f'{k}={v}' for k, v in self.dump().items()]) + ' ]'
