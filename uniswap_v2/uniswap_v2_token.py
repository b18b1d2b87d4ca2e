from common.helpers import load_contract, query_call_wrapper
from common.token_amount import TokenAmount


class Erc20TokenContainer:
    def __init__(self, token_address, token_abi_path, web3):
        """
        Nothing is read from the chain here. decimals() is looked up on first use and cached
        """
        self.token_address = token_address
        self.contract = load_contract(
            token_address,
            token_abi_path,
            web3,
        )
        self._decimals = None

    def call(self, f, step):
        return query_call_wrapper(f, step)

    def decimals(self) -> int:
        if self._decimals is None:
            self._decimals = int(self.call(self.contract.functions.decimals(), f'decimals() of {self.token_address}'))
        return self._decimals

    def allowance(self, owner, spender) -> int:
        return int(self.call(
            self.contract.functions.allowance(owner, spender),
            f'allowance({owner}, {spender}) of {self.token_address}',
        ))

    def balance_of(self, owner) -> int:
        return int(self.call(self.contract.functions.balanceOf(owner), f'balanceOf({owner}) of {self.token_address}'))

    def amount(self, raw: int) -> TokenAmount:
        return TokenAmount(raw=raw, decimals=self.decimals())

    # Writes: these only build the contract function call, TxnSender signs and sends it

    def approve(self, spender, raw_amount: int):
        return self.contract.functions.approve(spender, raw_amount)

    def transfer(self, to, raw_amount: int):
        return self.contract.functions.transfer(to, raw_amount)

    def dump(self):
        return {
            'token_address': self.token_address,
        }

    def __repr__(self):
        return '[ ' + ', '.join([f'{k}={v}' for k, v in self.dump().items()]) + ' ]'
