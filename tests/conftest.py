"""Dummy chain collaborators shared by the payment tests.

The dummies keep just enough state to behave like the real contracts from the
orchestrator's point of view: a mined approval raises the token's allowance,
and every write is recorded so tests can assert what was (not) sent.
"""

from common.enums import ReceiptStatus
from common.errors import QueryError
from common.token_amount import TokenAmount
from payment.payment_config import PaymentConfig
from payment.payment_context import PaymentContext
from payment.receipt import Receipt

import pytest


SIGNER = '0x5151515151515151515151515151515151515151'
ROUTER = '0x7272727272727272727272727272727272727272'
TOKEN_IN = '0x1a1a1a1a1a1a1a1a1a1a1a1a1a1a1a1a1a1a1a1a'
STABLE = '0x6d6d6d6d6d6d6d6d6d6d6d6d6d6d6d6d6d6d6d6d'
PLATFORM = '0x9e9e9e9e9e9e9e9e9e9e9e9e9e9e9e9e9e9e9e9e'


class DummyToken:
    def __init__(self, address, decimals, allowance=0, balance=10 ** 30, fail_decimals=False):
        self.token_address = address
        self._decimals = decimals
        self.allowance_value = allowance
        self.balance = balance
        self.fail_decimals = fail_decimals
        self.allowance_calls = []

    def decimals(self):
        if self.fail_decimals:
            raise QueryError(f'decimals() of {self.token_address}', ConnectionError('node unreachable'))
        return self._decimals

    def allowance(self, owner, spender):
        self.allowance_calls.append((owner, spender))
        return self.allowance_value

    def balance_of(self, owner):
        return self.balance

    def amount(self, raw):
        return TokenAmount(raw=raw, decimals=self._decimals)

    def approve(self, spender, raw_amount):
        return ('approve', self, spender, raw_amount)

    def transfer(self, to, raw_amount):
        return ('transfer', self, to, raw_amount)


class DummyRouter:
    def __init__(self, amount_in, fail_quote=False):
        self.amount_in = amount_in
        self.fail_quote = fail_quote
        self.quote_calls = []

    def get_amounts_in(self, amount_out, path):
        self.quote_calls.append((amount_out, list(path)))
        if self.fail_quote:
            raise QueryError(f'getAmountsIn({amount_out}, {path})', TimeoutError('timed out'))
        return [self.amount_in, amount_out]

    def swap_tokens_for_exact_tokens(self, amount_out, amount_in_max, path, to, deadline):
        return ('swap', amount_out, amount_in_max, list(path), to, deadline)


class DummyTxnSender:
    '''
    statuses maps a step name to the ReceiptStatus its txns are mined with,
    send_failures maps a step name to the TransactionFailed raised instead of mining
    '''
    def __init__(self, statuses=None, send_failures=None):
        self.wallet_address = SIGNER
        self.statuses = statuses or {}
        self.send_failures = send_failures or {}
        self.sent = []

    def send_and_wait(self, contract_function, step, gas_limit):
        if step in self.send_failures:
            raise self.send_failures[step]
        self.sent.append((step, contract_function, gas_limit))
        status = self.statuses.get(step, ReceiptStatus.SUCCESS)
        if step == 'approve' and status == ReceiptStatus.SUCCESS:
            _, token, _, raw_amount = contract_function
            token.allowance_value = raw_amount
        return Receipt(
            txn_hash=f'0x{len(self.sent):064x}',
            status=status,
            block_number=100 + len(self.sent),
            gas_used=21000,
        )

    def steps(self):
        return [step for step, _, _ in self.sent]


def make_config(**overrides):
    kwargs = dict(
        rpc_endpoint='http://dummy',
        private_key='0x' + '01' * 32,
        router_address=ROUTER,
        stable_token_address=STABLE,
        platform_address=PLATFORM,
        token_in_address=TOKEN_IN,
        router_abi_path='abi/uniswap_v2_router.json',
        token_abi_path='abi/erc20.json',
    )
    kwargs.update(overrides)
    return PaymentConfig(**kwargs)


def make_context(config, router, txn_sender, tokens):
    return PaymentContext(
        config=config,
        web3=None,
        router=router,
        txn_sender=txn_sender,
        address_to_token={token.token_address.lower(): token for token in tokens},
    )


@pytest.fixture
def token_in():
    return DummyToken(TOKEN_IN, decimals=18)


@pytest.fixture
def stable_token():
    return DummyToken(STABLE, decimals=6)


@pytest.fixture
def router():
    return DummyRouter(amount_in=2_000_000_000_000_000_000)


@pytest.fixture
def txn_sender():
    return DummyTxnSender()


@pytest.fixture
def context(token_in, stable_token, router, txn_sender):
    return make_context(make_config(), router, txn_sender, [token_in, stable_token])
