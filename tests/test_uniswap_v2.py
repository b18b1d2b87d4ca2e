from common.errors import QueryError
from uniswap_v2.uniswap_v2_router import UniswapV2RouterContainer
from uniswap_v2.uniswap_v2_token import Erc20TokenContainer

from pathlib import Path
import pytest
from types import SimpleNamespace
from web3 import Web3


ABI_DIR = Path(__file__).resolve().parents[1] / 'abi'
TOKEN = '0x' + 'cd' * 20
ROUTER = '0x' + 'ab' * 20


class _Call:
    def __init__(self, result=None, exc=None):
        self.result = result
        self.exc = exc
        self.calls = 0

    def call(self):
        self.calls += 1
        if self.exc is not None:
            raise self.exc
        return self.result


class _Functions:
    def __init__(self, **results):
        self.results = results
        self.invocations = []

    def __getattr__(self, name):
        def function(*args):
            self.invocations.append((name, args))
            return self.results.get(name, (name, args))
        return function


def _web3(functions):
    loaded = []

    def contract(address, abi):
        loaded.append((address, abi))
        return SimpleNamespace(address=address, functions=functions)

    return SimpleNamespace(to_checksum_address=Web3.to_checksum_address, eth=SimpleNamespace(contract=contract)), loaded


def test_token_reads_and_caches_decimals():
    decimals_call = _Call(result=6)
    web3, loaded = _web3(_Functions(decimals=decimals_call, allowance=_Call(result=123)))
    token = Erc20TokenContainer(TOKEN, str(ABI_DIR / 'erc20.json'), web3)

    assert loaded[0][0] == Web3.to_checksum_address(TOKEN)
    assert '"allowance"' in loaded[0][1]
    assert token.decimals() == 6
    assert token.decimals() == 6
    assert decimals_call.calls == 1
    assert token.allowance('0xowner', '0xspender') == 123
    assert token.amount(1_500_000).format() == '1.5'


def test_token_balance_of_reads_owner_balance():
    functions = _Functions(balanceOf=_Call(result=2_500_000))
    web3, loaded = _web3(functions)
    token = Erc20TokenContainer(TOKEN, str(ABI_DIR / 'erc20.json'), web3)

    assert token.balance_of('0xowner') == 2_500_000
    assert functions.invocations == [('balanceOf', ('0xowner',))]
    assert '"balanceOf"' in loaded[0][1]


def test_token_read_failure_is_query_error():
    web3, _ = _web3(_Functions(decimals=_Call(exc=ConnectionError('node unreachable'))))
    token = Erc20TokenContainer(TOKEN, str(ABI_DIR / 'erc20.json'), web3)

    with pytest.raises(QueryError) as exc_info:
        token.decimals()
    assert 'decimals()' in exc_info.value.step


def test_token_writes_only_build_the_call():
    functions = _Functions()
    web3, _ = _web3(functions)
    token = Erc20TokenContainer(TOKEN, str(ABI_DIR / 'erc20.json'), web3)

    assert token.approve('0xrouter', 10) == ('approve', ('0xrouter', 10))
    assert token.transfer('0xplatform', 5) == ('transfer', ('0xplatform', 5))


def test_router_get_amounts_in():
    functions = _Functions(getAmountsIn=_Call(result=[2_000_000_000_000_000_000, 1_000_000]))
    web3, _ = _web3(functions)
    router = UniswapV2RouterContainer(ROUTER, str(ABI_DIR / 'uniswap_v2_router.json'), web3)

    assert router.get_amounts_in(1_000_000, ['0xin', '0xout']) == [2_000_000_000_000_000_000, 1_000_000]
    assert functions.invocations == [('getAmountsIn', (1_000_000, ['0xin', '0xout']))]


def test_router_builds_swap_call():
    web3, _ = _web3(_Functions())
    router = UniswapV2RouterContainer(ROUTER, str(ABI_DIR / 'uniswap_v2_router.json'), web3)

    call = router.swap_tokens_for_exact_tokens(1, 2, ['0xin', '0xout'], '0xplatform', 99)
    assert call == ('swapTokensForExactTokens', (1, 2, ['0xin', '0xout'], '0xplatform', 99))
