from common.enums import ApprovalPolicy
from common.errors import ConfigurationMissing

from dataclasses import dataclass
from dotenv import load_dotenv
import os
from typing import Any, Dict, Mapping, Optional
from web3 import Web3

DEFAULT_DEADLINE_SECONDS = 60 * 20
DEFAULT_GAS_LIMIT = 1_000_000
DEFAULT_RECEIPT_TIMEOUT_SECONDS = 300


def _checksum(address: Optional[str]) -> Optional[str]:
    return Web3.to_checksum_address(address) if address else None


@dataclass(frozen=True)
class PaymentConfig:
    rpc_endpoint: str
    private_key: str
    router_address: str
    stable_token_address: str
    platform_address: str # receives the stable token, never the signer
    token_in_address: Optional[str] # the token we pay with when swapping

    router_abi_path: str
    token_abi_path: str

    wallet_address: Optional[str] = None # if set, must match the address derived from private_key
    slippage_tolerance: float = 1
    approval_policy: ApprovalPolicy = ApprovalPolicy.EXACT_QUOTE
    deadline_seconds: int = DEFAULT_DEADLINE_SECONDS
    gas_limit: int = DEFAULT_GAS_LIMIT
    receipt_timeout_seconds: int = DEFAULT_RECEIPT_TIMEOUT_SECONDS
    should_send_txns: bool = True

    def __post_init__(self):
        for key in ['rpc_endpoint', 'private_key', 'router_address', 'stable_token_address', 'platform_address']:
            if not getattr(self, key):
                raise ConfigurationMissing(key)
        if self.slippage_tolerance < 0:
            raise ValueError(f'slippage_tolerance must be non-negative, got {self.slippage_tolerance}')
        if self.deadline_seconds <= 0:
            raise ValueError(f'deadline_seconds must be positive, got {self.deadline_seconds}')

    @staticmethod
    def create_from_dict(config: Dict[str, Any], environ: Optional[Mapping[str, str]] = None):
        '''
        config is the parsed cfg.yaml. The secret always comes from the environment;
        addresses and the RPC endpoint may come from either, with the environment winning
        '''
        if environ is None:
            load_dotenv()
            environ = os.environ
        cfg = config.get('payment', {})
        contract_address = cfg.get('contract_address', {})
        abi_path = cfg.get('abi_path', {})
        return PaymentConfig(
            rpc_endpoint=environ.get('RPC_PROVIDER') or config.get('rpc_endpoint', {}).get('http'),
            private_key=environ.get('PRIVATE_KEY'),
            router_address=_checksum(environ.get('ROUTER_V2_ADDRESS') or contract_address.get('router')),
            stable_token_address=_checksum(environ.get('USDT_ADDRESS') or contract_address.get('stable_token')),
            platform_address=_checksum(environ.get('PLATFORM_ADDRESS') or cfg.get('platform_address')),
            token_in_address=_checksum(environ.get('OTHER_TOKEN_ADDRESS') or contract_address.get('token_in')),
            router_abi_path=abi_path.get('router', 'abi/uniswap_v2_router.json'),
            token_abi_path=abi_path.get('token', 'abi/erc20.json'),
            wallet_address=_checksum(cfg.get('wallet_address')),
            slippage_tolerance=cfg.get('slippage_tolerance', 1),
            approval_policy=ApprovalPolicy(cfg.get('approval_policy', ApprovalPolicy.EXACT_QUOTE.value)),
            deadline_seconds=int(cfg.get('deadline_seconds', DEFAULT_DEADLINE_SECONDS)),
            gas_limit=int(cfg.get('gas_limit', DEFAULT_GAS_LIMIT)),
            receipt_timeout_seconds=int(cfg.get('receipt_timeout_seconds', DEFAULT_RECEIPT_TIMEOUT_SECONDS)),
            should_send_txns=bool(cfg.get('should_send_txns', True)),
        )

    def __repr__(self):
        # Never print the private key
        fields = {k: v for k, v in self.__dict__.items() if k != 'private_key'}
        return 'PaymentConfig(' + ', '.join([f'{k}={v}' for k, v in fields.items()]) + ')'
