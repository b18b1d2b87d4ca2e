from payment.payment_config import PaymentConfig
from payment.txn_sender import TxnSender
from uniswap_v2.uniswap_v2_router import UniswapV2RouterContainer
from uniswap_v2.uniswap_v2_token import Erc20TokenContainer

from dataclasses import dataclass, field
import logging
from typing import Dict
import web3 as w3

logging.basicConfig(
    level=logging.INFO,
    format= '[%(asctime)s.%(msecs)03d] %(levelname)s:%(name)s %(message)s | %(pathname)s:%(lineno)d',
    datefmt='%Y%m%d,%H:%M:%S'
)


@dataclass
class PaymentContext:
    '''
    Everything the orchestrator talks to. Built once per invocation by create_payment_context;
    tests build one out of dummies instead
    '''
    config: PaymentConfig
    web3: w3.Web3
    router: UniswapV2RouterContainer
    txn_sender: TxnSender
    address_to_token: Dict[str, Erc20TokenContainer] = field(default_factory=dict)

    @property
    def signer_address(self) -> str:
        return self.txn_sender.wallet_address

    def token(self, token_address: str) -> Erc20TokenContainer:
        key = token_address.lower()
        if key not in self.address_to_token:
            self.address_to_token[key] = Erc20TokenContainer(token_address, self.config.token_abi_path, self.web3)
        return self.address_to_token[key]


def create_payment_context(config: PaymentConfig) -> PaymentContext:
    web3 = w3.Web3(w3.Web3.HTTPProvider(config.rpc_endpoint))
    router = UniswapV2RouterContainer(
        config.router_address,
        config.router_abi_path,
        web3,
    )
    txn_sender = TxnSender(web3, config.private_key, config)
    logging.info(f'Initialized payment context for wallet {txn_sender.wallet_address} via router {config.router_address}')
    return PaymentContext(
        config=config,
        web3=web3,
        router=router,
        txn_sender=txn_sender,
    )
