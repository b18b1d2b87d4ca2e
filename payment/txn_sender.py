from common.enums import ReceiptStatus
from common.errors import TransactionFailed
from payment.receipt import Receipt

from eth_account import Account
from eth_account.signers.local import LocalAccount
import logging
import requests
from timer import timer
import web3

logging.basicConfig(
    level=logging.INFO,
    format= '[%(asctime)s.%(msecs)03d] %(levelname)s:%(name)s %(message)s | %(pathname)s:%(lineno)d',
    datefmt='%Y%m%d,%H:%M:%S'
)


class TxnSender:
    def __init__(self, web3, private_key, config):
        self.web3 = web3
        self.private_key = private_key

        self.wallet_address = config.wallet_address
        self.should_send_txns = config.should_send_txns
        self.receipt_timeout_seconds = config.receipt_timeout_seconds
        self._validate_wallet()

    def _validate_wallet(self):
        if not self.private_key.startswith('0x'):
            raise ValueError('Private key must start with 0x hex prefix')

        account: LocalAccount = Account.from_key(self.private_key)
        if self.wallet_address is not None and self.wallet_address.lower() != account.address.lower():
            raise ValueError(f'Configured wallet_address {self.wallet_address} does not match '
                             f'the private key address {account.address}')
        self.wallet_address = account.address

    @timer
    def send_and_wait(self, contract_function, step: str, gas_limit: int) -> Receipt:
        '''
        Returns the receipt of the mined txn, whatever its status. Raises TransactionFailed
        if the txn could not be broadcast or was not mined within receipt_timeout_seconds
        '''
        txn_hash = self.send_nonblocking(contract_function, step, gas_limit)
        logging.warning(f'{step}: sent txn {txn_hash} (waiting for txn to be mined)...')
        try:
            receipt = self.web3.eth.wait_for_transaction_receipt(txn_hash, timeout=self.receipt_timeout_seconds)
        except web3.exceptions.TimeExhausted as e:
            logging.error(f'{step}: timed out waiting for txn receipt: {e}. '
                          f'The txn may still be included in a later block.')
            raise TransactionFailed(step, f'no receipt after {self.receipt_timeout_seconds}s', txn_hash=txn_hash) from e
        status = ReceiptStatus(receipt.status)
        logging.info(f'{step}: txn {txn_hash} mined in block {receipt.blockNumber} with status {status.name}, gas used {receipt.gasUsed}')
        return Receipt(
            txn_hash=txn_hash,
            status=status,
            block_number=receipt.blockNumber,
            gas_used=receipt.gasUsed,
        )

    def send_nonblocking(self, contract_function, step: str, gas_limit: int) -> str:
        if not self.should_send_txns:
            logging.warning(f'NOT sending {step} txn because should_send_txns is False')
            raise TransactionFailed(step, 'should_send_txns is False')
        try:
            nonce = self.web3.eth.get_transaction_count(self.wallet_address, 'pending')
            txn = contract_function.build_transaction({
                # must specify 'from' so the txn is built for our wallet
                'from': self.wallet_address,
                'nonce': nonce,
                'gas': gas_limit,
            })
            signed_txn = self.web3.eth.account.sign_transaction(txn, private_key=self.private_key)
        except Exception as e:
            logging.error(f'{step}: could not build txn ({e})')
            raise TransactionFailed(step, str(e)) from e

        # Known before sending, so a send that dies mid-flight can still be tracked down
        signed_hash = signed_txn.hash.to_0x_hex()
        try:
            return self.web3.eth.send_raw_transaction(signed_txn.raw_transaction).to_0x_hex()
        except requests.exceptions.RequestException as e:
            # Checked first: some of these also subclass ValueError but say nothing about the node's verdict
            raise self._lost_in_flight(step, signed_hash, e) from e
        except (web3.exceptions.Web3RPCError, ValueError) as e:
            # The node answered with a JSON-RPC error (nonce too low, insufficient funds for gas)
            logging.error(f'{step}: node rejected txn {signed_hash} ({e})')
            raise TransactionFailed(step, str(e)) from e
        except Exception as e:
            # Timeouts and dropped connections: the node may have accepted the txn before we lost it
            raise self._lost_in_flight(step, signed_hash, e) from e

    def _lost_in_flight(self, step, signed_hash, e) -> TransactionFailed:
        logging.error(f'{step}: lost the connection while sending txn {signed_hash} ({e}). '
                      f'The txn may still be mined.')
        return TransactionFailed(step, str(e), txn_hash=signed_hash)
