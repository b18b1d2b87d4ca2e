from typing import Optional


class PaymentError(Exception):
    pass


class ConfigurationMissing(PaymentError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f'{key} is not defined in the config or the environment variables')


class QueryError(PaymentError):
    '''
    A read call failed. Nothing has been sent on-chain by the step that raised it
    '''
    def __init__(self, step: str, cause: Exception):
        self.step = step
        self.cause = cause
        super().__init__(f'{step} failed: {cause}')


class TransactionFailed(PaymentError):
    '''
    A write call failed. There are three distinct outcomes and callers need to know which:
    - txn_hash is None: the txn was never broadcast, so no gas was spent
    - mined is True: the txn was mined and reverted, so gas was spent
    - otherwise: the txn was broadcast but we gave up waiting for the receipt,
      so it may still be mined (successfully or not) later
    '''
    def __init__(self, step: str, reason: str, txn_hash: Optional[str] = None, mined: bool = False):
        self.step = step
        self.reason = reason
        self.txn_hash = txn_hash
        self.mined = mined
        super().__init__(f'{step} failed: {reason} ({self.describe_outcome()})')

    def describe_outcome(self) -> str:
        if self.txn_hash is None:
            return 'txn was never broadcast, no gas spent'
        if self.mined:
            return f'txn {self.txn_hash} was mined and reverted, gas was spent'
        return f'txn {self.txn_hash} was broadcast but not confirmed, it may still be mined'


class InsufficientBalance(PaymentError):
    '''
    The signer holds less of a token than the payment needs. Raised before any txn is sent
    '''
    def __init__(self, token_address: str, required, available):
        self.token_address = token_address
        self.required = required
        self.available = available
        super().__init__(f'balance of {token_address} is {available}, need {required}')


class ApprovalFailed(TransactionFailed):
    pass


class SwapFailed(TransactionFailed):
    pass


class DepositFailed(TransactionFailed):
    pass
