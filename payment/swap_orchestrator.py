from common.enums import ApprovalPolicy
from common.errors import ApprovalFailed, DepositFailed, InsufficientBalance, SwapFailed, TransactionFailed
from common.token_amount import TokenAmount
from payment.payment_context import PaymentContext
from payment.quote import Quote, amount_in_max_with_slippage
from payment.swap_request import SwapRequest
from payment.swap_result import SwapResult

from decimal import Decimal
import logging
import time
from timer import timer
from typing import Callable, Optional, Union

logging.basicConfig(
    level=logging.INFO,
    format= '[%(asctime)s.%(msecs)03d] %(levelname)s:%(name)s %(message)s | %(pathname)s:%(lineno)d',
    datefmt='%Y%m%d,%H:%M:%S'
)
timer.set_level(logging.DEBUG)

HumanAmount = Union[Decimal, int, float, str]


class SwapOrchestrator:
    '''
    Pays the platform an exact amount of the stable token, either by swapping token_in for it
    (quote -> approve if needed -> swap) or by transferring the stable token directly.
    Every step blocks on the previous one and nothing is retried
    '''

    def __init__(self, context: PaymentContext, token_in_address: Optional[str] = None,
                 time_fn: Callable[[], float] = time.time):
        self.ctx = context
        self.config = context.config
        self.token_in_address = token_in_address or self.config.token_in_address
        self.stable_token_address = self.config.stable_token_address
        self.time_fn = time_fn

    def _swap_request(self, desired_output_amount: HumanAmount, slippage_tolerance: Optional[HumanAmount]) -> SwapRequest:
        if self.token_in_address is None:
            raise ValueError('No token_in address configured to swap from')
        if slippage_tolerance is None:
            slippage_tolerance = self.config.slippage_tolerance
        return SwapRequest(
            amount_out=Decimal(str(desired_output_amount)),
            slippage_tolerance=Decimal(str(slippage_tolerance)),
            token_in=self.token_in_address,
            token_out=self.stable_token_address,
        )

    @timer
    def quote_amount_in_max(self, desired_output_amount: HumanAmount,
                            slippage_tolerance: Optional[HumanAmount] = None) -> Quote:
        '''
        Read-only: how much token_in we would pay (at most) for exactly desired_output_amount
        of the stable token. Raises QueryError if any read fails
        '''
        return self._quote(self._swap_request(desired_output_amount, slippage_tolerance))

    def _quote(self, request: SwapRequest) -> Quote:
        token_in = self.ctx.token(request.token_in)
        token_out = self.ctx.token(request.token_out)

        token_out_decimals = token_out.decimals()
        token_in_decimals = token_in.decimals()
        logging.info(f'Decimals: token_in={token_in_decimals}, token_out={token_out_decimals}')

        amount_out = TokenAmount.from_human(request.amount_out, token_out_decimals)
        if amount_out.raw == 0:
            raise ValueError(f'{request.amount_out} rounds down to zero with {token_out_decimals} decimals')
        logging.info(f'Exact amount out: {amount_out}')

        amounts = self.ctx.router.get_amounts_in(amount_out.raw, request.path)
        amount_in = TokenAmount(raw=amounts[0], decimals=token_in_decimals)
        logging.info(f'Quoted amount in: {amount_in}')

        amount_in_max = TokenAmount(
            raw=amount_in_max_with_slippage(amount_in.raw, request.slippage_tolerance),
            decimals=token_in_decimals,
        )
        logging.info(f'Max amount in with {request.slippage_tolerance}% slippage: {amount_in_max}')
        return Quote(amount_out=amount_out, amount_in=amount_in, amount_in_max=amount_in_max)

    def _check_balance(self, token, required: TokenAmount):
        available = token.amount(token.balance_of(self.ctx.signer_address))
        logging.info(f'Balance of {token.token_address}: {available}')
        if available.raw < required.raw:
            logging.error(f'Balance of {token.token_address} is {available}, need {required}')
            raise InsufficientBalance(token.token_address, required, available)
        return available

    def _approve_if_needed(self, request: SwapRequest, quote: Quote):
        token_in = self.ctx.token(request.token_in)
        router_address = self.config.router_address
        if self.config.approval_policy == ApprovalPolicy.SLIPPAGE_PADDED:
            required = quote.amount_in_max
        else:
            required = quote.amount_in

        allowance = token_in.allowance(self.ctx.signer_address, router_address)
        logging.info(f'Current allowance for router {router_address}: {token_in.amount(allowance)}')
        if allowance >= required.raw:
            logging.info('Allowance covers the swap, no approval needed')
            return

        logging.warning(f'Allowance too low, sending txn to approve {required} for router {router_address}')
        try:
            receipt = self.ctx.txn_sender.send_and_wait(
                token_in.approve(router_address, required.raw),
                'approve',
                self.config.gas_limit,
            )
        except TransactionFailed as e:
            raise ApprovalFailed('approve', e.reason, txn_hash=e.txn_hash, mined=e.mined) from e
        if not receipt.is_success:
            raise ApprovalFailed('approve', 'approve txn reverted', txn_hash=receipt.txn_hash, mined=True)
        logging.info(f'Approval succeeded in txn {receipt.txn_hash}')

    @timer
    def swap_for_exact_output(self, desired_output_amount: HumanAmount,
                              slippage_tolerance: Optional[HumanAmount] = None) -> SwapResult:
        '''
        Swaps at most quote.amount_in_max of token_in for exactly desired_output_amount of the stable
        token, sent to the platform address. Raises QueryError or InsufficientBalance before anything is sent,
        ApprovalFailed (the swap is never sent) or SwapFailed
        '''
        request = self._swap_request(desired_output_amount, slippage_tolerance)
        logging.info(f'Swap request: {request}')
        quote = self._quote(request)
        available = self._check_balance(self.ctx.token(request.token_in), quote.amount_in)
        if available.raw < quote.amount_in_max.raw:
            logging.warning(f'Balance {available} covers the quote but not the {quote.amount_in_max} max, '
                            f'the swap reverts if the price moves that far')
        self._approve_if_needed(request, quote)

        deadline = int(self.time_fn()) + self.config.deadline_seconds
        logging.warning(f'Sending swap txn: {quote.amount_in_max} max in, {quote.amount_out} out, deadline {deadline}')
        try:
            receipt = self.ctx.txn_sender.send_and_wait(
                self.ctx.router.swap_tokens_for_exact_tokens(
                    quote.amount_out.raw,
                    quote.amount_in_max.raw,
                    request.path,
                    self.config.platform_address,
                    deadline,
                ),
                'swap',
                self.config.gas_limit,
            )
        except TransactionFailed as e:
            raise SwapFailed('swap', e.reason, txn_hash=e.txn_hash, mined=e.mined) from e
        if not receipt.is_success:
            raise SwapFailed('swap', 'swap txn reverted', txn_hash=receipt.txn_hash, mined=True)

        result = SwapResult(
            txn_hash=receipt.txn_hash,
            swap_token=request.token_in,
            amount_in=quote.amount_in.format(),
            amount_out=quote.amount_out.format(),
            sender_wallet_address=self.ctx.signer_address,
            target_wallet_address=self.config.platform_address,
        )
        logging.info(f'Swap successful: {result}')
        return result

    @timer
    def direct_deposit(self, amount: HumanAmount) -> SwapResult:
        '''
        For payers who already hold the stable token: transfer it straight to the platform address
        '''
        stable_token = self.ctx.token(self.stable_token_address)
        deposit_amount = TokenAmount.from_human(amount, stable_token.decimals())
        if deposit_amount.raw == 0:
            raise ValueError(f'Deposit amount {amount} rounds down to zero')
        self._check_balance(stable_token, deposit_amount)

        logging.warning(f'Sending deposit txn: {deposit_amount} to {self.config.platform_address}')
        try:
            receipt = self.ctx.txn_sender.send_and_wait(
                stable_token.transfer(self.config.platform_address, deposit_amount.raw),
                'deposit',
                self.config.gas_limit,
            )
        except TransactionFailed as e:
            raise DepositFailed('deposit', e.reason, txn_hash=e.txn_hash, mined=e.mined) from e
        if not receipt.is_success:
            raise DepositFailed('deposit', 'transfer txn reverted', txn_hash=receipt.txn_hash, mined=True)

        result = SwapResult(
            txn_hash=receipt.txn_hash,
            swap_token=self.stable_token_address,
            amount_in=deposit_amount.format(),
            amount_out=deposit_amount.format(),
            sender_wallet_address=self.ctx.signer_address,
            target_wallet_address=self.config.platform_address,
        )
        logging.info(f'Deposit successful: {result}')
        return result
