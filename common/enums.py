from enum import Enum, IntEnum


class ReceiptStatus(IntEnum):
    FAILURE = 0 # txn was mined but reverted
    SUCCESS = 1

class ApprovalPolicy(Enum):
    """
    Which amount the allowance is checked against (and approved for) before a swap.
    EXACT_QUOTE uses the quoted amount_in, SLIPPAGE_PADDED uses amount_in_max.
    With EXACT_QUOTE the swap reverts if the price moves against us between quote and
    execution, because the router cannot pull more than the approved amount
    """
    EXACT_QUOTE = 'exact_quote'
    SLIPPAGE_PADDED = 'slippage_padded'
