from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class SwapResult:
    '''
    Only ever built from a mined, successful receipt
    '''
    txn_hash: str
    swap_token: str # address of the token we paid with
    amount_in: str # human units
    amount_out: str # human units
    sender_wallet_address: str
    target_wallet_address: str

    def dump(self):
        return asdict(self)
