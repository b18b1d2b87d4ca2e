from common.enums import ReceiptStatus

from dataclasses import dataclass


@dataclass(frozen=True)
class Receipt:
    txn_hash: str
    status: ReceiptStatus
    block_number: int
    gas_used: int

    @property
    def is_success(self) -> bool:
        return self.status == ReceiptStatus.SUCCESS
