"""Transfer lifecycle - pending transfers settled exactly once"""

import math
import uuid
from dataclasses import replace
from datetime import date
from typing import Optional

from fincore.domain.exceptions import (
    InsufficientFundsError,
    InvalidTransferError,
    InvalidTransitionError,
)
from fincore.domain.models import SettlementOutcome, TransferRecord, TransferStatus

_OUTCOME_STATUS = {
    SettlementOutcome.SUCCESS: TransferStatus.COMPLETED,
    SettlementOutcome.FAILURE: TransferStatus.FAILED,
}


def initiate_transfer(
    source: str,
    destination: str,
    amount: float,
    reference: str,
    source_balance: Optional[float] = None,
    description: str = "",
    initiated_on: Optional[date] = None,
    transfer_id: Optional[str] = None,
) -> TransferRecord:
    """
    Create a pending transfer.

    Checks, in order:
    - both accounts named and different
    - amount is a positive finite number
    - source_balance, when supplied, covers the amount

    Raises:
        InvalidTransferError: Malformed request
        InsufficientFundsError: source_balance < amount
    """
    if not source or not source.strip() or not destination or not destination.strip():
        raise InvalidTransferError("Source and destination accounts are required")
    if source == destination:
        raise InvalidTransferError(f"Cannot transfer from {source} to itself")

    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidTransferError(f"Transfer amount must be a number, got {amount!r}")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidTransferError(f"Transfer amount must be positive, got {amount}")

    if source_balance is not None and source_balance < amount:
        raise InsufficientFundsError(
            f"Account {source} balance {source_balance} does not cover transfer of {amount}"
        )

    return TransferRecord(
        transfer_id=transfer_id or str(uuid.uuid4()),
        initiated_on=initiated_on or date.today(),
        source_account=source,
        destination_account=destination,
        amount=float(amount),
        status=TransferStatus.PENDING,
        reference=reference,
        description=description,
    )


def settle_transfer(record: TransferRecord, outcome: SettlementOutcome) -> TransferRecord:
    """
    Apply a settlement confirmation: success -> completed, failure -> failed.

    Returns a new record; the input record is unchanged.

    Raises:
        InvalidTransitionError: Record is already completed or failed
    """
    if record.is_terminal:
        raise InvalidTransitionError(
            f"Transfer {record.transfer_id} is already {record.status.value}"
        )

    return replace(record, status=_OUTCOME_STATUS[SettlementOutcome(outcome)])
