"""Data access layer for transfer records"""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from fincore.domain.exceptions import InvalidTransitionError, TransferNotFoundError
from fincore.domain.models import TransferRecord, TransferStatus
from fincore.infrastructure.database.models import FundTransfer


def _to_record(row: FundTransfer) -> TransferRecord:
    return TransferRecord(
        transfer_id=row.id,
        initiated_on=row.initiated_on,
        source_account=row.source_account,
        destination_account=row.destination_account,
        amount=row.amount,
        status=TransferStatus(row.status),
        reference=row.reference,
        description=row.description or "",
    )


class TransferRepository:
    """Repository for fund transfers"""

    def __init__(self, db: Session):
        self.db = db

    def add(self, record: TransferRecord) -> TransferRecord:
        """Persist a newly initiated transfer"""
        self.db.add(
            FundTransfer(
                id=record.transfer_id,
                initiated_on=record.initiated_on,
                source_account=record.source_account,
                destination_account=record.destination_account,
                amount=record.amount,
                status=record.status.value,
                reference=record.reference,
                description=record.description,
            )
        )
        self.db.flush()
        return record

    def get(self, transfer_id: str) -> TransferRecord:
        """
        Load a transfer as a domain record.

        Raises:
            TransferNotFoundError: No such transfer
        """
        row = self._get_row(transfer_id)
        if row is None:
            raise TransferNotFoundError(f"Transfer {transfer_id} not found")
        return _to_record(row)

    def save_settlement(self, record: TransferRecord) -> TransferRecord:
        """
        Store the status of a settled transfer.

        The write only matches a row that is still pending, so of two
        overlapping settlements exactly one is stored.

        Raises:
            TransferNotFoundError: No such transfer
            InvalidTransitionError: The transfer was settled in the meantime
        """
        updated = (
            self.db.query(FundTransfer)
            .filter(FundTransfer.id == record.transfer_id, FundTransfer.status == TransferStatus.PENDING.value)
            .update({FundTransfer.status: record.status.value}, synchronize_session=False)
        )
        if updated == 0:
            if self._get_row(record.transfer_id) is None:
                raise TransferNotFoundError(f"Transfer {record.transfer_id} not found")
            raise InvalidTransitionError(f"Transfer {record.transfer_id} is already settled")
        return record

    def list_recent(self, account: Optional[str] = None, limit: int = 20) -> List[TransferRecord]:
        """Most recent transfers first, optionally touching one account"""
        query = self.db.query(FundTransfer)
        if account:
            query = query.filter(
                or_(FundTransfer.source_account == account, FundTransfer.destination_account == account)
            )
        rows = query.order_by(FundTransfer.initiated_on.desc(), FundTransfer.created_at.desc()).limit(limit).all()
        return [_to_record(row) for row in rows]

    def _get_row(self, transfer_id: str) -> Optional[FundTransfer]:
        return self.db.query(FundTransfer).filter(FundTransfer.id == transfer_id).first()
