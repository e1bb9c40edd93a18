"""Fund transfer endpoints - initiation, settlement and history"""

import logging
import time
import uuid
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from fincore.api.dependencies import get_data_source_client, get_request_id, get_settlement_client
from fincore.api.v1.schemas import SettlementRequest, TransferHistoryResponse, TransferRequest, TransferResponse
from fincore.domain.exceptions import (
    DataSourceError,
    InsufficientFundsError,
    InvalidTransferError,
    InvalidTransitionError,
    TransferNotFoundError,
    UnknownAccountError,
)
from fincore.domain.models import TransferRecord
from fincore.domain.transfers import initiate_transfer, settle_transfer
from fincore.infrastructure.clients.data_source import DataSourceClient, find_account
from fincore.infrastructure.clients.settlement import SettlementClient
from fincore.infrastructure.database.repositories import TransferRepository
from fincore.infrastructure.database.session import get_db
from fincore.infrastructure.observability.logging import log_transfer_event
from fincore.infrastructure.observability.metrics import (
    data_source_failures_counter,
    record_rejection,
    record_transfer,
)

router = APIRouter()


def _to_response(record: TransferRecord) -> TransferResponse:
    return TransferResponse(
        transfer_id=record.transfer_id,
        initiated_on=record.initiated_on,
        source_account=record.source_account,
        destination_account=record.destination_account,
        amount=record.amount,
        status=record.status,
        reference=record.reference,
        description=record.description,
    )


@router.post("/transfers", response_model=TransferResponse, status_code=201)
async def create_transfer(
    request_body: TransferRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    data_source: DataSourceClient = Depends(get_data_source_client),
    settlement_client: SettlementClient = Depends(get_settlement_client),
):
    """
    Initiate a fund transfer.

    Flow:
    1. Resolve source and destination (by id or display name) against the data source
    2. Validate and create the pending transfer between the canonical account names
    3. Persist it to the transfer history
    4. Notify the settlement service in the background
    """
    start_time = time.time()
    request_id = get_request_id(request)
    transfer_id = str(uuid.uuid4())

    try:
        accounts = await data_source.get_accounts()
        source = find_account(accounts, request_body.source_account)
        destination = find_account(accounts, request_body.destination_account)

        record = initiate_transfer(
            source.name,
            destination.name,
            request_body.amount,
            request_body.reference or f"TXN-{transfer_id[:8].upper()}",
            source_balance=source.balance,
            description=request_body.description,
            initiated_on=request_body.transfer_date,
            transfer_id=transfer_id,
        )

        TransferRepository(db).add(record)
        db.commit()

    except DataSourceError as e:
        data_source_failures_counter.inc()
        db.rollback()
        logging.error(f"Data source error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Data source unavailable")

    except (UnknownAccountError, InvalidTransferError) as e:
        record_rejection(e)
        db.rollback()
        logging.warning(f"Invalid transfer: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except InsufficientFundsError as e:
        record_rejection(e)
        db.rollback()
        logging.warning(f"Insufficient funds: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    background_tasks.add_task(settlement_client.send_transfer_initiated, record, request_id)

    record_transfer(record.status.value)
    log_transfer_event(
        request_id, record.transfer_id, record.status.value, record.amount, (time.time() - start_time) * 1000
    )

    return _to_response(record)


@router.post("/transfers/{transfer_id}/settlement", response_model=TransferResponse)
def settle(
    transfer_id: str,
    request_body: SettlementRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Apply a settlement confirmation to a pending transfer (at most once)"""
    start_time = time.time()
    request_id = get_request_id(request)
    repo = TransferRepository(db)

    try:
        record = settle_transfer(repo.get(transfer_id), request_body.outcome)
        repo.save_settlement(record)
        db.commit()

    except TransferNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except InvalidTransitionError as e:
        record_rejection(e)
        db.rollback()
        logging.warning(f"Invalid settlement: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    record_transfer(record.status.value)
    log_transfer_event(
        request_id, record.transfer_id, record.status.value, record.amount, (time.time() - start_time) * 1000
    )

    return _to_response(record)


@router.get("/transfers/history", response_model=TransferHistoryResponse)
def get_transfer_history(
    account: Optional[str] = Query(None, description="Only transfers from or to this account"),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Recent transfers, newest first"""
    records = TransferRepository(db).list_recent(account=account, limit=limit)
    return TransferHistoryResponse(account=account, transfers=[_to_response(r) for r in records])
