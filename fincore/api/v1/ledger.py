"""General ledger endpoints - running balances and totals"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from fincore.api.dependencies import get_data_source_client, get_request_id
from fincore.api.v1.schemas import LedgerEntryOut, LedgerRequest, LedgerResponse, LedgerSummaryOut
from fincore.domain.exceptions import DataSourceError, InvalidEntryError
from fincore.domain.ledger import compute_balances, filter_entries, summarize_ledger
from fincore.domain.models import LedgerEntry, LedgerFilter
from fincore.infrastructure.clients.data_source import DataSourceClient
from fincore.infrastructure.observability.metrics import data_source_failures_counter, record_rejection

router = APIRouter()


def _build_response(entries: List[LedgerEntry], criteria: LedgerFilter) -> LedgerResponse:
    # Totals describe the filtered view, balances the full ledger
    visible = filter_entries(entries, criteria)
    summary = summarize_ledger(visible)

    return LedgerResponse(
        entries=[
            LedgerEntryOut(
                id=e.entry_id,
                date=e.date,
                account=e.account,
                description=e.description,
                debit=e.debit,
                credit=e.credit,
                balance=e.balance,
                reference=e.reference,
            )
            for e in visible
        ],
        summary=LedgerSummaryOut(
            total_debits=summary.total_debits,
            total_credits=summary.total_credits,
            net_position=summary.net_position,
        ),
    )


@router.get("/ledger", response_model=LedgerResponse)
async def get_ledger(
    request: Request,
    search: str = Query("", description="Matches account, description or reference"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    data_source: DataSourceClient = Depends(get_data_source_client),
):
    """
    Fetch the general ledger from the data source and derive balances.

    Flow:
    1. Fetch entries (chronological) and opening balance
    2. Compute running balances over the full ledger
    3. Apply search/date filters and summarize the visible entries
    """
    request_id = get_request_id(request)
    criteria = LedgerFilter(search=search, start_date=start_date, end_date=end_date)

    try:
        opening_balance, raw_entries = await data_source.get_ledger_entries()
        entries = compute_balances(raw_entries, opening_balance)

    except DataSourceError as e:
        data_source_failures_counter.inc()
        logging.error(f"Data source error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Data source unavailable")

    except InvalidEntryError as e:
        # Upstream handed us a ledger we cannot balance
        data_source_failures_counter.inc()
        logging.error(f"Invalid ledger from data source: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail=str(e))

    return _build_response(entries, criteria)


@router.post("/ledger/balances", response_model=LedgerResponse)
def post_ledger_balances(request_body: LedgerRequest, request: Request):
    """Compute balances for caller-supplied entries in the order given"""
    request_id = get_request_id(request)
    criteria = LedgerFilter(
        search=request_body.search,
        start_date=request_body.start_date,
        end_date=request_body.end_date,
    )

    try:
        entries = compute_balances(
            [entry.model_dump() for entry in request_body.entries],
            request_body.opening_balance,
        )
    except InvalidEntryError as e:
        record_rejection(e)
        logging.warning(f"Invalid ledger entry: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return _build_response(entries, criteria)
