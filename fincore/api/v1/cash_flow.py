"""Cash-flow endpoints - net and cumulative flow per period"""

import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from fincore.api.dependencies import get_data_source_client, get_request_id
from fincore.api.v1.schemas import CashFlowPeriodOut, CashFlowRequest, CashFlowResponse, CashFlowSummaryOut
from fincore.domain.cash_flow import aggregate_periods, summarize_cash_flow
from fincore.domain.exceptions import DataSourceError, InvalidPeriodError
from fincore.domain.models import CashFlowPeriod, Granularity
from fincore.infrastructure.clients.data_source import DataSourceClient
from fincore.infrastructure.observability.metrics import data_source_failures_counter, record_rejection

router = APIRouter()


def _build_response(periods: List[CashFlowPeriod], granularity: Optional[Granularity] = None) -> CashFlowResponse:
    return CashFlowResponse(
        granularity=granularity,
        periods=[CashFlowPeriodOut(**asdict(p)) for p in periods],
        summary=CashFlowSummaryOut(**asdict(summarize_cash_flow(periods))),
    )


@router.get("/cash-flow", response_model=CashFlowResponse)
async def get_cash_flow(
    request: Request,
    granularity: Granularity = Query(Granularity.MONTHLY),
    data_source: DataSourceClient = Depends(get_data_source_client),
):
    """Fetch bucketed periods from the data source and aggregate them"""
    request_id = get_request_id(request)

    try:
        raw_periods = await data_source.get_cash_flow_periods(granularity)
        periods = aggregate_periods(raw_periods)

    except DataSourceError as e:
        data_source_failures_counter.inc()
        logging.error(f"Data source error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Data source unavailable")

    except InvalidPeriodError as e:
        data_source_failures_counter.inc()
        logging.error(f"Invalid cash flow from data source: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail=str(e))

    return _build_response(periods, granularity)


@router.post("/cash-flow/aggregate", response_model=CashFlowResponse)
def post_cash_flow(request_body: CashFlowRequest, request: Request):
    """Aggregate caller-supplied periods in the order given"""
    request_id = get_request_id(request)

    try:
        periods = aggregate_periods(p.model_dump() for p in request_body.periods)
    except InvalidPeriodError as e:
        record_rejection(e)
        logging.warning(f"Invalid cash-flow period: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return _build_response(periods)
