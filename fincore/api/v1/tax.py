"""VAT calculator endpoints"""

import logging

from fastapi import APIRouter, HTTPException, Request

from fincore.api.dependencies import get_request_id
from fincore.api.v1.schemas import JurisdictionRatesOut, RateTableResponse, TaxRequest, TaxResponse
from fincore.config import settings
from fincore.domain.exceptions import InvalidAmountError, InvalidRateError
from fincore.domain.tax import DEFAULT_TAX_RATE, RATE_TABLE, calculate_tax, export_record
from fincore.infrastructure.observability.logging import log_tax_calculation
from fincore.infrastructure.observability.metrics import record_rejection, tax_calculation_counter

router = APIRouter()


@router.post("/tax/calculate", response_model=TaxResponse)
def calculate(request_body: TaxRequest, request: Request):
    """
    Add tax to a net amount or remove it from a gross amount.

    Without an explicit rate, the jurisdiction's default rate applies
    (settings.default_jurisdiction when none is given).
    """
    request_id = get_request_id(request)
    jurisdiction = request_body.jurisdiction or settings.default_jurisdiction

    try:
        computation = calculate_tax(
            request_body.amount,
            request_body.calculation_type,
            rate=request_body.rate,
            jurisdiction=jurisdiction,
        )
    except (InvalidRateError, InvalidAmountError) as e:
        record_rejection(e)
        logging.warning(f"Invalid tax request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    tax_calculation_counter.labels(direction=computation.direction.value).inc()
    log_tax_calculation(request_id, computation.direction.value, computation.rate, jurisdiction)

    return TaxResponse(**export_record(computation, request_body.amount))


@router.get("/tax/rates", response_model=RateTableResponse)
def get_rates():
    """Reference table of named rates per jurisdiction"""
    return RateTableResponse(
        fallback_rate=DEFAULT_TAX_RATE,
        jurisdictions={
            name: JurisdictionRatesOut(
                default_rate_name=rates.default_rate_name,
                default_rate=rates.default_rate,
                rates=dict(rates.rates),
            )
            for name, rates in RATE_TABLE.items()
        },
    )
