"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from fincore.domain.models import Granularity, SettlementOutcome, TaxDirection, TransferStatus


# Ledger

class LedgerEntryIn(BaseModel):
    """Raw ledger entry as recorded; balance is derived server-side"""

    id: Optional[str] = None
    date: str = Field(..., description="ISO date, YYYY-MM-DD")
    account: str = ""
    description: str = ""
    debit: float = 0.0
    credit: float = 0.0
    reference: str = ""


class LedgerRequest(BaseModel):
    """Request body for POST /v1/ledger/balances"""

    opening_balance: float = 0.0
    entries: List[LedgerEntryIn]
    search: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class LedgerEntryOut(BaseModel):
    id: str
    date: date
    account: str
    description: str
    debit: float
    credit: float
    balance: float
    reference: str


class LedgerSummaryOut(BaseModel):
    total_debits: float
    total_credits: float
    net_position: float


class LedgerResponse(BaseModel):
    """Entries (filtered view) with balances over the full ledger"""

    entries: List[LedgerEntryOut]
    summary: LedgerSummaryOut


# Tax

class TaxRequest(BaseModel):
    """Request body for POST /v1/tax/calculate"""

    calculation_type: TaxDirection = TaxDirection.ADD
    amount: float
    rate: Optional[float] = Field(None, description="Overrides the jurisdiction's default rate")
    jurisdiction: Optional[str] = None


class TaxResponse(BaseModel):
    """Exportable VAT calculation record"""

    calculation_type: TaxDirection
    input_amount: float
    net_amount: float
    tax_amount: float
    gross_amount: float
    rate: float
    jurisdiction: Optional[str] = None
    timestamp: str


class JurisdictionRatesOut(BaseModel):
    default_rate_name: str
    default_rate: float
    rates: Dict[str, float]


class RateTableResponse(BaseModel):
    """Response for GET /v1/tax/rates"""

    fallback_rate: float
    jurisdictions: Dict[str, JurisdictionRatesOut]


# Cash flow

class CashFlowPeriodIn(BaseModel):
    label: str
    inflow: float = 0.0
    outflow: float = 0.0


class CashFlowRequest(BaseModel):
    """Request body for POST /v1/cash-flow/aggregate"""

    periods: List[CashFlowPeriodIn]


class CashFlowPeriodOut(BaseModel):
    label: str
    inflow: float
    outflow: float
    net_flow: float
    cumulative_flow: float


class CashFlowSummaryOut(BaseModel):
    total_inflow: float
    total_outflow: float
    net_cash_flow: float
    closing_cumulative_flow: float


class CashFlowResponse(BaseModel):
    granularity: Optional[Granularity] = None
    periods: List[CashFlowPeriodOut]
    summary: CashFlowSummaryOut


# Transfers

class TransferRequest(BaseModel):
    """Request body for POST /v1/transfers"""

    source_account: str = Field(..., min_length=1)
    destination_account: str = Field(..., min_length=1)
    amount: float
    reference: Optional[str] = None
    description: str = ""
    transfer_date: Optional[date] = None


class SettlementRequest(BaseModel):
    """Request body for POST /v1/transfers/{transfer_id}/settlement"""

    outcome: SettlementOutcome


class TransferResponse(BaseModel):
    transfer_id: str
    initiated_on: date
    source_account: str
    destination_account: str
    amount: float
    status: TransferStatus
    reference: str
    description: str = ""


class TransferHistoryResponse(BaseModel):
    """Response for GET /v1/transfers/history"""

    account: Optional[str] = None
    transfers: List[TransferResponse]
