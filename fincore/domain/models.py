"""Domain models - immutable dataclasses representing dashboard figures"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Optional


@dataclass(frozen=True)
class LedgerEntry:
    """Bookkeeping record with its running balance"""

    entry_id: str
    date: date
    account: str
    description: str
    debit: float
    credit: float
    balance: float
    reference: str


@dataclass(frozen=True)
class LedgerSummary:
    """Debit/credit totals shown above the ledger table"""

    total_debits: float
    total_credits: float

    @property
    def net_position(self) -> float:
        return self.total_debits - self.total_credits


@dataclass(frozen=True)
class LedgerFilter:
    """Search text plus inclusive date bounds; empty values match everything"""

    search: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class TaxDirection(str, Enum):
    """Which side of the net/gross conversion the input amount is on"""

    ADD = "add"  # input is net
    REMOVE = "remove"  # input is gross


@dataclass(frozen=True)
class TaxComputation:
    """Result of converting between net and gross amounts"""

    net_amount: float
    tax_amount: float
    gross_amount: float
    rate: float
    direction: TaxDirection
    jurisdiction: Optional[str] = None


@dataclass(frozen=True)
class JurisdictionRates:
    """Named tax rates for one jurisdiction"""

    rates: Dict[str, float]
    default_rate_name: str = "standard"

    def __post_init__(self) -> None:
        if not self.rates:
            raise ValueError("Jurisdiction must define at least one rate")
        for name, rate in self.rates.items():
            if not 0 <= rate <= 100:
                raise ValueError(f"Rate {name}={rate} outside 0-100")
        if self.default_rate_name not in self.rates:
            raise ValueError(f"Default rate '{self.default_rate_name}' not defined")

    @property
    def default_rate(self) -> float:
        return self.rates[self.default_rate_name]


@dataclass(frozen=True)
class CashFlowPeriod:
    """One bucketed period with derived net and cumulative flow"""

    label: str
    inflow: float
    outflow: float
    net_flow: float
    cumulative_flow: float


@dataclass(frozen=True)
class CashFlowSummary:
    """Totals across all periods in a cash-flow query"""

    total_inflow: float
    total_outflow: float
    net_cash_flow: float
    closing_cumulative_flow: float


class Granularity(str, Enum):
    """Bucket size requested from the upstream data source"""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class Account:
    """Account known to the data source; the display name identifies it in transfers"""

    account_id: str
    name: str
    balance: float


class TransferStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset({TransferStatus.COMPLETED, TransferStatus.FAILED})


class SettlementOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class TransferRecord:
    """Fund transfer between two accounts"""

    transfer_id: str
    initiated_on: date
    source_account: str
    destination_account: str
    amount: float
    status: TransferStatus
    reference: str
    description: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
