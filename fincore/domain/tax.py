"""Tax engine - VAT/GST conversion between net and gross amounts"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from fincore.domain.exceptions import InvalidAmountError, InvalidRateError
from fincore.domain.models import JurisdictionRates, TaxComputation, TaxDirection
from fincore.utils.amount_utils import to_amount

# Applied when a jurisdiction is not in RATE_TABLE
DEFAULT_TAX_RATE = 20.0

RATE_TABLE: Dict[str, JurisdictionRates] = {
    "UK": JurisdictionRates({"standard": 20.0, "reduced": 5.0, "zero": 0.0}),
    "US": JurisdictionRates({"standard": 0.0, "state": 8.5}),  # no federal VAT
    "Germany": JurisdictionRates({"standard": 19.0, "reduced": 7.0}),
    "France": JurisdictionRates({"standard": 20.0, "reduced": 10.0, "super_reduced": 5.5}),
    "Spain": JurisdictionRates({"standard": 21.0, "reduced": 10.0, "super_reduced": 4.0}),
    "Italy": JurisdictionRates({"standard": 22.0, "reduced": 10.0, "super_reduced": 4.0}),
    "Netherlands": JurisdictionRates({"standard": 21.0, "reduced": 9.0}),
    "Canada": JurisdictionRates({"gst": 5.0, "hst": 13.0}, default_rate_name="gst"),
    "Australia": JurisdictionRates({"gst": 10.0}, default_rate_name="gst"),
    "Japan": JurisdictionRates({"standard": 10.0, "reduced": 8.0}),
}


def resolve_rate(jurisdiction: Optional[str], rate_name: Optional[str] = None) -> float:
    """
    Look up a rate in RATE_TABLE.

    Selection rule:
    - Unknown or missing jurisdiction: DEFAULT_TAX_RATE (never an error,
      jurisdiction is advisory metadata)
    - No rate name, or a name the jurisdiction does not define: the
      jurisdiction's default rate ("standard" unless it declares another)
    - Otherwise: the named rate
    """
    rates = RATE_TABLE.get(jurisdiction) if jurisdiction else None
    if rates is None:
        return DEFAULT_TAX_RATE
    if rate_name and rate_name in rates.rates:
        return rates.rates[rate_name]
    return rates.default_rate


def _validate_rate(rate_percent: Any) -> float:
    try:
        rate = to_amount(rate_percent)
    except ValueError as e:
        raise InvalidRateError(f"Invalid tax rate: {e}") from e
    if not 0 <= rate <= 100:
        raise InvalidRateError(f"Tax rate must be between 0 and 100, got {rate}")
    return rate


def _validate_amount(amount: Any) -> float:
    try:
        value = to_amount(amount)
    except ValueError as e:
        raise InvalidAmountError(f"Invalid amount: {e}") from e
    if value < 0:
        raise InvalidAmountError(f"Amount must be non-negative, got {value}")
    return value


def add_tax(net_amount: float, rate_percent: float, jurisdiction: Optional[str] = None) -> TaxComputation:
    """Gross up a net amount: tax = net * rate/100, gross = net + tax"""
    rate = _validate_rate(rate_percent)
    net = _validate_amount(net_amount)

    tax = net * rate / 100
    return TaxComputation(
        net_amount=net,
        tax_amount=tax,
        gross_amount=net + tax,
        rate=rate,
        direction=TaxDirection.ADD,
        jurisdiction=jurisdiction,
    )


def remove_tax(gross_amount: float, rate_percent: float, jurisdiction: Optional[str] = None) -> TaxComputation:
    """Back out tax from a gross amount: net = gross / (1 + rate/100)"""
    rate = _validate_rate(rate_percent)
    gross = _validate_amount(gross_amount)

    net = gross / (1 + rate / 100)
    return TaxComputation(
        net_amount=net,
        tax_amount=gross - net,
        gross_amount=gross,
        rate=rate,
        direction=TaxDirection.REMOVE,
        jurisdiction=jurisdiction,
    )


def calculate_tax(
    amount: float,
    direction: TaxDirection,
    rate: Optional[float] = None,
    jurisdiction: Optional[str] = None,
) -> TaxComputation:
    """
    Main entry point for the VAT calculator.

    An explicit rate overrides the jurisdiction's default rate; the
    jurisdiction is still recorded on the result.
    """
    if rate is None:
        rate = resolve_rate(jurisdiction)

    if TaxDirection(direction) is TaxDirection.ADD:
        return add_tax(amount, rate, jurisdiction)
    return remove_tax(amount, rate, jurisdiction)


def quick_calculations(rate_percent: float, amounts: Iterable[float] = (100, 500, 1000)) -> List[TaxComputation]:
    """Gross-up of a few round net amounts at the active rate"""
    return [add_tax(amount, rate_percent) for amount in amounts]


def export_record(
    computation: TaxComputation,
    input_amount: float,
    timestamp: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the JSON-serializable export of a calculation.

    timestamp defaults to the current UTC time.
    """
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)

    return {
        "calculation_type": computation.direction.value,
        "input_amount": input_amount,
        "net_amount": computation.net_amount,
        "tax_amount": computation.tax_amount,
        "gross_amount": computation.gross_amount,
        "rate": computation.rate,
        "jurisdiction": computation.jurisdiction,
        "timestamp": timestamp.isoformat(),
    }
