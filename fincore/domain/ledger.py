"""Ledger engine - running balances, totals and filtering for the general ledger"""

from typing import Any, Iterable, List, Mapping, Union

from fincore.domain.exceptions import InvalidEntryError
from fincore.domain.models import LedgerEntry, LedgerFilter, LedgerSummary
from fincore.utils.amount_utils import to_amount
from fincore.utils.date_utils import is_within_range, parse_date

EntryInput = Union[Mapping[str, Any], LedgerEntry]


def _entry_fields(raw: EntryInput) -> Mapping[str, Any]:
    if isinstance(raw, LedgerEntry):
        return {
            "id": raw.entry_id,
            "date": raw.date,
            "account": raw.account,
            "description": raw.description,
            "debit": raw.debit,
            "credit": raw.credit,
            "reference": raw.reference,
        }
    return raw


def _non_negative(value: Any, name: str, position: int) -> float:
    try:
        amount = to_amount(value)
    except ValueError as e:
        raise InvalidEntryError(f"Entry {position}: invalid {name}: {e}") from e
    if amount < 0:
        raise InvalidEntryError(f"Entry {position}: {name} must be non-negative, got {amount}")
    return amount


def compute_balances(entries: Iterable[EntryInput], opening_balance: float = 0.0) -> List[LedgerEntry]:
    """
    Derive the running balance of every entry.

    balance[i] = balance[i-1] + debit[i] - credit[i], starting from
    opening_balance. Entries are processed in the order given (callers sort
    chronologically); nothing is reordered or dropped, and any balance
    already present on the input is recomputed.

    Args:
        entries: Mappings with id, date, account, description, debit,
            credit and reference keys, or existing LedgerEntry values
        opening_balance: Balance carried in before the first entry

    Returns:
        New LedgerEntry list with balances populated

    Raises:
        InvalidEntryError: Negative or non-numeric amount, bad date

    Example:
        opening 20000, [debit 5000, credit 2500] -> balances [25000, 22500]
    """
    try:
        balance = to_amount(opening_balance)
    except ValueError as e:
        raise InvalidEntryError(f"Invalid opening balance: {e}") from e

    result = []
    for position, raw in enumerate(entries, start=1):
        fields = _entry_fields(raw)

        try:
            entry_date = parse_date(fields.get("date"))
        except (TypeError, ValueError) as e:
            raise InvalidEntryError(f"Entry {position}: invalid date {fields.get('date')!r}") from e

        debit = _non_negative(fields.get("debit", 0), "debit", position)
        credit = _non_negative(fields.get("credit", 0), "credit", position)
        balance = balance + debit - credit

        result.append(
            LedgerEntry(
                entry_id=str(position if fields.get("id") is None else fields["id"]),
                date=entry_date,
                account=str(fields.get("account", "")),
                description=str(fields.get("description", "")),
                debit=debit,
                credit=credit,
                balance=balance,
                reference=str(fields.get("reference", "")),
            )
        )

    return result


def summarize_ledger(entries: Iterable[LedgerEntry]) -> LedgerSummary:
    """Plain debit and credit sums"""
    total_debits = 0.0
    total_credits = 0.0
    for entry in entries:
        total_debits += entry.debit
        total_credits += entry.credit
    return LedgerSummary(total_debits=total_debits, total_credits=total_credits)


def matches_filter(entry: LedgerEntry, criteria: LedgerFilter) -> bool:
    """Case-insensitive substring search plus inclusive date range"""
    needle = criteria.search.strip().lower()
    if needle:
        haystacks = (entry.account, entry.description, entry.reference)
        if not any(needle in text.lower() for text in haystacks):
            return False
    return is_within_range(entry.date, criteria.start_date, criteria.end_date)


def filter_entries(entries: Iterable[LedgerEntry], criteria: LedgerFilter) -> List[LedgerEntry]:
    """
    Project the ledger onto entries matching the criteria.

    Balances are left as computed over the full ledger.
    """
    return [entry for entry in entries if matches_filter(entry, criteria)]
