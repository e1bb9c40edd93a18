"""
Property-based tests for the ledger, cash-flow and VAT laws.

Invariants:
1. balance[i] == balance[i-1] + debit[i] - credit[i], starting from the opening balance
2. cumulative[k] == sum(net[0..k]) and net[k] == inflow[k] - outflow[k]
3. remove_tax(add_tax(net, r).gross, r).net == net (within tolerance)
4. Filtering never changes a surviving entry's balance
"""

import pytest
from datetime import date
from hypothesis import given, settings, strategies as st
from fincore.domain.cash_flow import aggregate_periods, summarize_cash_flow
from fincore.domain.ledger import compute_balances, filter_entries, summarize_ledger
from fincore.domain.models import LedgerFilter
from fincore.domain.tax import add_tax, remove_tax


amount_strategy = st.floats(min_value=0, max_value=1e9, allow_nan=False, allow_infinity=False)
rate_strategy = st.floats(min_value=0, max_value=100, allow_nan=False, allow_infinity=False)
date_strategy = st.dates(min_value=date(2020, 1, 1), max_value=date(2030, 12, 31))

entry_strategy = st.fixed_dictionaries(
    {
        "date": date_strategy.map(date.isoformat),
        "debit": amount_strategy,
        "credit": amount_strategy,
        "account": st.sampled_from(["Cash", "Office Rent", "Consulting Revenue", "Software Licenses"]),
    }
)

period_strategy = st.fixed_dictionaries(
    {"label": st.text(max_size=12), "inflow": amount_strategy, "outflow": amount_strategy}
)


@given(entries=st.lists(entry_strategy, max_size=30), opening=st.floats(-1e9, 1e9))
@settings(max_examples=200)
def test_invariant_balance_recurrence(entries, opening):
    result = compute_balances(entries, opening)

    assert len(result) == len(entries)
    previous = opening
    for entry in result:
        assert entry.balance == previous + entry.debit - entry.credit
        previous = entry.balance


@given(entries=st.lists(entry_strategy, max_size=30))
def test_invariant_summary_is_plain_sum(entries):
    summary = summarize_ledger(compute_balances(entries))

    assert summary.total_debits == pytest.approx(sum(e["debit"] for e in entries))
    assert summary.total_credits == pytest.approx(sum(e["credit"] for e in entries))


@given(
    entries=st.lists(entry_strategy, max_size=30),
    search=st.sampled_from(["", "cash", "RENT", "zzz"]),
    start=st.one_of(st.none(), date_strategy),
    end=st.one_of(st.none(), date_strategy),
)
def test_invariant_filter_keeps_balances(entries, search, start, end):
    full = compute_balances(entries, 1000)
    view = filter_entries(full, LedgerFilter(search=search, start_date=start, end_date=end))

    by_id = {e.entry_id: e for e in full}
    for entry in view:
        assert entry == by_id[entry.entry_id]


@given(periods=st.lists(period_strategy, max_size=30))
@settings(max_examples=200)
def test_invariant_cumulative_prefix_sum(periods):
    result = aggregate_periods(periods)

    running = 0.0
    for raw, period in zip(periods, result):
        assert period.net_flow == raw["inflow"] - raw["outflow"]
        running += period.net_flow
        assert period.cumulative_flow == running

    summary = summarize_cash_flow(result)
    assert summary.closing_cumulative_flow == (result[-1].cumulative_flow if result else 0)


@given(net=amount_strategy, rate=rate_strategy)
@settings(max_examples=500)
def test_invariant_tax_round_trip(net, rate):
    gross = add_tax(net, rate).gross_amount
    assert remove_tax(gross, rate).net_amount == pytest.approx(net, rel=1e-9, abs=1e-9)


@given(gross=amount_strategy, rate=rate_strategy)
def test_invariant_removed_tax_sums_to_gross(gross, rate):
    result = remove_tax(gross, rate)

    assert result.net_amount + result.tax_amount == pytest.approx(gross, rel=1e-9, abs=1e-9)
    assert result.net_amount <= gross
