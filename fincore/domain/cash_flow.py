"""Cash-flow aggregator - net and cumulative flow over bucketed periods"""

from typing import Any, Iterable, List, Mapping

from fincore.domain.exceptions import InvalidPeriodError
from fincore.domain.models import CashFlowPeriod, CashFlowSummary
from fincore.utils.amount_utils import to_amount


def _flow(period: Mapping[str, Any], name: str, position: int) -> float:
    try:
        amount = to_amount(period.get(name, 0))
    except ValueError as e:
        raise InvalidPeriodError(f"Period {position}: invalid {name}: {e}") from e
    if amount < 0:
        raise InvalidPeriodError(f"Period {position}: {name} must be non-negative, got {amount}")
    return amount


def aggregate_periods(periods: Iterable[Mapping[str, Any]]) -> List[CashFlowPeriod]:
    """
    Derive net and cumulative flow in a single left-to-right scan.

    Periods arrive already bucketed (weekly/monthly/...) and ordered by the
    upstream data source. The running total starts at zero on every call.

    Args:
        periods: Mappings with label (or period), inflow and outflow

    Returns:
        New CashFlowPeriod list; an empty input gives an empty list

    Raises:
        InvalidPeriodError: Negative or non-numeric inflow/outflow
    """
    result = []
    cumulative = 0.0

    for position, period in enumerate(periods, start=1):
        inflow = _flow(period, "inflow", position)
        outflow = _flow(period, "outflow", position)
        net = inflow - outflow
        cumulative += net

        result.append(
            CashFlowPeriod(
                label=str(period.get("label", period.get("period", ""))),
                inflow=inflow,
                outflow=outflow,
                net_flow=net,
                cumulative_flow=cumulative,
            )
        )

    return result


def summarize_cash_flow(periods: List[CashFlowPeriod]) -> CashFlowSummary:
    """Totals for the summary cards; closing flow is the last cumulative value"""
    total_inflow = sum(p.inflow for p in periods)
    total_outflow = sum(p.outflow for p in periods)

    return CashFlowSummary(
        total_inflow=total_inflow,
        total_outflow=total_outflow,
        net_cash_flow=total_inflow - total_outflow,
        closing_cumulative_flow=periods[-1].cumulative_flow if periods else 0.0,
    )
