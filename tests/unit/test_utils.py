"""Unit tests for date and amount helpers"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from fincore.utils.amount_utils import to_amount
from fincore.utils.date_utils import is_within_range, parse_date


def test_parse_date_variants():
    assert parse_date("2025-01-20") == date(2025, 1, 20)
    assert parse_date(" 2025-01-20 ") == date(2025, 1, 20)
    assert parse_date(date(2025, 1, 20)) == date(2025, 1, 20)
    assert parse_date(datetime(2025, 1, 20, 15, 30)) == date(2025, 1, 20)


@pytest.mark.parametrize("value", [None, "", "2025-02-30", 20250120])
def test_parse_date_rejects(value):
    with pytest.raises(ValueError):
        parse_date(value)


def test_is_within_range_inclusive():
    day = date(2025, 1, 18)
    assert is_within_range(day, date(2025, 1, 18), date(2025, 1, 18))
    assert is_within_range(day)
    assert not is_within_range(day, start=date(2025, 1, 19))
    assert not is_within_range(day, end=date(2025, 1, 17))


def test_to_amount():
    assert to_amount(5) == 5.0
    assert to_amount("12.5") == 12.5
    assert to_amount(Decimal("0.10")) == 0.1


@pytest.mark.parametrize("value", [None, True, "abc", float("nan"), float("-inf"), [1]])
def test_to_amount_rejects(value):
    with pytest.raises(ValueError):
        to_amount(value)
