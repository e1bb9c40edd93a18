"""Dashboard data source HTTP client for ledger, cash-flow and account data"""

from typing import Any, Dict, List, Tuple

import httpx

from fincore.config import settings
from fincore.domain.exceptions import DataSourceError, UnknownAccountError
from fincore.domain.models import Account, Granularity
from fincore.utils.amount_utils import to_amount


class DataSourceClient:
    """Client for the upstream data source feeding the dashboard"""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.data_source_base
        self.timeout = timeout or settings.http_timeout_seconds

    async def _get(self, path: str, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(f"{self.base_url}{path}", params=params)
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                raise DataSourceError(f"Data source timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise DataSourceError(f"Data source error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise DataSourceError(f"Data source unreachable: {e}") from e
            except ValueError as e:
                raise DataSourceError(f"Invalid JSON from data source: {e}") from e

    async def get_ledger_entries(self) -> Tuple[float, List[Dict[str, Any]]]:
        """
        Fetch raw ledger entries in chronological order.

        Returns:
            (opening_balance, entries); balances are derived locally

        Raises:
            DataSourceError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get("/ledger/entries")
        try:
            entries = sorted(data.get("entries", []), key=lambda e: e["date"])
            return to_amount(data.get("opening_balance", 0)), entries
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise DataSourceError(f"Invalid ledger data from data source: {e}") from e

    async def get_cash_flow_periods(self, granularity: Granularity) -> List[Dict[str, Any]]:
        """Fetch periods already bucketed at the requested granularity"""
        data = await self._get("/cash-flow", params={"granularity": granularity.value})
        periods = data.get("periods") if isinstance(data, dict) else None
        if not isinstance(periods, list):
            raise DataSourceError("Invalid cash-flow data from data source: missing periods")
        return periods

    async def get_accounts(self) -> List[Account]:
        """
        All accounts with their current balances.

        Raises:
            DataSourceError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get("/accounts")
        try:
            return [
                Account(account_id=str(item["id"]), name=str(item["name"]), balance=to_amount(item["balance"]))
                for item in data.get("accounts", [])
            ]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise DataSourceError(f"Invalid account data from data source: {e}") from e

    async def get_account(self, account: str) -> Account:
        """
        Resolve an account by id or display name.

        Raises:
            UnknownAccountError: No account with that id or name
            DataSourceError: On timeout, HTTP errors, or invalid response
        """
        return find_account(await self.get_accounts(), account)


def find_account(accounts: List[Account], account: str) -> Account:
    """Match an id or display name against a list of accounts"""
    for candidate in accounts:
        if account in (candidate.account_id, candidate.name):
            return candidate
    raise UnknownAccountError(f"Unknown account: {account}")
