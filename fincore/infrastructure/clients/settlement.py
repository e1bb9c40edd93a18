"""Settlement webhook client: notifies the settlement service about new transfers"""

import asyncio
import logging
from typing import Any, Dict

import httpx

from fincore.config import settings
from fincore.domain.models import TransferRecord
from fincore.infrastructure.observability.metrics import webhook_failure_counter, webhook_latency_histogram

TRANSFER_INITIATED = "TRANSFER_INITIATED"


def transfer_event(record: TransferRecord, request_id: str = "unknown") -> Dict[str, Any]:
    """
    Build the TRANSFER_INITIATED payload for a pending transfer.

    The settlement service answers later through ``callback_path`` with
    a success or failure outcome.
    """
    return {
        "event": TRANSFER_INITIATED,
        "transfer_id": record.transfer_id,
        "initiated_on": record.initiated_on.isoformat(),
        "source_account": record.source_account,
        "destination_account": record.destination_account,
        "amount": record.amount,
        "reference": record.reference,
        "description": record.description,
        "status": record.status.value,
        "callback_path": f"/v1/transfers/{record.transfer_id}/settlement",
        "request_id": request_id,
    }


def is_retryable(error: Exception) -> bool:
    """Network failures, 5xx and 429 are retried; any other 4xx is final"""
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        return status >= 500 or status == 429
    return isinstance(error, httpx.RequestError)


def _failure_reason(error: Exception) -> str:
    if isinstance(error, httpx.HTTPStatusError):
        return "server_error" if error.response.status_code >= 500 else "client_error"
    return "network"


class SettlementClient:
    """Client for the settlement service webhook"""

    def __init__(self, webhook_url: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.webhook_url = webhook_url or settings.settlement_webhook_url
        self.max_retries = settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base
        self.transport = transport

    async def send_transfer_initiated(self, record: TransferRecord, request_id: str = "unknown") -> None:
        """
        Announce a pending transfer to the settlement service.

        Every attempt carries the transfer id as ``Idempotency-Key`` so a
        retried delivery cannot open a second settlement.

        Retry strategy:
        - Exponential backoff: base * 2^(attempt - 1)
        - Retries network failures, 5xx and 429
        - A rejected event (other 4xx) fails at once
        """
        payload = transfer_event(record, request_id)
        headers = {"Idempotency-Key": record.transfer_id, "X-Request-ID": request_id}

        attempt = 0
        async with httpx.AsyncClient(transport=self.transport) as client:
            while True:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(
                            self.webhook_url,
                            json=payload,
                            headers=headers,
                            timeout=settings.http_timeout_seconds,
                        )
                        response.raise_for_status()
                        return

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    webhook_failure_counter.labels(reason=_failure_reason(e)).inc()

                    if not is_retryable(e) or attempt >= self.max_retries:
                        logging.error(
                            f"Settlement notification failed for transfer {record.transfer_id}: {e}",
                            extra={"request_id": request_id, "attempts": attempt},
                        )
                        raise

                    await asyncio.sleep(self.backoff_base * (2 ** (attempt - 1)))
