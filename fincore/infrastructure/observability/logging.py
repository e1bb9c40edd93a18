"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from fincore.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_transfer_event(
    request_id: str,
    transfer_id: str,
    status: str,
    amount: float,
    duration_ms: float,
) -> None:
    """Log structured transfer lifecycle step for analysis"""
    logging.info(
        "Transfer updated",
        extra={
            "request_id": request_id,
            "transfer_id": transfer_id,
            "step": f"transfer_{status}",
            "transfer_status": status,
            "amount": amount,
            "duration_ms": duration_ms,
        },
    )


def log_tax_calculation(request_id: str, direction: str, rate: float, jurisdiction: str | None) -> None:
    """Log which rate a VAT calculation resolved to"""
    logging.info(
        "Tax calculated",
        extra={
            "request_id": request_id,
            "step": "tax_calculated",
            "direction": direction,
            "rate": rate,
            "jurisdiction": jurisdiction,
        },
    )
