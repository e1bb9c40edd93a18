"""Prometheus metrics for monitoring transfers, tax calculations and upstream calls"""

from prometheus_client import Counter, Histogram

# Transfer metrics
transfer_counter = Counter(
    "fincore_transfer_total",
    "Transfer lifecycle steps",
    ["status"],  # pending | completed | failed
)

# Tax metrics
tax_calculation_counter = Counter(
    "fincore_tax_calculation_total",
    "VAT calculations performed",
    ["direction"],  # add | remove
)

# Validation failures surfaced to callers
rejection_counter = Counter(
    "fincore_rejected_requests_total",
    "Requests rejected by domain validation",
    ["error"],
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Settlement webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "settlement_webhook_failures_total",
    "Failed settlement webhook deliveries",
    ["reason"],  # network | server_error | client_error
)

# Data source metrics
data_source_failures_counter = Counter(
    "data_source_fetch_failures_total",
    "Failed data source API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_transfer(status: str) -> None:
    """Record a transfer reaching a lifecycle state"""
    transfer_counter.labels(status=status).inc()


def record_rejection(error: Exception) -> None:
    """Count a domain validation failure by exception type"""
    rejection_counter.labels(error=type(error).__name__).inc()
