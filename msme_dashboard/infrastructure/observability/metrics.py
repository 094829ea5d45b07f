"""Prometheus metrics for monitoring portfolio fetches and page latency"""

from prometheus_client import Counter, Histogram, Gauge

from msme_dashboard.domain.models import FetchState, Loaded

# Portfolio API metrics
portfolio_fetch_counter = Counter(
    "msme_portfolio_fetch_total",
    "Portfolio fetches by final view state",
    ["outcome"],  # loaded | failed
)

portfolio_fetch_latency_histogram = Histogram(
    "msme_portfolio_fetch_latency_seconds",
    "Portfolio API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

portfolio_records_gauge = Gauge(
    "msme_portfolio_records",
    "MSME records in the last loaded portfolio",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_portfolio_load(state: FetchState) -> None:
    """Record the outcome of a finished portfolio load"""
    if isinstance(state, Loaded):
        portfolio_fetch_counter.labels(outcome="loaded").inc()
        portfolio_records_gauge.set(len(state.payload.data))
    else:
        portfolio_fetch_counter.labels(outcome="failed").inc()
