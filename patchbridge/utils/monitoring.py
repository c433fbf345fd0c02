"""Monitoring utilities leveraging Prometheus client."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

http_requests_total = Counter(
    "patchbridge_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_latency_seconds = Histogram(
    "patchbridge_http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
)

host_queries_total = Counter(
    "patchbridge_host_queries_total",
    "Queries issued to the host, by outcome",
    ["action", "outcome"],
)

host_pending_queries = Gauge(
    "patchbridge_host_pending_queries",
    "Queries awaiting a host reply",
)

host_messages_sent_total = Counter(
    "patchbridge_host_messages_sent_total",
    "Messages written to the host transport",
    ["selector"],
)


def observe_request(method: str, path: str, status: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_latency_seconds.labels(method=method, path=path).observe(duration_seconds)


def observe_query(action: str, outcome: str) -> None:
    host_queries_total.labels(action=action, outcome=outcome).inc()
