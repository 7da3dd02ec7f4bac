"""Prometheus metrics exposed on ``/metrics``."""

from prometheus_client import Counter

REQUESTS_SERVED = Counter(
    "autotrace_server_requests",
    "Requests answered by /server_request",
    ["variant"],
)
