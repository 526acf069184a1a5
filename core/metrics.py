"""
Prometheus metrics for the license client.

Custom metrics for remote calls, caching and license outcomes.
"""

from prometheus_client import Counter, Histogram

# Remote API metrics
license_api_requests_total = Counter(
    "license_api_requests_total",
    "Total requests sent to the licensing service",
    ["operation", "outcome"],
)

license_api_request_duration_seconds = Histogram(
    "license_api_request_duration_seconds",
    "Licensing service request duration in seconds",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 15.0],
)

# Cache metrics
cache_hits_total = Counter(
    "license_cache_hits_total",
    "Total cache hits",
    ["cache"],
)

cache_misses_total = Counter(
    "license_cache_misses_total",
    "Total cache misses",
    ["cache"],
)

# License metrics
license_validations_total = Counter(
    "license_validations_total",
    "License validation outcomes",
    ["result", "source"],
)

license_activations_total = Counter(
    "license_activations_total",
    "License activation attempts",
    ["outcome"],
)

license_deactivations_total = Counter(
    "license_deactivations_total",
    "License deactivations",
    ["remote_outcome"],
)
