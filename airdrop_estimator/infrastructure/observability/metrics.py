"""Prometheus metrics for monitoring estimates, score evaluations, and price feed health"""

from prometheus_client import Counter, Histogram

# Allocation metrics
estimate_counter = Counter(
    "airdrop_estimate_total",
    "Total allocation estimates computed",
    ["outcome"],  # estimated | insufficient_data
)

# Scoring metrics
score_counter = Counter(
    "airdrop_score_total",
    "Total rule scoring evaluations",
    ["version"],
)

score_total_histogram = Histogram(
    "airdrop_score_points",
    "Distribution of computed point totals",
    buckets=[0, 10, 100, 1_000, 10_000, 100_000, 1_000_000],
)

# Price feed metrics
price_fetch_latency_histogram = Histogram(
    "price_fetch_latency_seconds",
    "Price API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

price_fetch_failures_counter = Counter(
    "price_fetch_failures_total",
    "Failed price API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_estimate(has_share: bool) -> None:
    """Record whether an estimate had enough data to produce a share"""
    outcome = "estimated" if has_share else "insufficient_data"
    estimate_counter.labels(outcome=outcome).inc()


def record_score(version: str, total: int) -> None:
    """Record a scoring pass and the resulting total"""
    score_counter.labels(version=version or "unversioned").inc()
    score_total_histogram.observe(total)
