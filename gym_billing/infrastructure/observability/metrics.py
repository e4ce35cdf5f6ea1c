"""Prometheus metrics for monitoring payment statuses, debt tiers and seeding runs"""

from prometheus_client import Counter, Histogram

# Billing metrics
payments_recorded_counter = Counter(
    "gym_payments_recorded_total",
    "Payments persisted, by status derived at write time",
    ["status"],  # pending | overdue | paid
)

debt_classification_counter = Counter(
    "gym_debt_classifications_total",
    "Member debt classifications served",
    ["tier"],  # on_time | mild | severe
)

# Seeding metrics
seed_runs_counter = Counter(
    "gym_seed_runs_total",
    "Sample dataset runs",
    ["outcome"],  # success | failure
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_classification(tier: str) -> None:
    """Record one member's debt tier for monitoring the tier distribution"""
    debt_classification_counter.labels(tier=tier).inc()
