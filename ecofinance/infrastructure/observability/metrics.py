"""Prometheus metrics for batch scoring, eco-score distribution, rewards and investments"""

from prometheus_client import Counter, Histogram

# Batch metrics
batch_counter = Counter(
    "ecofinance_batch_total",
    "Transaction batches submitted for scoring",
    ["source", "outcome"],  # source: csv | bank, outcome: processed | rejected
)

transactions_scored_counter = Counter(
    "ecofinance_transactions_scored_total",
    "Transactions scored and persisted",
)

eco_score_histogram = Histogram(
    "ecofinance_batch_eco_score",
    "Overall eco-score per processed batch",
    buckets=[20, 40, 60, 70, 80, 90, 100],
)

# Rewards
cashback_counter = Counter(
    "ecofinance_cashback_rewards_total",
    "Cashback rewards issued",
    ["tier"],
)

# Investments
investment_counter = Counter(
    "ecofinance_investments_total",
    "Investments recorded",
    ["type", "funding"],  # funding: direct | cashback
)

risk_assessment_counter = Counter(
    "ecofinance_risk_assessments_total",
    "Risk surveys scored",
    ["risk_level"],
)

# Bank API metrics
bank_fetch_failures_counter = Counter(
    "bank_fetch_failures_total",
    "Failed bank API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_batch(source: str, transaction_count: int, overall_score: int) -> None:
    """Record a successfully processed batch"""
    batch_counter.labels(source=source, outcome="processed").inc()
    transactions_scored_counter.inc(transaction_count)
    eco_score_histogram.observe(overall_score)


def record_rejected_batch(source: str) -> None:
    batch_counter.labels(source=source, outcome="rejected").inc()


def record_cashback(overall_score: int) -> None:
    """Count issued rewards by score tier"""
    if overall_score >= 80:
        tier = "excellent"
    elif overall_score >= 60:
        tier = "good"
    elif overall_score >= 40:
        tier = "average"
    else:
        tier = "base"

    cashback_counter.labels(tier=tier).inc()


def record_investment(investment_type: str, funding: str = "direct") -> None:
    investment_counter.labels(type=investment_type, funding=funding).inc()


def record_risk_assessment(risk_level: str) -> None:
    risk_assessment_counter.labels(risk_level=risk_level).inc()
