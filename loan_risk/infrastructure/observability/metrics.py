"""Prometheus metrics for monitoring loan decisions, risk levels and rule health"""

from typing import Iterable
from prometheus_client import Counter, Histogram
from loan_risk.domain.models import ScoringResult

# Decision metrics
decision_counter = Counter(
    "loan_decision_total",
    "Total loan decisions made",
    ["decision"],  # Approved | Manual Review | Rejected
)

risk_level_counter = Counter(
    "loan_risk_level_total",
    "Loan applications by risk level",
    ["risk_level"],  # Low | Medium | High
)

# Rule health
rule_skipped_counter = Counter(
    "rule_evaluation_skipped_total",
    "Rules that could not be evaluated and did not contribute",
    ["reason"],  # unknown_field | missing_value | invalid_literal | unsupported_operator | type_mismatch | error
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_loan_decision(result: ScoringResult) -> None:
    """Record decision, risk level and skipped-rule metrics for one scoring pass"""
    decision_counter.labels(decision=result.decision.value).inc()
    risk_level_counter.labels(risk_level=result.risk_level.value).inc()
    record_skipped_rules(skipped.reason for skipped in result.skipped_rules)


def record_skipped_rules(reasons: Iterable[str]) -> None:
    for reason in reasons:
        rule_skipped_counter.labels(reason=reason).inc()
