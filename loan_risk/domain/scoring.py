"""Risk scoring engine - evaluates scoring rules against a customer and loan request"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from loan_risk.domain.decision import classify
from loan_risk.domain.exceptions import RuleEvaluationError
from loan_risk.domain.fields import EvaluationContext, FieldRegistry, build_context, default_registry
from loan_risk.domain.models import Customer, LoanRequest, ScoringResult, ScoringRule, SkippedRule
from loan_risk.domain.operators import compare, parse_literal

EXPLANATION_SEPARATOR = ", "


@dataclass
class RuleEvaluation:
    """Accumulated outcome of running a rule set over one context"""

    total_score: float = 0.0
    explanation: List[str] = field(default_factory=list)
    triggered_rules: List[ScoringRule] = field(default_factory=list)
    skipped_rules: List[SkippedRule] = field(default_factory=list)

    def render_explanation(self) -> str:
        return EXPLANATION_SEPARATOR.join(self.explanation)


def order_rules(rules: Iterable[ScoringRule]) -> List[ScoringRule]:
    """Enabled rules in ascending priority; sort is stable so ties keep input order"""
    return sorted((rule for rule in rules if rule.enabled), key=lambda rule: rule.priority)


def explain(rule: ScoringRule) -> str:
    """
    Explanation entry for a triggered rule, e.g. "Age Rule (+30 points)".

    The plus sign is literal, so a -10 rule reads "Good Credit (+-10 points)".
    """
    return f"{rule.name} (+{rule.risk_points} points)"


def evaluate_rule(rule: ScoringRule, context: EvaluationContext, registry: FieldRegistry) -> bool:
    """
    Decide whether a single rule triggers.

    Raises:
        RuleEvaluationError: Field unknown or absent, literal unparseable,
            operator unsupported or operand kinds mismatched
    """
    actual = registry.resolve(rule.field, context)
    expected = parse_literal(rule.value, actual.kind)
    return compare(actual, rule.operator, expected)


def score_rules(
    context: EvaluationContext,
    rules: Iterable[ScoringRule],
    registry: Optional[FieldRegistry] = None,
) -> RuleEvaluation:
    """
    Evaluate every enabled rule in priority order and sum the triggered weights.

    A rule that cannot be evaluated never aborts the pass: it is logged,
    recorded in skipped_rules and contributes nothing.
    """
    registry = registry or default_registry
    result = RuleEvaluation()

    for rule in order_rules(rules):
        try:
            triggered = evaluate_rule(rule, context, registry)
        except RuleEvaluationError as e:
            _skip(result, rule, e.reason, str(e))
            continue
        except Exception as e:
            logging.exception(f"Error evaluating rule: {rule.name}")
            result.skipped_rules.append(SkippedRule(rule=rule, reason="error", detail=str(e)))
            continue

        if triggered:
            result.total_score += rule.risk_points
            result.explanation.append(explain(rule))
            result.triggered_rules.append(rule)

    return result


def _skip(result: RuleEvaluation, rule: ScoringRule, reason: str, detail: str) -> None:
    logging.warning(
        f"Rule skipped: {detail}",
        extra={
            "rule_id": rule.id,
            "rule_name": rule.name,
            "rule_field": rule.field,
            "reason": reason,
        },
    )
    result.skipped_rules.append(SkippedRule(rule=rule, reason=reason, detail=detail))


def evaluate(
    customer: Customer,
    loan_request: LoanRequest,
    rules: Iterable[ScoringRule],
    today: Optional[date] = None,
    registry: Optional[FieldRegistry] = None,
) -> ScoringResult:
    """
    Main entry point: score a loan request and classify the result.

    Deterministic for identical inputs and `today` (defaults to the current date,
    which only affects derived fields such as age).
    """
    context = build_context(customer, loan_request, today)
    evaluation = score_rules(context, rules, registry)
    risk_level, decision = classify(evaluation.total_score)

    return ScoringResult(
        total_score=evaluation.total_score,
        risk_level=risk_level,
        decision=decision,
        explanation=evaluation.render_explanation(),
        triggered_rules=evaluation.triggered_rules,
        skipped_rules=evaluation.skipped_rules,
    )
