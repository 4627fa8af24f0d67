"""Default scoring rules inserted into an empty rule table"""

import logging
from typing import List
from sqlalchemy.orm import Session
from loan_risk.domain.models import ScoringRule
from loan_risk.infrastructure.database.repositories import ScoringRuleRepository

DEFAULT_RULES: List[ScoringRule] = [
    ScoringRule(id=None, name="Low Credit Score", field="customer.creditScore", operator="<", value="580", risk_points=40, priority=0),
    ScoringRule(id=None, name="Age Rule", field="customer.age", operator=">", value="60", risk_points=20, priority=1),
    ScoringRule(id=None, name="Young Applicant", field="customer.age", operator="<", value="21", risk_points=15, priority=2),
    ScoringRule(id=None, name="High Debt To Income", field="customer.debtToIncomeRatio", operator=">", value="0.4", risk_points=25, priority=3),
    ScoringRule(id=None, name="Large Loan Amount", field="loan.amount", operator=">", value="50000", risk_points=20, priority=4),
    ScoringRule(id=None, name="Long Loan Term", field="loan.termMonths", operator=">", value="60", risk_points=10, priority=5),
]


def seed_default_rules(db: Session) -> int:
    """
    Insert DEFAULT_RULES when no rules exist yet.

    Returns:
        Number of rules inserted (0 if the table already had rules)
    """
    repo = ScoringRuleRepository(db)
    if repo.count() > 0:
        return 0

    for rule in DEFAULT_RULES:
        repo.create_rule(rule)

    logging.info("Seeded default scoring rules", extra={"rule_count": len(DEFAULT_RULES)})
    return len(DEFAULT_RULES)
