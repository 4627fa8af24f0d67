"""Loan application orchestration: look up customer, score, persist"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from loan_risk.domain.exceptions import CustomerNotFoundError, LoanApplicationNotFoundError
from loan_risk.domain.fields import FieldRegistry
from loan_risk.domain.models import LoanApplication, LoanRequest, ScoringResult
from loan_risk.domain.scoring import evaluate
from loan_risk.infrastructure.database.repositories import (
    CustomerRepository,
    LoanApplicationRepository,
    ScoringRuleRepository,
)


@dataclass
class LoanDecision:
    """Persisted application together with the scoring pass that produced it"""

    application: LoanApplication
    scoring: ScoringResult


class LoanApplicationService:
    """Scores loan requests and stores the outcome; the caller owns the transaction"""

    def __init__(
        self,
        customers: CustomerRepository,
        rules: ScoringRuleRepository,
        loan_applications: LoanApplicationRepository,
        registry: Optional[FieldRegistry] = None,
    ):
        self.customers = customers
        self.rules = rules
        self.loan_applications = loan_applications
        self.registry = registry

    def apply_for_loan(
        self,
        customer_id: int,
        loan_amount: Decimal,
        loan_term_months: int,
        today: Optional[date] = None,
    ) -> LoanDecision:
        """
        Score a loan request and persist the resulting application.

        Flow:
        1. Look up the customer
        2. Fetch enabled rules in priority order (fresh for every pass)
        3. Evaluate rules and classify the total score
        4. Persist a new LoanApplication

        Raises:
            CustomerNotFoundError: No customer with that ID; nothing is persisted
        """
        logging.info("Received loan application request", extra={"customer_id": customer_id})

        customer = self.customers.get_customer_by_id(customer_id)
        if customer is None:
            logging.warning("Customer not found", extra={"customer_id": customer_id})
            raise CustomerNotFoundError(customer_id)

        loan_request = LoanRequest(customer_id=customer_id, amount=loan_amount, term_months=loan_term_months)
        active_rules = self.rules.get_enabled_rules()
        result = evaluate(customer, loan_request, active_rules, today=today, registry=self.registry)

        application = self.loan_applications.create_loan_application(
            LoanApplication(
                id=None,
                customer_id=customer_id,
                loan_amount=loan_amount,
                loan_term_months=loan_term_months,
                risk_score=result.total_score,
                risk_level=result.risk_level,
                decision=result.decision,
                explanation=result.explanation,
                created_at=datetime.now(timezone.utc),
            )
        )
        logging.info(
            "Loan application saved",
            extra={
                "loan_id": str(application.id),
                "customer_id": customer_id,
                "rules_evaluated": len(active_rules),
                "rules_triggered": len(result.triggered_rules),
                "rules_skipped": len(result.skipped_rules),
            },
        )
        return LoanDecision(application=application, scoring=result)

    def get_loan_application(self, loan_id: uuid.UUID) -> LoanApplication:
        """
        Raises:
            LoanApplicationNotFoundError: No application with that ID
        """
        application = self.loan_applications.get_loan_application_by_id(loan_id)
        if application is None:
            raise LoanApplicationNotFoundError(loan_id)
        return application
