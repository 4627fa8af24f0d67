"""Data access layer for customers, scoring rules and loan applications"""

import uuid
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from loan_risk.infrastructure.database.models import CustomerRecord, LoanApplicationRecord, ScoringRuleRecord
from loan_risk.domain.exceptions import DuplicateCustomerError, RuleNotFoundError
from loan_risk.domain.models import Customer, Decision, LoanApplication, RiskLevel, ScoringRule


def to_customer(row: CustomerRecord) -> Customer:
    return Customer(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        date_of_birth=row.date_of_birth,
        address=row.address,
        email=row.email,
        credit_score=row.credit_score,
        annual_income=row.annual_income,
        existing_debt=row.existing_debt,
        employment_status=row.employment_status,
        marital_status=row.marital_status,
        dependents=row.dependents,
    )


def to_scoring_rule(row: ScoringRuleRecord) -> ScoringRule:
    return ScoringRule(
        id=row.id,
        name=row.name,
        field=row.field,
        operator=row.operator,
        value=row.rule_value,
        risk_points=row.risk_points,
        priority=row.priority,
        enabled=row.enabled,
    )


def to_loan_application(row: LoanApplicationRecord) -> LoanApplication:
    return LoanApplication(
        id=row.id,
        customer_id=row.customer_id,
        loan_amount=row.loan_amount,
        loan_term_months=row.loan_term_months,
        risk_score=row.risk_score,
        risk_level=RiskLevel(row.risk_level),
        decision=Decision(row.decision),
        explanation=row.explanation,
        created_at=row.created_at,
    )


class CustomerRepository:
    """Repository for customers"""

    def __init__(self, db: Session):
        self.db = db

    def create_customer(self, customer: Customer) -> Customer:
        """
        Persist a new customer and return it with its assigned ID.

        Raises:
            DuplicateCustomerError: Email is already registered. The session is
                left for the caller to roll back.
        """
        db_customer = CustomerRecord(
            first_name=customer.first_name,
            last_name=customer.last_name,
            date_of_birth=customer.date_of_birth,
            address=customer.address,
            email=customer.email,
            credit_score=customer.credit_score,
            annual_income=customer.annual_income,
            existing_debt=customer.existing_debt,
            employment_status=customer.employment_status,
            marital_status=customer.marital_status,
            dependents=customer.dependents,
        )
        exists = (
            self.db.query(CustomerRecord.id)
            .filter(CustomerRecord.email == customer.email)
            .first()
        )
        if exists:
            raise DuplicateCustomerError(customer.email)

        self.db.add(db_customer)
        try:
            self.db.flush()
        except IntegrityError as e:
            # Concurrent insert of the same email won the race
            raise DuplicateCustomerError(customer.email) from e
        return to_customer(db_customer)

    def get_customer_by_id(self, customer_id: int) -> Optional[Customer]:
        row = self.db.get(CustomerRecord, customer_id)
        return to_customer(row) if row else None


class ScoringRuleRepository:
    """Repository for scoring rules"""

    def __init__(self, db: Session):
        self.db = db

    def get_enabled_rules(self) -> List[ScoringRule]:
        """Enabled rules ordered by priority, ties by ID"""
        rows = (
            self.db.query(ScoringRuleRecord)
            .filter(ScoringRuleRecord.enabled.is_(True))
            .order_by(ScoringRuleRecord.priority.asc(), ScoringRuleRecord.id.asc())
            .all()
        )
        return [to_scoring_rule(row) for row in rows]

    def get_all_rules(self) -> List[ScoringRule]:
        rows = (
            self.db.query(ScoringRuleRecord)
            .order_by(ScoringRuleRecord.priority.asc(), ScoringRuleRecord.id.asc())
            .all()
        )
        return [to_scoring_rule(row) for row in rows]

    def count(self) -> int:
        return self.db.query(ScoringRuleRecord).count()

    def create_rule(self, rule: ScoringRule) -> ScoringRule:
        db_rule = ScoringRuleRecord(
            name=rule.name,
            field=rule.field,
            operator=rule.operator,
            rule_value=rule.value,
            risk_points=rule.risk_points,
            priority=rule.priority,
            enabled=rule.enabled,
        )
        self.db.add(db_rule)
        self.db.flush()  # Get ID without committing
        return to_scoring_rule(db_rule)

    def update_rule(self, rule_id: int, changes: Dict[str, Any]) -> ScoringRule:
        """
        Apply a partial update to a rule.

        `changes` uses domain field names; `value` maps to the rule_value column.

        Raises:
            RuleNotFoundError: No rule with that ID
        """
        db_rule = self._get_or_raise(rule_id)
        for key, value in changes.items():
            setattr(db_rule, "rule_value" if key == "value" else key, value)
        self.db.flush()
        return to_scoring_rule(db_rule)

    def delete_rule(self, rule_id: int) -> None:
        db_rule = self._get_or_raise(rule_id)
        self.db.delete(db_rule)
        self.db.flush()

    def _get_or_raise(self, rule_id: int) -> ScoringRuleRecord:
        db_rule = self.db.get(ScoringRuleRecord, rule_id)
        if db_rule is None:
            raise RuleNotFoundError(rule_id)
        return db_rule


class LoanApplicationRepository:
    """Repository for scored loan applications"""

    def __init__(self, db: Session):
        self.db = db

    def create_loan_application(self, application: LoanApplication) -> LoanApplication:
        """Persist a scored application and return it with its assigned ID"""
        db_application = LoanApplicationRecord(
            customer_id=application.customer_id,
            loan_amount=application.loan_amount,
            loan_term_months=application.loan_term_months,
            risk_score=application.risk_score,
            risk_level=application.risk_level.value,
            decision=application.decision.value,
            explanation=application.explanation,
            created_at=application.created_at,
        )
        self.db.add(db_application)
        self.db.flush()
        return to_loan_application(db_application)

    def get_loan_application_by_id(self, loan_id: uuid.UUID) -> Optional[LoanApplication]:
        row = self.db.get(LoanApplicationRecord, loan_id)
        return to_loan_application(row) if row else None

    def get_loan_applications_by_customer(self, customer_id: int, limit: int = 20) -> List[LoanApplication]:
        """Most recent applications first"""
        rows = (
            self.db.query(LoanApplicationRecord)
            .filter(LoanApplicationRecord.customer_id == customer_id)
            .order_by(LoanApplicationRecord.created_at.desc())
            .limit(limit)
            .all()
        )
        return [to_loan_application(row) for row in rows]
