"""Integration tests for repositories and the loan application service"""

import uuid
import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy.orm import Session
from loan_risk.domain.exceptions import (
    CustomerNotFoundError,
    DuplicateCustomerError,
    LoanApplicationNotFoundError,
    RuleNotFoundError,
)
from loan_risk.domain.models import Customer, Decision, RiskLevel
from loan_risk.infrastructure.database.models import CustomerRecord, LoanApplicationRecord
from loan_risk.infrastructure.database.repositories import (
    CustomerRepository,
    LoanApplicationRepository,
    ScoringRuleRepository,
)
from loan_risk.infrastructure.database.seed import DEFAULT_RULES, seed_default_rules
from loan_risk.services.customers import CustomerService
from loan_risk.services.loan_applications import LoanApplicationService


@pytest.fixture
def service(db: Session) -> LoanApplicationService:
    return LoanApplicationService(
        customers=CustomerRepository(db),
        rules=ScoringRuleRepository(db),
        loan_applications=LoanApplicationRepository(db),
    )


@pytest.fixture
def saved_customer(db: Session) -> Customer:
    return CustomerRepository(db).create_customer(
        Customer(
            id=None,
            first_name="Jane",
            last_name="Doe",
            date_of_birth=date(1954, 6, 15),  # 70 on 2024-06-15
            address="456 Oak Ave",
            email="jane.doe@example.com",
        )
    )


def test_create_and_find_customer(db: Session, saved_customer: Customer):
    assert saved_customer.id is not None

    found = CustomerRepository(db).get_customer_by_id(saved_customer.id)

    assert found == saved_customer


def test_customer_missing(db: Session):
    assert CustomerRepository(db).get_customer_by_id(12345) is None
    with pytest.raises(CustomerNotFoundError):
        CustomerService(CustomerRepository(db)).get_customer(12345)


def test_duplicate_email(db: Session, saved_customer: Customer):
    with pytest.raises(DuplicateCustomerError):
        CustomerService(CustomerRepository(db)).create_customer(saved_customer)


def test_duplicate_email_on_flush_leaves_rollback_to_caller(db: Session, make_rule):
    """A unique-constraint failure at flush surfaces as a duplicate without ending the caller's transaction"""
    ScoringRuleRepository(db).create_rule(make_rule(None, "Age Rule", "customer.age", ">", "60", 10))
    customer = Customer(
        id=None,
        first_name="Jane",
        last_name="Doe",
        date_of_birth=date(1954, 6, 15),
        address="456 Oak Ave",
        email="jane.doe@example.com",
    )
    # Pending and unflushed, so the email pre-check cannot see it
    db.add(
        CustomerRecord(
            first_name="Other",
            last_name="Person",
            date_of_birth=date(1980, 1, 1),
            address="1 Elm St",
            email=customer.email,
        )
    )

    with pytest.raises(DuplicateCustomerError):
        CustomerRepository(db).create_customer(customer)

    assert db.is_active is False
    db.rollback()
    assert ScoringRuleRepository(db).count() == 0


def test_enabled_rules_ordered_by_priority_then_id(db: Session, make_rule):
    repo = ScoringRuleRepository(db)
    repo.create_rule(make_rule(None, "Rule 1", "customer.age", ">", "60", 10, priority=1))
    repo.create_rule(make_rule(None, "Rule 2", "customer.age", ">", "60", 10, priority=1))
    repo.create_rule(make_rule(None, "Rule 3", "customer.age", ">", "60", 10, priority=0))
    repo.create_rule(make_rule(None, "Disabled", "customer.age", ">", "60", 99, priority=0, enabled=False))

    names = [rule.name for rule in repo.get_enabled_rules()]

    assert names == ["Rule 3", "Rule 1", "Rule 2"]
    assert len(repo.get_all_rules()) == 4


def test_update_and_delete_rule(db: Session, make_rule):
    repo = ScoringRuleRepository(db)
    rule = repo.create_rule(make_rule(None, "Age Rule", "customer.age", ">", "60", 10))

    updated = repo.update_rule(rule.id, {"value": "65", "enabled": False})
    assert updated.value == "65"
    assert updated.enabled is False
    assert repo.get_enabled_rules() == []

    repo.delete_rule(rule.id)
    assert repo.count() == 0
    with pytest.raises(RuleNotFoundError):
        repo.delete_rule(rule.id)


def test_seed_default_rules_only_into_empty_table(db: Session):
    assert seed_default_rules(db) == len(DEFAULT_RULES) == 6
    assert seed_default_rules(db) == 0
    assert ScoringRuleRepository(db).count() == 6


def test_apply_for_loan_persists_application(db: Session, service, saved_customer, make_rule, today):
    rules = ScoringRuleRepository(db)
    rules.create_rule(make_rule(None, "Age Rule", "customer.age", ">", "60", 30, priority=1))
    rules.create_rule(make_rule(None, "Other Rule", "some.other.field", "==", "x", 40, priority=2))

    outcome = service.apply_for_loan(saved_customer.id, Decimal("15000"), 24, today=today)
    db.commit()

    application = outcome.application
    assert application.id is not None
    assert application.risk_score == 30
    assert application.risk_level == RiskLevel.MEDIUM
    assert application.decision == Decision.MANUAL_REVIEW
    assert application.explanation == "Age Rule (+30 points)"
    assert [s.reason for s in outcome.scoring.skipped_rules] == ["unknown_field"]

    stored = service.get_loan_application(application.id)
    assert stored.loan_amount == Decimal("15000")
    assert stored.loan_term_months == 24
    assert stored.explanation == application.explanation


def test_rescoring_creates_new_record(db: Session, service, saved_customer, today):
    first = service.apply_for_loan(saved_customer.id, Decimal("1000"), 12, today=today).application
    second = service.apply_for_loan(saved_customer.id, Decimal("1000"), 12, today=today).application

    assert first.id != second.id
    assert db.query(LoanApplicationRecord).count() == 2


def test_apply_for_unknown_customer_persists_nothing(db: Session, service, today):
    """Scenario D: unknown customer fails before any application is written"""
    with pytest.raises(CustomerNotFoundError):
        service.apply_for_loan(9999, Decimal("1000"), 12, today=today)

    assert db.query(LoanApplicationRecord).count() == 0


def test_get_unknown_loan_application(service):
    with pytest.raises(LoanApplicationNotFoundError):
        service.get_loan_application(uuid.uuid4())
