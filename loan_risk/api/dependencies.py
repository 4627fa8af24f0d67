"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from loan_risk.infrastructure.database.session import get_db
from loan_risk.infrastructure.database.repositories import (
    CustomerRepository,
    LoanApplicationRepository,
    ScoringRuleRepository,
)
from loan_risk.services.customers import CustomerService
from loan_risk.services.loan_applications import LoanApplicationService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Provide customer service bound to the request's session"""
    return CustomerService(CustomerRepository(db))


def get_loan_application_service(db: Session = Depends(get_db)) -> LoanApplicationService:
    """Provide loan application service bound to the request's session"""
    return LoanApplicationService(
        customers=CustomerRepository(db),
        rules=ScoringRuleRepository(db),
        loan_applications=LoanApplicationRepository(db),
    )
