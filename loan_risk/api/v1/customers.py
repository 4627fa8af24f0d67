"""Customer endpoints: POST /v1/customers, GET /v1/customers/{customer_id}"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from loan_risk.api.v1.schemas import (
    CreateCustomerRequest,
    CustomerResponse,
    GetLoanResponse,
    LoanHistoryResponse,
)
from loan_risk.api.v1.loans import to_loan_response
from loan_risk.api.dependencies import get_customer_service, get_request_id
from loan_risk.infrastructure.database.session import get_db
from loan_risk.infrastructure.database.repositories import LoanApplicationRepository
from loan_risk.services.customers import CustomerService
from loan_risk.domain.exceptions import CustomerNotFoundError, DuplicateCustomerError
from loan_risk.domain.models import Customer

router = APIRouter()


@router.post("/customers", response_model=CustomerResponse, status_code=201)
def create_customer(
    request_body: CreateCustomerRequest,
    request: Request,
    db: Session = Depends(get_db),
    customer_service: CustomerService = Depends(get_customer_service),
):
    """Register a new customer. Emails are unique."""
    request_id = get_request_id(request)

    try:
        customer = customer_service.create_customer(Customer(id=None, **request_body.model_dump()))
        db.commit()
        return CustomerResponse.model_validate(customer)

    except DuplicateCustomerError as e:
        db.rollback()
        logging.warning(f"Duplicate customer: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/customers/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int,
    customer_service: CustomerService = Depends(get_customer_service),
):
    try:
        return CustomerResponse.model_validate(customer_service.get_customer(customer_id))
    except CustomerNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/customers/{customer_id}/loans", response_model=LoanHistoryResponse)
def get_customer_loans(
    customer_id: int,
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    customer_service: CustomerService = Depends(get_customer_service),
):
    """
    Retrieve a customer's most recent loan applications.

    Returns:
        Applications newest first, each with its score, decision and explanation
    """
    try:
        customer_service.get_customer(customer_id)
    except CustomerNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    applications = LoanApplicationRepository(db).get_loan_applications_by_customer(customer_id, limit=limit)
    loans: list[GetLoanResponse] = [to_loan_response(application) for application in applications]
    return LoanHistoryResponse(customer_id=customer_id, loans=loans)
