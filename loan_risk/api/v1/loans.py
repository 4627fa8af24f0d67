"""Loan endpoints: POST /v1/loan/apply, GET /v1/loan/{loan_id}"""

import time
import uuid
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from loan_risk.api.v1.schemas import ApplyLoanRequest, ApplyLoanResponse, GetLoanResponse
from loan_risk.api.dependencies import get_loan_application_service, get_request_id
from loan_risk.infrastructure.database.session import get_db
from loan_risk.services.loan_applications import LoanApplicationService
from loan_risk.domain.exceptions import CustomerNotFoundError, LoanApplicationNotFoundError
from loan_risk.domain.models import LoanApplication
from loan_risk.infrastructure.observability.metrics import record_loan_decision
from loan_risk.infrastructure.observability.logging import log_loan_decision

router = APIRouter()


def to_loan_response(application: LoanApplication) -> GetLoanResponse:
    return GetLoanResponse(
        loan_id=str(application.id),
        customer_id=application.customer_id,
        loan_amount=application.loan_amount,
        loan_term_months=application.loan_term_months,
        risk_score=int(application.risk_score),
        risk_level=application.risk_level.value,
        decision=application.decision.value,
        explanation=application.explanation,
        created_at=application.created_at,
    )


@router.post("/loan/apply", response_model=ApplyLoanResponse)
def apply_for_loan(
    request_body: ApplyLoanRequest,
    request: Request,
    db: Session = Depends(get_db),
    loan_service: LoanApplicationService = Depends(get_loan_application_service),
):
    """
    Score a loan request against the enabled rules and record the decision.

    Flow:
    1. Look up the customer
    2. Evaluate enabled rules in priority order
    3. Classify the total score into risk level and decision
    4. Persist the loan application
    5. Return decision with explanation of triggered rules
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        outcome = loan_service.apply_for_loan(
            customer_id=request_body.customer_id,
            loan_amount=request_body.loan_amount,
            loan_term_months=request_body.loan_term_months,
        )
        db.commit()

        # Record metrics and logs
        application = outcome.application
        duration_ms = (time.time() - start_time) * 1000
        record_loan_decision(outcome.scoring)
        log_loan_decision(
            request_id,
            str(application.id),
            application.customer_id,
            application.decision.value,
            application.risk_score,
            duration_ms,
        )

        return ApplyLoanResponse(
            loan_id=str(application.id),
            risk_score=int(application.risk_score),
            risk_level=application.risk_level.value,
            decision=application.decision.value,
            explanation=application.explanation,
        )

    except CustomerNotFoundError as e:
        db.rollback()
        logging.warning(f"Customer not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/loan/{loan_id}", response_model=GetLoanResponse)
def get_loan(
    loan_id: str,
    loan_service: LoanApplicationService = Depends(get_loan_application_service),
):
    """
    Retrieve a scored loan application.

    Returns:
        Loan terms, risk score, risk level, decision and explanation
    """
    try:
        loan_uuid = uuid.UUID(loan_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid loan ID format")

    try:
        return to_loan_response(loan_service.get_loan_application(loan_uuid))
    except LoanApplicationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
