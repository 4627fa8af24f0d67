"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field, PastDate
from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

OperatorSymbol = Literal[">", "<", "==", "!=", ">=", "<="]


class CreateCustomerRequest(BaseModel):
    """Request body for POST /v1/customers"""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    date_of_birth: PastDate
    address: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    credit_score: Optional[int] = Field(None, ge=300, le=850)
    annual_income: Optional[Decimal] = Field(None, ge=0)
    existing_debt: Optional[Decimal] = Field(None, ge=0)
    employment_status: Optional[str] = None
    marital_status: Optional[str] = None
    dependents: Optional[int] = Field(None, ge=0)


class CustomerResponse(BaseModel):
    """Customer as returned by the customer endpoints"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    date_of_birth: date
    address: str
    email: str
    credit_score: Optional[int] = None
    annual_income: Optional[Decimal] = None
    existing_debt: Optional[Decimal] = None
    employment_status: Optional[str] = None
    marital_status: Optional[str] = None
    dependents: Optional[int] = None


class ApplyLoanRequest(BaseModel):
    """Request body for POST /v1/loan/apply"""

    customer_id: int
    loan_amount: Decimal = Field(..., gt=0, description="Requested loan amount")
    loan_term_months: int = Field(..., gt=0, description="Requested term in months")


class ApplyLoanResponse(BaseModel):
    """Response for POST /v1/loan/apply"""

    loan_id: str
    risk_score: int
    risk_level: str
    decision: str
    explanation: str


class GetLoanResponse(BaseModel):
    """Response for GET /v1/loan/{loan_id}"""

    loan_id: str
    customer_id: int
    loan_amount: Decimal
    loan_term_months: int
    risk_score: int
    risk_level: str
    decision: str
    explanation: str
    created_at: datetime


class LoanHistoryResponse(BaseModel):
    """Response for GET /v1/customers/{customer_id}/loans"""

    customer_id: int
    loans: List[GetLoanResponse]


class CreateRuleRequest(BaseModel):
    """Request body for POST /v1/rules"""

    name: str = Field(..., min_length=1)
    field: str = Field(..., min_length=1, description="Field path, e.g. customer.age")
    operator: OperatorSymbol
    value: str = Field(..., description="Literal compared against the field value")
    risk_points: int
    priority: int = 0
    enabled: bool = True


class UpdateRuleRequest(BaseModel):
    """Request body for PATCH /v1/rules/{rule_id}; omitted fields are left unchanged"""

    name: Optional[str] = Field(None, min_length=1)
    field: Optional[str] = Field(None, min_length=1)
    operator: Optional[OperatorSymbol] = None
    value: Optional[str] = None
    risk_points: Optional[int] = None
    priority: Optional[int] = None
    enabled: Optional[bool] = None


class RuleResponse(BaseModel):
    """Scoring rule as returned by the rule endpoints"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    field: str
    operator: str
    value: str
    risk_points: int
    priority: int
    enabled: bool
