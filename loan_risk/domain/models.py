"""Domain models - pure Python dataclasses representing business entities"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Decision(str, Enum):
    APPROVED = "Approved"
    MANUAL_REVIEW = "Manual Review"
    REJECTED = "Rejected"


@dataclass(frozen=True)
class Customer:
    """Registered customer; financial attributes are optional"""

    id: Optional[int]
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


@dataclass(frozen=True)
class LoanRequest:
    """Loan terms submitted for scoring"""

    customer_id: int
    amount: Decimal
    term_months: int


@dataclass(frozen=True)
class ScoringRule:
    """Declarative comparison: `<field> <operator> <value>` adds risk_points when true"""

    id: Optional[int]
    name: str
    field: str
    operator: str  # one of > < == != >= <=
    value: str  # literal, parsed according to the resolved field's type
    risk_points: int
    priority: int  # lower = evaluated and reported earlier
    enabled: bool = True


@dataclass(frozen=True)
class SkippedRule:
    """Rule that could not be evaluated and therefore did not contribute"""

    rule: ScoringRule
    reason: str
    detail: str


@dataclass
class ScoringResult:
    """Output of one scoring pass"""

    total_score: float
    risk_level: RiskLevel
    decision: Decision
    explanation: str
    triggered_rules: List[ScoringRule] = field(default_factory=list)
    skipped_rules: List[SkippedRule] = field(default_factory=list)


@dataclass(frozen=True)
class LoanApplication:
    """Persisted outcome of a scoring pass; never mutated after creation"""

    id: Optional[uuid.UUID]
    customer_id: int
    loan_amount: Decimal
    loan_term_months: int
    risk_score: float
    risk_level: RiskLevel
    decision: Decision
    explanation: str
    created_at: datetime
