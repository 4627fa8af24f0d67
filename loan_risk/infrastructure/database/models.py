"""SQLAlchemy ORM models for customers, scoring rules and loan applications"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Date, Integer, Numeric, ForeignKey, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class CustomerRecord(Base):
    """Registered customer"""

    __tablename__ = "customer"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    address = Column(Text, nullable=False)
    email = Column(String(320), nullable=False, unique=True)
    credit_score = Column(Integer, nullable=True)
    annual_income = Column(Numeric(14, 2), nullable=True)
    existing_debt = Column(Numeric(14, 2), nullable=True)
    employment_status = Column(Text, nullable=True)
    marital_status = Column(Text, nullable=True)
    dependents = Column(Integer, nullable=True)

    loan_applications = relationship("LoanApplicationRecord", back_populates="customer")


class ScoringRuleRecord(Base):
    """Configurable scoring rule"""

    __tablename__ = "scoring_rule"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    field = Column(Text, nullable=False)
    operator = Column(String(2), nullable=False)
    rule_value = Column(Text, nullable=False)
    risk_points = Column(Integer, nullable=False)
    priority = Column(Integer, nullable=False, default=0, index=True)
    enabled = Column(Boolean, nullable=False, default=True)


class LoanApplicationRecord(Base):
    """Scored loan application; rows are written once and never updated"""

    __tablename__ = "loan_application"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)
    loan_amount = Column(Numeric(14, 2), nullable=False)
    loan_term_months = Column(Integer, nullable=False)
    risk_score = Column(Float, nullable=False)
    risk_level = Column(Text, nullable=False)
    decision = Column(Text, nullable=False)
    explanation = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False)

    customer = relationship("CustomerRecord", back_populates="loan_applications")
