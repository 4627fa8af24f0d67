"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from loan_risk.api.main import create_app
from loan_risk.infrastructure.database.models import Base
from loan_risk.infrastructure.database.session import get_db
from loan_risk.domain.models import Customer, LoanRequest, ScoringRule


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed evaluation date so derived ages are stable
TODAY = date(2024, 6, 15)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_customer():
    """Factory for customers whose age on TODAY is exactly `age`"""

    def _make(age: int, **overrides) -> Customer:
        fields = dict(
            id=1,
            first_name="John",
            last_name="Doe",
            date_of_birth=date(TODAY.year - age, TODAY.month, TODAY.day),
            address="123 Main St",
            email="john.doe@example.com",
        )
        fields.update(overrides)
        return Customer(**fields)

    return _make


@pytest.fixture
def make_rule():
    """Factory for in-memory scoring rules"""

    def _make(
        rule_id: int,
        name: str,
        field: str,
        operator: str,
        value: str,
        points: int,
        priority: int = 0,
        enabled: bool = True,
    ) -> ScoringRule:
        return ScoringRule(
            id=rule_id,
            name=name,
            field=field,
            operator=operator,
            value=value,
            risk_points=points,
            priority=priority,
            enabled=enabled,
        )

    return _make


@pytest.fixture
def loan_request() -> LoanRequest:
    return LoanRequest(customer_id=1, amount=Decimal("25000"), term_months=36)
