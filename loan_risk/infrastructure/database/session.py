"""Database session management with connection pooling"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from loan_risk.config import settings
from loan_risk.infrastructure.database.models import Base
from loan_risk.infrastructure.database.seed import seed_default_rules

# Connection pool: max 20 connections, recycle after 1 hour to avoid stale connections
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,  # Verify connections before using
    pool_size=10,
    max_overflow=10,
    pool_recycle=3600,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency injection for database sessions"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_database(bind: Engine = engine, seed_rules: bool = True) -> None:
    """Create tables and, if requested, seed the default rule set into an empty rule table"""
    Base.metadata.create_all(bind=bind)
    if not seed_rules:
        return

    db = Session(bind=bind)
    try:
        seed_default_rules(db)
        db.commit()
    finally:
        db.close()
