"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from loan_risk.api.middleware import RequestIDMiddleware, MetricsMiddleware
from loan_risk.api.v1 import customers, loans, rules
from loan_risk.infrastructure.database.session import init_database
from loan_risk.infrastructure.observability.logging import setup_logging
from loan_risk.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.init_schema_on_startup:
        init_database(seed_rules=settings.seed_default_rules)
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Loan Risk Scoring Service",
        description="Customer registration, rule-based loan risk scoring and decisions",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(customers.router, prefix="/v1", tags=["customers"])
    app.include_router(loans.router, prefix="/v1", tags=["loans"])
    app.include_router(rules.router, prefix="/v1", tags=["rules"])

    return app


app = create_app()
