"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from ecofinance.api.middleware import RequestIDMiddleware, MetricsMiddleware
from ecofinance.api.v1 import bank, cashback, investments, sustainability, uploads
from ecofinance.infrastructure.observability.logging import setup_logging
from ecofinance.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="EcoFinance Gateway",
        description="Transaction eco-scoring, sustainability metrics, cashback rewards and green investing",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(uploads.router, prefix="/v1", tags=["ingestion"])
    app.include_router(bank.router, prefix="/v1", tags=["ingestion"])
    app.include_router(sustainability.router, prefix="/v1", tags=["sustainability"])
    app.include_router(cashback.router, prefix="/v1", tags=["cashback"])
    app.include_router(investments.router, prefix="/v1", tags=["investments"])

    return app


app = create_app()
