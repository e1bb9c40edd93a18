"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from fincore.api.middleware import MetricsMiddleware, RequestIDMiddleware
from fincore.api.v1 import cash_flow, ledger, tax, transfers
from fincore.config import settings
from fincore.infrastructure.database.session import init_db
from fincore.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create transfer history tables before serving"""
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Finance Dashboard Core",
        description="Ledger, VAT, cash-flow and fund transfer computations",
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
    app.include_router(ledger.router, prefix="/v1", tags=["ledger"])
    app.include_router(tax.router, prefix="/v1", tags=["tax"])
    app.include_router(cash_flow.router, prefix="/v1", tags=["cash-flow"])
    app.include_router(transfers.router, prefix="/v1", tags=["transfers"])

    return app


app = create_app()
