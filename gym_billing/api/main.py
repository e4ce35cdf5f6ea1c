"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from gym_billing.api.middleware import RequestIDMiddleware, MetricsMiddleware
from gym_billing.api.v1 import members, plans
from gym_billing.domain.exceptions import StatusDriftError
from gym_billing.infrastructure.observability.logging import setup_logging
from gym_billing.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Gym Billing",
        description="Membership payment status and debt dashboard service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(StatusDriftError)
    async def status_drift_handler(request: Request, exc: StatusDriftError):
        logging.error(
            f"Payment status drift: {exc}",
            extra={"request_id": getattr(request.state, "request_id", "unknown"), "payment_id": exc.payment_id},
        )
        return JSONResponse(status_code=500, content={"detail": "Stored payment status is inconsistent"})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(plans.router, prefix="/v1", tags=["plans"])
    app.include_router(members.router, prefix="/v1", tags=["members"])

    return app


app = create_app()
