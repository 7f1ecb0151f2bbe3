"""Health check and metrics routes for monitoring service status."""

from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
import structlog

logger = structlog.get_logger(__name__)


def register_health_routes(app: FastAPI, service) -> None:
    """Attach health, readiness and metrics routes for *service* to *app*."""

    service_name = service.settings.service_name

    @app.get("/health")
    async def health_check():
        """Basic liveness endpoint."""
        return JSONResponse(
            content={"status": "healthy", "service": service_name},
            status_code=200,
        )

    @app.get("/health/detailed")
    async def detailed_health():
        """Detailed health status with record freshness and connection stats."""
        try:
            return JSONResponse(content=service.health_status(), status_code=200)
        except Exception as e:
            logger.error("Detailed health check failed", error=str(e))
            return JSONResponse(
                content={
                    "status": "unhealthy",
                    "error": str(e),
                    "service": service_name,
                },
                status_code=503,
            )

    @app.get("/ready")
    async def readiness_check():
        """Kubernetes readiness probe endpoint."""
        is_ready = bool(service.running)
        return JSONResponse(
            content={
                "status": "ready" if is_ready else "not_ready",
                "service": service_name,
            },
            status_code=200 if is_ready else 503,
        )

    @app.get("/metrics")
    async def metrics():
        """Prometheus metrics endpoint."""
        if not service.settings.metrics_enabled:
            return JSONResponse(content={"error": "Metrics disabled"}, status_code=404)
        try:
            # Refresh freshness-derived gauges before exposition
            service.snapshot_view()
            return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
        except Exception as e:
            logger.error("Metrics endpoint failed", error=str(e))
            return JSONResponse(content={"error": str(e)}, status_code=500)
